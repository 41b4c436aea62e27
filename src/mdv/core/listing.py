"""Directory listing for the tree navigator.

Enumerates the immediate children of a directory under the served root,
keeping subdirectories and Markdown files only.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

from mdv.core.links import is_markdown_path


class ListItemDict(TypedDict):
    """Dictionary representation of a listing entry."""

    name: str
    path: str
    isDir: bool


@dataclass(frozen=True)
class ListItem:
    """File or directory entry returned by the listing API."""

    name: str
    path: str
    is_dir: bool

    def to_dict(self) -> ListItemDict:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "path": self.path, "isDir": self.is_dir}


def list_directory(root_dir: Path, display_path: str) -> list[ListItem]:
    """List subdirectories and Markdown files of a directory.

    Directories come first, then files; each group is sorted by name.

    Args:
        root_dir: Absolute served root
        display_path: Cleaned path relative to root_dir ("" for the root)

    Returns:
        Ordered list of ListItem

    Raises:
        OSError: If the directory does not exist or cannot be read
        ValueError: If display_path contains a null byte
    """
    full_path = root_dir / display_path if display_path else root_dir

    items: list[ListItem] = []
    with os.scandir(full_path) as entries:
        for entry in entries:
            is_dir = entry.is_dir()
            if not is_dir and not is_markdown_path(entry.name):
                continue
            item_path = f"{display_path}/{entry.name}" if display_path else entry.name
            items.append(ListItem(name=entry.name, path=item_path, is_dir=is_dir))

    items.sort(key=lambda item: (not item.is_dir, item.name))
    return items
