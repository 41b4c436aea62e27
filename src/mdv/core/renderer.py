"""Markdown rendering with link policy and sanitization.

Two-stage pipeline: mistune converts Markdown to HTML while a pluggable
link policy decides which links become anchors, then the result is passed
through the HTML sanitizer.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import mistune

from mdv.core.links import is_safe_link
from mdv.core.sanitizer import sanitize

logger = logging.getLogger(__name__)

LinkPolicy = Callable[[str], bool]

GFM_PLUGINS = ["table", "strikethrough", "url", "task_lists"]


class RenderError(Exception):
    """Markdown conversion failed."""


@dataclass(frozen=True)
class RenderedDocument:
    """Result of rendering a Markdown document."""

    title: str
    html: str


class SafeLinkRenderer(mistune.HTMLRenderer):
    """HTML renderer that only emits anchors for links the policy accepts.

    Rejected links are unwrapped entirely: only their inline content is
    written, so nothing in the output points at the original destination.
    """

    def __init__(self, link_policy: LinkPolicy, *, escape: bool = True) -> None:
        super().__init__(escape=escape)
        self._link_policy = link_policy

    def link(self, text: str, url: str, title: str | None = None) -> str:
        if not self._link_policy(url):
            return text
        return super().link(text, url, title)


class MarkdownRenderer:
    """Renders Markdown sources to sanitized HTML documents."""

    def __init__(self, link_policy: LinkPolicy = is_safe_link) -> None:
        """Initialize renderer.

        Args:
            link_policy: Predicate deciding whether a link destination
                         is rendered as an anchor
        """
        self._link_policy = link_policy

    def render(self, source: bytes, file_name: str) -> RenderedDocument:
        """Render Markdown source.

        Args:
            source: Raw Markdown bytes (decoded as UTF-8)
            file_name: Base name of the source file, used as the title

        Returns:
            RenderedDocument with the file name as title and sanitized HTML

        Raises:
            RenderError: If the Markdown converter fails
        """
        text = source.decode("utf-8", errors="replace")
        try:
            html = self.to_html(text)
        except Exception as exc:
            raise RenderError(f"Failed to convert {file_name}") from exc
        return RenderedDocument(title=file_name, html=sanitize(html))

    def render_file(self, path: Path) -> RenderedDocument:
        """Read and render a Markdown file.

        Args:
            path: Path to the Markdown file

        Returns:
            RenderedDocument titled with the file's base name

        Raises:
            OSError: If the file cannot be read
            ValueError: If the path contains a null byte
            RenderError: If the Markdown converter fails
        """
        source = path.read_bytes()
        logger.debug(f"Rendering {path} ({len(source)} bytes)")
        return self.render(source, path.name)

    def to_html(self, text: str) -> str:
        """Convert Markdown to unsanitized HTML with the link policy applied."""
        markdown = mistune.create_markdown(
            escape=True,
            renderer=SafeLinkRenderer(self._link_policy, escape=True),
            plugins=GFM_PLUGINS,
        )
        return markdown(text)
