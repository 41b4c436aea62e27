"""Link safety policy.

Only relative links to Markdown documents are rendered as hyperlinks;
everything else is shown as plain text.
"""

MARKDOWN_EXTENSIONS = frozenset({".md", ".markdown"})

_EXTERNAL_PREFIXES = ("http://", "https://")


def extension(path: str) -> str:
    """Return the extension of the last path segment, including the dot.

    Unlike os.path.splitext, a name made only of an extension (".md")
    still has that extension.

    Args:
        path: Slash-separated path or link destination

    Returns:
        Extension such as ".md", or "" when there is none
    """
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def is_markdown_path(path: str) -> bool:
    """Check whether a path ends in a Markdown extension (case-insensitive)."""
    return extension(path).lower() in MARKDOWN_EXTENSIONS


def is_safe_link(destination: str) -> bool:
    """Decide whether a link destination may be rendered as an anchor.

    Args:
        destination: Link destination as written in the document

    Returns:
        True for .md/.markdown destinations that do not start with
        http:// or https:// (case-sensitive)
    """
    if destination.startswith(_EXTERNAL_PREFIXES):
        return False
    return is_markdown_path(destination)
