"""Request path validation.

Single choke point that rejects malformed request targets and directory
traversal attempts before any routing decision is made.
"""

import logging
import posixpath
import re
from urllib.parse import unquote, urlsplit

logger = logging.getLogger(__name__)

_ABSOLUTE_FORM = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
_CONTROL_OR_SPACE = re.compile(r"[\x00-\x20\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_REPEATED_SLASHES = re.compile(r"/{2,}")


class PathRejectedError(Exception):
    """Request target refused before routing."""

    status = 400

    def __init__(self, raw_target: str, reason: str) -> None:
        super().__init__(f"{reason}: {raw_target!r}")
        self.raw_target = raw_target
        self.reason = reason


class MalformedURIError(PathRejectedError):
    """Request target cannot be parsed as a request URI."""

    status = 400


class TraversalError(PathRejectedError):
    """Decoded request path contains a `..` segment."""

    status = 403


def contains_dot_dot(path: str) -> bool:
    """Check whether a decoded path contains a `..` segment.

    Args:
        path: Percent-decoded, slash-separated path

    Returns:
        True if any segment equals exactly ".."
    """
    return any(segment == ".." for segment in path.split("/"))


def validate(raw_target: str) -> str:
    """Validate a raw request target.

    The traversal check runs on the percent-decoded path so that encoded
    forms such as ``%2e%2e`` are caught too.

    Args:
        raw_target: Request target exactly as received (path and query)

    Returns:
        Decoded request path with repeated slashes collapsed

    Raises:
        MalformedURIError: If the target is not a valid request URI
        TraversalError: If the decoded path contains a `..` segment
    """
    try:
        path = _parse_path(raw_target)
    except MalformedURIError:
        logger.warning(f"[PathGuard] Bad request, malformed URI: {raw_target!r}")
        raise

    if contains_dot_dot(path):
        logger.warning(f"[PathGuard] Forbidden, traversal attempt in URI: {raw_target!r}")
        raise TraversalError(raw_target, "Directory traversal attempt")

    return _REPEATED_SLASHES.sub("/", path)


def clean_display_path(path: str) -> str:
    """Normalize a client-supplied relative path.

    Strips leading slashes and collapses `.` segments and repeated slashes.
    The caller must have rejected `..` segments already.

    Args:
        path: Relative path (e.g., "/docs//guide/", ".", "")

    Returns:
        Relative path without leading slash, "" for the root
    """
    cleaned = posixpath.normpath("/" + path).lstrip("/")
    return "" if cleaned == "." else cleaned


def _parse_path(raw_target: str) -> str:
    if not raw_target:
        raise MalformedURIError(raw_target, "Empty request target")
    if not raw_target.startswith("/") and not _ABSOLUTE_FORM.match(raw_target):
        raise MalformedURIError(raw_target, "Request target is not absolute")
    if _CONTROL_OR_SPACE.search(raw_target):
        raise MalformedURIError(raw_target, "Invalid character in request target")

    if raw_target.startswith("/"):
        # Origin form: a leading "//" is part of the path, not an authority.
        raw_path = raw_target.partition("?")[0].partition("#")[0]
    else:
        try:
            raw_path = urlsplit(raw_target).path
        except ValueError as exc:
            raise MalformedURIError(raw_target, str(exc)) from exc

    # Only the path is checked; query escapes are left to the handlers.
    if _BAD_ESCAPE.search(raw_path):
        raise MalformedURIError(raw_target, "Invalid percent escape")
    return unquote(raw_path) or "/"
