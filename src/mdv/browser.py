"""Default web browser launcher."""

import logging
import webbrowser
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def open_browser(url: str) -> bool:
    """Open a URL in the default web browser.

    Args:
        url: Absolute http or https URL

    Returns:
        True if a browser was launched

    Raises:
        ValueError: If the URL is not an absolute http(s) URL
    """
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        raise ValueError(f"URL scheme must be http or https: {url!r}")
    if not parts.netloc:
        raise ValueError(f"URL must include a host: {url!r}")

    launched = webbrowser.open(parts.geturl())
    if not launched:
        logger.warning(f"No browser available to open {url}")
    return launched
