"""HTML sanitization policy for rendered Markdown.

Allow-list suitable for user-generated content, extended so that
syntax-highlighting hints on <code> survive.
"""

import re

import bleach
from bleach.sanitizer import ALLOWED_ATTRIBUTES, ALLOWED_PROTOCOLS, ALLOWED_TAGS

_LANGUAGE_CLASS = re.compile(r"language-[\w-]+", re.ASCII)

ALLOWED_HTML_TAGS = frozenset(ALLOWED_TAGS) | {
    "br",
    "dd",
    "del",
    "div",
    "dl",
    "dt",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "img",
    "ins",
    "kbd",
    "mark",
    "p",
    "pre",
    "q",
    "s",
    "samp",
    "small",
    "span",
    "sub",
    "sup",
    "table",
    "tbody",
    "td",
    "tfoot",
    "th",
    "thead",
    "tr",
}


def allow_code_attribute(tag: str, name: str, value: str) -> bool:
    """Permit `class` on <code> only for `language-*` values."""
    return name == "class" and _LANGUAGE_CLASS.fullmatch(value) is not None


ALLOWED_HTML_ATTRIBUTES = {
    **ALLOWED_ATTRIBUTES,
    "code": allow_code_attribute,
    "img": ["src", "alt", "title", "width", "height"],
    "ol": ["start"],
    "td": ["colspan", "rowspan"],
    "th": ["colspan", "rowspan"],
}


def sanitize(html: str) -> str:
    """Sanitize rendered HTML.

    Disallowed tags are stripped (their text is kept, escaped), comments and
    disallowed attributes are removed.

    Args:
        html: HTML produced by the Markdown converter

    Returns:
        Sanitized HTML
    """
    # bleach.clean builds a new Cleaner per call; Cleaner is not thread-safe.
    return bleach.clean(
        html,
        tags=ALLOWED_HTML_TAGS,
        attributes=ALLOWED_HTML_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
    )
