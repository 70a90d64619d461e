"""Text and URL helpers shared by every extraction mode."""

from __future__ import annotations

import re
from urllib.parse import urljoin

_WHITESPACE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Collapse whitespace runs to single spaces and trim.

    Examples:
        >>> normalize("  a\\n\\tb   c ")
        'a b c'
        >>> normalize(None)
        ''
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def truncate(text: str, limit: int | None) -> str:
    """Cut text to at most ``limit`` characters (no limit when None)."""
    if limit is None:
        return text
    return text[:limit]


def resolve_url(base_url: str, candidate: str) -> str:
    """Resolve a possibly-relative URL against the page URL.

    Handles absolute, protocol-relative, path-relative and query or
    fragment-only candidates. A candidate that cannot be resolved is
    returned unchanged; partial URLs are still useful to the caller.

    Args:
        base_url: URL of the page the candidate was found on.
        candidate: Raw ``href``/``src`` attribute value.

    Returns:
        The resolved absolute URL, or ``candidate`` itself on failure.

    Examples:
        >>> resolve_url("https://a.com/x/", "y.png")
        'https://a.com/x/y.png'
        >>> resolve_url("https://a.com/x/", "//cdn.a.com/y.png")
        'https://cdn.a.com/y.png'
    """
    stripped = candidate.strip() if candidate else ""
    if not stripped:
        return candidate
    try:
        return urljoin(base_url, stripped)
    except ValueError:
        return candidate
