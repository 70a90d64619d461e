"""Selector utility functions for the extraction engine.

This module provides the two primitives every fallback chain is built on:
translating a CSS selector into a descendant-only XPath expression, and
``first_non_empty``, the "first candidate that matches wins" combinator.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import TypeVar

from cssselect import HTMLTranslator

T = TypeVar("T")
R = TypeVar("R")

_translator = HTMLTranslator()


@lru_cache(maxsize=1024)
def css_to_descendant_xpath(selector: str) -> str:
    """Translate a CSS selector into an XPath over descendants only.

    lxml's own ``cssselect()`` evaluates against ``descendant-or-self``, so a
    container could match its own field selectors. Record fields are always
    looked up below the container, never on it.

    Args:
        selector: CSS selector expression.

    Returns:
        XPath expression relative to the context element.

    Raises:
        cssselect.SelectorError: If the selector cannot be parsed.

    Examples:
        >>> css_to_descendant_xpath("li")
        'descendant::li'
    """
    return _translator.css_to_xpath(selector, prefix="descendant::")


def first_non_empty(
    candidates: Iterable[T], matcher: Callable[[T], R]
) -> R | None:
    """Apply ``matcher`` to each candidate and return the first truthy result.

    Works for field chains (matcher returns text) and container chains
    (matcher returns a list of elements) alike.

    Args:
        candidates: Ordered candidates, usually selector strings.
        matcher: Function evaluating one candidate.

    Returns:
        The first non-empty result, or None if every candidate came up empty.

    Examples:
        >>> first_non_empty(["", "a", "b"], str.upper)
        'A'
        >>> first_non_empty([], str.upper) is None
        True
    """
    for candidate in candidates:
        result = matcher(candidate)
        if result:
            return result
    return None
