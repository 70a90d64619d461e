"""Field extraction from a single container element.

Each logical field is read through an ordered selector chain. For every
selector only its first match below the container is considered; if that
element has no text the next selector is tried. Misses are never errors,
they produce an empty string.
"""

from __future__ import annotations

from collections.abc import Sequence

from trawl.common.page_element import PageElement
from trawl.common.selector_utils import first_non_empty
from trawl.common.text import normalize, resolve_url, truncate
from trawl.data_types import SelectorHints
from trawl.extraction.selectors import (
    DATE_ATTRIBUTE,
    IMAGE,
    IMAGE_ATTRIBUTES,
    LINK,
    FieldChain,
)


def first_element(
    container: PageElement, selector: str
) -> PageElement | None:
    """First descendant of ``container`` matching ``selector``, if any."""
    matches = container.query_css(selector, "field")
    return matches[0] if matches else None


def element_text(container: PageElement, selector: str) -> str:
    """Normalized text of the first match of ``selector``, or ``""``."""
    element = first_element(container, selector)
    if element is None:
        return ""
    return normalize(element.text_content())


def extract_text(container: PageElement, selectors: Sequence[str]) -> str:
    """Normalized text of the first selector whose first match has text.

    Args:
        container: Element the record is built from.
        selectors: Candidate selectors in priority order.

    Returns:
        The extracted text, or ``""`` if no selector produced any.
    """
    return (
        first_non_empty(
            selectors, lambda selector: element_text(container, selector)
        )
        or ""
    )


def extract_field(
    container: PageElement, chain: FieldChain, hints: SelectorHints
) -> str:
    """Extract one field through its chain, honouring a hint if present."""
    selectors = hints.chain(chain.selectors, *chain.hint_keys)
    return truncate(extract_text(container, selectors), chain.max_length)


def extract_date(
    container: PageElement, chain: FieldChain, hints: SelectorHints
) -> str:
    """Extract a date from element text, else its ``datetime`` attribute."""

    def date_of(selector: str) -> str:
        element = first_element(container, selector)
        if element is None:
            return ""
        return normalize(element.text_content()) or normalize(
            element.get_attribute(DATE_ATTRIBUTE)
        )

    selectors = hints.chain(chain.selectors, *chain.hint_keys)
    return first_non_empty(selectors, date_of) or ""


def extract_link(
    container: PageElement, hints: SelectorHints, page_url: str
) -> str:
    """Resolved ``href`` of the first link in the container."""
    (selector,) = hints.chain(LINK.selectors, *LINK.hint_keys)
    element = first_element(container, selector)
    if element is None:
        return ""
    href = element.get_attribute("href")
    return resolve_url(page_url, href) if href else ""


def extract_image(
    container: PageElement, hints: SelectorHints, page_url: str
) -> str:
    """Resolved ``src`` (or lazy-loading ``data-src``) of the first image."""
    (selector,) = hints.chain(IMAGE.selectors, *IMAGE.hint_keys)
    element = first_element(container, selector)
    if element is None:
        return ""
    src = first_non_empty(IMAGE_ATTRIBUTES, element.get_attribute)
    return resolve_url(page_url, src) if src else ""


def fallback_title(container: PageElement, limit: int) -> str:
    """The container's whole text, collapsed to one line and cut.

    Line breaks are whitespace like any other, so text spread over several
    child elements reads as one phrase.
    """
    return truncate(normalize(container.text_content()), limit)
