"""Container selection strategy.

Decides which elements of a page represent "the records". There is no
universal page schema, so the strategy walks from the most specific
structural signal to the least:

1. The caller's ``container`` hint, if any. Its result is final, even when
   it matches nothing.
2. Selector families (sports first, in sports mode only, then product,
   article and generic containers). Inside a family the first selector that
   matches anything wins.
3. List items, when the page has more than a handful of them.
4. Divs of moderate text length (a crude content-density filter).

Matches are returned in document order and never re-ranked or deduplicated.
"""

from __future__ import annotations

import logging

from trawl.common.page_element import PageElement
from trawl.common.selector_utils import first_non_empty
from trawl.data_types import SelectorHints
from trawl.extraction.selectors import (
    ARTICLE_FAMILY,
    DENSITY_MAX_LENGTH,
    DENSITY_MIN_LENGTH,
    DENSITY_SELECTOR,
    GENERIC_FAMILY,
    LIST_ITEM_MIN_COUNT,
    LIST_ITEM_SELECTOR,
    PRODUCT_FAMILY,
    SPORTS_FAMILY,
    SelectorFamily,
)

logger = logging.getLogger(__name__)


def container_families(sports: bool = False) -> tuple[SelectorFamily, ...]:
    """Selector families in the order they are tried."""
    families = (PRODUCT_FAMILY, ARTICLE_FAMILY, GENERIC_FAMILY)
    if sports:
        return (SPORTS_FAMILY, *families)
    return families


def select_family(
    page: PageElement, family: SelectorFamily
) -> list[PageElement]:
    """Return the matches of the first selector in ``family`` that has any."""
    description = f"{family.name} container"
    return (
        first_non_empty(
            family.selectors,
            lambda selector: page.query_css(selector, description),
        )
        or []
    )


def is_content_sized(element: PageElement) -> bool:
    """True if the element's trimmed text is neither tiny nor huge."""
    length = len(element.text_content().strip())
    return DENSITY_MIN_LENGTH < length < DENSITY_MAX_LENGTH


def select_containers(
    page: PageElement,
    hints: SelectorHints,
    sports: bool = False,
) -> list[PageElement]:
    """Pick the elements that represent records on ``page``.

    Args:
        page: Root element of the parsed document.
        hints: Caller-supplied selectors; only ``container`` is used here.
        sports: Whether to try the sports family first.

    Returns:
        Container elements in document order. May be empty.
    """
    override = hints.hint("container")
    if override is not None:
        elements = page.query_css(override, "container override")
        logger.debug(
            "Container override %r matched %d elements",
            override,
            len(elements),
        )
        return elements

    for family in container_families(sports):
        elements = select_family(page, family)
        if elements:
            logger.debug(
                "Container family %s matched %d elements",
                family.name,
                len(elements),
            )
            return elements

    list_items = page.query_css(LIST_ITEM_SELECTOR, "list items")
    if len(list_items) > LIST_ITEM_MIN_COUNT:
        logger.debug("Falling back to %d list items", len(list_items))
        return list_items

    elements = [
        element
        for element in page.query_css(DENSITY_SELECTOR, "content divs")
        if is_content_sized(element)
    ]
    logger.debug("Falling back to %d content-sized divs", len(elements))
    return elements
