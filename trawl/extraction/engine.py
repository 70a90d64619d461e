"""Mode dispatch and the extraction entry point.

The engine performs no I/O and holds no mutable module state, so
independent pages can be extracted concurrently from any number of threads
or tasks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from trawl.common.page_element import PageElement
from trawl.data_types import DataType, Record, SelectorHints
from trawl.extraction.modes import (
    CompetitionDetector,
    ExtractionContext,
    ExtractionMode,
    FixedMatchMode,
    GenericMode,
    RichMatchMode,
    StatisticsMode,
    bundesliga_detector,
)
from trawl.extraction.selectors import DEFAULT_MATCH_PROFILE, MatchSiteProfile

logger = logging.getLogger(__name__)


def select_mode(
    hints: SelectorHints,
    data_type: DataType | None = None,
    *,
    match_profile: MatchSiteProfile = DEFAULT_MATCH_PROFILE,
    competition_detector: CompetitionDetector | None = bundesliga_detector,
) -> ExtractionMode:
    """Pick the extraction strategy for one pass.

    An explicit ``data_type`` always wins. Without one, any home team, away
    team or score hint switches the generic pass to rich match records.

    Args:
        hints: Caller-supplied selectors.
        data_type: Explicit discriminator from match/statistics callers.
        match_profile: Site profile for ``DataType.MATCH``.
        competition_detector: Page-level competition hook for rich matches.

    Returns:
        The ExtractionMode to run.
    """
    if data_type is DataType.STATISTICS:
        return StatisticsMode()
    if data_type is DataType.MATCH:
        return FixedMatchMode(match_profile)
    if hints.wants_sports:
        return RichMatchMode(competition_detector)
    return GenericMode()


def extract_records(
    page: PageElement,
    hints: SelectorHints | Mapping[str, str] | None = None,
    page_url: str | None = None,
    data_type: DataType | None = None,
    *,
    mode: ExtractionMode | None = None,
) -> list[Record]:
    """Turn a parsed page into a list of records.

    Args:
        page: Root element of the parsed document.
        hints: Caller-supplied selectors, by field name.
        page_url: URL for resolving relative links (defaults to ``page.url``).
        data_type: Explicit discriminator from match/statistics callers.
        mode: Strategy to use instead of the dispatched one.

    Returns:
        Records in container order; every one satisfies its mode's
        inclusion predicate.
    """
    if not isinstance(hints, SelectorHints):
        hints = SelectorHints(hints)
    if mode is None:
        mode = select_mode(hints, data_type)

    context = ExtractionContext(
        page=page,
        hints=hints,
        page_url=page.url if page_url is None else page_url,
    )
    records = mode.extract(context)
    logger.debug(
        "%s (%s mode) extracted %d records from %s",
        type(mode).__name__,
        mode.mode.value,
        len(records),
        context.page_url or "document",
    )
    return records
