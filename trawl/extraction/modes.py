"""Extraction modes: one strategy object per record shape.

Each mode owns its container discovery, its record layout and its inclusion
predicate:

- GenericMode: products, articles and other listing cards.
- RichMatchMode: generic records enriched with league/team/score fields,
  used when the caller hints at sports fields.
- FixedMatchMode: match records read through a site profile's fixed class
  names, with a positional zipping fallback.
- StatisticsMode: one record per statistics table row, with a loose
  percent/stat-class fallback.

Record ids use fixed offsets and are never renumbered after filtering.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar, Protocol

from trawl.common.page_element import PageElement
from trawl.common.selector_utils import first_non_empty
from trawl.common.text import normalize
from trawl.data_types import Mode, Record, SelectorHints
from trawl.extraction.containers import select_containers
from trawl.extraction.fields import (
    extract_date,
    extract_field,
    extract_image,
    extract_link,
    extract_text,
    fallback_title,
    first_element,
)
from trawl.extraction.selectors import (
    AWAY_TEAM,
    DATE,
    DEFAULT_MATCH_PROFILE,
    DESCRIPTION,
    GENERIC_TEXT_FIELDS,
    HALFTIME,
    HOME_TEAM,
    LEAGUE,
    MATCH_DATE,
    NON_CONTENT_TAGS,
    PERCENT_SIGN,
    SCORE,
    STATISTICS_CELL_SELECTOR,
    STATISTICS_FALLBACK_CATEGORY,
    STATISTICS_FALLBACK_SELECTORS,
    STATISTICS_MIN_CELLS,
    STATISTICS_MIN_ROWS,
    STATISTICS_ROW_SELECTOR,
    STATISTICS_TABLE_SELECTORS,
    TITLE,
    TITLE_FALLBACK_LENGTH,
    MatchSiteProfile,
)

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3  # strictly longer than this


@dataclass(frozen=True)
class ExtractionContext:
    """Inputs shared by every record of one extraction pass.

    Attributes:
        page: Root element of the parsed document.
        hints: Caller-supplied selectors.
        page_url: URL of the page, for resolving links and images.
    """

    page: PageElement
    hints: SelectorHints
    page_url: str


class ExtractionMode(ABC):
    """Strategy for turning one parsed page into records."""

    mode: ClassVar[Mode]

    @abstractmethod
    def extract(self, context: ExtractionContext) -> list[Record]:
        """Run a full extraction pass over ``context.page``."""

    @abstractmethod
    def include(self, record: Record) -> bool:
        """Inclusion predicate: whether ``record`` carries enough content."""


class ContainerMode(ExtractionMode):
    """Mode that builds exactly one candidate record per container."""

    id_prefix: ClassVar[str] = "item"

    @abstractmethod
    def select_containers(
        self, context: ExtractionContext
    ) -> list[PageElement]:
        """Pick the elements that represent records."""

    @abstractmethod
    def build_record(
        self,
        container: PageElement,
        record_id: str,
        context: ExtractionContext,
    ) -> Record:
        """Populate one record from one container."""

    def record_id(self, index: int) -> str:
        return f"{self.id_prefix}-{index + 1}"

    def records_from(
        self,
        containers: Sequence[PageElement],
        context: ExtractionContext,
    ) -> list[Record]:
        """Build, filter and collect one record per container."""
        records = []
        for index, container in enumerate(containers):
            record = self.build_record(
                container, self.record_id(index), context
            )
            if self.include(record):
                records.append(record)

        logger.debug(
            "%s kept %d of %d containers",
            type(self).__name__,
            len(records),
            len(containers),
        )
        return records

    def extract(self, context: ExtractionContext) -> list[Record]:
        return self.records_from(self.select_containers(context), context)


# =============================================================================
# Generic listing records
# =============================================================================


class GenericMode(ContainerMode):
    """Products, articles, cards and other listing entries."""

    mode = Mode.GENERIC
    sports_containers: ClassVar[bool] = False

    def select_containers(
        self, context: ExtractionContext
    ) -> list[PageElement]:
        return select_containers(
            context.page, context.hints, sports=self.sports_containers
        )

    def build_record(
        self,
        container: PageElement,
        record_id: str,
        context: ExtractionContext,
    ) -> Record:
        record = Record(id=record_id)
        self.fill_generic(record, container, context)
        return record

    def fill_generic(
        self,
        record: Record,
        container: PageElement,
        context: ExtractionContext,
    ) -> None:
        """Fill the generic fields of ``record`` that are still empty."""
        hints = context.hints

        if not record.title:
            record.title = extract_field(
                container, TITLE, hints
            ) or fallback_title(container, TITLE_FALLBACK_LENGTH)

        if not record.description:
            record.description = extract_field(container, DESCRIPTION, hints)

        record.url = extract_link(container, hints, context.page_url)
        record.image = extract_image(container, hints, context.page_url)

        for chain in GENERIC_TEXT_FIELDS:
            setattr(
                record, chain.field, extract_field(container, chain, hints)
            )

        if not record.date:
            record.date = extract_date(container, DATE, hints)

    def include(self, record: Record) -> bool:
        return len(record.title) > MIN_TITLE_LENGTH


# =============================================================================
# Sports matches
# =============================================================================


class CompetitionDetector(Protocol):
    """Names the competition a whole page is about, or returns ``""``."""

    def __call__(self, page: PageElement) -> str: ...


@dataclass(frozen=True)
class PageHeadingDetector:
    """Detects one known competition name in the page title or first h1.

    Only the literal substring is checked. This covers a single site whose
    match cards carry no league label; it is not a general league detector.

    Attributes:
        competition: Exact competition name to look for.
    """

    competition: str

    def __call__(self, page: PageElement) -> str:
        titles = page.query_css("title", "page title")
        headings = page.query_css("h1", "page heading")
        sources = [
            "".join(title.text_content() for title in titles),
            headings[0].text_content() if headings else "",
        ]
        if any(self.competition in source for source in sources):
            return self.competition
        return ""


bundesliga_detector = PageHeadingDetector("Bundesliga")


class RichMatchMode(GenericMode):
    """Generic records enriched with league, teams, score and kickoff.

    ``title`` carries the league and ``description`` the pairing. Generic
    fields fill in whatever the sports chains left empty.
    """

    mode = Mode.SPORTS
    sports_containers = True

    def __init__(
        self,
        competition_detector: CompetitionDetector
        | None = bundesliga_detector,
    ) -> None:
        self.competition_detector = competition_detector

    def build_record(
        self,
        container: PageElement,
        record_id: str,
        context: ExtractionContext,
    ) -> Record:
        hints = context.hints
        record = Record(id=record_id)

        record.league = extract_field(container, LEAGUE, hints)
        record.title = record.league
        record.home_team = extract_field(container, HOME_TEAM, hints)
        record.away_team = extract_field(container, AWAY_TEAM, hints)
        record.score = extract_field(container, SCORE, hints)
        record.halftime = extract_field(container, HALFTIME, hints)
        record.match_date = extract_field(container, MATCH_DATE, hints)
        record.date = record.match_date

        if record.home_team and record.away_team:
            record.description = f"{record.home_team} vs {record.away_team}"

        if not record.league and self.competition_detector is not None:
            competition = self.competition_detector(context.page)
            if competition:
                record.league = record.title = competition

        self.fill_generic(record, container, context)
        return record

    def include(self, record: Record) -> bool:
        return super().include(record) or bool(
            record.home_team or record.away_team or record.score
        )


def pairing(home: str, away: str, separator: str) -> str:
    """Join team names, dropping whichever side is missing."""
    return separator.join(name for name in (home, away) if name)


class FixedMatchMode(ContainerMode):
    """Match records read through a site profile's fixed selectors.

    Containers are the first profile selector whose matches hold at least
    one team or score element. When no container qualifies, the page-wide
    home, away and score lists are zipped by position. Zipping has no
    structural guarantee: on pages where the three lists are not aligned it
    pairs the wrong teams and scores.
    """

    mode = Mode.SPORTS
    id_prefix = "match"

    def __init__(
        self, profile: MatchSiteProfile = DEFAULT_MATCH_PROFILE
    ) -> None:
        self.profile = profile

    def field_selectors(self, hints: SelectorHints) -> tuple[str, str, str]:
        """Home, away and score selectors after applying hints."""
        return (
            hints.hint("homeTeam") or self.profile.home_team,
            hints.hint("awayTeam") or self.profile.away_team,
            hints.hint("score") or self.profile.score,
        )

    def select_containers(
        self, context: ExtractionContext
    ) -> list[PageElement]:
        override = context.hints.hint("container")
        if override is not None:
            return context.page.query_css(override, "container override")

        field_selectors = self.field_selectors(context.hints)

        def holds_match_fields(container: PageElement) -> bool:
            return any(
                first_element(container, selector) is not None
                for selector in field_selectors
            )

        def qualifying(selector: str) -> list[PageElement]:
            return [
                container
                for container in context.page.query_css(
                    selector, "match container"
                )
                if holds_match_fields(container)
            ]

        return first_non_empty(self.profile.containers, qualifying) or []

    def build_record(
        self,
        container: PageElement,
        record_id: str,
        context: ExtractionContext,
    ) -> Record:
        home, away, score = (
            extract_text(container, (selector,))
            for selector in self.field_selectors(context.hints)
        )
        return self.match_record(record_id, home, away, score)

    def match_record(
        self, record_id: str, home: str, away: str, score: str
    ) -> Record:
        return Record(
            id=record_id,
            title=pairing(home, away, " - "),
            description=pairing(home, away, " vs "),
            home_team=home,
            away_team=away,
            score=score,
        )

    def zip_positions(self, context: ExtractionContext) -> list[Record]:
        """Pair the i-th home, away and score elements of the whole page."""
        columns = [
            [
                normalize(element.text_content())
                for element in context.page.query_css(selector, "match field")
            ]
            for selector in self.field_selectors(context.hints)
        ]
        count = max(len(column) for column in columns)
        logger.debug("Zipping %d match rows by position", count)

        records = []
        for index in range(count):
            home, away, score = (
                column[index] if index < len(column) else ""
                for column in columns
            )
            record = self.match_record(
                self.record_id(index), home, away, score
            )
            if self.include(record):
                records.append(record)
        return records

    def extract(self, context: ExtractionContext) -> list[Record]:
        containers = self.select_containers(context)
        if not containers and context.hints.hint("container") is None:
            return self.zip_positions(context)
        return self.records_from(containers, context)

    def include(self, record: Record) -> bool:
        return bool(record.home_team or record.away_team or record.score)


# =============================================================================
# Statistics tables
# =============================================================================

ElementMatcher = Callable[[PageElement], list[PageElement]]


def css_matcher(selector: str) -> ElementMatcher:
    """Matcher selecting descendants by CSS selector."""
    return lambda page: page.query_css(selector, "statistics element")


def own_text_contains(marker: str) -> ElementMatcher:
    """Matcher selecting content elements whose own text holds ``marker``."""

    def matcher(page: PageElement) -> list[PageElement]:
        return [
            element
            for element in page.query_css("*", "any element")
            if element.tag_name() not in NON_CONTENT_TAGS
            and marker in element.own_text()
        ]

    return matcher


STATISTICS_FALLBACK_MATCHERS: tuple[ElementMatcher, ...] = (
    *(css_matcher(selector) for selector in STATISTICS_FALLBACK_SELECTORS),
    own_text_contains(PERCENT_SIGN),
)


def row_count(table: PageElement) -> int:
    return len(table.query_css(STATISTICS_ROW_SELECTOR, "table rows"))


class StatisticsMode(ExtractionMode):
    """One record per statistics row: home value, statistic, away value.

    Table rows map cell 0 to ``homeValue``, cell 1 to ``statistic`` and cell
    2 to ``awayValue``. Row ids are ``stat-<table>-<row>``, both 0-based.
    Pages without a usable table fall back to stat-like elements, one record
    each, with ids ``stat-<n>`` (1-based).
    """

    mode = Mode.STATISTICS

    def __init__(
        self,
        fallback_matchers: tuple[
            ElementMatcher, ...
        ] = STATISTICS_FALLBACK_MATCHERS,
    ) -> None:
        self.fallback_matchers = fallback_matchers

    def select_tables(self, context: ExtractionContext) -> list[PageElement]:
        """Elements of the first family holding a table with several rows."""

        def multi_row_tables(selector: str) -> list[PageElement]:
            tables = context.page.query_css(selector, "statistics table")
            if any(row_count(table) > STATISTICS_MIN_ROWS for table in tables):
                return tables
            return []

        selectors = context.hints.chain(
            STATISTICS_TABLE_SELECTORS, "container"
        )
        return first_non_empty(selectors, multi_row_tables) or []

    def row_record(self, cells: list[str], record_id: str) -> Record:
        home_value, statistic = cells[0], cells[1]
        away_value = cells[2] if len(cells) > 2 else ""
        return Record(
            id=record_id,
            title=statistic,
            description=f"{home_value} - {statistic} - {away_value}",
            statistic=statistic,
            home_value=home_value,
            away_value=away_value,
        )

    def table_records(self, tables: list[PageElement]) -> list[Record]:
        records = []
        for table_index, table in enumerate(tables):
            rows = table.query_css(STATISTICS_ROW_SELECTOR, "table rows")
            for row_index, row in enumerate(rows):
                cells = [
                    normalize(cell.text_content())
                    for cell in row.query_css(
                        STATISTICS_CELL_SELECTOR, "row cells"
                    )
                ]
                if len(cells) < STATISTICS_MIN_CELLS:
                    continue
                record = self.row_record(
                    cells, f"stat-{table_index}-{row_index}"
                )
                if self.include(record):
                    records.append(record)
        return records

    def fallback_records(self, context: ExtractionContext) -> list[Record]:
        """Scan stat-like elements until one matcher yields records."""

        def records_for(matcher: ElementMatcher) -> list[Record]:
            records = []
            for index, element in enumerate(matcher(context.page)):
                text = normalize(element.text_content())
                if text:
                    records.append(
                        Record(
                            id=f"stat-{index + 1}",
                            title=text,
                            description=text,
                            statistic=text,
                            category=STATISTICS_FALLBACK_CATEGORY,
                        )
                    )
            return records

        return first_non_empty(self.fallback_matchers, records_for) or []

    def extract(self, context: ExtractionContext) -> list[Record]:
        tables = self.select_tables(context)
        if tables:
            logger.debug("Reading statistics rows from %d tables", len(tables))
            return self.table_records(tables)

        logger.debug("No statistics table found, scanning stat-like elements")
        return self.fallback_records(context)

    def include(self, record: Record) -> bool:
        return bool(
            record.statistic and (record.home_value or record.away_value)
        )
