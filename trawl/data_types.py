"""Data types shared by the extraction engine and its callers.

This module defines:

1. Record - one extracted item, a fixed set of string fields (open schema)
2. SelectorHints - caller-supplied CSS selectors overriding fallback chains
3. Mode / DataType - the extraction strategy discriminators
4. ScrapeResult - the envelope returned to HTTP and CLI callers
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DataType(str, Enum):
    """Explicit discriminator sent by match/statistics-oriented callers.

    Values:
        MATCH: One record per sports match (fixed-selector variant).
        STATISTICS: One record per statistics table row.
    """

    MATCH = "match"
    STATISTICS = "statistics"


class Mode(Enum):
    """Record-shape strategy in effect for one extraction pass."""

    GENERIC = "generic"
    SPORTS = "sports"
    STATISTICS = "statistics"


class Record(BaseModel):
    """One extracted record.

    Every recognized field is a string and defaults to ``""``; an empty string
    means "not found". Attribute names are snake_case, serialized names are
    the camelCase names used on the wire (``homeTeam``). Unrecognized extra
    fields are accepted but never populated by the engine.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = ""
    title: str = ""
    description: str = ""
    url: str = ""
    image: str = ""
    price: str = ""
    category: str = ""
    date: str = ""
    author: str = ""
    league: str = ""
    home_team: str = Field("", alias="homeTeam")
    away_team: str = Field("", alias="awayTeam")
    score: str = ""
    halftime: str = ""
    match_date: str = Field("", alias="matchDate")
    statistic: str = ""
    home_value: str = Field("", alias="homeValue")
    away_value: str = Field("", alias="awayValue")

    def as_dict(self) -> dict[str, Any]:
        """Serialize with wire (camelCase) field names."""
        return self.model_dump(by_alias=True)


# Wire names of the recognized fields, in serialization order.
RECORD_FIELDS: tuple[str, ...] = tuple(
    info.alias or name for name, info in Record.model_fields.items()
)

SPORTS_HINT_KEYS = ("homeTeam", "awayTeam", "score")


class SelectorHints(Mapping[str, str]):
    """Read-only mapping of field name to a caller-supplied CSS selector.

    Blank selectors are dropped on construction, so a key is present only
    when the caller actually asked for something. A present hint fully
    replaces the built-in fallback chain for its field.

    Example::

        hints = SelectorHints({"title": "h4.name", "price": "  "})
        hints.chain(("h1", "h2"), "title")   # ("h4.name",)
        hints.chain((".price",), "price")    # (".price",)
    """

    def __init__(self, selectors: Mapping[str, Any] | None = None) -> None:
        self._selectors: dict[str, str] = {
            key: value.strip()
            for key, value in (selectors or {}).items()
            if isinstance(value, str) and value.strip()
        }

    def __getitem__(self, key: str) -> str:
        return self._selectors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._selectors)

    def __len__(self) -> int:
        return len(self._selectors)

    def __repr__(self) -> str:
        return f"SelectorHints({self._selectors!r})"

    def hint(self, *keys: str) -> str | None:
        """Return the hint for the first of ``keys`` that has one."""
        for key in keys:
            if key in self._selectors:
                return self._selectors[key]
        return None

    def chain(self, defaults: Sequence[str], *keys: str) -> tuple[str, ...]:
        """Selector chain for a field: the hint alone, else the defaults.

        Args:
            defaults: Built-in fallback selectors for the field.
            *keys: Hint keys that address the field, in priority order.

        Returns:
            ``(hint,)`` if a hint exists, otherwise ``tuple(defaults)``.
        """
        selector = self.hint(*keys)
        if selector is not None:
            return (selector,)
        return tuple(defaults)

    @property
    def wants_sports(self) -> bool:
        """True if any sports-specific field hint was supplied."""
        return any(key in self._selectors for key in SPORTS_HINT_KEYS)


def iso_timestamp(moment: datetime) -> str:
    """Format an aware UTC datetime as ISO-8601 with milliseconds and ``Z``."""
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_timestamp() -> str:
    """Current UTC time, formatted by ``iso_timestamp``."""
    return iso_timestamp(datetime.now(timezone.utc))


class ScrapeResult(BaseModel):
    """Envelope returned for a successful scrape."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    url: str
    data_type: DataType | None = Field(None, alias="dataType")
    total_items: int = Field(0, alias="totalItems")
    data: list[Record] = Field(default_factory=list)
    scraped_at: str = Field(default_factory=utc_timestamp, alias="scrapedAt")

    @classmethod
    def from_records(
        cls,
        url: str,
        records: list[Record],
        data_type: DataType | None = None,
    ) -> ScrapeResult:
        """Build a result whose ``totalItems`` matches ``records``."""
        return cls(
            url=url,
            data_type=data_type,
            total_items=len(records),
            data=records,
        )

    def as_dict(self) -> dict[str, Any]:
        """Serialize with wire names; ``dataType`` is omitted when unset."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
