"""Heuristic extraction engine.

Example::

    page = LxmlPageElement.from_html(html_bytes, "https://shop.example/")
    records = extract_records(page, {"price": "span.cost"})
"""

from trawl.extraction.engine import extract_records, select_mode
from trawl.extraction.modes import (
    ExtractionMode,
    FixedMatchMode,
    GenericMode,
    PageHeadingDetector,
    RichMatchMode,
    StatisticsMode,
)
from trawl.extraction.selectors import MatchSiteProfile

__all__ = [
    "ExtractionMode",
    "FixedMatchMode",
    "GenericMode",
    "MatchSiteProfile",
    "PageHeadingDetector",
    "RichMatchMode",
    "StatisticsMode",
    "extract_records",
    "select_mode",
]
