"""Exporters for scraped records.

Two formats are supported:

- JSON: the records wrapped in a metadata block (source URL, export date,
  item count).
- PDF: a printable, paginated report rendered with PyMuPDF. Each record is a
  numbered title followed by one line per non-empty field.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import fitz  # PyMuPDF

from trawl.data_types import Record, iso_timestamp

logger = logging.getLogger(__name__)

EXPORTED_BY = "trawl"
FILENAME_STEM = "scraped-data"

REPORT_TITLE = "Web Scraper Report"
REPORT_VALUE_LIMIT = 100
UNTITLED = "Untitled"

# Layout in PDF points; the page is A4 portrait.
MM = 72 / 25.4
PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
LEFT_MARGIN = 20 * MM
FIELD_INDENT = 25 * MM
TOP_MARGIN = 20 * MM
# Room a record title needs below it, and a field line, before a page break.
TITLE_BREAK = 40 * MM
FIELD_BREAK = 20 * MM

FONT = "helv"
BOLD_FONT = "hebo"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def build_json_export(
    records: Sequence[Record],
    source_url: str,
    export_date: datetime | None = None,
) -> dict[str, Any]:
    """Wrap records in the JSON export envelope.

    Args:
        records: Records to export, in order.
        source_url: Page the records were scraped from.
        export_date: Timestamp to stamp; defaults to now (UTC).

    Returns:
        ``{"metadata": {...}, "data": [...]}`` ready for ``json.dumps``.
    """
    export_date = export_date or _now()
    return {
        "metadata": {
            "sourceUrl": source_url,
            "exportDate": iso_timestamp(export_date),
            "totalItems": len(records),
            "exportedBy": EXPORTED_BY,
        },
        "data": [record.as_dict() for record in records],
    }


def export_filename(extension: str, today: date | None = None) -> str:
    """Default export file name, e.g. ``scraped-data-2024-05-01.json``."""
    today = today or _now().date()
    return f"{FILENAME_STEM}-{today.isoformat()}.{extension.lstrip('.')}"


def report_value(value: Any) -> str:
    """Field value as printed in the report, cut at 100 characters."""
    text = str(value)
    if len(text) > REPORT_VALUE_LIMIT:
        return text[:REPORT_VALUE_LIMIT] + "..."
    return text


def record_fields(record: Record) -> list[str]:
    """``key: value`` lines for every non-empty field except id and title."""
    return [
        f"{key}: {report_value(value)}"
        for key, value in record.as_dict().items()
        if key not in ("id", "title") and value
    ]


@dataclass(frozen=True)
class TextStyle:
    """Font, size and vertical advance of one kind of report line."""

    fontsize: float
    advance: float
    fontname: str = FONT


HEADING = TextStyle(20, 15 * MM)
META = TextStyle(12, 10 * MM)
LAST_META = TextStyle(12, 20 * MM)
SECTION = TextStyle(14, 15 * MM)
RECORD_TITLE = TextStyle(12, 8 * MM, BOLD_FONT)
FIELD = TextStyle(10, 6 * MM)
RECORD_GAP = 5 * MM


class ReportCanvas:
    """Writes lines top to bottom, adding pages as the cursor runs out.

    Coordinates are PyMuPDF text baselines measured from the top of the page.
    """

    def __init__(self, document: fitz.Document) -> None:
        self.document = document
        self.new_page()

    def new_page(self) -> None:
        self.page = self.document.new_page(
            width=PAGE_WIDTH, height=PAGE_HEIGHT
        )
        self.y = TOP_MARGIN

    def ensure_room(self, room: float) -> None:
        """Break the page if the cursor sits within ``room`` of the bottom."""
        if self.y > PAGE_HEIGHT - room:
            self.new_page()

    def write(
        self, text: str, style: TextStyle, x: float = LEFT_MARGIN
    ) -> None:
        self.page.insert_text(
            (x, self.y),
            text,
            fontname=style.fontname,
            fontsize=style.fontsize,
        )
        self.y += style.advance


def render_report(
    records: Sequence[Record],
    source_url: str,
    export_date: datetime | None = None,
) -> bytes:
    """Render records as a paginated PDF report.

    The first page opens with the report title, the source URL, the export
    date and the item count. Each record then gets a bold numbered title
    (``Untitled`` when it has none) followed by one ``field: value`` line per
    non-empty field other than ``id`` and ``title``. A record title never
    starts in the bottom 40 mm of a page, a field line never in the bottom
    20 mm.

    Args:
        records: Records to render, in order.
        source_url: Page the records were scraped from.
        export_date: Date to print; defaults to now (UTC).

    Returns:
        The PDF document as bytes.
    """
    export_date = export_date or _now()

    with fitz.open() as document:
        canvas = ReportCanvas(document)

        canvas.write(REPORT_TITLE, HEADING)
        canvas.write(f"Source URL: {source_url}", META)
        canvas.write(f"Export date: {export_date.date().isoformat()}", META)
        canvas.write(f"Total items: {len(records)}", LAST_META)
        canvas.write("Scraped data:", SECTION)

        for index, record in enumerate(records, start=1):
            canvas.ensure_room(TITLE_BREAK)
            canvas.write(
                f"{index}. {record.title or UNTITLED}", RECORD_TITLE
            )
            for line in record_fields(record):
                canvas.ensure_room(FIELD_BREAK)
                canvas.write(line, FIELD, x=FIELD_INDENT)
            canvas.y += RECORD_GAP

        document.set_metadata({"title": REPORT_TITLE, "subject": source_url})
        return document.tobytes()


def write_json_export(
    path: str | Path,
    records: Sequence[Record],
    source_url: str,
    export_date: datetime | None = None,
) -> Path:
    """Write the JSON export to ``path`` and return the path written."""
    path = Path(path)
    payload = build_json_export(records, source_url, export_date)
    path.write_text(
        json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    logger.info("Wrote %d items to %s", len(records), path)
    return path


def write_report(
    path: str | Path,
    records: Sequence[Record],
    source_url: str,
    export_date: datetime | None = None,
) -> Path:
    """Write the PDF report to ``path`` and return the path written."""
    path = Path(path)
    path.write_bytes(render_report(records, source_url, export_date))
    logger.info("Wrote PDF report of %d items to %s", len(records), path)
    return path
