"""Scrape orchestration: validate, fetch, parse, extract.

One scrape is one GET followed by one synchronous extraction pass. Either the
complete record list comes back wrapped in a ScrapeResult, or a single
ScrapeException propagates.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from urllib.parse import urlsplit

from trawl.common.exceptions import InvalidURLException
from trawl.common.lxml_page_element import LxmlPageElement
from trawl.common.request_manager import (
    AsyncRequestManager,
    FetchSettings,
    SyncRequestManager,
)
from trawl.data_types import DataType, ScrapeResult, SelectorHints
from trawl.extraction import extract_records

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


def validate_url(url: str | None) -> str:
    """Check that ``url`` is present and is an absolute http(s) URL.

    Args:
        url: URL supplied by the caller.

    Returns:
        The URL, stripped of surrounding whitespace.

    Raises:
        InvalidURLException: If the URL is missing or does not parse.
    """
    if url is None or not url.strip():
        raise InvalidURLException("URL is required")

    url = url.strip()
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidURLException("Invalid URL format", url) from e

    if parts.scheme not in SUPPORTED_SCHEMES or not parts.netloc:
        raise InvalidURLException("Invalid URL format", url)
    return url


def scrape_document(
    content: str | bytes,
    url: str,
    hints: SelectorHints | Mapping[str, str] | None = None,
    data_type: DataType | None = None,
) -> ScrapeResult:
    """Extract records from an already-fetched page body.

    Args:
        content: Raw HTML of the page.
        url: URL the page came from, used to resolve relative links.
        hints: Caller-supplied selectors, by field name.
        data_type: Explicit discriminator from match/statistics callers.

    Returns:
        ScrapeResult holding every extracted record.

    Raises:
        DocumentParseException: If the page holds no parseable document.
    """
    page = LxmlPageElement.from_html(content, url)
    records = extract_records(page, hints, url, data_type)
    logger.info("Scraped %d items from %s", len(records), url)
    return ScrapeResult.from_records(url, records, data_type)


def scrape_url(
    url: str | None,
    hints: SelectorHints | Mapping[str, str] | None = None,
    data_type: DataType | None = None,
    *,
    request_manager: SyncRequestManager | None = None,
    settings: FetchSettings | None = None,
) -> ScrapeResult:
    """Fetch ``url`` and extract its records.

    Args:
        url: Page to scrape.
        hints: Caller-supplied selectors, by field name.
        data_type: Explicit discriminator from match/statistics callers.
        request_manager: Manager to fetch with; a temporary one is created
            (and closed) when omitted.
        settings: Fetch settings for the temporary manager.

    Returns:
        ScrapeResult for the page.

    Raises:
        InvalidURLException: If ``url`` is missing or malformed.
        TransientException: If the fetch fails.
        DocumentParseException: If the page cannot be parsed.
    """
    url = validate_url(url)
    logger.info("Scraping URL: %s", url)

    if request_manager is None:
        with SyncRequestManager(settings) as manager:
            response = manager.fetch(url)
    else:
        response = request_manager.fetch(url)

    return scrape_document(response.content, url, hints, data_type)


async def scrape_url_async(
    url: str | None,
    hints: SelectorHints | Mapping[str, str] | None = None,
    data_type: DataType | None = None,
    *,
    request_manager: AsyncRequestManager | None = None,
    settings: FetchSettings | None = None,
) -> ScrapeResult:
    """Async variant of ``scrape_url``.

    Parsing and extraction run in a worker thread so a large page never
    stalls the event loop.
    """
    url = validate_url(url)
    logger.info("Scraping URL: %s", url)

    if request_manager is None:
        async with AsyncRequestManager(settings) as manager:
            response = await manager.fetch(url)
    else:
        response = await request_manager.fetch(url)

    return await asyncio.to_thread(
        scrape_document, response.content, url, hints, data_type
    )
