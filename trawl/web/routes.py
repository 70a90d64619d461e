"""REST API endpoints.

This module provides endpoints for:
- Scraping one page into records
- Liveness checks
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from trawl.common.request_manager import AsyncRequestManager
from trawl.data_types import DataType
from trawl.scraper import scrape_url_async
from trawl.web.app import get_request_manager

router = APIRouter(tags=["scrape"])


class ScrapeRequest(BaseModel):
    """Request model for a scrape."""

    model_config = ConfigDict(populate_by_name=True)

    url: str | None = Field(None, description="Page to scrape")
    custom_selectors: dict[str, str | None] | None = Field(
        None,
        alias="customSelectors",
        description="CSS selector per field, replacing the built-in chain",
    )
    data_type: DataType | None = Field(
        None, alias="dataType", description="match or statistics"
    )


@router.post("/api/scrape")
async def scrape(
    body: ScrapeRequest,
    manager: Annotated[AsyncRequestManager, Depends(get_request_manager)],
) -> dict[str, Any]:
    """Fetch the page and return every extracted record."""
    result = await scrape_url_async(
        body.url,
        body.custom_selectors,
        body.data_type,
        request_manager=manager,
    )
    return result.as_dict()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}
