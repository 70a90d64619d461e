"""FastAPI application exposing the scrape endpoint.

This module provides:
- Lifespan context manager closing the shared HTTP client
- A CORS shim permitting every origin, POST and OPTIONS
- Exception handlers mapping every failure to ``{success: false, error}``
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from trawl.common.exceptions import (
    InvalidURLException,
    ScrapeException,
    TransientException,
)
from trawl.common.request_manager import AsyncRequestManager, FetchSettings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_request_manager(request: Request) -> AsyncRequestManager:
    """Dependency returning the app's shared request manager."""
    return request.app.state.request_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager: closes the HTTP client on shutdown."""
    yield
    await app.state.request_manager.close()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


async def cors_shim(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Answer OPTIONS with an empty 200 and add CORS headers everywhere."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def handle_invalid_url(
    request: Request, exc: InvalidURLException
) -> JSONResponse:
    logger.info("Rejected scrape request: %s", exc.message)
    return error_response(400, exc.message)


async def handle_transient(
    request: Request, exc: TransientException
) -> JSONResponse:
    logger.warning("Upstream fetch failed:\n%s", exc.details())
    return error_response(502, f"Scraping failed: {exc.message}")


async def handle_scrape_failure(
    request: Request, exc: ScrapeException
) -> JSONResponse:
    logger.error("Scrape failed:\n%s", exc.details())
    return error_response(500, f"Scraping failed: {exc.message}")


async def handle_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return error_response(422, f"Invalid request body: {problems}")


async def handle_http_error(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 405:
        return error_response(405, "Method not allowed")
    return error_response(exc.status_code, str(exc.detail))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("API Error")
    return error_response(500, "Internal server error")


def create_app(
    settings: FetchSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create a new FastAPI application.

    Args:
        settings: Fetch configuration for upstream pages.
        transport: Optional httpx transport for upstream fetches (tests).

    Returns:
        Configured FastAPI application.
    """
    from trawl.web.routes import router

    app = FastAPI(
        title="trawl",
        description="Extract structured records from arbitrary HTML pages",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.request_manager = AsyncRequestManager(settings, transport)

    app.middleware("http")(cors_shim)

    app.add_exception_handler(InvalidURLException, handle_invalid_url)
    app.add_exception_handler(TransientException, handle_transient)
    app.add_exception_handler(ScrapeException, handle_scrape_failure)
    app.add_exception_handler(RequestValidationError, handle_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected)

    app.include_router(router)

    return app
