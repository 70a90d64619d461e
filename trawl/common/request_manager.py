"""Request managers for fetching the page to scrape.

This module provides SyncRequestManager and AsyncRequestManager classes that
encapsulate the HTTP client and turn upstream failures into trawl
exceptions.

The request manager is responsible for:
- Maintaining the HTTP client (httpx.Client or httpx.AsyncClient)
- Sending one browser-like GET per page, with a bounded wait
- Wrapping timeouts, transport errors and non-success statuses

Nothing here retries. A failed fetch is reported once and the scrape is
abandoned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from trawl.common.exceptions import (
    HTMLResponseAssumptionException,
    RequestFailedException,
    RequestTimeoutException,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass(frozen=True)
class FetchSettings:
    """Configuration for the upstream page fetch.

    Attributes:
        timeout: Seconds to wait for the whole response.
        user_agent: User-Agent header sent with every request.
        follow_redirects: Whether to follow HTTP redirects.
    """

    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments shared by the sync and async httpx clients."""
        return {
            "timeout": self.timeout,
            "headers": {"User-Agent": self.user_agent},
            "follow_redirects": self.follow_redirects,
        }


@dataclass
class Response:
    """HTTP response from fetching a page.

    Attributes:
        content: Raw response bytes, decoded later by the HTML parser so the
            page's declared charset is honoured.
    """

    content: bytes


def _to_response(http_response: httpx.Response, url: str) -> Response:
    """Check the status and convert an httpx response.

    Raises:
        HTMLResponseAssumptionException: For any non-2xx status code.
    """
    if not http_response.is_success:
        raise HTMLResponseAssumptionException(
            status_code=http_response.status_code,
            expected_codes=[200],
            url=url,
        )

    return Response(content=http_response.content)


class SyncRequestManager:
    """Fetches pages for synchronous callers (the CLI).

    Example::

        with SyncRequestManager(FetchSettings(timeout=5.0)) as manager:
            response = manager.fetch("https://example.com/")
    """

    def __init__(
        self,
        settings: FetchSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the request manager.

        Args:
            settings: Fetch configuration (defaults to ``FetchSettings()``).
            transport: Optional httpx transport, e.g. a MockTransport in tests.
        """
        self.settings = settings or FetchSettings()
        self._client = httpx.Client(
            transport=transport, **self.settings.client_kwargs()
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> SyncRequestManager:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()

    def fetch(self, url: str) -> Response:
        """GET ``url`` and return the Response.

        Args:
            url: Absolute URL of the page.

        Returns:
            Response containing the page body.

        Raises:
            HTMLResponseAssumptionException: For a non-2xx status code.
            RequestTimeoutException: If the request times out.
            RequestFailedException: For any other transport failure.
        """
        logger.debug("GET %s", url)
        try:
            http_response = self._client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutException(
                url=url, timeout_seconds=self.settings.timeout
            ) from e
        except httpx.HTTPError as e:
            raise RequestFailedException(url=url, reason=str(e)) from e

        return _to_response(http_response, url)


class AsyncRequestManager:
    """Fetches pages for asynchronous callers (the web handler).

    Example::

        async with AsyncRequestManager() as manager:
            response = await manager.fetch("https://example.com/")
    """

    def __init__(
        self,
        settings: FetchSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the request manager.

        Args:
            settings: Fetch configuration (defaults to ``FetchSettings()``).
            transport: Optional httpx transport, e.g. a MockTransport in tests.
        """
        self.settings = settings or FetchSettings()
        self._client = httpx.AsyncClient(
            transport=transport, **self.settings.client_kwargs()
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncRequestManager:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()

    async def fetch(self, url: str) -> Response:
        """GET ``url`` and return the Response.

        Args:
            url: Absolute URL of the page.

        Returns:
            Response containing the page body.

        Raises:
            HTMLResponseAssumptionException: For a non-2xx status code.
            RequestTimeoutException: If the request times out.
            RequestFailedException: For any other transport failure.
        """
        logger.debug("GET %s", url)
        try:
            http_response = await self._client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutException(
                url=url, timeout_seconds=self.settings.timeout
            ) from e
        except httpx.HTTPError as e:
            raise RequestFailedException(url=url, reason=str(e)) from e

        return _to_response(http_response, url)
