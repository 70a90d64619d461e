"""Exception types for scrape failures.

This module defines the exception hierarchy surfaced by a scrape request.
Per-field extraction misses and malformed selectors are never errors; they
degrade to empty strings and zero matches inside the engine. Only failures
that abort the whole request live here.
"""

from typing import Any


class ScrapeException(Exception):
    """Base class for failures that abort a scrape request.

    A scrape either returns the full record list for a page or raises exactly
    one of these. There is no partial-success mode.
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the failure.
            url: The URL of the page being scraped, if known.
            context: Optional dict of additional context.
        """
        self.message = message
        self.url = url
        self.context = context or {}
        super().__init__(self.message)

    def details(self) -> str:
        """Format the error message with URL and context for logs.

        Returns:
            Multi-line description of the failure.
        """
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class InvalidURLException(ScrapeException):
    """Raised when the requested URL is missing or does not parse.

    Extraction is never attempted for an invalid URL.
    """


class DocumentParseException(ScrapeException):
    """Raised when the fetched page cannot be parsed into a document."""


class TransientException(ScrapeException):
    """Base class for upstream fetch failures.

    Network issues, timeouts and non-success responses land here. The
    failure is reported once; nothing in trawl retries it.
    """


class HTMLResponseAssumptionException(TransientException):
    """Raised when the upstream page answers with a non-success status.

    Attributes:
        status_code: The actual HTTP status code received.
        expected_codes: List of status codes that were expected.
    """

    def __init__(
        self,
        status_code: int,
        expected_codes: list[int],
        url: str,
    ) -> None:
        """Initialize the exception.

        Args:
            status_code: The actual status code received.
            expected_codes: List of expected status codes.
            url: The URL of the request.
        """
        self.status_code = status_code
        self.expected_codes = expected_codes

        expected_str = ", ".join(str(code) for code in expected_codes)
        super().__init__(
            f"HTTP {status_code} from {url} (expected one of: {expected_str})",
            url,
            {"status_code": status_code, "expected_codes": expected_codes},
        )


class RequestTimeoutException(TransientException):
    """Raised when the upstream fetch exceeds its timeout.

    Attributes:
        timeout_seconds: The timeout duration in seconds.
    """

    def __init__(self, url: str, timeout_seconds: float) -> None:
        """Initialize the exception.

        Args:
            url: The URL that timed out.
            timeout_seconds: The timeout duration in seconds.
        """
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Request to {url} timed out after {timeout_seconds}s",
            url,
            {"timeout_seconds": timeout_seconds},
        )


class RequestFailedException(TransientException):
    """Raised when the upstream fetch fails at the transport level.

    Attributes:
        reason: Description of the underlying transport error.
    """

    def __init__(self, url: str, reason: str) -> None:
        """Initialize the exception.

        Args:
            url: The URL that could not be fetched.
            reason: Description of the underlying transport error.
        """
        self.reason = reason
        super().__init__(
            f"Request to {url} failed: {reason}",
            url,
            {"reason": reason},
        )
