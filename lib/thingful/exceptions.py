"""
Thingful API Exceptions

This module contains the exception classes raised by the Thingful client.
Validation errors are raised before any network request is made; transport
and HTTP errors are raised from the point of failure, without retries.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ThingfulError(Exception):
    """Base exception class for all Thingful client errors, dood!

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        logger.debug(f"{type(self).__name__}: {message}")

    def __str__(self) -> str:
        return self.message


class InvalidQueryError(ThingfulError):
    """Raised when query() gets a missing, empty or non-string query."""

    def __init__(self, message: str = "No query was defined") -> None:
        super().__init__(message)


class InvalidBoundsError(ThingfulError):
    """Raised when the bounding box is missing or any of its fields is absent or not a number."""

    def __init__(self, message: str = "Invalid geobounds parameter") -> None:
        super().__init__(message)


class MissingArgsError(ThingfulError):
    """Raised when nextPageUntilAmount() is called without an amount."""

    def __init__(self, message: str = "No arguments were given") -> None:
        super().__init__(message)


class MissingQueryError(ThingfulError):
    """Raised when there is no query to build a fresh request URL from."""

    def __init__(self, message: str = "No search query was defined") -> None:
        super().__init__(message)


class MissingBoundsError(ThingfulError):
    """Raised when nextPageUntilAmount() has no bounds from arguments or client state."""

    def __init__(self, message: str = "No search bounds were defined") -> None:
        super().__init__(message)


class TransportError(ThingfulError):
    """Raised when the request could not complete: timeouts, DNS and connection failures.

    Attributes:
        cause: Underlying httpx exception, if any
    """

    def __init__(self, message: str = "Network error occurred", cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.cause = cause


class HttpError(ThingfulError):
    """Raised when the API answers with anything but 200 OK.

    Attributes:
        statusCode: HTTP status code of the response
    """

    def __init__(self, statusCode: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"Bad HTTP Response ({statusCode})")
        self.statusCode = statusCode


class InvalidResponseShapeError(ThingfulError):
    """Raised when the response body is not JSON or lacks the expected keys."""

    def __init__(self, message: str = "Unexpected response shape") -> None:
        super().__init__(message)
