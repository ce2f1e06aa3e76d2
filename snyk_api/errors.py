"""Exception hierarchy for snyk-api."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import requests


class SnykError(Exception):
    """Base class for every error raised by this package."""

    def with_context(self, context: str) -> SnykError:
        """Copy of this error with ``context`` in front of its message."""
        return type(self)(f"{context}; {self}")


class MalformedInput(SnykError):
    """A request path could not be composed into a URL."""


class SerializationError(SnykError):
    """A request body could not be encoded as JSON."""


class TransportError(SnykError):
    """The request failed below the HTTP layer."""


class APIError(SnykError):
    """The API answered with a status of 400 or above."""

    def __init__(
        self, status: int, body: str, response: requests.Response | None = None, message: str | None = None
    ):
        super().__init__(message or f"error: '{status}': '{body}'")
        self.status = status
        self.body = body
        self.response = response

    def with_context(self, context: str) -> APIError:
        return APIError(self.status, self.body, self.response, message=f"{context}; {self}")


class DecodeError(SnykError):
    """A response body did not match the expected shape."""


class ValidationError(SnykError, ValueError):
    """A caller-supplied value is outside its allowed set."""


class NotFoundError(SnykError):
    """A lookup by identifier matched nothing."""

    def __init__(self, message: str, identifier: str):
        super().__init__(message)
        self.identifier = identifier

    def with_context(self, context: str) -> NotFoundError:
        return NotFoundError(f"{context}; {self}", self.identifier)


class UnsupportedOperation(SnykError):
    """The operation is not available for this kind of entity."""
