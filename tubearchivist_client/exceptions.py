"""Exceptions raised by the TubeArchivist API client.

The repository layer turns every one of these into a Left(ArchiveError),
so they never reach the presentation layer.
"""

from typing import Optional


class ArchiveClientError(Exception):
    """Base exception for the API client.

    Attributes:
        message: Human readable description of the failure.
        status_code: HTTP status returned by the backend, if any.
    """

    kind: str = "unexpected"

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TransportError(ArchiveClientError):
    """The backend could not be reached (connection refused, DNS, timeout)."""

    kind: str = "transport"


class HttpStatusError(ArchiveClientError):
    """The backend answered with a non-2xx status."""

    kind: str = "http_status"

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message, status_code)


class NotFoundError(HttpStatusError):
    """The requested entity does not exist (HTTP 404)."""

    kind: str = "not_found"

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class DecodeError(ArchiveClientError):
    """The response body was not JSON or did not have the expected shape."""

    kind: str = "decode"
