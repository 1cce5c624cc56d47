from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class AppError:
    """Base class for application errors."""
    message: str


@dataclass(frozen=True)
class ConfigError(AppError):
    """Missing or invalid client configuration."""
    pass


@dataclass(frozen=True)
class ArchiveError(AppError):
    """Error while talking to the TubeArchivist backend.

    Attributes:
        kind: Short name of the failure (transport, http_status, not_found,
            decode, invalid_request or unexpected).
        status_code: HTTP status returned by the backend, if any.
        cause: The exception that produced this error.
    """
    kind: str = "unexpected"
    status_code: Optional[int] = None
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)
