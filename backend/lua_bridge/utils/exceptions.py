"""
Exception taxonomy for the generation adapter and command relay.

WHAT: Domain-specific exceptions that map to HTTP status codes
WHY: Consistent error handling across all API endpoints
HOW: Exception classes carrying an error code, message, status and details
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Normalized error categories."""
    CLIENT_ERROR = "CLIENT_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    EXTRACTION_ERROR = "EXTRACTION_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


class BridgeException(Exception):
    """Base class for all exceptions that become an HTTP error response."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class GenerationError(BridgeException):
    """Base class for the normalized error taxonomy."""

    kind: ErrorKind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(
            message=message,
            code=self.kind.value,
            status_code=status_code,
            details=details,
        )

    @property
    def upstream_status(self) -> Optional[int]:
        return None


class ClientError(GenerationError):
    """Malformed or missing input. Never reaches a backend."""

    kind = ErrorKind.CLIENT_ERROR
    status_code = 400


class ConfigurationError(GenerationError):
    """Server is misconfigured (e.g. API key not set). Requires operator action."""

    kind = ErrorKind.CONFIGURATION_ERROR
    status_code = 500


class UpstreamError(GenerationError):
    """
    Backend answered with a non-success HTTP status.

    4xx/5xx statuses are passed through to the caller. Anything else
    (an unfollowed 3xx redirect, say) is reported as 502.
    """

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(self, message: str, upstream_status: int):
        super().__init__(
            message=message,
            status_code=upstream_status if 400 <= upstream_status <= 599 else 502,
            details={"upstream_status": upstream_status},
        )
        self._upstream_status = upstream_status

    @property
    def upstream_status(self) -> Optional[int]:
        return self._upstream_status


class ExtractionError(GenerationError):
    """Backend call succeeded but no usable text could be extracted."""

    kind = ErrorKind.EXTRACTION_ERROR
    status_code = 500


class TransportError(GenerationError):
    """Network failure reaching the backend."""

    kind = ErrorKind.TRANSPORT_ERROR
    status_code = 500
