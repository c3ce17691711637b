"""
semcache — Core Error Types

Defines the exception hierarchy for the semantic cache.
All locally raised exceptions inherit from SemanticCacheError.

Errors raised by a vector index client (network, auth, quota) are NOT
wrapped: they reach the caller exactly as the client raised them.
The single exception is BulkWriteError, which chains the client error
as its __cause__ so callers can tell which keys were stored.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standard error codes carried in error details."""

    INVALID_INPUT = "INVALID_INPUT"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"
    PARTIAL_WRITE = "PARTIAL_WRITE"


class SemanticCacheError(Exception):
    """Base exception for all semcache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a plain dictionary (for logs and API responses)."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(SemanticCacheError):
    """Raised when configuration is invalid or a backend library is missing."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        details = details or {}
        details.setdefault("error_code", ErrorCode.CONFIGURATION_ERROR)
        super().__init__(message, details)


class InvalidArgumentError(SemanticCacheError, ValueError):
    """Raised when input is malformed. Always raised before any remote call."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        details = details or {}
        details.setdefault("error_code", ErrorCode.INVALID_INPUT)
        super().__init__(message, details)


class BulkWriteError(SemanticCacheError):
    """
    Raised when a multi-key set fails part way through.

    Keys are written one at a time in input order, so the keys before
    ``failed_key`` are stored and the keys after it were never attempted.
    The backend's original exception is available as ``__cause__``.
    """

    def __init__(
        self,
        written_keys: Sequence[str],
        failed_key: str,
        pending_keys: Sequence[str],
    ):
        self.written_keys = list(written_keys)
        self.failed_key = failed_key
        self.pending_keys = list(pending_keys)
        message = (
            f"Bulk set failed at key {failed_key!r} after writing "
            f"{len(self.written_keys)} of {len(self.written_keys) + 1 + len(self.pending_keys)} entries"
        )
        super().__init__(
            message,
            {
                "error_code": ErrorCode.PARTIAL_WRITE,
                "written_keys": self.written_keys,
                "failed_key": failed_key,
                "pending_keys": self.pending_keys,
            },
        )
