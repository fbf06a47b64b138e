"""
Unified exception hierarchy for client_auth.

Provides typed exceptions with a category so callers can route failures
(retry, re-authenticate, abort) without string matching.
"""

# Import ErrorCategory from canonical source to avoid duplicate enum issues
# (comparing enums from different classes always returns False)
from client_auth.types import ErrorCategory


class ClientAuthError(Exception):
    """
    Base exception for all client_auth errors.

    Attributes:
        message: Human-readable error description
        category: Error classification for routing decisions
        cause: Original exception if wrapping
        context: Additional context dict for debugging
    """

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict | None = None,
    ):
        self.message = message
        self.cause = cause
        self.context = context or {}
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return self.category in (ErrorCategory.TRANSIENT, ErrorCategory.UNKNOWN)

    @property
    def must_reauthenticate(self) -> bool:
        return self.category == ErrorCategory.REAUTHENTICATE

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)


# =============================================================================
# Category base classes
# =============================================================================


class AuthError(ClientAuthError):
    """Base class for authentication errors."""

    category = ErrorCategory.AUTH


class ReauthenticationRequiredError(ClientAuthError):
    """Base class for errors that require a full authentication restart."""

    category = ErrorCategory.REAUTHENTICATE


class TransientError(ClientAuthError):
    """Base class for transient/retriable errors."""

    category = ErrorCategory.TRANSIENT


class PermanentError(ClientAuthError):
    """Base class for permanent/non-retriable errors."""

    category = ErrorCategory.PERMANENT


# =============================================================================
# Error Classification Utilities
# =============================================================================


def classify_http_status(status_code: int) -> ErrorCategory:
    """Classify HTTP status code into error category."""
    if 200 <= status_code < 300:
        return ErrorCategory.UNKNOWN  # Not an error

    if status_code == 401:
        return ErrorCategory.AUTH

    if status_code in (408, 429):
        return ErrorCategory.TRANSIENT

    if 400 <= status_code < 500:
        return ErrorCategory.PERMANENT

    if status_code >= 500:
        return ErrorCategory.TRANSIENT

    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ClientAuthError",
    "AuthError",
    "ReauthenticationRequiredError",
    "TransientError",
    "PermanentError",
    "classify_http_status",
]
