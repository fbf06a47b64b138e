"""
Error classification and exception hierarchy.

Provides:
- ErrorCategory enum for routing failures
- ClientAuthError hierarchy for typed exceptions
- HTTP status classification for token endpoint responses
"""

from client_auth.errors.exceptions import (
    AuthError,
    ClientAuthError,
    ErrorCategory,
    PermanentError,
    ReauthenticationRequiredError,
    TransientError,
    classify_http_status,
)

__all__ = [
    # Enums
    "ErrorCategory",
    # Base classes
    "ClientAuthError",
    "AuthError",
    "ReauthenticationRequiredError",
    "TransientError",
    "PermanentError",
    # Classification utilities
    "classify_http_status",
]
