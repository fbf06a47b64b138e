"""
Core types and protocols used across modules.

This module provides the shared enums and protocol definitions that the
oauth2, signing and errors packages agree on.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Protocol


class ErrorCategory(Enum):
    """
    Classification of error types for handling decisions.

    Categories:
        TRANSIENT: Temporary failures that a wrapping policy may retry
                   (e.g., network timeouts, 429/503 from the token endpoint)
        AUTH: Authentication failures (e.g., 401 from an API call)
        REAUTHENTICATE: The held refresh token can no longer be used; the
                        caller must restart the full authentication flow
        PERMANENT: Non-retriable failures (caller contract violations,
                   malformed requests, signing failures)
        UNKNOWN: Unclassified errors
    """

    TRANSIENT = "transient"
    AUTH = "auth"
    REAUTHENTICATE = "reauthenticate"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


class Clock(Protocol):
    """Callable returning the current instant as an aware UTC datetime."""

    def __call__(self) -> datetime: ...


class BodyEncoder(Protocol):
    """Serializes a request entity into the bytes that are signed and sent."""

    def __call__(self, entity: Any) -> bytes: ...


__all__ = [
    "ErrorCategory",
    "Clock",
    "BodyEncoder",
]
