"""OAuth2-specific exceptions."""

from client_auth.errors.exceptions import (
    ClientAuthError,
    PermanentError,
    ReauthenticationRequiredError,
    classify_http_status,
)
from client_auth.types import ErrorCategory


class OAuth2Error(ClientAuthError):
    """Base exception for OAuth2 operations."""

    pass


class InvalidStateError(OAuth2Error, PermanentError):
    """A flow was invoked without the tokens it requires (caller bug, never retried)."""

    category = ErrorCategory.PERMANENT


class MustReauthenticateError(OAuth2Error, ReauthenticationRequiredError):
    """
    The refresh token cannot be used any more.

    Raised before any network call when the refresh token is within the
    safety window of expiring. Callers route this to their initial
    authentication flow instead of retrying the refresh.
    """

    category = ErrorCategory.REAUTHENTICATE


class InvalidConfigurationError(OAuth2Error, PermanentError):
    """OAuth2 client configuration is invalid."""

    category = ErrorCategory.PERMANENT


class TokenEndpointError(OAuth2Error):
    """
    The token endpoint answered with a non-success status.

    Attributes:
        status: HTTP status code
        error_code: OAuth2 ``error`` field (RFC 6749 section 5.2), if present
        error_description: OAuth2 ``error_description`` field, if present
    """

    def __init__(
        self,
        status: int,
        error_code: str | None = None,
        error_description: str | None = None,
        cause: Exception | None = None,
    ):
        message = f"Token endpoint returned HTTP {status}"
        if error_code:
            message += f": {error_code}"
        if error_description:
            message += f" ({error_description})"
        super().__init__(
            message,
            cause=cause,
            context={"http_status": status, "error_code": error_code},
        )
        self.status = status
        self.error_code = error_code
        self.error_description = error_description

        # A rejected refresh token cannot be fixed by retrying the same grant
        if error_code == "invalid_grant":
            self.category = ErrorCategory.REAUTHENTICATE
        else:
            self.category = classify_http_status(status)


__all__ = [
    "OAuth2Error",
    "InvalidStateError",
    "MustReauthenticateError",
    "InvalidConfigurationError",
    "TokenEndpointError",
]
