"""OAuth2 data models and configuration."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from client_auth.oauth2.exceptions import InvalidConfigurationError

DEFAULT_ACCESS_TOKEN_LIFESPAN = timedelta(minutes=1)
DEFAULT_REFRESH_TOKEN_LIFESPAN = timedelta(minutes=30)
DEFAULT_REFRESH_SAFETY_WINDOW = timedelta(seconds=10)


@dataclass(frozen=True)
class Token:
    """
    An issued OAuth2 token.

    Attributes:
        payload: The opaque token string sent to servers
        issued_at: UTC instant the token was obtained, if known
        lifespan: Lifetime declared by the server (``expires_in``), if any
        expiration_time: Explicit UTC expiration instant, if known
    """

    payload: str
    issued_at: datetime | None = None
    lifespan: timedelta | None = None
    expiration_time: datetime | None = None

    def __post_init__(self):
        if not self.payload:
            raise ValueError("Token payload must be a non-empty string")

    @classmethod
    def issued(
        cls,
        payload: str,
        issued_at: datetime,
        expires_in: int | float | None = None,
    ) -> "Token":
        """Build a token from a server response field expressed in seconds."""
        lifespan = timedelta(seconds=expires_in) if expires_in is not None else None
        return cls(payload=payload, issued_at=issued_at, lifespan=lifespan)

    def __repr__(self) -> str:
        # Never render the payload
        return (
            f"Token(issued_at={self.issued_at!r}, lifespan={self.lifespan!r}, "
            f"expiration_time={self.expiration_time!r})"
        )


@dataclass(frozen=True)
class Tokens:
    """
    Access token plus optional refresh token, replaced as a unit.

    Attributes:
        access_token: Token sent as bearer credential on API calls
        refresh_token: Token exchanged for new tokens, if the server issued one
    """

    access_token: Token
    refresh_token: Token | None = None

    def __post_init__(self):
        if self.access_token is None:
            raise ValueError("Tokens require an access token")


@dataclass
class OAuth2ClientConfig:
    """
    OAuth2 client configuration.

    Attributes:
        client_name: Identifier used in logs
        token_endpoint: Token endpoint URL
        client_id: OAuth2 client ID
        client_secret: Client secret; when set the client authenticates with
            HTTP Basic, otherwise client_id travels in the form body
        scope: Space-separated string or list of scopes; omitted when unset
        default_access_token_lifespan: Assumed when a response has no expires_in
        default_refresh_token_lifespan: Assumed when a response has no
            refresh_expires_in
        refresh_safety_window: Margin before expiry at which a token counts as
            about to expire
        timeout_seconds: Total timeout handed to the HTTP session, None for the
            session default
        extra_params: Additional form parameters for token requests
    """

    token_endpoint: str
    client_id: str
    client_secret: str | None = None
    client_name: str = "default"
    scope: str | list[str] | None = None
    default_access_token_lifespan: timedelta = DEFAULT_ACCESS_TOKEN_LIFESPAN
    default_refresh_token_lifespan: timedelta = DEFAULT_REFRESH_TOKEN_LIFESPAN
    refresh_safety_window: timedelta = DEFAULT_REFRESH_SAFETY_WINDOW
    timeout_seconds: float | None = 30
    extra_params: dict[str, str] = field(default_factory=dict)

    def get_scope_string(self) -> str | None:
        """Get scope as space-separated string, or None when no scope is configured."""
        if not self.scope:
            return None
        if isinstance(self.scope, list):
            return " ".join(self.scope) or None
        return self.scope

    def validate(self) -> None:
        """
        Check the configuration is usable.

        Raises:
            InvalidConfigurationError: If a required field is missing or a
                duration is negative
        """
        if not self.token_endpoint or not self.client_id:
            raise InvalidConfigurationError("token_endpoint and client_id are required")

        for name in (
            "default_access_token_lifespan",
            "default_refresh_token_lifespan",
            "refresh_safety_window",
        ):
            if getattr(self, name) < timedelta(0):
                raise InvalidConfigurationError(f"{name} must not be negative")


__all__ = [
    "Token",
    "Tokens",
    "OAuth2ClientConfig",
    "DEFAULT_ACCESS_TOKEN_LIFESPAN",
    "DEFAULT_REFRESH_TOKEN_LIFESPAN",
    "DEFAULT_REFRESH_SAFETY_WINDOW",
]
