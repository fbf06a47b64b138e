"""
Wire schemas for the OAuth2 token endpoint.

Pydantic models for the refresh grant request and the token/error responses
defined by RFC 6749 sections 5.1, 5.2 and 6.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from client_auth.oauth2.models import Token, Tokens


class RefreshTokensRequest(BaseModel):
    """Refresh grant request (RFC 6749 section 6)."""

    model_config = ConfigDict(frozen=True)

    grant_type: Literal["refresh_token"] = "refresh_token"
    refresh_token: str = Field(..., min_length=1)
    scope: str | None = None

    @field_validator("scope")
    @classmethod
    def blank_scope_is_unset(cls, v: str | None) -> str | None:
        """An empty scope is never sent; it is the same as no scope."""
        if v is None or not v.strip():
            return None
        return v

    def to_form(self) -> dict[str, str]:
        """Form fields for the token endpoint; unset fields are omitted."""
        return self.model_dump(exclude_none=True)


class TokensResponse(BaseModel):
    """Successful token endpoint response (RFC 6749 section 5.1)."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1)
    token_type: str = "Bearer"
    expires_in: int | None = Field(default=None, ge=0)
    refresh_token: str | None = None
    refresh_expires_in: int | None = Field(default=None, ge=0)
    scope: str | None = None

    def as_tokens(self, issued_at: datetime) -> Tokens:
        """
        Convert to Tokens stamped with the instant the response was received.

        Args:
            issued_at: Issuance instant for both tokens

        Returns:
            Tokens; refresh_token is None when the server issued none
        """
        refresh = None
        if self.refresh_token:
            refresh = Token.issued(self.refresh_token, issued_at, self.refresh_expires_in)
        return Tokens(
            access_token=Token.issued(self.access_token, issued_at, self.expires_in),
            refresh_token=refresh,
        )


class ErrorResponse(BaseModel):
    """Token endpoint error response (RFC 6749 section 5.2)."""

    model_config = ConfigDict(extra="ignore")

    error: str
    error_description: str | None = None
    error_uri: str | None = None


__all__ = ["RefreshTokensRequest", "TokensResponse", "ErrorResponse"]
