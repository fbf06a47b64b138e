"""Token refresh flow (RFC 6749 section 6)."""

import logging
from dataclasses import dataclass

from client_auth.errors.exceptions import ClientAuthError
from client_auth.oauth2.exceptions import InvalidStateError, MustReauthenticateError
from client_auth.oauth2.expiration import TokenState, token_expiration_time, token_state
from client_auth.oauth2.flows.base import AbstractFlow
from client_auth.oauth2.models import Tokens
from client_auth.oauth2.schemas import RefreshTokensRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Refreshed:
    """The refresh exchange succeeded."""

    tokens: Tokens


@dataclass(frozen=True)
class MustReauthenticate:
    """The held refresh token is unusable; run the initial authentication flow."""

    reason: str


RefreshOutcome = Refreshed | MustReauthenticate


class RefreshTokensFlow(AbstractFlow):
    """
    Exchanges a refresh token for new tokens.

    The refresh token is checked against the expiration policy first. A token
    that is expired or inside the safety window is never sent; the flow fails
    fast with MustReauthenticateError instead.

    Usage:
        flow = RefreshTokensFlow(config)
        try:
            tokens = await flow.fetch_new_tokens(tokens)
        except MustReauthenticateError:
            tokens = await login()
    """

    async def fetch_new_tokens(self, current_tokens: Tokens | None) -> Tokens:
        """
        Refresh the given tokens.

        Args:
            current_tokens: Tokens holding the refresh token to exchange

        Returns:
            New Tokens. If the server does not rotate the refresh token, the
            current one is carried over.

        Raises:
            InvalidStateError: If tokens or the refresh token are missing
            MustReauthenticateError: If the refresh token is about to expire
            TokenEndpointError: If the token endpoint rejects the grant
        """
        if current_tokens is None:
            raise InvalidStateError("Refresh flow requires current tokens")
        refresh_token = current_tokens.refresh_token
        if refresh_token is None:
            raise InvalidStateError("Refresh flow requires a refresh token")

        now = self._clock()
        state = token_state(
            now,
            refresh_token,
            self.config.default_refresh_token_lifespan,
            self.config.refresh_safety_window,
        )
        if state is not TokenState.VALID:
            expiration = token_expiration_time(
                now, refresh_token, self.config.default_refresh_token_lifespan
            )
            logger.info(
                f"Refresh token for '{self.client_name}' is {state.value}, "
                f"re-authentication required",
                extra={
                    "token_state": state.value,
                    "expires_at": expiration.isoformat(),
                    "remaining_seconds": (expiration - now).total_seconds(),
                },
            )
            raise MustReauthenticateError(
                "Refresh token is about to expire",
                context={"token_state": state.value, "client_name": self.client_name},
            )

        request = RefreshTokensRequest(
            refresh_token=refresh_token.payload,
            scope=self.config.get_scope_string(),
        )
        response = await self.invoke_token_endpoint(request.to_form())
        new_tokens = response.as_tokens(issued_at=self._clock())

        if new_tokens.refresh_token is None:
            new_tokens = Tokens(access_token=new_tokens.access_token, refresh_token=refresh_token)

        logger.debug(
            f"Refreshed tokens for '{self.client_name}'",
            extra={"grant_type": request.grant_type, "expires_in": response.expires_in},
        )
        return new_tokens

    async def try_refresh(self, current_tokens: Tokens | None) -> RefreshOutcome:
        """
        Refresh without using exceptions for the re-authentication branch.

        Returns:
            Refreshed with new tokens, or MustReauthenticate when the refresh
            token is about to expire or the server rejected it as invalid_grant

        Raises:
            InvalidStateError: If tokens or the refresh token are missing
            Any transport or endpoint error that does not require
            re-authentication
        """
        try:
            return Refreshed(await self.fetch_new_tokens(current_tokens))
        except ClientAuthError as e:
            if not e.must_reauthenticate:
                raise
            return MustReauthenticate(reason=e.message)


__all__ = ["RefreshTokensFlow", "RefreshOutcome", "Refreshed", "MustReauthenticate"]
