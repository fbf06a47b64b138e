"""OAuth2 token manager with single-flight refresh."""

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any

from client_auth.oauth2.expiration import (
    TokenState,
    expiration_state,
    token_expiration_time,
    token_state,
)
from client_auth.oauth2.flows.refresh import MustReauthenticate, RefreshTokensFlow
from client_auth.oauth2.models import Tokens
from client_auth.types import Clock

logger = logging.getLogger(__name__)

Authenticate = Callable[[], Awaitable[Tokens]]


class OAuth2TokenManager:
    """
    Holds the current Tokens for one client and keeps the access token fresh.

    The refresh flow itself is stateless; this class owns the Tokens,
    replaces them atomically, and guarantees at most one exchange in flight.
    When the refresh token is spent (or absent) it falls back to the
    ``authenticate`` coroutine, which runs whatever initial grant the
    application uses and returns fresh Tokens.

    Usage:
        flow = RefreshTokensFlow(config)
        manager = OAuth2TokenManager(flow, authenticate=login)

        token = await manager.get_access_token()
        headers = {"Authorization": f"Bearer {token}"}
    """

    def __init__(
        self,
        refresh_flow: RefreshTokensFlow,
        authenticate: Authenticate,
        clock: Clock | None = None,
        initial_tokens: Tokens | None = None,
    ):
        """
        Initialize token manager.

        Args:
            refresh_flow: Flow used to exchange refresh tokens
            authenticate: Coroutine function performing initial authentication
            clock: Source of the current instant (default: the flow's clock)
            initial_tokens: Tokens obtained elsewhere, if any
        """
        self._flow = refresh_flow
        self._authenticate = authenticate
        self._clock = clock or refresh_flow.clock
        self._tokens = initial_tokens
        self._lock = threading.Lock()
        self._refresh_lock = asyncio.Lock()
        self.config = refresh_flow.config

        logger.debug(
            f"Initialized OAuth2TokenManager for '{self.config.client_name}' with "
            f"{self.config.refresh_safety_window.total_seconds()}s safety window"
        )

    @property
    def current_tokens(self) -> Tokens | None:
        with self._lock:
            return self._tokens

    def _access_expiration(self, tokens: Tokens, now: datetime) -> datetime:
        access = tokens.access_token
        # Without a declared lifespan the default ages from issuance, not from now
        anchor = access.issued_at or now
        return token_expiration_time(anchor, access, self.config.default_access_token_lifespan)

    def _access_token_state(self, tokens: Tokens) -> TokenState:
        now = self._clock()
        return expiration_state(
            now, self._access_expiration(tokens, now), self.config.refresh_safety_window
        )

    def _usable(self, tokens: Tokens | None) -> bool:
        return tokens is not None and self._access_token_state(tokens) is TokenState.VALID

    async def get_access_token(self, force_refresh: bool = False) -> str:
        """
        Get a valid access token payload, refreshing when needed.

        Args:
            force_refresh: Exchange tokens even if the cached access token is valid

        Returns:
            Access token payload

        Raises:
            Whatever the refresh flow or authenticate coroutine raise, except
            the re-authentication signal which is handled here
        """
        if not force_refresh:
            cached = self.current_tokens
            if self._usable(cached):
                return cached.access_token.payload

        async with self._refresh_lock:
            # Another coroutine may have refreshed while we waited
            current = self.current_tokens
            if not force_refresh and self._usable(current):
                logger.debug(
                    f"Tokens were refreshed by another coroutine for '{self.config.client_name}'"
                )
                return current.access_token.payload

            new_tokens = await self._obtain(current)

            with self._lock:
                self._tokens = new_tokens

            expiration = self._access_expiration(new_tokens, self._clock())
            logger.info(
                f"Access token for '{self.config.client_name}' valid until "
                f"{expiration.isoformat()}"
            )
            return new_tokens.access_token.payload

    async def _obtain(self, current: Tokens | None) -> Tokens:
        if current is None or current.refresh_token is None:
            logger.debug(f"Authenticating '{self.config.client_name}' (no refresh token held)")
            return await self._authenticate()

        outcome = await self._flow.try_refresh(current)
        if isinstance(outcome, MustReauthenticate):
            logger.info(
                f"Re-authenticating '{self.config.client_name}': {outcome.reason}"
            )
            return await self._authenticate()
        return outcome.tokens

    def clear(self) -> None:
        """Drop held tokens; the next call authenticates from scratch."""
        with self._lock:
            self._tokens = None
        logger.debug(f"Cleared tokens for '{self.config.client_name}'")

    def get_cached_token_info(self) -> dict[str, Any] | None:
        """
        Get information about held tokens for diagnostics.

        Returns:
            Dict with token timing info (never payloads), or None if nothing is held
        """
        tokens = self.current_tokens
        if tokens is None:
            return None

        now = self._clock()
        access_expiration = self._access_expiration(tokens, now)
        info = {
            "client_name": self.config.client_name,
            "access_expires_at": access_expiration.isoformat(),
            "access_state": expiration_state(
                now, access_expiration, self.config.refresh_safety_window
            ).value,
            "has_refresh_token": tokens.refresh_token is not None,
        }
        if tokens.refresh_token is not None:
            info["refresh_state"] = token_state(
                now,
                tokens.refresh_token,
                self.config.default_refresh_token_lifespan,
                self.config.refresh_safety_window,
            ).value
        return info

    async def close(self) -> None:
        """Release the flow's HTTP session and drop held tokens."""
        await self._flow.close()
        self.clear()
        logger.info(f"OAuth2TokenManager for '{self.config.client_name}' closed")


__all__ = ["OAuth2TokenManager", "Authenticate"]
