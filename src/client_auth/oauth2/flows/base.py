"""Base OAuth2 flow: token endpoint invocation shared by all grants."""

import json
import logging
from abc import ABC, abstractmethod

import aiohttp
from pydantic import ValidationError

from client_auth.clock import system_clock
from client_auth.oauth2.exceptions import TokenEndpointError
from client_auth.oauth2.models import OAuth2ClientConfig, Tokens
from client_auth.oauth2.schemas import ErrorResponse, TokensResponse
from client_auth.types import Clock

logger = logging.getLogger(__name__)


class AbstractFlow(ABC):
    """
    Abstract base class for OAuth2 grant flows.

    Implementations decide which grant to send and how to turn the response
    into Tokens. This base owns the HTTP exchange with the token endpoint:
    client authentication, form encoding and response parsing.

    Sessions passed in by the caller are never closed by the flow.
    """

    def __init__(
        self,
        config: OAuth2ClientConfig,
        clock: Clock = system_clock,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Initialize flow.

        Args:
            config: OAuth2 client configuration
            clock: Source of the current instant
            session: Optional caller-managed aiohttp session

        Raises:
            InvalidConfigurationError: If the configuration is incomplete
        """
        config.validate()
        self.config = config
        self._clock = clock
        self._session = session
        self._owns_session = session is None

    @property
    def client_name(self) -> str:
        return self.config.client_name

    @property
    def clock(self) -> Clock:
        return self._clock

    @abstractmethod
    async def fetch_new_tokens(self, current_tokens: Tokens | None) -> Tokens:
        """
        Obtain a new set of tokens.

        Args:
            current_tokens: Tokens currently held by the caller, if any

        Returns:
            New Tokens
        """
        pass

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP client session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def _build_request(self, form: dict[str, str]) -> tuple[dict[str, str], aiohttp.BasicAuth | None]:
        data = dict(self.config.extra_params)
        data.update(form)

        if self.config.client_secret:
            return data, aiohttp.BasicAuth(self.config.client_id, self.config.client_secret)

        # Public client: identify in the body (RFC 6749 section 3.2.1)
        data["client_id"] = self.config.client_id
        return data, None

    async def invoke_token_endpoint(self, form: dict[str, str]) -> TokensResponse:
        """
        POST a grant to the token endpoint and parse the typed response.

        Transport errors (aiohttp.ClientError, timeouts) propagate unchanged.

        Args:
            form: Grant-specific form fields

        Returns:
            Parsed TokensResponse

        Raises:
            TokenEndpointError: On a non-200 status or an unparseable body
        """
        session = await self._ensure_session()
        data, auth = self._build_request(form)

        kwargs = {}
        if self.config.timeout_seconds is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        async with session.post(
            self.config.token_endpoint,
            data=data,
            auth=auth,
            headers={"Accept": "application/json"},
            **kwargs,
        ) as response:
            if response.status != 200:
                error_text = await response.text()
                error = self._parse_error(response.status, error_text)
                logger.warning(
                    f"Token endpoint rejected {form.get('grant_type')} grant "
                    f"for '{self.client_name}': HTTP {response.status}",
                    extra={
                        "http_status": response.status,
                        "error_code": error.error_code,
                        "grant_type": form.get("grant_type"),
                    },
                )
                raise error

            payload = await response.json()

        try:
            return TokensResponse.model_validate(payload)
        except ValidationError as e:
            raise TokenEndpointError(
                200,
                error_code="invalid_response",
                error_description=f"Unexpected token response shape: {e.error_count()} error(s)",
                cause=e,
            ) from e

    @staticmethod
    def _parse_error(status: int, body: str) -> TokenEndpointError:
        try:
            parsed = ErrorResponse.model_validate(json.loads(body))
        except (ValueError, ValidationError):
            return TokenEndpointError(status, error_description=body[:200] or None)
        return TokenEndpointError(status, parsed.error, parsed.error_description)

    async def close(self) -> None:
        """Close the HTTP session if this flow created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()


__all__ = ["AbstractFlow"]
