"""
OAuth2 token lifecycle: expiration policy, refresh flow and token manager.

Basic Usage:
    from client_auth.oauth2 import OAuth2ClientConfig, RefreshTokensFlow

    config = OAuth2ClientConfig(
        token_endpoint="https://auth.example.com/oauth/token",
        client_id=os.getenv("OAUTH2_CLIENT_ID"),
        client_secret=os.getenv("OAUTH2_CLIENT_SECRET"),
        scope="catalog",
    )
    flow = RefreshTokensFlow(config)

    try:
        tokens = await flow.fetch_new_tokens(tokens)
    except MustReauthenticateError:
        tokens = await login()

Without exceptions:
    outcome = await flow.try_refresh(tokens)
    if isinstance(outcome, Refreshed):
        tokens = outcome.tokens
    else:
        tokens = await login()

Managed:
    manager = OAuth2TokenManager(flow, authenticate=login)
    token = await manager.get_access_token()
    headers = {"Authorization": f"Bearer {token}"}
"""

from client_auth.oauth2.exceptions import (
    InvalidConfigurationError,
    InvalidStateError,
    MustReauthenticateError,
    OAuth2Error,
    TokenEndpointError,
)
from client_auth.oauth2.expiration import (
    TokenState,
    expiration_state,
    is_about_to_expire,
    token_expiration_time,
    token_state,
)
from client_auth.oauth2.flows import (
    AbstractFlow,
    MustReauthenticate,
    RefreshOutcome,
    Refreshed,
    RefreshTokensFlow,
)
from client_auth.oauth2.manager import OAuth2TokenManager
from client_auth.oauth2.models import OAuth2ClientConfig, Token, Tokens
from client_auth.oauth2.schemas import ErrorResponse, RefreshTokensRequest, TokensResponse

__all__ = [
    # Flows
    "AbstractFlow",
    "RefreshTokensFlow",
    "RefreshOutcome",
    "Refreshed",
    "MustReauthenticate",
    # Manager
    "OAuth2TokenManager",
    # Expiration policy
    "TokenState",
    "token_expiration_time",
    "expiration_state",
    "token_state",
    "is_about_to_expire",
    # Models
    "Token",
    "Tokens",
    "OAuth2ClientConfig",
    "RefreshTokensRequest",
    "TokensResponse",
    "ErrorResponse",
    # Exceptions
    "OAuth2Error",
    "InvalidStateError",
    "MustReauthenticateError",
    "InvalidConfigurationError",
    "TokenEndpointError",
]
