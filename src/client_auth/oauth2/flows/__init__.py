from client_auth.oauth2.flows.base import AbstractFlow
from client_auth.oauth2.flows.refresh import (
    MustReauthenticate,
    RefreshOutcome,
    Refreshed,
    RefreshTokensFlow,
)

__all__ = [
    "AbstractFlow",
    "RefreshTokensFlow",
    "RefreshOutcome",
    "Refreshed",
    "MustReauthenticate",
]
