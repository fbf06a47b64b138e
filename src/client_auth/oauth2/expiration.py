"""
Token expiration policy.

Expiration is resolved in three tiers, most specific first:

    1. the token's explicit expiration instant
    2. issued_at + declared lifespan
    3. now + default lifespan

A token is usable only while its expiration lies strictly after
``now + safety_window``. Reaching the window boundary exactly counts as
about to expire.
"""

from datetime import datetime, timedelta
from enum import Enum

from client_auth.oauth2.models import Token


class TokenState(Enum):
    """Validity of a token relative to now and the safety window."""

    VALID = "valid"
    ABOUT_TO_EXPIRE = "about_to_expire"
    EXPIRED = "expired"


def token_expiration_time(now: datetime, token: Token, default_lifespan: timedelta) -> datetime:
    """
    Compute the instant a token stops being valid.

    Args:
        now: Current instant, used only by the default tier
        token: Token to inspect
        default_lifespan: Lifespan assumed when the token declares none

    Returns:
        Expiration instant
    """
    if token.expiration_time is not None:
        return token.expiration_time
    if token.issued_at is not None and token.lifespan is not None:
        return token.issued_at + token.lifespan
    return now + default_lifespan


def expiration_state(now: datetime, expiration: datetime, safety_window: timedelta) -> TokenState:
    """Classify an expiration instant relative to now and the safety window."""
    if expiration <= now:
        return TokenState.EXPIRED
    if expiration <= now + safety_window:
        return TokenState.ABOUT_TO_EXPIRE
    return TokenState.VALID


def token_state(
    now: datetime,
    token: Token,
    default_lifespan: timedelta,
    safety_window: timedelta,
) -> TokenState:
    """Classify a token as valid, about to expire, or expired."""
    expiration = token_expiration_time(now, token, default_lifespan)
    return expiration_state(now, expiration, safety_window)


def is_about_to_expire(
    now: datetime,
    token: Token,
    default_lifespan: timedelta,
    safety_window: timedelta,
) -> bool:
    """True when the token is expired or inside the safety window."""
    return token_state(now, token, default_lifespan, safety_window) is not TokenState.VALID


__all__ = [
    "TokenState",
    "token_expiration_time",
    "expiration_state",
    "token_state",
    "is_about_to_expire",
]
