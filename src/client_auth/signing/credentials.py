"""
Credential providers for request signing.

Providers are asked for credentials on every signature. Nothing here caches
across requests, so rotation and expiry of session credentials are picked up
as soon as the underlying source reflects them.

Supported sources:
    - Static keys (configuration, tests)
    - botocore's default chain: environment, shared config/credentials
      files, container and instance metadata endpoints

Example:
    >>> provider = BotocoreCredentialsProvider(profile="ci")
    >>> creds = provider.resolve_credentials()
"""

import logging
from typing import Protocol

import botocore.session
from botocore.exceptions import BotoCoreError

from client_auth.signing.exceptions import SigningError
from client_auth.signing.models import AwsCredentials

logger = logging.getLogger(__name__)


class CredentialsProvider(Protocol):
    """Resolves the credentials to sign one request with."""

    def resolve_credentials(self) -> AwsCredentials:
        """
        Resolve current credentials.

        May block (e.g. on an instance metadata call).

        Raises:
            SigningError: If no credentials are available
        """
        ...


class StaticCredentialsProvider:
    """Always returns the same keys."""

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        session_token: str | None = None,
    ):
        if not access_key_id or not secret_access_key:
            raise ValueError("access_key_id and secret_access_key are required")
        self._credentials = AwsCredentials(access_key_id, secret_access_key, session_token)

    def resolve_credentials(self) -> AwsCredentials:
        return self._credentials


class BotocoreCredentialsProvider:
    """
    Resolves credentials through botocore's default provider chain.

    The botocore session keeps its own refreshable credential object;
    each call takes a frozen snapshot, which triggers botocore's refresh
    when the cached session credentials are close to expiry.
    """

    def __init__(self, profile: str | None = None, session: botocore.session.Session | None = None):
        """
        Args:
            profile: Named profile from the shared config files
            session: Pre-built botocore session (takes precedence over profile)
        """
        self._session = session or botocore.session.get_session()
        if profile and session is None:
            self._session.set_config_variable("profile", profile)

    def resolve_credentials(self) -> AwsCredentials:
        try:
            credentials = self._session.get_credentials()
            if credentials is None:
                raise SigningError("No AWS credentials found in the default provider chain")
            frozen = credentials.get_frozen_credentials()
        except BotoCoreError as e:
            logger.error(f"Failed to resolve AWS credentials: {e}")
            raise SigningError("Failed to resolve AWS credentials", cause=e) from e

        return AwsCredentials(
            access_key_id=frozen.access_key,
            secret_access_key=frozen.secret_key,
            session_token=frozen.token,
        )


__all__ = [
    "CredentialsProvider",
    "StaticCredentialsProvider",
    "BotocoreCredentialsProvider",
]
