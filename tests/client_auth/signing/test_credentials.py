"""Tests for credential providers."""

from unittest.mock import MagicMock

import pytest
from botocore.credentials import Credentials
from botocore.exceptions import NoCredentialsError

from client_auth.signing.credentials import BotocoreCredentialsProvider, StaticCredentialsProvider
from client_auth.signing.exceptions import SigningError
from client_auth.signing.models import AwsCredentials


class TestStaticCredentialsProvider:

    def test_returns_credentials(self):
        creds = StaticCredentialsProvider("AKID", "secret", "tok").resolve_credentials()
        assert creds == AwsCredentials("AKID", "secret", "tok")

    def test_requires_keys(self):
        with pytest.raises(ValueError):
            StaticCredentialsProvider("", "secret")

    def test_repr_hides_secret(self):
        creds = StaticCredentialsProvider("AKID", "very-secret").resolve_credentials()
        assert "very-secret" not in repr(creds)


class TestBotocoreCredentialsProvider:

    def _session(self, credentials):
        session = MagicMock()
        session.get_credentials.return_value = credentials
        return session

    def test_resolves_frozen_credentials(self):
        session = self._session(Credentials("AKID", "secret", "tok"))

        creds = BotocoreCredentialsProvider(session=session).resolve_credentials()

        assert creds == AwsCredentials("AKID", "secret", "tok")

    def test_resolves_on_every_call(self):
        session = self._session(Credentials("AKID", "secret"))
        provider = BotocoreCredentialsProvider(session=session)

        provider.resolve_credentials()
        provider.resolve_credentials()

        assert session.get_credentials.call_count == 2

    def test_no_credentials(self):
        provider = BotocoreCredentialsProvider(session=self._session(None))

        with pytest.raises(SigningError, match="No AWS credentials"):
            provider.resolve_credentials()

    def test_botocore_error_wrapped(self):
        session = MagicMock()
        session.get_credentials.side_effect = NoCredentialsError()

        with pytest.raises(SigningError) as exc_info:
            BotocoreCredentialsProvider(session=session).resolve_credentials()

        assert isinstance(exc_info.value.cause, NoCredentialsError)

    def test_profile_sets_config_variable(self, monkeypatch):
        session = MagicMock()
        monkeypatch.setattr("botocore.session.get_session", lambda: session)

        BotocoreCredentialsProvider(profile="ci")

        session.set_config_variable.assert_called_once_with("profile", "ci")
