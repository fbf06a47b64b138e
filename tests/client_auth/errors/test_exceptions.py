"""
Tests for exception hierarchy and error classification.
"""

from client_auth.errors.exceptions import (
    AuthError,
    ClientAuthError,
    ErrorCategory,
    PermanentError,
    ReauthenticationRequiredError,
    TransientError,
    classify_http_status,
)


class TestErrorCategory:
    """Test ErrorCategory enum."""

    def test_all_categories_exist(self):
        """All expected categories are defined."""
        assert ErrorCategory.TRANSIENT.value == "transient"
        assert ErrorCategory.AUTH.value == "auth"
        assert ErrorCategory.REAUTHENTICATE.value == "reauthenticate"
        assert ErrorCategory.PERMANENT.value == "permanent"
        assert ErrorCategory.UNKNOWN.value == "unknown"


class TestClientAuthError:
    """Test base ClientAuthError class."""

    def test_basic_error(self):
        """Can create basic error with message."""
        err = ClientAuthError("Something went wrong")
        assert err.message == "Something went wrong"
        assert err.cause is None
        assert err.context == {}
        assert err.category == ErrorCategory.UNKNOWN

    def test_error_with_cause(self):
        """Can wrap another exception."""
        cause = ValueError("Invalid value")
        err = ClientAuthError("Wrapper message", cause=cause)
        assert err.cause == cause
        assert "Caused by: Invalid value" in str(err)

    def test_error_with_context(self):
        """Can add context dict."""
        err = ClientAuthError("Error", context={"client_name": "catalog"})
        assert err.context["client_name"] == "catalog"

    def test_unknown_is_retryable(self):
        """Unknown category is retryable."""
        assert ClientAuthError("Error").is_retryable is True
        assert ClientAuthError("Error").must_reauthenticate is False


class TestCategoryClasses:
    """Test category base classes."""

    def test_auth_error(self):
        err = AuthError("unauthorized")
        assert err.category == ErrorCategory.AUTH
        assert err.is_retryable is False

    def test_reauthentication_required(self):
        err = ReauthenticationRequiredError("refresh token spent")
        assert err.category == ErrorCategory.REAUTHENTICATE
        assert err.must_reauthenticate is True
        assert err.is_retryable is False

    def test_transient_error(self):
        err = TransientError("timeout")
        assert err.is_retryable is True

    def test_permanent_error(self):
        err = PermanentError("bad request")
        assert err.is_retryable is False


class TestClassifyHttpStatus:
    """Test HTTP status classification."""

    def test_success_is_not_an_error(self):
        assert classify_http_status(200) == ErrorCategory.UNKNOWN

    def test_401_is_auth(self):
        assert classify_http_status(401) == ErrorCategory.AUTH

    def test_throttling_and_timeout_are_transient(self):
        assert classify_http_status(408) == ErrorCategory.TRANSIENT
        assert classify_http_status(429) == ErrorCategory.TRANSIENT

    def test_other_client_errors_are_permanent(self):
        assert classify_http_status(400) == ErrorCategory.PERMANENT
        assert classify_http_status(403) == ErrorCategory.PERMANENT
        assert classify_http_status(404) == ErrorCategory.PERMANENT

    def test_server_errors_are_transient(self):
        assert classify_http_status(500) == ErrorCategory.TRANSIENT
        assert classify_http_status(503) == ErrorCategory.TRANSIENT
