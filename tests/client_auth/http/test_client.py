"""Tests for signed request dispatch over aiohttp."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from client_auth.http.client import SignedResponse, create_session, send_signed
from client_auth.signing.credentials import StaticCredentialsProvider
from client_auth.signing.exceptions import MalformedRequestError, SigningError
from client_auth.signing.interceptor import SigningInterceptor
from client_auth.signing.models import OutboundRequest, SigningScope
from client_auth.signing.signer import RequestSigner

SCOPE = SigningScope(service="execute-api", region="us-west-2")


def _response(status=200, content=b"{}", headers=None):
    """Create a mock async context manager for a response."""
    mock_resp = AsyncMock()
    mock_resp.status = status
    mock_resp.headers = headers or {"Content-Type": "application/json"}
    mock_resp.read = AsyncMock(return_value=content)
    mock_resp.__aenter__ = AsyncMock(return_value=mock_resp)
    mock_resp.__aexit__ = AsyncMock(return_value=False)
    return mock_resp


def _mock_session(response_mock):
    mock_session = MagicMock()
    mock_session.closed = False
    mock_session.request = MagicMock(return_value=response_mock)
    return mock_session


@pytest.fixture
def interceptor(clock):
    return SigningInterceptor(
        StaticCredentialsProvider("AKID", "secret"),
        SCOPE,
        signer=RequestSigner(clock),
    )


class TestSendSigned:

    async def test_sends_signed_request(self, interceptor):
        session = _mock_session(_response(content=b'{"ok": true}'))
        request = OutboundRequest("GET", "https://api.example.com/p?a=1")

        response = await send_signed(session, interceptor, request)

        assert isinstance(response, SignedResponse)
        assert response.status == 200
        assert response.content == b'{"ok": true}'
        assert response.headers["Content-Type"] == "application/json"

        args, kwargs = session.request.call_args
        assert args == ("GET", "https://api.example.com/p?a=1")
        assert kwargs["headers"]["X-Amz-Date"] == "20240101T000000Z"
        assert "Authorization" in kwargs["headers"]

    async def test_body_encoded_once_and_sent(self, interceptor):
        session = _mock_session(_response())
        request = OutboundRequest("POST", "https://h/p", body={"name": "x"})

        await send_signed(session, interceptor, request)

        kwargs = session.request.call_args[1]
        assert kwargs["data"] == b'{\n  "name": "x"\n}'
        # Caller's entity untouched, signed headers visible to the caller
        assert request.body == {"name": "x"}
        assert "Authorization" in request.headers

    async def test_not_sent_when_query_malformed(self, interceptor):
        session = _mock_session(_response())

        with pytest.raises(MalformedRequestError):
            await send_signed(session, interceptor, OutboundRequest("GET", "https://h/p?a"))

        session.request.assert_not_called()

    async def test_not_sent_when_credentials_unavailable(self, clock):
        provider = MagicMock()
        provider.resolve_credentials.side_effect = SigningError("No AWS credentials found")
        interceptor = SigningInterceptor(provider, SCOPE, signer=RequestSigner(clock))
        session = _mock_session(_response())

        with pytest.raises(SigningError):
            await send_signed(session, interceptor, OutboundRequest("GET", "https://h/p"))

        session.request.assert_not_called()

    async def test_transport_error_propagates(self, interceptor):
        session = MagicMock()
        session.request = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(aiohttp.ClientConnectionError):
            await send_signed(session, interceptor, OutboundRequest("GET", "https://h/p"))


class TestCreateSession:

    async def test_configures_timeouts(self):
        session = create_session(timeout_total=10, timeout_connect=2, timeout_sock_read=5)
        try:
            assert session.timeout.total == 10
            assert session.timeout.connect == 2
            assert session.timeout.sock_read == 5
        finally:
            await session.close()


class TestSendSignedContentType:

    async def test_json_body_labelled_as_json(self, interceptor):
        session = _mock_session(_response())
        request = OutboundRequest("POST", "https://h/p?a=1", {}, {"k": 1})

        await send_signed(session, interceptor, request)

        headers = session.request.call_args[1]["headers"]
        assert headers["Content-Type"] == "application/json"

    async def test_caller_content_type_kept(self, interceptor):
        session = _mock_session(_response())
        request = OutboundRequest(
            "POST", "https://h/p", {"content-type": "application/vnd.api+json"}, {"k": 1}
        )

        await send_signed(session, interceptor, request)

        headers = session.request.call_args[1]["headers"]
        assert headers["content-type"] == "application/vnd.api+json"
        assert "Content-Type" not in headers

    async def test_str_and_bytes_bodies_not_labelled(self, interceptor):
        for body in ("plain text", b"raw"):
            session = _mock_session(_response())

            await send_signed(session, interceptor, OutboundRequest("PUT", "https://h/p", body=body))

            assert "Content-Type" not in session.request.call_args[1]["headers"]

    async def test_custom_encoder_not_labelled(self, clock):
        interceptor = SigningInterceptor(
            StaticCredentialsProvider("AKID", "secret"),
            SCOPE,
            signer=RequestSigner(clock),
            body_encoder=lambda entity: b"k=1",
        )
        session = _mock_session(_response())

        await send_signed(session, interceptor, OutboundRequest("POST", "https://h/p", body={"k": 1}))

        kwargs = session.request.call_args[1]
        assert kwargs["data"] == b"k=1"
        assert "Content-Type" not in kwargs["headers"]
