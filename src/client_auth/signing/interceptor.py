"""Signing interceptor applied to every outbound request."""

import logging

from client_auth.logging.utilities import log_with_context
from client_auth.signing.canonical import canonicalize
from client_auth.signing.credentials import CredentialsProvider
from client_auth.signing.exceptions import SigningError
from client_auth.signing.models import OutboundRequest, SigningScope
from client_auth.signing.signer import RequestSigner
from client_auth.types import BodyEncoder
from client_auth.utils.json_serializers import encode_json_body

logger = logging.getLogger(__name__)


class SigningInterceptor:
    """
    Canonicalizes, signs, and adds authentication headers to requests.

    Credentials are resolved from the provider on every request. Computed
    headers are only added when the caller has not already set a header of
    the exact same name; caller headers are never overwritten.

    The transport must call ``before_send`` (or ``apply``) for each request
    and must not dispatch a request for which it raised.

    Usage:
        interceptor = SigningInterceptor(
            BotocoreCredentialsProvider(),
            SigningScope(service="execute-api", region="us-west-2"),
        )
        request = OutboundRequest("GET", "https://api.example.com/trees?ref=main")
        interceptor.apply(request)
    """

    def __init__(
        self,
        credentials_provider: CredentialsProvider,
        scope: SigningScope,
        signer: RequestSigner | None = None,
        body_encoder: BodyEncoder = encode_json_body,
    ):
        self.credentials_provider = credentials_provider
        self.scope = scope
        self.signer = signer or RequestSigner()
        self.body_encoder = body_encoder

    def apply(self, request: OutboundRequest) -> None:
        """
        Sign the request in place. Only ``request.headers`` is modified.

        Raises:
            MalformedRequestError: If the query string is malformed
            SigningPreparationError: If the body cannot be serialized
            SigningError: If credentials or the signature cannot be produced
        """
        canonical = canonicalize(
            request.method,
            request.url,
            request.headers,
            request.body,
            self.body_encoder,
        )

        try:
            credentials = self.credentials_provider.resolve_credentials()
        except SigningError:
            raise
        except Exception as e:
            raise SigningError(f"Failed to resolve signing credentials: {e}", cause=e) from e

        signed = self.signer.sign(canonical, credentials, self.scope)

        added = []
        skipped = []
        for name, value in signed.headers.items():
            if name in request.headers:
                skipped.append(name)
                continue
            request.headers[name] = value
            added.append(name)

        log_with_context(
            logger,
            logging.DEBUG,
            f"Signed {canonical.method} request for {self.scope.service}/{self.scope.region}",
            http_method=canonical.method,
            http_url=canonical.uri,
            headers_added=added,
            headers_skipped=skipped,
        )

    def before_send(self, request: OutboundRequest) -> OutboundRequest:
        """Transport hook: sign and hand the same request back."""
        self.apply(request)
        return request


__all__ = ["SigningInterceptor"]
