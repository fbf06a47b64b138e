"""AWS Signature Version 4 signing of canonical requests."""

import logging

from botocore.auth import SIGV4_TIMESTAMP, SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from client_auth.clock import system_clock
from client_auth.signing.exceptions import SigningError
from client_auth.signing.models import AwsCredentials, CanonicalRequest, SignedRequest, SigningScope
from client_auth.types import Clock

logger = logging.getLogger(__name__)


class _ClockedSigV4Auth(SigV4Auth):
    """SigV4Auth that takes its timestamp from an injected clock."""

    def __init__(self, credentials: Credentials, service_name: str, region_name: str, clock: Clock):
        super().__init__(credentials, service_name, region_name)
        self._clock = clock

    def add_auth(self, request: AWSRequest) -> str:
        request.context["timestamp"] = self._clock().strftime(SIGV4_TIMESTAMP)
        self._modify_request_before_signing(request)
        canonical_request = self.canonical_request(request)
        string_to_sign = self.string_to_sign(request, canonical_request)
        signature = self.signature(string_to_sign, request)
        self._inject_signature_to_request(request, signature)
        return signature


class RequestSigner:
    """
    Computes SigV4 authentication headers for a canonical request.

    Only method, URI, query parameters and body are signed; the caller's own
    headers are not part of the signature. The produced headers are
    ``X-Amz-Date``, ``Authorization`` and, for session credentials,
    ``X-Amz-Security-Token``.
    """

    def __init__(self, clock: Clock = system_clock):
        self._clock = clock

    def sign(
        self,
        canonical_request: CanonicalRequest,
        credentials: AwsCredentials,
        scope: SigningScope,
    ) -> SignedRequest:
        """
        Sign a canonical request.

        Deterministic for a fixed clock, credentials and request.

        Raises:
            SigningError: If the signature cannot be computed
        """
        try:
            aws_request = AWSRequest(
                method=canonical_request.method,
                url=canonical_request.uri,
                data=canonical_request.body or b"",
                params=dict(canonical_request.query_params),
            )
            auth = _ClockedSigV4Auth(
                Credentials(
                    credentials.access_key_id,
                    credentials.secret_access_key,
                    credentials.session_token,
                ),
                scope.service,
                scope.region,
                self._clock,
            )
            signature = auth.add_auth(aws_request)
        except Exception as e:
            logger.error(
                f"Failed to sign {canonical_request.method} request: {e}",
                extra={"http_method": canonical_request.method, "http_url": canonical_request.uri},
            )
            raise SigningError(f"Failed to sign request: {e}", cause=e) from e

        return SignedRequest(headers=dict(aws_request.headers.items()), signature=signature)


__all__ = ["RequestSigner"]
