"""
AWS SigV4 request signing.

Basic Usage:
    from client_auth.signing import (
        BotocoreCredentialsProvider,
        OutboundRequest,
        SigningInterceptor,
        SigningScope,
    )

    interceptor = SigningInterceptor(
        BotocoreCredentialsProvider(),
        SigningScope(service="execute-api", region="us-west-2"),
    )

    request = OutboundRequest("POST", url, headers={"Content-Type": "application/json"}, body=payload)
    interceptor.apply(request)
"""

from client_auth.signing.canonical import canonicalize, parse_query
from client_auth.signing.credentials import (
    BotocoreCredentialsProvider,
    CredentialsProvider,
    StaticCredentialsProvider,
)
from client_auth.signing.exceptions import (
    MalformedRequestError,
    SigningError,
    SigningPreparationError,
)
from client_auth.signing.interceptor import SigningInterceptor
from client_auth.signing.models import (
    AwsCredentials,
    CanonicalRequest,
    OutboundRequest,
    SignedRequest,
    SigningScope,
)
from client_auth.signing.signer import RequestSigner

__all__ = [
    # Interceptor and signer
    "SigningInterceptor",
    "RequestSigner",
    # Canonicalization
    "canonicalize",
    "parse_query",
    # Credentials
    "CredentialsProvider",
    "StaticCredentialsProvider",
    "BotocoreCredentialsProvider",
    # Models
    "SigningScope",
    "AwsCredentials",
    "CanonicalRequest",
    "SignedRequest",
    "OutboundRequest",
    # Exceptions
    "SigningPreparationError",
    "MalformedRequestError",
    "SigningError",
]
