"""
aiohttp glue for signed requests.

The signing interceptor is transport-agnostic; this module is the one place
that wires it to aiohttp. Signing runs in a worker thread because
credential resolution may block on a metadata endpoint.
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace

import aiohttp

from client_auth.logging.utilities import log_exception
from client_auth.signing.exceptions import SigningError, SigningPreparationError
from client_auth.signing.interceptor import SigningInterceptor
from client_auth.signing.models import OutboundRequest
from client_auth.utils.json_serializers import encode_json_body

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


@dataclass
class SignedResponse:
    """Response from a signed request with content and metadata."""

    status: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)


async def send_signed(
    session: aiohttp.ClientSession,
    interceptor: SigningInterceptor,
    request: OutboundRequest,
) -> SignedResponse:
    """
    Sign a request and dispatch it.

    The request is never sent when signing fails. The body is encoded once
    for signing and the same bytes are sent, so the payload hash matches.
    Transport errors propagate unchanged; retries are the caller's concern.
    JSON-encoded entities get Content-Type: application/json unless the
    caller already set a content type.

    Args:
        session: aiohttp ClientSession (caller manages lifecycle)
        interceptor: Configured signing interceptor
        request: Request to sign and send; its headers are updated in place

    Returns:
        SignedResponse

    Raises:
        SigningPreparationError: If the request cannot be canonicalized
        SigningError: If the request cannot be signed
        aiohttp.ClientError: On transport failure
    """
    if request.body is not None and not isinstance(request.body, bytes):
        try:
            encoded = interceptor.body_encoder(request.body)
        except Exception as e:
            raise SigningPreparationError(
                f"Failed to serialize request body: {e}", cause=e
            ) from e
        if (
            not isinstance(request.body, str)
            and interceptor.body_encoder is encode_json_body
            and not any(name.lower() == "content-type" for name in request.headers)
        ):
            request.headers["Content-Type"] = JSON_CONTENT_TYPE
        # Shares the caller's header dict, so signed headers land on it
        request = replace(request, body=encoded)

    try:
        await asyncio.to_thread(interceptor.before_send, request)
    except (SigningPreparationError, SigningError) as e:
        log_exception(
            logger,
            e,
            "Aborting unsigned request",
            include_traceback=False,
            http_method=request.method,
            http_url=request.url,
        )
        raise

    async with session.request(
        request.method,
        request.url,
        headers=request.headers,
        data=request.body,
    ) as response:
        content = await response.read()
        return SignedResponse(
            status=response.status,
            content=content,
            headers=dict(response.headers),
        )


def create_session(
    max_connections: int = 100,
    max_connections_per_host: int = 10,
    timeout_total: int = 300,
    timeout_connect: int = 30,
    timeout_sock_read: int = 60,
) -> aiohttp.ClientSession:
    """
    Create aiohttp ClientSession with connection pooling and timeouts.

    Timeouts configured here are the only deadlines applied to signed
    requests and token endpoint calls made through this session.

    Example:
        async with create_session() as session:
            response = await send_signed(session, interceptor, request)
    """
    connector = aiohttp.TCPConnector(
        limit=max_connections,
        limit_per_host=max_connections_per_host,
        ttl_dns_cache=300,
    )

    timeout = aiohttp.ClientTimeout(
        total=timeout_total,
        connect=timeout_connect,
        sock_read=timeout_sock_read,
    )

    return aiohttp.ClientSession(connector=connector, timeout=timeout)


__all__ = ["SignedResponse", "send_signed", "create_session"]
