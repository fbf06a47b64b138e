"""Request canonicalization ahead of signing."""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote, urlsplit, urlunsplit

from client_auth.signing.exceptions import MalformedRequestError, SigningPreparationError
from client_auth.signing.models import CanonicalRequest
from client_auth.types import BodyEncoder
from client_auth.utils.json_serializers import encode_json_body

logger = logging.getLogger(__name__)


def parse_query(query: str) -> dict[str, str]:
    """
    Split a raw query string into decoded key/value pairs.

    Every segment must be ``key=value``; the value may be empty and may itself
    contain ``=``. When a key repeats, the last occurrence wins.

    Raises:
        MalformedRequestError: If a segment has no ``=`` or an empty key
    """
    params: dict[str, str] = {}
    if not query:
        return params

    for segment in query.split("&"):
        key, sep, value = segment.partition("=")
        if not sep or not key:
            raise MalformedRequestError(
                f"Malformed query parameter {segment!r}: expected key=value",
                context={"segment": segment},
            )
        key = unquote(key)
        if key in params:
            logger.debug(f"Duplicate query parameter '{key}', keeping last value")
        params[key] = unquote(value)
    return params


def canonicalize(
    method: str,
    uri: str,
    headers: Mapping[str, str] | None = None,
    body: Any = None,
    body_encoder: BodyEncoder = encode_json_body,
) -> CanonicalRequest:
    """
    Build the canonical view of a request.

    Pure function of its inputs.

    Args:
        method: HTTP method
        uri: Absolute target URI, query string included
        headers: Headers the caller already set
        body: Request entity, or None
        body_encoder: Serializer turning the entity into bytes

    Returns:
        CanonicalRequest

    Raises:
        MalformedRequestError: If the query string cannot be parsed
        SigningPreparationError: If the URI is not absolute or the body
            cannot be serialized
    """
    parts = urlsplit(uri)
    if not parts.scheme or not parts.netloc:
        raise SigningPreparationError(f"Cannot sign relative URI {uri!r}")

    query_params = parse_query(parts.query)
    base_uri = urlunsplit((parts.scheme, parts.netloc, parts.path or "/", "", ""))

    body_bytes = None
    if body is not None:
        try:
            body_bytes = body_encoder(body)
        except Exception as e:
            raise SigningPreparationError(
                f"Failed to serialize request body: {e}",
                cause=e,
                context={"error_type": type(e).__name__},
            ) from e

    return CanonicalRequest(
        method=method.upper(),
        uri=base_uri,
        query_params=query_params,
        body=body_bytes,
        headers=headers or {},
    )


__all__ = ["parse_query", "canonicalize"]
