"""Request signing data models."""

import io
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class SigningScope:
    """
    Service/region binding of a signature.

    Attributes:
        service: Signing name of the target service (e.g. "execute-api")
        region: Region the signature is valid in (e.g. "us-west-2")
    """

    service: str
    region: str

    def __post_init__(self):
        if not self.service or not self.region:
            raise ValueError("SigningScope requires both service and region")


@dataclass(frozen=True)
class AwsCredentials:
    """Resolved, short-lived view of signing credentials."""

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None

    def __repr__(self) -> str:
        return f"AwsCredentials(access_key_id={self.access_key_id!r})"


@dataclass(frozen=True)
class CanonicalRequest:
    """
    Deterministic view of an outbound request, built fresh per call.

    Attributes:
        method: Upper-case HTTP method
        uri: Target URI without query string or fragment
        query_params: Decoded query parameters, unique keys
        body: Serialized body, or None when the request has no entity
        headers: Snapshot of the caller's headers at canonicalization time
    """

    method: str
    uri: str
    query_params: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the mappings so the record is immutable end to end
        object.__setattr__(self, "query_params", MappingProxyType(dict(self.query_params)))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def content_stream(self) -> io.BytesIO | None:
        """A fresh stream over the body; every call starts at byte zero."""
        if self.body is None:
            return None
        return io.BytesIO(self.body)


@dataclass(frozen=True)
class SignedRequest:
    """Headers computed by the signer and the raw signature."""

    headers: Mapping[str, str]
    signature: str


@dataclass
class OutboundRequest:
    """
    Outbound HTTP request as seen by the signing interceptor.

    The interceptor reads method, url and body, and only ever adds to headers.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None


__all__ = [
    "SigningScope",
    "AwsCredentials",
    "CanonicalRequest",
    "SignedRequest",
    "OutboundRequest",
]
