"""
Client authentication library for outbound HTTP calls.

Modules:
    oauth2   - Token expiration policy, refresh-token flow, token manager
    signing  - AWS SigV4 canonicalization, signer and request interceptor
    errors   - Error classification and exception hierarchy
    logging  - Structured JSON logging with context propagation
    http     - aiohttp glue for signed requests
    config   - YAML configuration with environment overrides

Design Principles:
    - Time is injected through a clock so expiry decisions are testable
    - Token payloads and credentials never reach log records
    - Async-first where network calls are involved
"""

from .clock import FixedClock, system_clock
from .types import BodyEncoder, Clock, ErrorCategory

__version__ = "0.1.0"

__all__ = [
    "ErrorCategory",
    "Clock",
    "BodyEncoder",
    "FixedClock",
    "system_clock",
]
