"""
Structured logging module.

Provides JSON logging with context propagation. Token payloads and
secrets are never passed to loggers; URL fields are redacted.
"""

from client_auth.logging.context import (
    clear_log_context,
    get_log_context,
    set_log_context,
)
from client_auth.logging.formatters import ConsoleFormatter, JSONFormatter
from client_auth.logging.setup import get_logger, setup_logging
from client_auth.logging.utilities import log_exception, log_with_context

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Formatters
    "JSONFormatter",
    "ConsoleFormatter",
    # Context
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    # Utilities
    "log_with_context",
    "log_exception",
]
