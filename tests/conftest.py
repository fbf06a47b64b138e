"""
pytest configuration for client_auth tests.

Adds src directory to Python path for imports and isolates the environment
variables the config loader reads.
"""

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from client_auth.clock import FixedClock  # noqa: E402
from client_auth.logging.context import clear_log_context  # noqa: E402

T0 = datetime(2024, 1, 1, tzinfo=UTC)


@pytest.fixture
def clock():
    """Clock frozen at 2024-01-01T00:00:00Z."""
    return FixedClock(T0)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for var in (
        "OAUTH2_TOKEN_ENDPOINT",
        "OAUTH2_CLIENT_ID",
        "OAUTH2_CLIENT_SECRET",
        "CLIENT_AUTH_CONFIG",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
    clear_log_context()
