"""Clock sources for expiration and signing decisions."""

import threading
from datetime import UTC, datetime, timedelta


def system_clock() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(UTC)


class FixedClock:
    """
    Manually driven clock for deterministic tests and replays.

    Usage:
        clock = FixedClock(datetime(2024, 1, 1, tzinfo=UTC))
        flow = RefreshTokensFlow(config, clock=clock)
        clock.advance(seconds=3500)
    """

    def __init__(self, now: datetime):
        if now.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self._now = now
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, delta: timedelta | None = None, seconds: float = 0) -> datetime:
        """Move the clock forward and return the new instant."""
        step = delta if delta is not None else timedelta(seconds=seconds)
        with self._lock:
            self._now = self._now + step
            return self._now

    def set(self, now: datetime) -> None:
        with self._lock:
            self._now = now


__all__ = ["system_clock", "FixedClock"]
