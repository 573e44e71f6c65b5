"""Fake Time implementation for testing."""

from datetime import UTC, datetime

from tkit.core.time.abc import Time


class FakeTime(Time):
    """Fake clock that always returns the time given at construction."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime(2026, 1, 15, 12, 0, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self._now
