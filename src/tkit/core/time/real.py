"""Real clock implementation."""

from datetime import UTC, datetime

from tkit.core.time.abc import Time


class RealTime(Time):
    """Production implementation using datetime.now()."""

    def now(self) -> datetime:
        return datetime.now(UTC)
