"""Clock primitives consumed by scenario handlers.

``SystemClock`` reflects wall-clock time. ``FixedClock`` only moves when a
test (or a handler) tells it to, which keeps fixture timestamps reproducible.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable

DEFAULT_FIXED_INSTANT = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@runtime_checkable
class Clock(Protocol):
    """Capability: give the current time as an aware UTC datetime."""

    def now(self) -> datetime: ...


class SystemClock:
    """Clock backed by the platform wall clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Virtual clock that advances only explicitly.

    Naive datetimes are interpreted as UTC.
    """

    def __init__(self, instant: datetime = DEFAULT_FIXED_INSTANT) -> None:
        self._instant = _as_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        """Jump to an absolute instant."""
        self._instant = _as_utc(instant)

    def advance(
        self,
        delta: timedelta | None = None,
        *,
        seconds: float = 0,
        milliseconds: float = 0,
    ) -> datetime:
        """Move the clock forward and return the new instant.

        Raises:
            ValueError: If the resulting step would move time backwards.
        """
        step = (delta or timedelta()) + timedelta(
            seconds=seconds, milliseconds=milliseconds
        )
        if step < timedelta():
            raise ValueError(f"FixedClock cannot move backwards (step={step})")
        self._instant = self._instant + step
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()})"


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def epoch_seconds(clock: Clock) -> int:
    """Whole seconds since the Unix epoch for the clock's current time."""
    return int(clock.now().timestamp())


def iso_timestamp(instant: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = _as_utc(instant)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
