"""
Period: a single time interval with optional boundaries.

A Period is the value every group and chain is made of. It is frozen, so
moving a period never mutates it in place; ``shifted`` returns a new one
and containers swap it into their slot.

Either boundary may be unset (``None``). Operations that need a boundary
raise :class:`UnsetBoundaryError` instead of failing on ``None`` arithmetic.

Examples:
    >>> from datetime import datetime, timedelta
    >>> p = Period.from_start(datetime(2026, 1, 9, 9, 0), timedelta(minutes=30))
    >>> p.end
    datetime.datetime(2026, 1, 9, 9, 30)
    >>> p.shifted(timedelta(hours=1)).start
    datetime.datetime(2026, 1, 9, 10, 0)
    >>> Period().duration is None
    True

Tags:
    period, interval, value-object, periodchain
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from periodchain.core.errors import InvalidPeriodError, UnsetBoundaryError


@dataclass(frozen=True, slots=True)
class Period:
    """
    Immutable interval between two instants.

    Attributes:
        start: First instant of the period, or None if unset.
        end: Last instant of the period, or None if unset.

    Raises:
        InvalidPeriodError: if both boundaries are set and end precedes start.
    """

    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.end < self.start:
            raise InvalidPeriodError(
                f"Period end {self.end.isoformat()} precedes start {self.start.isoformat()}",
                field="end",
                value=self.end,
            )

    @classmethod
    def from_start(cls, start: datetime, duration: timedelta) -> Period:
        """Create a period beginning at *start* lasting *duration*."""
        _check_duration(duration)
        return cls(start=start, end=start + duration)

    @classmethod
    def from_end(cls, end: datetime, duration: timedelta) -> Period:
        """Create a period ending at *end* lasting *duration*."""
        _check_duration(duration)
        return cls(start=end - duration, end=end)

    # -- properties ----------------------------------------------------------

    @property
    def duration(self) -> timedelta | None:
        """``end - start`` when both boundaries are set, else None."""
        if self.start is None or self.end is None:
            return None
        return self.end - self.start

    @property
    def has_start(self) -> bool:
        return self.start is not None

    @property
    def has_end(self) -> bool:
        return self.end is not None

    @property
    def is_bounded(self) -> bool:
        """True when both start and end are set."""
        return self.start is not None and self.end is not None

    @property
    def is_moment(self) -> bool:
        """True for a bounded period of zero length."""
        return self.is_bounded and self.start == self.end

    # -- operations ----------------------------------------------------------

    def shifted(self, delta: timedelta) -> Period:
        """Return a copy with both boundaries moved by *delta* (may be negative)."""
        if not self.is_bounded:
            raise UnsetBoundaryError(
                "Cannot shift a period with an unset boundary",
                field="start" if self.start is None else "end",
            )
        return Period(start=self.start + delta, end=self.end + delta)

    def contains(self, instant: datetime) -> bool:
        """Check whether *instant* falls within the period, boundaries included."""
        if not self.is_bounded:
            return False
        return self.start <= instant <= self.end

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        duration = self.duration
        return {
            "start": self.start.isoformat() if self.start is not None else None,
            "end": self.end.isoformat() if self.end is not None else None,
            "duration_seconds": duration.total_seconds() if duration is not None else None,
        }

    def __str__(self) -> str:
        start = self.start.isoformat() if self.start is not None else "?"
        end = self.end.isoformat() if self.end is not None else "?"
        return f"{start} -> {end}"


def _check_duration(duration: timedelta) -> None:
    if not isinstance(duration, timedelta):
        raise InvalidPeriodError(
            f"Expected timedelta duration, got {type(duration).__name__}",
            field="duration",
            value=duration,
        )
    if duration < timedelta(0):
        raise InvalidPeriodError(
            f"Period duration must not be negative, got {duration}",
            field="duration",
            value=duration,
        )


__all__ = ["Period"]
