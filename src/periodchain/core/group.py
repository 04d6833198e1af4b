"""
PeriodGroup: an ordered collection of periods with aggregate queries.

The group owns a plain list of :class:`Period` values and answers questions
about the collection as a whole (how many, earliest start, latest end, total
span). Aggregates are computed on demand from the list, so direct edits to
``periods`` are always reflected.

Groups make no promise about how their periods relate to each other; they
may overlap or leave gaps. :class:`~periodchain.core.chain.TimePeriodChain`
narrows that to back-to-back periods.

Examples:
    >>> from datetime import datetime, timedelta
    >>> nine = datetime(2026, 1, 9, 9, 0)
    >>> group = PeriodGroup([
    ...     Period.from_start(nine, timedelta(hours=1)),
    ...     Period.from_start(nine + timedelta(hours=3), timedelta(hours=1)),
    ... ])
    >>> group.count
    2
    >>> group.duration
    datetime.timedelta(seconds=14400)
    >>> group.map(lambda p: p.duration.total_seconds())
    [3600.0, 3600.0]

Tags:
    period-group, collection, aggregate, periodchain
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from datetime import datetime, timedelta
from typing import Any, TypeVar, overload

from periodchain.core.period import Period

T = TypeVar("T")
R = TypeVar("R")


class PeriodGroup:
    """
    Ordered collection of periods.

    Attributes:
        periods: The periods in insertion order. Owned by the group.
    """

    def __init__(self, periods: Iterable[Period] | None = None):
        self.periods: list[Period] = list(periods) if periods is not None else []

    # -- aggregates ----------------------------------------------------------

    @property
    def count(self) -> int:
        return len(self.periods)

    @property
    def is_empty(self) -> bool:
        return not self.periods

    @property
    def start(self) -> datetime | None:
        """Earliest set start among the periods, or None."""
        starts = [p.start for p in self.periods if p.start is not None]
        return min(starts) if starts else None

    @property
    def end(self) -> datetime | None:
        """Latest set end among the periods, or None."""
        ends = [p.end for p in self.periods if p.end is not None]
        return max(ends) if ends else None

    @property
    def duration(self) -> timedelta | None:
        """Span from ``start`` to ``end`` when both are known."""
        start, end = self.start, self.end
        if start is None or end is None:
            return None
        return end - start

    # -- traversal -----------------------------------------------------------

    def map(self, transform: Callable[[Period], T]) -> list[T]:
        """Apply *transform* to every period, in order."""
        return [transform(period) for period in self]

    def filter(self, predicate: Callable[[Period], bool]) -> list[Period]:
        """Periods for which *predicate* is true, in order."""
        return [period for period in self if predicate(period)]

    def reduce(self, function: Callable[[R, Period], R], initial: R) -> R:
        """Left-to-right fold starting from *initial*."""
        result = initial
        for period in self:
            result = function(result, period)
        return result

    # -- sequence protocol ---------------------------------------------------

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self) -> Iterator[Period]:
        return iter(self.periods)

    @overload
    def __getitem__(self, index: int) -> Period: ...

    @overload
    def __getitem__(self, index: slice) -> list[Period]: ...

    def __getitem__(self, index):
        return self.periods[index]

    def __contains__(self, instant: object) -> bool:
        if not isinstance(instant, datetime):
            return False
        return any(period.contains(instant) for period in self.periods)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        start, end, duration = self.start, self.end, self.duration
        return {
            "count": self.count,
            "start": start.isoformat() if start is not None else None,
            "end": end.isoformat() if end is not None else None,
            "duration_seconds": duration.total_seconds() if duration is not None else None,
            "periods": [period.to_dict() for period in self.periods],
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(count={self.count}, start={self.start!r}, end={self.end!r})"


__all__ = ["PeriodGroup"]
