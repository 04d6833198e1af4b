"""
TimePeriodChain: back-to-back periods with no gaps and no overlaps.

A chain is a :class:`PeriodGroup` whose periods are kept adjacent: every
period starts exactly where its predecessor ends. It models schedules such
as sequential meetings or appointments, where adding, inserting or removing
one slot moves everything after it instead of leaving a hole or an overlap.

Why a chain and not a group:
    A plain group answers "what is booked"; a chain answers "what happens
    next". Removing the 10:00 meeting from a chain pulls the 11:00 meeting
    forward to 10:00. Inserting a 15 minute break pushes everything after
    it back by 15 minutes.

Key Concepts:
    Adjacency: ``periods[i + 1].start == periods[i].end`` for every pair.
    Anchor: the boundary a new period starts from (the last end for
        ``append``, the predecessor's end for an anchored ``insert``).
    Shift: replacing a period with ``period.shifted(delta)`` to keep the
        periods after a change adjacent.

Failure model:
    Every operation checks its preconditions and builds the new tail before
    touching ``periods``. A raised error means the chain is unchanged.

    - ``append`` with nothing to anchor to → :class:`EmptyChainError`
    - ``insert`` / ``remove`` out of range → :class:`ChainIndexError`
    - a value without a duration → :class:`InvalidPeriodError`
    - ``pop`` on an empty chain → ``None``

Insert modes:
    ``InsertMode.PRESERVE`` stores the caller's period verbatim, so the
    caller must hand over a period whose boundaries already fit the slot;
    only the tail is shifted. ``InsertMode.ANCHORED`` stores a period of the
    same duration starting at the slot's anchor, which keeps the chain
    adjacent for any input. The default comes from
    ``PeriodChainSettings.insert_mode``.

Example:
    >>> from datetime import datetime, timedelta
    >>> chain = TimePeriodChain([
    ...     Period(datetime(2026, 1, 9, 9, 0), datetime(2026, 1, 9, 9, 30)),
    ... ])
    >>> chain.append(timedelta(minutes=30))
    Period(start=datetime.datetime(2026, 1, 9, 9, 30), end=datetime.datetime(2026, 1, 9, 10, 0))
    >>> chain.count
    2
    >>> chain.remove(0).end
    datetime.datetime(2026, 1, 9, 9, 30)
    >>> chain[0].start
    datetime.datetime(2026, 1, 9, 9, 0)

Tags:
    period-chain, schedule, adjacency, periodchain
"""

from __future__ import annotations

import functools
import itertools
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta
from typing import TypeVar

from periodchain.core.enums import InsertMode
from periodchain.core.errors import (
    ChainIndexError,
    EmptyChainError,
    InvalidPeriodError,
    UnsetBoundaryError,
)
from periodchain.core.group import PeriodGroup
from periodchain.core.logging import get_logger
from periodchain.core.period import Period
from periodchain.core.protocols import HasDuration
from periodchain.core.settings import get_settings

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Appendable = HasDuration | timedelta


class TimePeriodChain(PeriodGroup):
    """
    Ordered, adjacent periods.

    Attributes:
        periods: The periods in chronological order. Seeded periods are taken
            as given; chain operations keep them adjacent from then on.
        insert_mode: What ``insert`` stores at the insertion index.
    """

    def __init__(
        self,
        periods: Iterable[Period] | None = None,
        *,
        insert_mode: InsertMode | str | None = None,
    ):
        super().__init__(periods)
        if insert_mode is None:
            self.insert_mode = get_settings().insert_mode
        else:
            self.insert_mode = InsertMode(insert_mode)

    @classmethod
    def from_durations(
        cls,
        start: datetime,
        durations: Iterable[Appendable],
        *,
        insert_mode: InsertMode | str | None = None,
    ) -> TimePeriodChain:
        """Build a chain starting at *start* with one period per duration."""
        items = list(durations)
        chain = cls(insert_mode=insert_mode)
        if not items:
            return chain
        chain.periods.append(Period.from_start(start, _duration_of(items[0], "from_durations")))
        chain.append_contents_of(items[1:])
        return chain

    # -- aggregates ----------------------------------------------------------

    @property
    def start(self) -> datetime | None:
        """Start of the first period."""
        return self.periods[0].start if self.periods else None

    @property
    def end(self) -> datetime | None:
        """End of the last period."""
        return self.periods[-1].end if self.periods else None

    def is_adjacent(self) -> bool:
        """Check that every period starts where its predecessor ends."""
        return all(prev.end == nxt.start for prev, nxt in itertools.pairwise(self.periods))

    # -- existence manipulation ----------------------------------------------

    def append(self, period: Appendable) -> Period:
        """
        Append a period of *period*'s duration after the last period.

        Args:
            period: Anything exposing ``duration``, or a bare timedelta.
                Only the duration is used; the new period starts at the
                chain's current end.

        Returns:
            The period that was appended.

        Raises:
            EmptyChainError: the chain has no last end to anchor to.
            InvalidPeriodError: *period* has no duration.
        """
        anchor = self._anchor("append")
        duration = _duration_of(period, "append")

        new_period = Period.from_start(anchor, duration)
        self.periods.append(new_period)
        logger.debug(
            "period_appended",
            index=len(self.periods) - 1,
            count=len(self.periods),
            duration_seconds=duration.total_seconds(),
        )
        self.update_variables()
        return new_period

    def append_contents_of(self, group: Iterable[Appendable]) -> list[Period]:
        """
        Append one period per element of *group*, in iteration order.

        Each new period chains off this chain's own last end; how the source
        periods relate to each other does not matter. Equivalent to calling
        ``append`` once per element, except that every element is validated
        before anything is appended.

        Returns:
            The periods that were appended.
        """
        durations = [_duration_of(item, "append_contents_of") for item in list(group)]
        if not durations:
            return []
        anchor = self._anchor("append_contents_of")

        appended = []
        for duration in durations:
            new_period = Period.from_start(anchor, duration)
            appended.append(new_period)
            anchor = new_period.end
        self.periods.extend(appended)
        logger.debug("periods_appended", added=len(appended), count=len(self.periods))
        self.update_variables()
        return appended

    def insert(self, period: Period | Appendable, index: int) -> Period:
        """
        Insert a period at *index* and push every later period back.

        Every period after the insertion point is shifted forward by the
        inserted duration. What lands at *index* depends on
        ``insert_mode`` (see module docstring).

        Args:
            period: The period to insert. In PRESERVE mode this must be a
                :class:`Period` and is stored as-is.
            index: Position in ``0..count`` (inserting at ``count`` appends).

        Returns:
            The period stored at *index*.

        Raises:
            ChainIndexError: *index* is outside ``0..count``.
            InvalidPeriodError: *period* has no duration, or cannot be
                stored verbatim.
            UnsetBoundaryError: a period that has to move, or the anchor
                of the slot, has an unset boundary.
        """
        count = len(self.periods)
        if not 0 <= index <= count:
            logger.warning("insert_index_out_of_bounds", index=index, count=count)
            raise ChainIndexError(index, count, operation="insert")

        duration = _duration_of(period, "insert")
        stored = self._period_for_slot(period, duration, index)
        shifted_tail = self._shifted(self.periods[index:], duration, "insert", index)

        self.periods[index:] = [stored, *shifted_tail]
        logger.debug(
            "period_inserted",
            index=index,
            count=len(self.periods),
            shifted=len(shifted_tail),
            insert_mode=self.insert_mode.value,
        )
        self.update_variables()
        return stored

    def remove(self, index: int) -> Period:
        """
        Remove the period at *index* and pull every later period forward.

        The periods that followed the removed one are shifted backward by its
        duration, so the first of them starts where the removed period
        started.

        Returns:
            The removed period.

        Raises:
            ChainIndexError: *index* is outside ``0..count - 1``.
            UnsetBoundaryError: later periods have to move but the removed
                period (or one of them) has an unset boundary.
        """
        count = len(self.periods)
        if not 0 <= index < count:
            logger.warning("remove_index_out_of_bounds", index=index, count=count)
            raise ChainIndexError(index, count, operation="remove")

        removed = self.periods[index]
        tail = self.periods[index + 1:]
        if tail and removed.duration is None:
            logger.warning("removed_period_unbounded", index=index, count=count)
            raise UnsetBoundaryError(
                "Cannot close the gap left by a period without a duration",
                field="duration",
                value=removed,
            ).with_context(operation="remove", index=index, count=count)
        shifted_tail = self._shifted(tail, -removed.duration, "remove", index) if tail else []

        self.periods[index:] = shifted_tail
        logger.debug("period_removed", index=index, count=len(self.periods), shifted=len(shifted_tail))
        self.update_variables()
        return removed

    def remove_all(self) -> None:
        """Remove every period."""
        removed = len(self.periods)
        self.periods.clear()
        logger.debug("chain_cleared", removed=removed)
        self.update_variables()

    def pop(self) -> Period | None:
        """Remove and return the last period, or None if the chain is empty."""
        if not self.periods:
            return None
        period = self.periods.pop()
        logger.debug("period_popped", count=len(self.periods))
        self.update_variables()
        return period

    # -- traversal -----------------------------------------------------------

    def map(self, transform: Callable[[Period], T]) -> list[T]:
        return list(map(transform, self.periods))

    def filter(self, predicate: Callable[[Period], bool]) -> list[Period]:
        return list(filter(predicate, self.periods))

    def reduce(self, function: Callable[[R, Period], R], initial: R) -> R:
        return functools.reduce(function, self.periods, initial)

    # -- relationship --------------------------------------------------------

    def equals(self, chain: PeriodGroup) -> bool:
        """
        Structural comparison over (start, end) pairs.

        True when both hold the same number of periods and each pair of
        periods at the same index has equal starts and equal ends.
        """
        if self.count != chain.count:
            return False
        return all(
            mine.start == theirs.start and mine.end == theirs.end
            for mine, theirs in zip(self.periods, chain.periods)
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TimePeriodChain):
            return self.equals(other)
        return NotImplemented

    __hash__ = None  # mutable

    # -- updates -------------------------------------------------------------

    def update_variables(self) -> None:
        """
        Hook run after every successful mutation.

        Aggregates are computed on demand, so there is nothing to refresh
        here. Subclasses that cache derived values recompute them by
        overriding this method.
        """

    # -- internals -----------------------------------------------------------

    def _anchor(self, operation: str) -> datetime:
        """End of the last period, which the next appended period starts at."""
        if not self.periods or self.periods[-1].end is None:
            logger.warning("chain_has_no_anchor", operation=operation, count=len(self.periods))
            raise EmptyChainError().with_context(operation=operation, count=len(self.periods))
        return self.periods[-1].end

    def _period_for_slot(self, period: Period | Appendable, duration: timedelta, index: int) -> Period:
        """The period ``insert`` stores at *index*."""
        if self.insert_mode is InsertMode.ANCHORED and self.periods:
            anchor = self.periods[index - 1].end if index > 0 else self.periods[0].start
            if anchor is None:
                logger.warning("insert_slot_has_no_anchor", index=index, count=len(self.periods))
                raise UnsetBoundaryError(
                    f"Slot {index} has no anchor boundary to start the inserted period from",
                    field="end" if index > 0 else "start",
                ).with_context(operation="insert", index=index, count=len(self.periods))
            return Period.from_start(anchor, duration)

        if not isinstance(period, Period):
            logger.warning(
                "insert_needs_period",
                index=index,
                value_type=type(period).__name__,
                insert_mode=self.insert_mode.value,
            )
            raise InvalidPeriodError(
                f"insert stores the period as given and needs a Period, got {type(period).__name__}",
                field="period",
                value=period,
            ).with_context(operation="insert", index=index)
        return period

    def _shifted(self, periods: list[Period], delta: timedelta, operation: str, index: int) -> list[Period]:
        """Copies of *periods* moved by *delta*; nothing is written back."""
        try:
            return [p.shifted(delta) for p in periods]
        except UnsetBoundaryError as exc:
            logger.warning(
                "tail_period_unbounded",
                operation=operation,
                index=index,
                count=len(self.periods),
                field=exc.field,
            )
            exc.with_context(operation=operation, index=index, count=len(self.periods))
            raise


def _duration_of(value: Appendable, operation: str) -> timedelta:
    """Duration carried by *value*, which may itself be a timedelta."""
    duration = value if isinstance(value, timedelta) else getattr(value, "duration", None)
    if not isinstance(duration, timedelta):
        logger.warning("value_has_no_duration", operation=operation, value_type=type(value).__name__)
        raise InvalidPeriodError(
            f"{type(value).__name__} has no usable duration",
            field="duration",
            value=value,
        ).with_context(operation=operation)
    if duration < timedelta(0):
        logger.warning("value_has_negative_duration", operation=operation, duration_seconds=duration.total_seconds())
        raise InvalidPeriodError(
            f"Duration must not be negative, got {duration}",
            field="duration",
            value=value,
        ).with_context(operation=operation)
    return duration


__all__ = ["TimePeriodChain", "InsertMode"]
