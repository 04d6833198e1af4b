"""
Canonical protocols for periodchain.

Protocols describe what the chain needs from the values it is handed,
without forcing callers to inherit from library classes:

    ├── HasDuration      : anything a chain can append (Period, a booking, ...)
    └── PeriodTraversal  : map / filter / reduce over a group's periods

Examples:
    >>> from datetime import timedelta
    >>> class Slot:
    ...     duration = timedelta(minutes=15)
    >>> isinstance(Slot(), HasDuration)
    True

Tags:
    protocol, duck-typing, periodchain, contracts
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from periodchain.core.period import Period

T = TypeVar("T")
R = TypeVar("R")


@runtime_checkable
class HasDuration(Protocol):
    """Any value exposing a ``duration``; unset durations are ``None``."""

    @property
    def duration(self) -> timedelta | None: ...


@runtime_checkable
class PeriodTraversal(Protocol):
    """
    Generic traversal over an ordered collection of periods.

    ``PeriodGroup`` supplies a default implementation written against
    iteration; ``TimePeriodChain`` specialises it over its own list.
    """

    def map(self, transform: Callable[[Period], T]) -> list[T]:
        """Apply *transform* to every period, in order."""
        ...

    def filter(self, predicate: Callable[[Period], bool]) -> list[Period]:
        """Periods for which *predicate* is true, in order."""
        ...

    def reduce(self, function: Callable[[R, Period], R], initial: R) -> R:
        """Left-to-right fold starting from *initial*."""
        ...


__all__ = ["HasDuration", "PeriodTraversal"]
