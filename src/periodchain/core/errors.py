"""
Structured error types for period chains.

Provides a small hierarchy of typed errors with metadata for categorisation,
logging and root cause analysis through error chaining.

Every failure in periodchain is a programming error surfaced to the caller:
an append with nothing to anchor to, an index outside the chain, a period
with no duration. None of them is retryable and none of them leaves the
chain partially mutated. Instead of bare ``IndexError``/``ValueError``,
PeriodChainError and its subclasses carry:
- **Category:** What kind of error (state, index, validation, config)
- **Context:** Operation name, offending index, chain size, custom fields
- **Cause:** Chained underlying exception for root cause analysis

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure kind
    - **Stdlib Compatible:** Index and validation errors still satisfy
      ``except IndexError`` / ``except ValueError``
    - **Rich Context:** Errors carry metadata for structured logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     PeriodChainError                         │
        │                (category, context, cause)                    │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  EmptyChainError    ChainIndexError     InvalidPeriodError   │
        │  (STATE)            (INDEX, IndexError) (VALIDATION,         │
        │                                          ValueError)         │
        │                                              │               │
        │                                     UnsetBoundaryError       │
        │                                                              │
        │  ConfigError                                                 │
        │  (CONFIG)                                                    │
        └─────────────────────────────────────────────────────────────┘

Examples:
    Index errors keep the offending position:

    >>> error = ChainIndexError(5, 2, operation="remove")
    >>> error.index, error.count
    (5, 2)
    >>> isinstance(error, IndexError)
    True

    Adding context fluently:

    >>> error = EmptyChainError("Cannot append to an empty chain")
    >>> error.with_context(operation="append").context.operation
    'append'

Guardrails:
    ❌ DON'T: Raise bare IndexError from chain operations
    ✅ DO: Raise ChainIndexError so the index and count travel with it

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, periodchain
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification.

    Attributes:
        STATE: Operation not valid for the chain's current state
        INDEX: Position outside the chain's valid range
        VALIDATION: Malformed period or argument
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    STATE = "STATE"
    INDEX = "INDEX"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover what chain operations know when they fail; anything
    else goes into ``metadata``. ``to_dict()`` serializes only the fields
    that are set.

    Examples:
        >>> ctx = ErrorContext(operation="insert", index=4, count=3)
        >>> ctx.to_dict()
        {'operation': 'insert', 'index': 4, 'count': 3}

    Attributes:
        operation: Name of the chain operation that failed
        index: Position the operation was asked to use
        count: Number of periods in the chain at the time of failure
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    index: int | None = None
    count: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "index", "count"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class PeriodChainError(Exception):
    """
    Base exception for all periodchain errors.

    Subclasses set ``default_category`` to classify themselves; callers can
    override it per instance.

    Examples:
        >>> error = PeriodChainError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'PeriodChainError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> PeriodChainError:
        """
        Add context to this error (fluent API).

        Usage:
            raise EmptyChainError("No anchor").with_context(operation="append")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CHAIN STATE ERRORS
# =============================================================================


class EmptyChainError(PeriodChainError):
    """
    The chain has no last period whose end can anchor a new period.

    Raised by ``append`` and ``append_contents_of`` on an empty chain, or
    when the last period's end is unset.
    """

    default_category = ErrorCategory.STATE

    def __init__(
        self,
        message: str = "Chain has no last period to anchor to",
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)


class ChainIndexError(PeriodChainError, IndexError):
    """Index outside the range an operation accepts."""

    default_category = ErrorCategory.INDEX

    def __init__(
        self,
        index: int,
        count: int,
        *,
        operation: str | None = None,
        message: str | None = None,
        **kwargs: Any,
    ):
        self.index = index
        self.count = count
        super().__init__(
            message or f"Index {index} out of bounds for chain of {count} period(s)",
            context=ErrorContext(operation=operation, index=index, count=count),
            **kwargs,
        )


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class InvalidPeriodError(PeriodChainError, ValueError):
    """
    A period, or a value standing in for one, cannot be used.

    Never recoverable by the chain itself - the input must be fixed.
    """

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


class UnsetBoundaryError(InvalidPeriodError):
    """Operation needs a start or end that the period does not have."""

    pass


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(PeriodChainError):
    """Invalid configuration."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, PeriodChainError):
        return error.category
    if isinstance(error, IndexError):
        return ErrorCategory.INDEX
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "PeriodChainError",
    "EmptyChainError",
    "ChainIndexError",
    "InvalidPeriodError",
    "UnsetBoundaryError",
    "ConfigError",
    "categorize_error",
]
