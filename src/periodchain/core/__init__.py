"""periodchain.core -- periods, groups and adjacency-preserving chains.

Module Map (recommended reading order)
--------------------------------------
**Type System & Errors (start here)**
  errors            Structured error hierarchy with categories
  enums             InsertMode
  protocols         HasDuration, PeriodTraversal

**Domain Models**
  period            Period value object (start, end, derived duration)
  group             PeriodGroup: ordered periods + aggregate queries
  chain             TimePeriodChain: back-to-back periods

**Cross-Cutting Concerns**
  logging           Structured logging (structlog)
  settings          PeriodChainSettings (pydantic-settings)

Tags:
    periodchain, scheduling, time-periods, module-index
"""

from periodchain.core.chain import TimePeriodChain
from periodchain.core.enums import InsertMode
from periodchain.core.errors import (
    ChainIndexError,
    ConfigError,
    EmptyChainError,
    ErrorCategory,
    ErrorContext,
    InvalidPeriodError,
    PeriodChainError,
    UnsetBoundaryError,
    categorize_error,
)
from periodchain.core.group import PeriodGroup
from periodchain.core.logging import LogContext, configure_logging, get_logger
from periodchain.core.period import Period
from periodchain.core.protocols import HasDuration, PeriodTraversal
from periodchain.core.settings import (
    PeriodChainSettings,
    clear_settings_cache,
    configure_from_settings,
    get_settings,
)

__all__ = [
    # Domain
    "Period",
    "PeriodGroup",
    "TimePeriodChain",
    "InsertMode",
    # Protocols
    "HasDuration",
    "PeriodTraversal",
    # Errors
    "ErrorCategory",
    "ErrorContext",
    "PeriodChainError",
    "EmptyChainError",
    "ChainIndexError",
    "InvalidPeriodError",
    "UnsetBoundaryError",
    "ConfigError",
    "categorize_error",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # Settings
    "PeriodChainSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_from_settings",
]
