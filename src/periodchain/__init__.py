"""
periodchain - Adjacency-preserving chains of time periods.

Models schedules such as back-to-back meetings or appointments as a chain
of periods where each one starts exactly where the previous one ends.
"""

__version__ = "0.1.0"

from periodchain.core import *  # noqa
from periodchain.core import __all__ as _core_all

__all__ = ["__version__", *_core_all]
