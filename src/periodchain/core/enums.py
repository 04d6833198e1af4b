"""
Shared enums for periodchain.

Kept apart from ``chain`` so that settings can refer to them without
importing the chain itself.
"""

from enum import Enum


class InsertMode(str, Enum):
    """
    What ``TimePeriodChain.insert`` stores at the insertion index.

    Both modes shift every period after the insertion point forward by the
    inserted duration. They differ only in the period placed at the index.
    """

    # Store the caller's period exactly as given. The caller guarantees its
    # start/end already fit the slot.
    PRESERVE = "preserve"

    # Store a period of the same duration starting at the slot's anchor
    # (predecessor's end, or the chain start at index 0).
    ANCHORED = "anchored"
