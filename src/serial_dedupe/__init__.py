"""serial-dedupe - share one expensive computation per serial.

Items are tagged with a serial; items with equal serials form a group, and
exactly one item per group (the representative) owns the shared work.

Quick Start:
    >>> from serial_dedupe import DedupIndex
    >>> index = DedupIndex()
    >>> index.upsert(1, "400x500")
    >>> index.upsert(2, "400x500")
    >>> index.upsert(3, "800x600")
    >>> stats = index.apply_pending()
    >>> index.representative_of("400x500")
    1
    >>> index.group_for("400x500").member_ids
    (2,)
"""

from serial_dedupe.core import Change, ChangeKind, Group, GroupView, Item
from serial_dedupe.engine import (
    ApplyStats,
    DedupIndex,
    DedupIndexConfig,
    HookEvent,
    HookPayload,
    HookRegistry,
    IndexSnapshot,
    PartitionReport,
    diagnose,
)
from serial_dedupe.errors import (
    DedupIndexError,
    DrainInProgressError,
    IndexClosedError,
    PartitionInvariantError,
)

__version__ = "0.1.0"

__all__ = [
    # Index
    "DedupIndex",
    "DedupIndexConfig",
    "ApplyStats",
    "IndexSnapshot",
    # Data models
    "Item",
    "Change",
    "ChangeKind",
    "Group",
    "GroupView",
    # Hooks
    "HookEvent",
    "HookPayload",
    "HookRegistry",
    # Diagnostics
    "PartitionReport",
    "diagnose",
    # Errors
    "DedupIndexError",
    "IndexClosedError",
    "DrainInProgressError",
    "PartitionInvariantError",
]
