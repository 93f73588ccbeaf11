"""Exceptions raised by the deduplicating partition index."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from serial_dedupe.engine.diagnostics import PartitionReport


class DedupIndexError(RuntimeError):
    """Base class for index lifecycle and consistency failures."""


class IndexClosedError(DedupIndexError):
    """Raised when an index is used after ``close()``."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"DedupIndex.{operation}() called after close()")
        self.operation = operation


class PartitionInvariantError(DedupIndexError):
    """Raised when post-drain verification finds a broken partition."""

    def __init__(self, report: PartitionReport) -> None:
        summary = "; ".join(report.problems[:3])
        more = len(report.problems) - 3
        if more > 0:
            summary += f" (+{more} more)"
        super().__init__(f"Partition invariant violated: {summary}")
        self.report = report


class DrainInProgressError(DedupIndexError):
    """Raised when a hook listener starts a drain or rebuild while one is running."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"DedupIndex.{operation}() called from a hook listener while the queue is draining"
        )
        self.operation = operation
