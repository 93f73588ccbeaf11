"""Partition engine: the index, its configuration, hooks and diagnostics."""

from serial_dedupe.engine.config import DedupIndexConfig
from serial_dedupe.engine.diagnostics import PartitionReport, diagnose
from serial_dedupe.engine.hooks import HookEvent, HookPayload, HookRegistry
from serial_dedupe.engine.index import ApplyStats, DedupIndex, IndexSnapshot

__all__ = [
    "ApplyStats",
    "DedupIndex",
    "DedupIndexConfig",
    "IndexSnapshot",
    "HookEvent",
    "HookPayload",
    "HookRegistry",
    "PartitionReport",
    "diagnose",
]
