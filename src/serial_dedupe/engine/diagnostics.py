"""Read-only consistency checks for a DedupIndex."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from serial_dedupe.engine.index import DedupIndex


@dataclass(frozen=True)
class PartitionReport:
    """Result of a diagnostics pass.

    Attributes:
        item_count: Items in the item index
        group_count: Groups in the group index
        pending_count: Change records still queued
        problems: Human-readable description of every inconsistency found
    """

    item_count: int
    group_count: int
    pending_count: int
    problems: tuple[str, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not self.problems

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_count": self.item_count,
            "group_count": self.group_count,
            "pending_count": self.pending_count,
            "is_clean": self.is_clean,
            "problems": list(self.problems),
        }


def diagnose(index: DedupIndex) -> PartitionReport:
    """Check that items and groups form an exact partition.

    Every live item must be reachable through exactly one group whose key
    matches the item's serial, every id a group holds must resolve to a
    live item, and the queue must be fully drained.
    """
    state = index.snapshot()
    pending = state.pending_count
    items = state.items
    groups = state.groups
    problems: list[str] = []
    placed: dict[Hashable, Hashable] = {}

    for key, group in groups.items():
        if group.serial != key:
            problems.append(f"group keyed {key!r} records serial {group.serial!r}")

        for item_id in (group.representative_id, *group.member_ids):
            if item_id in placed:
                problems.append(
                    f"item {item_id!r} appears in group {placed[item_id]!r} and group {key!r}"
                )
                continue
            placed[item_id] = key

            item = items.get(item_id)
            if item is None:
                problems.append(f"group {key!r} references unknown item {item_id!r}")
            elif item.serial != key:
                problems.append(
                    f"item {item_id!r} has serial {item.serial!r} but sits in group {key!r}"
                )

    for item_id in items:
        if item_id not in placed:
            problems.append(f"item {item_id!r} is not reachable through any group")

    if pending:
        problems.append(f"{pending} change record(s) still pending")

    return PartitionReport(
        item_count=len(items),
        group_count=len(groups),
        pending_count=pending,
        problems=tuple(problems),
    )
