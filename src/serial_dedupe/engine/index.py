"""Deduplicating partition index.

Tracks items tagged with a serial and keeps them partitioned into one
group per serial, each with exactly one representative. Requests are
queued by ``upsert()``/``remove()`` and only take effect when
``apply_pending()`` drains the queue.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Hashable
from dataclasses import asdict, dataclass
from typing import Any

from serial_dedupe.core.group import Group, GroupView
from serial_dedupe.core.item import Change, ChangeKind, Item
from serial_dedupe.engine.config import DedupIndexConfig
from serial_dedupe.engine.hooks import HookEvent, HookRegistry
from serial_dedupe.errors import (
    DrainInProgressError,
    IndexClosedError,
    PartitionInvariantError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyStats:
    """Counters for one drain of the pending-change queue.

    Attributes:
        records_processed: Change records popped, including ones the drain pushed itself
        items_added: Items admitted through the add path (re-admissions included)
        items_removed: Items deleted from the index
        groups_created: Groups created with a freshly elected representative
        groups_dissolved: Groups torn down because their representative left
        serial_changes: Adds that superseded an existing item's serial
        readmitted: Members detached from a dissolved group and queued for re-admission
    """

    records_processed: int = 0
    items_added: int = 0
    items_removed: int = 0
    groups_created: int = 0
    groups_dissolved: int = 0
    serial_changes: int = 0
    readmitted: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class IndexSnapshot:
    """Read-only copy of a DedupIndex's state.

    Attributes:
        items: Item index (id -> Item) in admission order
        groups: Group index (serial -> GroupView) in creation order
        pending_count: Change records still queued
    """

    items: dict[Hashable, Item]
    groups: dict[Hashable, GroupView]
    pending_count: int


@dataclass
class _DrainCounters:
    records_processed: int = 0
    items_added: int = 0
    items_removed: int = 0
    groups_created: int = 0
    groups_dissolved: int = 0
    serial_changes: int = 0
    readmitted: int = 0

    def freeze(self) -> ApplyStats:
        return ApplyStats(**asdict(self))


class DedupIndex:
    """Incrementally maintained partition of items by serial.

    Not thread-safe: callers that share an index across threads must
    serialize every call themselves.

    Example:
        index = DedupIndex()
        index.upsert("clip-1", "400x500")
        index.upsert("clip-2", "400x500")
        index.apply_pending()
        index.representative_of("400x500")  # "clip-1"
    """

    def __init__(
        self,
        config: DedupIndexConfig | None = None,
        hooks: HookRegistry | None = None,
    ) -> None:
        self._config = config or DedupIndexConfig()
        self._hooks = hooks if hooks is not None else HookRegistry()
        self._items: dict[Hashable, Item] = {}
        self._groups: dict[Hashable, Group] = {}
        self._queue: deque[Change] = deque()
        self._closed = False
        self._draining = False

    def __repr__(self) -> str:
        if self._closed:
            return "DedupIndex(closed)"
        return (
            f"DedupIndex(items={len(self._items)}, groups={len(self._groups)}, "
            f"pending={len(self._queue)})"
        )

    def __enter__(self) -> DedupIndex:
        self._ensure_open("__enter__")
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if not self._closed:
            self.close()

    # ── Lifecycle ────────────────────────────────────────────────────

    @property
    def config(self) -> DedupIndexConfig:
        return self._config

    @property
    def hooks(self) -> HookRegistry:
        return self._hooks

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release all held state. Any later call raises IndexClosedError."""
        self._ensure_open("close")
        self._items.clear()
        self._groups.clear()
        self._queue.clear()
        self._closed = True

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise IndexClosedError(operation)

    # ── Mutation requests ────────────────────────────────────────────

    def upsert(self, item_id: Hashable, serial: Hashable) -> None:
        """Queue an add (or serial change) for item_id."""
        self._ensure_open("upsert")
        self._queue.append(Change.add(item_id, serial))

    def remove(self, item_id: Hashable) -> None:
        """Queue a delete for item_id. Unknown ids are ignored at drain time."""
        self._ensure_open("remove")
        self._queue.append(Change.delete(item_id))

    @property
    def pending_count(self) -> int:
        """Number of change records waiting for apply_pending()."""
        self._ensure_open("pending_count")
        return len(self._queue)

    # ── Drain ────────────────────────────────────────────────────────

    def apply_pending(self) -> ApplyStats:
        """Drain the queue front to back until it is empty.

        Records pushed by the drain itself land at the front of the queue,
        so a decomposed request finishes before any other queued work runs.

        Returns:
            ApplyStats for this drain.

        Raises:
            DrainInProgressError: If called from a hook listener mid-drain.
            PartitionInvariantError: If verify_after_apply is set and the
                resulting partition fails diagnostics.
        """
        self._ensure_open("apply_pending")
        self._ensure_not_draining("apply_pending")
        self._draining = True
        try:
            stats = self._drain()
        finally:
            self._draining = False

        if self._config.verify_after_apply:
            from serial_dedupe.engine.diagnostics import diagnose

            report = diagnose(self)
            if not report.is_clean:
                raise PartitionInvariantError(report)

        return stats

    def _ensure_not_draining(self, operation: str) -> None:
        if self._draining:
            raise DrainInProgressError(operation)

    def _drain(self) -> ApplyStats:
        counters = _DrainCounters()

        while self._queue:
            change = self._queue.popleft()
            counters.records_processed += 1
            if self._config.log_records:
                logger.debug(
                    "Applying %s id=%r serial=%r", change.kind, change.id, change.serial
                )

            if change.kind is ChangeKind.ADD:
                self._add(change, counters)
            else:
                self._delete(change, counters)

            # A hook listener may have closed the index mid-drain
            self._ensure_open("apply_pending")

        stats = counters.freeze()
        logger.debug(
            "Drained %d records: +%d -%d items, %d groups created, %d dissolved",
            stats.records_processed,
            stats.items_added,
            stats.items_removed,
            stats.groups_created,
            stats.groups_dissolved,
        )
        return stats

    def _push_front(self, *changes: Change) -> None:
        """Put changes at the front of the queue, keeping their order."""
        self._queue.extendleft(reversed(changes))

    def _add(self, change: Change, counters: _DrainCounters) -> None:
        existing = self._items.get(change.id)
        if existing is not None:
            if existing.serial != change.serial:
                self._push_front(
                    Change.delete(existing.id, existing.serial),
                    Change.add(change.id, change.serial),
                )
                counters.serial_changes += 1
            return

        item = Item(id=change.id, serial=change.serial)
        self._items[item.id] = item
        counters.items_added += 1

        group = self._groups.get(item.serial)
        if group is None:
            self._groups[item.serial] = Group(serial=item.serial, representative_id=item.id)
            counters.groups_created += 1
            is_representative = True
        else:
            group.add_member(item.id)
            is_representative = False

        self._hooks.emit(
            HookEvent.ITEM_ADDED,
            {"id": item.id, "serial": item.serial, "representative": is_representative},
        )
        if is_representative:
            self._hooks.emit(
                HookEvent.REPRESENTATIVE_ELECTED, {"serial": item.serial, "id": item.id}
            )

    def _delete(self, change: Change, counters: _DrainCounters) -> None:
        item = self._items.get(change.id)
        if item is None:
            return

        group = self._groups[item.serial]
        dissolved = group.representative_id == item.id
        if dissolved:
            # Tear the group down and re-admit its members through the add
            # path; the first of them becomes the new representative.
            readmit: list[Change] = []
            for member_id in group.member_ids:
                member = self._items.pop(member_id)
                readmit.append(Change.add(member.id, member.serial))
            del self._groups[item.serial]
            self._push_front(*readmit)
            counters.groups_dissolved += 1
            counters.readmitted += len(readmit)
        else:
            group.discard_member(item.id)

        del self._items[item.id]
        counters.items_removed += 1

        # Listeners only run once the record is fully applied
        if dissolved:
            self._hooks.emit(HookEvent.GROUP_DISSOLVED, {"serial": item.serial, "id": item.id})
        self._hooks.emit(HookEvent.ITEM_REMOVED, {"id": item.id, "serial": item.serial})

    # ── Rebuild ──────────────────────────────────────────────────────

    def rebuild_from_scratch(self) -> ApplyStats:
        """Discard pending changes and recompute the partition from the live items.

        Every current item is re-queued as one add record, in item-index
        order, and the queue is drained. Previous representative choices
        are not preserved.

        Raises:
            DrainInProgressError: If called from a hook listener mid-drain.
        """
        self._ensure_open("rebuild_from_scratch")
        self._ensure_not_draining("rebuild_from_scratch")
        snapshot = list(self._items.values())
        dissolved = list(self._groups.values())
        dropped = len(self._queue)

        self._items.clear()
        self._groups.clear()
        self._queue.clear()
        self._queue.extend(Change.add(item.id, item.serial) for item in snapshot)
        logger.debug(
            "Rebuilding partition from %d items (%d pending records dropped)",
            len(snapshot),
            dropped,
        )

        self._draining = True
        try:
            for group in dissolved:
                self._hooks.emit(
                    HookEvent.GROUP_DISSOLVED,
                    {"serial": group.serial, "id": group.representative_id},
                )
            self._ensure_open("rebuild_from_scratch")
        finally:
            self._draining = False
        return self.apply_pending()

    # ── Queries ──────────────────────────────────────────────────────

    def snapshot(self) -> IndexSnapshot:
        """Return a read-only copy of the item index, group index and queue length."""
        self._ensure_open("snapshot")
        return IndexSnapshot(
            items=dict(self._items),
            groups={serial: group.to_view() for serial, group in self._groups.items()},
            pending_count=len(self._queue),
        )

    def is_representative(self, item_id: Hashable) -> bool:
        """Return whether item_id is the representative of its group."""
        self._ensure_open("is_representative")
        item = self._items.get(item_id)
        if item is None:
            return False
        group = self._groups.get(item.serial)
        return group is not None and group.representative_id == item.id

    def group_for(self, serial: Hashable) -> GroupView | None:
        """Return a snapshot of the group for serial, or None if it has no items."""
        self._ensure_open("group_for")
        group = self._groups.get(serial)
        if group is None:
            return None
        return group.to_view()

    def representative_of(self, serial: Hashable) -> Hashable | None:
        """Return the representative id for serial, or None if it has no items."""
        self._ensure_open("representative_of")
        group = self._groups.get(serial)
        if group is None:
            return None
        return group.representative_id

    def serial_of(self, item_id: Hashable) -> Hashable | None:
        """Return the applied serial of item_id, or None if it is not live."""
        self._ensure_open("serial_of")
        item = self._items.get(item_id)
        if item is None:
            return None
        return item.serial

    def serials(self) -> tuple[Hashable, ...]:
        """Return every serial that currently has a group, in creation order."""
        self._ensure_open("serials")
        return tuple(self._groups)

    def __len__(self) -> int:
        self._ensure_open("__len__")
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        self._ensure_open("__contains__")
        return item_id in self._items
