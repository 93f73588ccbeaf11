"""Group data structures - one representative plus its members."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Group:
    """
    The set of live items sharing one serial.

    Groups hold ids only. Items are resolved through the owning index's
    item map, so moving an id between the representative slot and the
    member set never leaves a stale reference behind.

    Attributes:
        serial: Grouping key shared by every item in the group
        representative_id: Id of the item that owns the shared computation
        member_ids: Ids of the remaining items, in admission order
    """

    serial: Hashable
    representative_id: Hashable
    member_ids: dict[Hashable, None] = field(default_factory=dict)

    def __contains__(self, item_id: object) -> bool:
        return item_id == self.representative_id or item_id in self.member_ids

    def __len__(self) -> int:
        return 1 + len(self.member_ids)

    def add_member(self, item_id: Hashable) -> None:
        self.member_ids[item_id] = None

    def discard_member(self, item_id: Hashable) -> None:
        self.member_ids.pop(item_id, None)

    def to_view(self) -> GroupView:
        return GroupView(
            serial=self.serial,
            representative_id=self.representative_id,
            member_ids=tuple(self.member_ids),
        )


@dataclass(frozen=True)
class GroupView:
    """Immutable snapshot of a group, safe to hand out to callers.

    Attributes:
        serial: Grouping key
        representative_id: Id of the representative
        member_ids: Non-representative ids in admission order
    """

    serial: Hashable
    representative_id: Hashable
    member_ids: tuple[Hashable, ...] = ()

    @property
    def size(self) -> int:
        return 1 + len(self.member_ids)

    def to_dict(self) -> dict[str, Any]:
        return {
            "serial": self.serial,
            "representative_id": self.representative_id,
            "member_ids": list(self.member_ids),
            "size": self.size,
        }
