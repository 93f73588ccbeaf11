"""Item and change-record data structures."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import StrEnum


class ChangeKind(StrEnum):
    """Kind of a pending change record."""

    ADD = "add"
    DELETE = "delete"


@dataclass(frozen=True)
class Item:
    """
    A tracked item - an id tagged with a grouping serial.

    Items with equal serials share one expensive computation, owned by
    the representative of their group.

    Attributes:
        id: Unique identifier (any hashable value)
        serial: Grouping key (any hashable value)
    """

    id: Hashable
    serial: Hashable


@dataclass(frozen=True)
class Change:
    """
    A pending add or delete request.

    Delete records created by the drain itself carry the stored serial;
    delete records queued through ``remove()`` leave it as ``None``.

    Attributes:
        kind: Whether this record adds or deletes an item
        id: Identifier the change applies to
        serial: Target serial for adds, stored serial (if known) for deletes
    """

    kind: ChangeKind
    id: Hashable
    serial: Hashable | None = None

    @classmethod
    def add(cls, item_id: Hashable, serial: Hashable) -> Change:
        return cls(kind=ChangeKind.ADD, id=item_id, serial=serial)

    @classmethod
    def delete(cls, item_id: Hashable, serial: Hashable | None = None) -> Change:
        return cls(kind=ChangeKind.DELETE, id=item_id, serial=serial)
