"""Core data models for serial-dedupe."""

from serial_dedupe.core.group import Group, GroupView
from serial_dedupe.core.item import Change, ChangeKind, Item

__all__ = [
    # Items and change records
    "Item",
    "Change",
    "ChangeKind",
    # Groups
    "Group",
    "GroupView",
]
