"""Configuration for the deduplicating partition index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DedupIndexConfig:
    """Configuration for a DedupIndex.

    Both switches are off by default so the drain loop does no extra work.

    Attributes:
        verify_after_apply: Run partition diagnostics after every drain and
            raise PartitionInvariantError if anything is inconsistent.
        log_records: Emit a debug log line for every processed change record.
    """

    verify_after_apply: bool = False
    log_records: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.verify_after_apply, bool):
            raise ValueError(
                f"verify_after_apply must be a bool, got {type(self.verify_after_apply).__name__}"
            )
        if not isinstance(self.log_records, bool):
            raise ValueError(f"log_records must be a bool, got {type(self.log_records).__name__}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "verify_after_apply": self.verify_after_apply,
            "log_records": self.log_records,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DedupIndexConfig:
        """Build a config from a plain dict; anything that is not a real bool keeps its default."""
        defaults = cls()
        return cls(
            verify_after_apply=_bool_field(data, "verify_after_apply", defaults.verify_after_apply),
            log_records=_bool_field(data, "log_records", defaults.log_records),
        )


def _bool_field(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    return value if isinstance(value, bool) else default
