"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from serial_dedupe.engine.config import DedupIndexConfig
from serial_dedupe.engine.hooks import HookEvent, HookPayload, HookRegistry
from serial_dedupe.engine.index import DedupIndex


@pytest.fixture
def index() -> Iterator[DedupIndex]:
    """A fresh index that verifies its partition after every drain."""
    idx = DedupIndex(config=DedupIndexConfig(verify_after_apply=True))
    yield idx
    if not idx.closed:
        idx.close()


@pytest.fixture
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def recorded(hooks: HookRegistry) -> list[HookPayload]:
    """Every payload emitted on the ``hooks`` registry, in order."""
    received: list[HookPayload] = []
    for event in HookEvent:
        hooks.on(event, received.append)
    return received
