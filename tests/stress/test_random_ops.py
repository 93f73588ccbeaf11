"""Stress tests - long random operation sequences checked against a plain dict model."""

from __future__ import annotations

import random
from collections.abc import Hashable

import pytest

from serial_dedupe.engine.config import DedupIndexConfig
from serial_dedupe.engine.index import DedupIndex

SERIALS = ["400x500", "800x600", "1920x1080", "64x64", "128x128"]


def _expected_groups(model: dict[Hashable, Hashable]) -> dict[Hashable, set[Hashable]]:
    groups: dict[Hashable, set[Hashable]] = {}
    for item_id, serial in model.items():
        groups.setdefault(serial, set()).add(item_id)
    return groups


def _actual_groups(index: DedupIndex) -> dict[Hashable, set[Hashable]]:
    groups: dict[Hashable, set[Hashable]] = {}
    for serial in index.serials():
        view = index.group_for(serial)
        assert view is not None
        groups[serial] = {view.representative_id, *view.member_ids}
    return groups


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5, 6, 7])
def test_random_operations_match_model(seed: int) -> None:
    rng = random.Random(seed)
    index = DedupIndex(config=DedupIndexConfig(verify_after_apply=True))
    model: dict[Hashable, Hashable] = {}

    for _round in range(40):
        for _ in range(rng.randint(1, 25)):
            item_id = rng.randrange(30)
            if rng.random() < 0.3:
                index.remove(item_id)
                model.pop(item_id, None)
            else:
                serial = rng.choice(SERIALS)
                index.upsert(item_id, serial)
                model[item_id] = serial

        index.apply_pending()

        assert len(index) == len(model)
        assert _actual_groups(index) == _expected_groups(model)
        for serial in index.serials():
            rep = index.representative_of(serial)
            assert index.is_representative(rep)

    index.rebuild_from_scratch()
    assert _actual_groups(index) == _expected_groups(model)
    index.close()


@pytest.mark.parametrize("seed", [10, 11, 12])
def test_representative_stable_under_member_churn(seed: int) -> None:
    rng = random.Random(seed)
    index = DedupIndex(config=DedupIndexConfig(verify_after_apply=True))
    index.upsert("root", "shared")
    index.apply_pending()

    for _ in range(200):
        item_id = f"m{rng.randrange(20)}"
        if rng.random() < 0.5:
            index.upsert(item_id, rng.choice(["shared", "other"]))
        else:
            index.remove(item_id)
        index.apply_pending()
        assert index.representative_of("shared") == "root"

    index.close()


def test_large_group_root_removal() -> None:
    index = DedupIndex(config=DedupIndexConfig(verify_after_apply=True))
    for i in range(5000):
        index.upsert(i, "big")
    index.apply_pending()

    index.remove(0)
    stats = index.apply_pending()

    view = index.group_for("big")
    assert view is not None
    assert view.representative_id == 1
    assert view.size == 4999
    assert stats.readmitted == 4998
    index.close()
