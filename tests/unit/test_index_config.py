"""Tests for index configuration."""

from __future__ import annotations

import logging

import pytest

from serial_dedupe.engine.config import DedupIndexConfig
from serial_dedupe.engine.index import DedupIndex


class TestDedupIndexConfig:
    def test_defaults_off(self) -> None:
        cfg = DedupIndexConfig()
        assert cfg.verify_after_apply is False
        assert cfg.log_records is False

    def test_validation_rejects_non_bool(self) -> None:
        with pytest.raises(ValueError, match="verify_after_apply"):
            DedupIndexConfig(verify_after_apply="yes")  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="log_records"):
            DedupIndexConfig(log_records=1)  # type: ignore[arg-type]

    def test_to_dict_roundtrip(self) -> None:
        cfg = DedupIndexConfig(verify_after_apply=True, log_records=True)
        restored = DedupIndexConfig.from_dict(cfg.to_dict())
        assert restored == cfg

    def test_from_dict_defaults(self) -> None:
        cfg = DedupIndexConfig.from_dict({})
        assert cfg == DedupIndexConfig()

    def test_frozen(self) -> None:
        cfg = DedupIndexConfig()
        with pytest.raises(AttributeError):
            cfg.log_records = True  # type: ignore[misc]

    def test_index_uses_default_config(self) -> None:
        assert DedupIndex().config == DedupIndexConfig()


class TestRecordLogging:
    def test_log_records_logs_every_record(self, caplog: pytest.LogCaptureFixture) -> None:
        index = DedupIndex(config=DedupIndexConfig(log_records=True))
        index.upsert(1, "a")
        index.upsert(1, "b")

        with caplog.at_level(logging.DEBUG, logger="serial_dedupe.engine.index"):
            index.apply_pending()

        applied = [r for r in caplog.records if r.getMessage().startswith("Applying")]
        # add(1,a), add(1,b), delete(1,a), add(1,b)
        assert len(applied) == 4
        assert "delete" in applied[2].getMessage()

    def test_records_not_logged_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        index = DedupIndex()
        index.upsert(1, "a")

        with caplog.at_level(logging.DEBUG, logger="serial_dedupe.engine.index"):
            index.apply_pending()

        assert not any(r.getMessage().startswith("Applying") for r in caplog.records)
        assert any(r.getMessage().startswith("Drained 1 records") for r in caplog.records)


class TestFromDictCoercion:
    @pytest.mark.parametrize("raw", ["false", "true", 1, 0, None, [True]])
    def test_non_bool_values_keep_defaults(self, raw: object) -> None:
        cfg = DedupIndexConfig.from_dict({"verify_after_apply": raw, "log_records": raw})
        assert cfg == DedupIndexConfig()

    def test_real_bools_are_kept(self) -> None:
        cfg = DedupIndexConfig.from_dict({"verify_after_apply": True, "log_records": False})
        assert cfg.verify_after_apply is True
        assert cfg.log_records is False
