"""
Tests for engine settings.
"""
import logging

import pytest

from explosio.config import CrashStrategy, Settings, apply_log_level
from explosio.domain import MaterialResource, PeriodType, Supplier, build_activity
from explosio.engine import AnalysisEngine


class TestSettings:

    def test_defaults(self):
        assert Settings.to_dict() == {
            "crash_strategy": "snapshot",
            "log_level": "WARNING",
            "default_target_period": "day",
        }

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("EXPLOSIO_CRASH_STRATEGY", "INCREMENTAL")
        monkeypatch.setenv("EXPLOSIO_LOG_LEVEL", "debug")
        monkeypatch.setenv("EXPLOSIO_DEFAULT_PERIOD", "week")
        Settings.reset()
        config = Settings.get_config()
        assert config.crash_strategy == CrashStrategy.INCREMENTAL
        assert config.log_level == "DEBUG"
        assert config.default_target_period == PeriodType.WEEK

    def test_invalid_values_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("EXPLOSIO_CRASH_STRATEGY", "random")
        monkeypatch.setenv("EXPLOSIO_DEFAULT_PERIOD", "fortnight")
        Settings.reset()
        with caplog.at_level(logging.WARNING, logger="explosio.config"):
            config = Settings.get_config()
        assert config.crash_strategy == CrashStrategy.SNAPSHOT
        assert config.default_target_period == PeriodType.DAY
        assert "EXPLOSIO_CRASH_STRATEGY" in caplog.text

    def test_runtime_override(self):
        assert Settings.set_crash_strategy("incremental")
        assert Settings.get_crash_strategy() == CrashStrategy.INCREMENTAL
        assert not Settings.set_crash_strategy("bogus")
        assert Settings.get_crash_strategy() == CrashStrategy.INCREMENTAL

    def test_apply_log_level(self):
        assert apply_log_level("info")
        assert logging.getLogger("explosio").level == logging.INFO
        apply_log_level()
        assert logging.getLogger("explosio").level == logging.WARNING

    def test_apply_invalid_log_level(self, caplog):
        apply_log_level("error")
        with caplog.at_level(logging.WARNING, logger="explosio.config"):
            assert not apply_log_level("chatty")
        assert logging.getLogger("explosio").level == logging.ERROR
        assert "Invalid log level CHATTY" in caplog.text
        apply_log_level()


class TestEngineDefaults:

    def test_default_target_period_used(self, monkeypatch):
        monkeypatch.setenv("EXPLOSIO_DEFAULT_PERIOD", "week")
        Settings.reset()
        leaf = build_activity("L", "Leaf", 1)
        mill = Supplier("Mill", available_quantity=7, period=PeriodType.DAY)
        leaf.materials.append(MaterialResource("Flour", quantity=1, supplier=mill))
        # 70 units per week = 10 per day
        reqs = AnalysisEngine().calculate_supplier_requirements(leaf, 70)
        assert reqs[0].required_quantity == pytest.approx(10.0)
