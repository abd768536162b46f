"""
Explosio - Engine Settings
==========================

Runtime settings for the analysis engine.

Usage:
    from explosio.config import Settings, CrashStrategy

    if Settings.get_crash_strategy() == CrashStrategy.INCREMENTAL:
        ...

Environment variables:
    EXPLOSIO_CRASH_STRATEGY=snapshot|incremental
    EXPLOSIO_LOG_LEVEL=DEBUG|INFO|WARNING|ERROR
    EXPLOSIO_DEFAULT_PERIOD=minute|hour|day|week|month|year
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from explosio.domain.periods import PeriodType

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CrashStrategy(str, Enum):
    """
    Crashing strategies.

    SNAPSHOT: sort the critical activities once (cheapest cost per minute
              first) and take whole activities from that static list
    INCREMENTAL: shorten the project one minute at a time through the
              cheapest set of critical activities, recomputing CPM after
              every step
    """
    SNAPSHOT = "snapshot"
    INCREMENTAL = "incremental"


@dataclass
class EngineSettings:
    """Engine configuration; defaults keep the snapshot crashing behaviour."""
    crash_strategy: CrashStrategy = CrashStrategy.SNAPSHOT
    log_level: str = "WARNING"
    default_target_period: PeriodType = PeriodType.DAY


class Settings:
    """
    Class-level holder for the active EngineSettings.

    Loaded lazily from the environment on first access.
    """

    _instance: Optional[EngineSettings] = None

    @classmethod
    def _load_from_env(cls) -> EngineSettings:
        config = EngineSettings()

        value = os.environ.get("EXPLOSIO_CRASH_STRATEGY")
        if value:
            try:
                config.crash_strategy = CrashStrategy(value.strip().lower())
                logger.info(f"Crash strategy = {config.crash_strategy.value}")
            except ValueError:
                logger.warning(f"Invalid value for EXPLOSIO_CRASH_STRATEGY: {value}")

        value = os.environ.get("EXPLOSIO_LOG_LEVEL")
        if value:
            if value.strip().upper() in _LOG_LEVELS:
                config.log_level = value.strip().upper()
            else:
                logger.warning(f"Invalid value for EXPLOSIO_LOG_LEVEL: {value}")

        value = os.environ.get("EXPLOSIO_DEFAULT_PERIOD")
        if value:
            period = PeriodType.parse(value)
            if period is not None:
                config.default_target_period = period
            else:
                logger.warning(f"Invalid value for EXPLOSIO_DEFAULT_PERIOD: {value}")

        return config

    @classmethod
    def get_config(cls) -> EngineSettings:
        if cls._instance is None:
            cls._instance = cls._load_from_env()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached settings so the next access reloads the environment."""
        cls._instance = None

    @classmethod
    def get_crash_strategy(cls) -> CrashStrategy:
        return cls.get_config().crash_strategy

    @classmethod
    def get_default_target_period(cls) -> PeriodType:
        return cls.get_config().default_target_period

    @classmethod
    def set_crash_strategy(cls, value: str) -> bool:
        """Override the crash strategy at runtime. Returns False on unknown values."""
        try:
            cls.get_config().crash_strategy = CrashStrategy(value.lower())
        except ValueError:
            logger.warning(f"Invalid crash strategy {value}")
            return False
        logger.info(f"Crash strategy set to {value}")
        return True

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        config = cls.get_config()
        return {
            "crash_strategy": config.crash_strategy.value,
            "log_level": config.log_level,
            "default_target_period": config.default_target_period.value,
        }


def apply_log_level(level: Optional[str] = None) -> bool:
    """
    Set the level of the `explosio` logger hierarchy (settings value by default).

    Returns False, leaving the level unchanged, for an unknown level name.
    """
    level = (level or Settings.get_config().log_level).strip().upper()
    if level not in _LOG_LEVELS:
        logger.warning(f"Invalid log level {level}")
        return False
    logging.getLogger("explosio").setLevel(level)
    return True
