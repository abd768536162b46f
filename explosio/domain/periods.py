"""
Periods used to express supplier capacity and production targets.

Month and year are fixed approximations (30 and 365 days).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1440
MINUTES_PER_WEEK = 10080
MINUTES_PER_MONTH = 43200   # 30 days
MINUTES_PER_YEAR = 525600   # 365 days
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
HOURS_PER_DAY = 24


class PeriodType(str, Enum):
    """Capacity / production period."""
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Union["PeriodType", str, None]) -> Optional["PeriodType"]:
        """Return the matching PeriodType, or None for unknown values."""
        if isinstance(value, PeriodType):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def minutes(self) -> int:
        return _PERIOD_MINUTES[self]


_PERIOD_MINUTES = {
    PeriodType.MINUTE: 1,
    PeriodType.HOUR: MINUTES_PER_HOUR,
    PeriodType.DAY: MINUTES_PER_DAY,
    PeriodType.WEEK: MINUTES_PER_WEEK,
    PeriodType.MONTH: MINUTES_PER_MONTH,
    PeriodType.YEAR: MINUTES_PER_YEAR,
}

PeriodLike = Union[PeriodType, str]


def is_valid_period(value: Optional[PeriodLike]) -> bool:
    return PeriodType.parse(value) is not None


def period_to_minutes(value: Optional[PeriodLike]) -> int:
    """Minutes in one period; 0 when the period is not recognised."""
    period = PeriodType.parse(value)
    if period is None:
        return 0
    return period.minutes


def period_label(value: Optional[PeriodLike]) -> str:
    if isinstance(value, PeriodType):
        return value.value
    return str(value)
