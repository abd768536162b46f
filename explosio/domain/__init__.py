"""
Domain model: activity tree, resources, suppliers, periods and the
fluent project builder.
"""

from .periods import (
    PeriodType,
    period_to_minutes,
    is_valid_period,
    MINUTES_PER_HOUR,
    MINUTES_PER_DAY,
    MINUTES_PER_WEEK,
    MINUTES_PER_MONTH,
    MINUTES_PER_YEAR,
)
from .resources import (
    Supplier,
    Resource,
    ResourceCategory,
    HumanResource,
    MaterialResource,
    Asset,
)
from .activity import Activity
from .builder import Project, build_activity

__all__ = [
    # Periods
    "PeriodType",
    "period_to_minutes",
    "is_valid_period",
    "MINUTES_PER_HOUR",
    "MINUTES_PER_DAY",
    "MINUTES_PER_WEEK",
    "MINUTES_PER_MONTH",
    "MINUTES_PER_YEAR",
    # Resources
    "Supplier",
    "Resource",
    "ResourceCategory",
    "HumanResource",
    "MaterialResource",
    "Asset",
    # Tree
    "Activity",
    "Project",
    "build_activity",
]
