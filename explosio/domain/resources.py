"""
Resources allocated to activities and the suppliers behind them.

Three resource kinds share the Resource capability (cost, quantity,
optional supplier):

    HumanResource     cost = (cost_per_h / 60) * duration * quantity
    MaterialResource  cost = unit_cost * quantity
    Asset             cost = cost_per_use * quantity

`duration` is the duration (minutes) of the activity that owns the
resource. A supplier is only used for capacity checks, it never enters
the cost.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from explosio.domain.periods import (
    MINUTES_PER_HOUR,
    PeriodLike,
    PeriodType,
    is_valid_period,
    period_label,
    period_to_minutes,
)
from explosio.errors import (
    ExplosioError,
    InvalidPeriodError,
    NegativeCostError,
    NegativeQuantityError,
)


class ResourceCategory(str, Enum):
    """Cost category used by the cost breakdown."""
    HUMAN = "human"
    MATERIAL = "material"
    ASSET = "asset"


_KIND_LABELS = {
    ResourceCategory.HUMAN: "human resource",
    ResourceCategory.MATERIAL: "material resource",
    ResourceCategory.ASSET: "asset",
}


# ════════════════════════════════════════════════════════════════════════════════════════════════════
# SUPPLIER
# ════════════════════════════════════════════════════════════════════════════════════════════════════

@dataclass
class Supplier:
    """
    External supplier with a capacity per period.

    Several resources may point at the same Supplier instance; the
    supplier is an association, not owned by any resource.

    Attributes:
        name: Supplier name (identity key for persistence)
        description: Free text
        unit_cost: Informative unit price (not used by cost rollups)
        available_quantity: Units available per `period`
        period: Capacity period; unknown values are kept and treated as invalid
    """
    name: str
    description: str = ""
    unit_cost: float = 0.0
    available_quantity: float = 0.0
    period: PeriodLike = PeriodType.DAY

    def __post_init__(self):
        parsed = PeriodType.parse(self.period)
        if parsed is not None:
            self.period = parsed

    @property
    def period_minutes(self) -> int:
        return period_to_minutes(self.period)

    def validate(self) -> Optional[ExplosioError]:
        if self.available_quantity < 0:
            return NegativeQuantityError(
                f"supplier {self.name} has negative available quantity"
            )
        if not is_valid_period(self.period):
            return InvalidPeriodError(
                f"supplier {self.name} has invalid period {period_label(self.period)}"
            )
        return None

    def get_capacity_for_period(self, target_period: PeriodLike) -> float:
        """Available quantity converted to `target_period`; 0 if either period is invalid."""
        source_minutes = self.period_minutes
        target_minutes = period_to_minutes(target_period)
        if source_minutes == 0 or target_minutes == 0:
            return 0.0
        return (self.available_quantity / source_minutes) * target_minutes

    def get_daily_capacity(self) -> float:
        return self.get_capacity_for_period(PeriodType.DAY)


# ════════════════════════════════════════════════════════════════════════════════════════════════════
# RESOURCES
# ════════════════════════════════════════════════════════════════════════════════════════════════════

class Resource(ABC):
    """Common capability of every resource kind."""

    category: ResourceCategory
    quantity: float
    supplier: Optional[Supplier]

    @abstractmethod
    def get_cost(self, duration: int) -> float:
        """Cost of the resource inside an activity lasting `duration` minutes."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        ...

    @abstractmethod
    def cost_value(self) -> float:
        """The resource's own cost field (per hour, per unit or per use)."""

    def validate(self) -> Optional[ExplosioError]:
        kind = _KIND_LABELS[self.category]
        if self.cost_value() < 0:
            return NegativeCostError(f"{kind} {self.display_name} has negative cost")
        if self.quantity < 0:
            return NegativeQuantityError(f"{kind} {self.display_name} has negative quantity")
        if self.supplier is not None:
            err = self.supplier.validate()
            if err is not None:
                return type(err)(f"{kind} {self.display_name}: {err}")
        return None


@dataclass
class HumanResource(Resource):
    """Labour allocated to an activity, paid per hour."""
    role: str
    description: str = ""
    cost_per_h: float = 0.0
    quantity: float = 0.0
    supplier: Optional[Supplier] = None

    category = ResourceCategory.HUMAN

    def get_cost(self, duration: int) -> float:
        return (self.cost_per_h / MINUTES_PER_HOUR) * duration * self.quantity

    @property
    def display_name(self) -> str:
        return self.role

    def cost_value(self) -> float:
        return self.cost_per_h


@dataclass
class MaterialResource(Resource):
    """Consumed material, paid per unit."""
    name: str
    description: str = ""
    unit_cost: float = 0.0
    quantity: float = 0.0
    supplier: Optional[Supplier] = None

    category = ResourceCategory.MATERIAL

    def get_cost(self, duration: int) -> float:
        return self.unit_cost * self.quantity

    @property
    def display_name(self) -> str:
        return self.name

    def cost_value(self) -> float:
        return self.unit_cost


@dataclass
class Asset(Resource):
    """Rented or owned equipment, paid per use."""
    name: str
    description: str = ""
    cost_per_use: float = 0.0
    quantity: float = 0.0
    supplier: Optional[Supplier] = None

    category = ResourceCategory.ASSET

    def get_cost(self, duration: int) -> float:
        return self.cost_per_use * self.quantity

    @property
    def display_name(self) -> str:
        return self.name

    def cost_value(self) -> float:
        return self.cost_per_use
