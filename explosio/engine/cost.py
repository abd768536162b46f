"""
Cost rollups.

    C(a) = Σ_{r ∈ R(a)} cost_r(d_a) + Σ_{c ∈ children(a)} C(c)

Pure functions of the tree; no CPM precondition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from explosio.domain.activity import Activity
from explosio.domain.resources import ResourceCategory


@dataclass
class CostBreakdown:
    """Total cost split by resource category."""
    human: float = 0.0
    material: float = 0.0
    asset: float = 0.0

    @property
    def total(self) -> float:
        return self.human + self.material + self.asset

    def __add__(self, other: "CostBreakdown") -> "CostBreakdown":
        return CostBreakdown(
            human=self.human + other.human,
            material=self.material + other.material,
            asset=self.asset + other.asset,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'human': round(self.human, 2),
            'material': round(self.material, 2),
            'asset': round(self.asset, 2),
            'total': round(self.total, 2),
        }


def get_direct_cost(activity: Optional[Activity]) -> float:
    """Cost of the resources allocated to `activity` alone."""
    if activity is None:
        return 0.0
    return sum(r.get_cost(activity.duration) for r in activity.resources())


def get_total_cost(activity: Optional[Activity]) -> float:
    if activity is None:
        return 0.0
    cost = get_direct_cost(activity)
    for sub in activity.sub_activities:
        cost += get_total_cost(sub)
    return cost


def get_cost_breakdown(activity: Optional[Activity]) -> CostBreakdown:
    if activity is None:
        return CostBreakdown()

    totals = {category: 0.0 for category in ResourceCategory}
    for resource in activity.resources():
        totals[resource.category] += resource.get_cost(activity.duration)

    breakdown = CostBreakdown(
        human=totals[ResourceCategory.HUMAN],
        material=totals[ResourceCategory.MATERIAL],
        asset=totals[ResourceCategory.ASSET],
    )
    for sub in activity.sub_activities:
        breakdown = breakdown + get_cost_breakdown(sub)
    return breakdown
