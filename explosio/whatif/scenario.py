"""
What-if scenarios: named overrides applied to an isolated copy of a tree.

Overrides are applied by activity ID, in a fixed order:
    duration → min_duration → crash_cost_step
    → human cost factor (cost_per_h) → material factor (unit_cost) → asset factor (cost_per_use)

IDs not present in the tree are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set

from explosio.clone import clone_activity
from explosio.domain.activity import Activity
from explosio.tree import iter_activities

logger = logging.getLogger(__name__)


@dataclass
class ActivityOverride:
    """
    Optional per-activity overrides. A None field is left untouched; a
    factor of 1.0 leaves the corresponding costs untouched.
    """
    duration: Optional[int] = None
    min_duration: Optional[int] = None
    crash_cost_step: Optional[float] = None
    human_cost_factor: float = 1.0
    material_cost_factor: float = 1.0
    asset_cost_factor: float = 1.0

    def apply(self, activity: Activity) -> None:
        if self.duration is not None:
            activity.duration = self.duration
        if self.min_duration is not None:
            activity.min_duration = self.min_duration
        if self.crash_cost_step is not None:
            activity.crash_cost_step = self.crash_cost_step
        if self.human_cost_factor != 1.0:
            for h in activity.humans:
                h.cost_per_h *= self.human_cost_factor
        if self.material_cost_factor != 1.0:
            for m in activity.materials:
                m.unit_cost *= self.material_cost_factor
        if self.asset_cost_factor != 1.0:
            for a in activity.assets:
                a.cost_per_use *= self.asset_cost_factor

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ActivityOverride':
        return cls(
            duration=data.get('duration'),
            min_duration=data.get('min_duration'),
            crash_cost_step=data.get('crash_cost_step'),
            human_cost_factor=data.get('human_cost_factor', 1.0),
            material_cost_factor=data.get('material_cost_factor', 1.0),
            asset_cost_factor=data.get('asset_cost_factor', 1.0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'duration': self.duration,
            'min_duration': self.min_duration,
            'crash_cost_step': self.crash_cost_step,
            'human_cost_factor': self.human_cost_factor,
            'material_cost_factor': self.material_cost_factor,
            'asset_cost_factor': self.asset_cost_factor,
        }


@dataclass
class Scenario:
    """A named set of overrides evaluated at a sell price."""
    name: str
    sell_price: float = 0.0
    overrides: Dict[str, ActivityOverride] = field(default_factory=dict)
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Scenario':
        return cls(
            name=data['name'],
            sell_price=data.get('sell_price', 0.0),
            overrides={
                activity_id: ActivityOverride.from_dict(o)
                for activity_id, o in (data.get('overrides') or {}).items()
            },
            description=data.get('description', ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'description': self.description,
            'sell_price': self.sell_price,
            'overrides': {k: o.to_dict() for k, o in self.overrides.items()},
        }


def apply_scenario(root: Optional[Activity], scenario: Scenario) -> Optional[Activity]:
    """Clone `root` and apply the scenario's overrides to the clone."""
    if root is None:
        return None

    cl = clone_activity(root)
    if not scenario.overrides:
        return cl

    applied: Set[str] = set()
    for activity in iter_activities(cl):
        override = scenario.overrides.get(activity.id)
        if override is not None:
            override.apply(activity)
            applied.add(activity.id)

    missed = set(scenario.overrides) - applied
    if missed:
        logger.debug(f"Scenario '{scenario.name}': overrides for unknown activities ignored: {sorted(missed)}")
    return cl
