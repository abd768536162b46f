"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    EXPLOSIO — ACTIVITY MODEL
═══════════════════════════════════════════════════════════════════════════════════════════════════════

An Activity is a node of the project tree.

    parent = composed of its sub-activities

A parent cannot start before ALL of its sub-activities have finished
(AND-join). The tree is strict: one parent per node. Each node owns
its resources and its children; `next` only records the IDs of the
parents the node was attached to, for display and traceability.

Schedule parameters (minutes):
    duration        d_a ≥ 0
    min_duration    0 ≤ m_a ≤ d_a   (floor reachable by crashing)
    crash_cost_step c_a ≥ 0         (cost per minute saved)

CPM fields (es, ef, ls, lf, slack) are written by the CPM engine only
and are meaningful after `compute_cpm` has run on the tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from explosio.domain.resources import (
    Asset,
    HumanResource,
    MaterialResource,
    Resource,
    Supplier,
)
from explosio.errors import ExplosioError, InvalidActivityError


def _checked(resource: Resource) -> Resource:
    """Fail-fast guard used by the fluent helpers."""
    err = resource.validate()
    if err is not None:
        raise err
    return resource


@dataclass(eq=False)
class Activity:
    """
    Project tree node.

    Attributes:
        id: Identifier, unique within a tree
        name: Human-readable name
        description: Free text
        duration: Duration in minutes
        min_duration: Shortest duration reachable by crashing
        crash_cost_step: Extra cost per minute saved by crashing
        humans / materials / assets: Owned resources, in insertion order
        sub_activities: Owned children, in insertion order
        next: IDs of the parents this node was attached to
    """
    id: str
    name: str = ""
    description: str = ""
    duration: int = 0

    # Crashing parameters
    min_duration: int = 0
    crash_cost_step: float = 0.0

    # Allocated resources
    humans: List[HumanResource] = field(default_factory=list)
    materials: List[MaterialResource] = field(default_factory=list)
    assets: List[Asset] = field(default_factory=list)

    # Tree relations
    sub_activities: List["Activity"] = field(default_factory=list)
    next: List[str] = field(default_factory=list)

    # Computed fields (CPM)
    es: int = 0
    ef: int = 0
    ls: int = 0
    lf: int = 0
    slack: int = 0

    def __repr__(self) -> str:
        return (
            f"Activity(id={self.id!r}, name={self.name!r}, duration={self.duration}, "
            f"children={len(self.sub_activities)})"
        )

    @property
    def is_leaf(self) -> bool:
        return not self.sub_activities

    @property
    def is_critical(self) -> bool:
        return self.slack == 0

    @property
    def crashable_minutes(self) -> int:
        return max(0, self.duration - self.min_duration)

    @property
    def parent_id(self) -> Optional[str]:
        """Last parent this node was attached to (diagnostic only)."""
        return self.next[-1] if self.next else None

    def resources(self) -> Iterator[Resource]:
        """Humans, then materials, then assets."""
        yield from self.humans
        yield from self.materials
        yield from self.assets

    def add_sub_activity(self, child: "Activity") -> "Activity":
        """Attach `child` as the last sub-activity and record the back-reference."""
        child.next.append(self.id)
        self.sub_activities.append(child)
        return child

    # ── Fluent construction ──────────────────────────────────────────────────────────────────────

    def with_human(
        self,
        role: str,
        description: str,
        cost_per_h: float,
        quantity: float,
        supplier: Optional[Supplier] = None,
    ) -> "Activity":
        self.humans.append(_checked(HumanResource(role, description, cost_per_h, quantity, supplier)))
        return self

    def with_material(
        self,
        name: str,
        description: str,
        unit_cost: float,
        quantity: float,
        supplier: Optional[Supplier] = None,
    ) -> "Activity":
        self.materials.append(_checked(MaterialResource(name, description, unit_cost, quantity, supplier)))
        return self

    def with_asset(
        self,
        name: str,
        description: str,
        cost_per_use: float,
        quantity: float,
        supplier: Optional[Supplier] = None,
    ) -> "Activity":
        self.assets.append(_checked(Asset(name, description, cost_per_use, quantity, supplier)))
        return self

    def can_crash(self, min_duration: int, crash_cost_step: float) -> "Activity":
        self.min_duration = min_duration
        self.crash_cost_step = crash_cost_step
        return self

    def depends_on(self, *subs: "Activity") -> "Activity":
        """Attach `subs` as sub-activities that must finish before this one starts."""
        for sub in subs:
            self.add_sub_activity(sub)
        return self

    # ── Checks and export ────────────────────────────────────────────────────────────────────────

    def validate_basic(self) -> Optional[ExplosioError]:
        """Check durations of this node only."""
        if self.duration < 0:
            return InvalidActivityError(f"activity {self.id} has negative duration")
        if self.min_duration < 0:
            return InvalidActivityError(f"activity {self.id} has negative min duration")
        if self.min_duration > self.duration:
            return InvalidActivityError(
                f"activity {self.id} has min duration ({self.min_duration}) "
                f"greater than duration ({self.duration})"
            )
        return None

    def cpm_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'duration': self.duration,
            'es': self.es,
            'ef': self.ef,
            'ls': self.ls,
            'lf': self.lf,
            'slack': self.slack,
            'is_critical': self.is_critical,
        }
