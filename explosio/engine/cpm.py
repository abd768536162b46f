"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    CPM ENGINE — Critical Path Method on the activity tree
═══════════════════════════════════════════════════════════════════════════════════════════════════════

The tree is an AND-join schedule: a parent starts when all of its
sub-activities have finished.

Forward pass (post-order):
    leaf:      ES = 0
    interior:  ES = max_{c ∈ children} EF_c
               EF = ES + d

Backward pass (pre-order, LF of a child = LS of its parent):
    root:      LF = EF_root
               LS = LF - d
               Slack = LS - ES

Consequences:
    Slack_root = 0 for every tree
    critical path = {a : Slack_a = 0}, one or more nodes per level (ties kept)

Fields are written directly onto the nodes; readers get whatever the
last `compute_cpm` wrote.
═══════════════════════════════════════════════════════════════════════════════════════════════════════
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pandas as pd

from explosio.domain.activity import Activity
from explosio.tree import count_activities, iter_activities

logger = logging.getLogger(__name__)


SCHEDULE_COLUMNS = ['id', 'name', 'duration', 'es', 'ef', 'ls', 'lf', 'slack', 'is_critical']


@dataclass
class CPMSummary:
    """Total duration, critical activities and node count of a computed tree."""
    total_duration: int = 0
    critical_path: List[Activity] = field(default_factory=list)
    activity_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_duration': self.total_duration,
            'critical_path': [a.id for a in self.critical_path],
            'activity_count': self.activity_count,
        }


def compute_cpm(root: Optional[Activity]) -> None:
    """Run the forward and backward passes on the tree rooted at `root`."""
    if root is None:
        return
    _forward_pass(root)
    _backward_pass(root, root.ef)
    logger.debug(f"CPM computed for {root.id}: total duration {root.ef} min")


def _forward_pass(activity: Activity) -> int:
    if not activity.sub_activities:
        activity.es = 0
        activity.ef = activity.duration
        return activity.ef

    max_ef = 0
    for sub in activity.sub_activities:
        max_ef = max(max_ef, _forward_pass(sub))

    activity.es = max_ef
    activity.ef = activity.es + activity.duration
    return activity.ef


def _backward_pass(activity: Activity, late_finish: int) -> None:
    activity.lf = late_finish
    activity.ls = activity.lf - activity.duration
    activity.slack = activity.ls - activity.es
    for sub in activity.sub_activities:
        _backward_pass(sub, activity.ls)


def get_total_duration(root: Optional[Activity]) -> int:
    if root is None:
        return 0
    return root.ef


def get_critical_path(root: Optional[Activity]) -> List[Activity]:
    """Every node with zero slack, in pre-order."""
    return [a for a in iter_activities(root) if a.slack == 0]


def get_cpm_summary(root: Optional[Activity]) -> CPMSummary:
    if root is None:
        return CPMSummary()
    return CPMSummary(
        total_duration=root.ef,
        critical_path=get_critical_path(root),
        activity_count=count_activities(root),
    )


def activities_by_es(root: Optional[Activity]) -> List[Activity]:
    """All nodes ordered by (ES, EF, ID)."""
    return sorted(iter_activities(root), key=lambda a: (a.es, a.ef, a.id))


def schedule_dataframe(root: Optional[Activity]) -> pd.DataFrame:
    """ES-ordered schedule as a DataFrame (one row per activity)."""
    rows = [a.cpm_dict() for a in activities_by_es(root)]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
