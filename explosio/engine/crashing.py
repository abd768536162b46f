"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    CRASHING OPTIMIZER — Time/Cost Trade-off
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Crashing buys time: activity a can be shortened from d_a down to m_a at
c_a per minute saved.

Upper bound (whole tree, slack ignored):
    T_max = Σ_a (d_a - m_a)          K_max = Σ_a (d_a - m_a) · c_a

SNAPSHOT strategy (requires compute_cpm beforehand):
    K = {a : Slack_a = 0 ∧ d_a > m_a}, sorted by c_a ascending
    budget B:  take whole activities while Σ cost ≤ B
    target T:  take whole activities until Σ time ≥ T
    The critical set is read once; with several concurrently critical
    branches the selected time is not necessarily a real reduction of
    the project duration.

INCREMENTAL strategy (works on a clone, no precondition):
    repeat:
        cut* = cheapest set of activities whose 1-minute reduction
               shortens the project by 1 minute
               cut(a) = min( c_a                      if d_a > m_a,
                             Σ_{c critical child} cut(c) )
        apply cut*, recompute CPM
    until budget exhausted / target reached / no cut left
    time_saved is the real reduction of the project duration.
═══════════════════════════════════════════════════════════════════════════════════════════════════════
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from explosio.clone import clone_activity
from explosio.config import CrashStrategy, Settings
from explosio.domain.activity import Activity
from explosio.engine.cpm import compute_cpm
from explosio.tree import iter_activities

logger = logging.getLogger(__name__)

_COST_TOLERANCE = 1e-9


@dataclass
class CrashCandidate:
    """A critical activity that can still be shortened."""
    activity: Activity
    time_save: int
    cost: float

    @property
    def crash_cost_step(self) -> float:
        return self.activity.crash_cost_step


@dataclass
class CrashPlan:
    """
    Outcome of a crashing request.

    Attributes:
        time_saved: Minutes saved
        extra_cost: Extra cost spent
        achieved: Whether the requested target was reached (always True for budget requests)
        crashed: Minutes crashed per activity ID
        strategy: Strategy that produced the plan
    """
    time_saved: int = 0
    extra_cost: float = 0.0
    achieved: bool = True
    crashed: Dict[str, int] = field(default_factory=dict)
    strategy: CrashStrategy = CrashStrategy.SNAPSHOT

    def to_dict(self) -> Dict[str, Any]:
        return {
            'time_saved': self.time_saved,
            'extra_cost': round(self.extra_cost, 2),
            'achieved': self.achieved,
            'crashed': dict(self.crashed),
            'strategy': self.strategy.value,
        }


# ════════════════════════════════════════════════════════════════════════════════════════════════════
# POTENTIAL
# ════════════════════════════════════════════════════════════════════════════════════════════════════

def get_max_crash_potential(activity: Optional[Activity]) -> Tuple[int, float]:
    """(time, cost) of crashing every activity of the tree to its floor."""
    if activity is None:
        return 0, 0.0
    time_saved = activity.duration - activity.min_duration
    extra_cost = time_saved * activity.crash_cost_step
    for sub in activity.sub_activities:
        sub_time, sub_cost = get_max_crash_potential(sub)
        time_saved += sub_time
        extra_cost += sub_cost
    return time_saved, extra_cost


def collect_crashable_critical(root: Optional[Activity]) -> List[CrashCandidate]:
    """Zero-slack activities above their floor, cheapest cost per minute first."""
    candidates = []
    for a in iter_activities(root):
        if a.slack == 0 and a.duration > a.min_duration:
            time_save = a.duration - a.min_duration
            candidates.append(CrashCandidate(activity=a, time_save=time_save, cost=time_save * a.crash_cost_step))
    candidates.sort(key=lambda c: c.crash_cost_step)
    return candidates


# ════════════════════════════════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ════════════════════════════════════════════════════════════════════════════════════════════════════

def crash_with_budget(
    root: Optional[Activity],
    max_extra_cost: float,
    strategy: Optional[CrashStrategy] = None,
) -> CrashPlan:
    """Minutes that can be saved spending at most `max_extra_cost`."""
    strategy = strategy or Settings.get_crash_strategy()
    if strategy == CrashStrategy.INCREMENTAL:
        plan = _crash_incremental(root, budget=max_extra_cost)
    else:
        plan = _snapshot_budget(root, max_extra_cost)
    logger.debug(
        f"crash_with_budget({max_extra_cost}) [{strategy.value}]: "
        f"saved {plan.time_saved} min for {plan.extra_cost:.2f}"
    )
    return plan


def crash_to_save_time(
    root: Optional[Activity],
    target_minutes: int,
    strategy: Optional[CrashStrategy] = None,
) -> CrashPlan:
    """Extra cost needed to save at least `target_minutes`."""
    strategy = strategy or Settings.get_crash_strategy()
    if strategy == CrashStrategy.INCREMENTAL:
        plan = _crash_incremental(root, target=target_minutes)
    else:
        plan = _snapshot_target(root, target_minutes)
    if not plan.achieved:
        logger.info(
            f"crash_to_save_time: target {target_minutes} min not reachable "
            f"({plan.time_saved} min available) [{strategy.value}]"
        )
    return plan


# ════════════════════════════════════════════════════════════════════════════════════════════════════
# SNAPSHOT STRATEGY
# ════════════════════════════════════════════════════════════════════════════════════════════════════

def _snapshot_budget(root: Optional[Activity], max_extra_cost: float) -> CrashPlan:
    plan = CrashPlan(strategy=CrashStrategy.SNAPSHOT)
    for candidate in collect_crashable_critical(root):
        if plan.extra_cost + candidate.cost <= max_extra_cost:
            plan.time_saved += candidate.time_save
            plan.extra_cost += candidate.cost
            plan.crashed[candidate.activity.id] = candidate.time_save
    return plan


def _snapshot_target(root: Optional[Activity], target_minutes: int) -> CrashPlan:
    plan = CrashPlan(strategy=CrashStrategy.SNAPSHOT)
    for candidate in collect_crashable_critical(root):
        if plan.time_saved >= target_minutes:
            break
        plan.time_saved += candidate.time_save
        plan.extra_cost += candidate.cost
        plan.crashed[candidate.activity.id] = candidate.time_save
    plan.achieved = plan.time_saved >= target_minutes
    return plan


# ════════════════════════════════════════════════════════════════════════════════════════════════════
# INCREMENTAL STRATEGY
# ════════════════════════════════════════════════════════════════════════════════════════════════════

def _cheapest_cut(activity: Activity) -> Tuple[float, List[Activity]]:
    """
    Cheapest set of activities whose 1-minute reduction shortens the
    subtree rooted at `activity` by one minute. (inf, []) if none exists.
    """
    best_cost, best_cut = math.inf, []
    if activity.duration > activity.min_duration:
        best_cost, best_cut = activity.crash_cost_step, [activity]

    if not activity.sub_activities:
        return best_cost, best_cut

    longest = max(sub.ef for sub in activity.sub_activities)
    children_cost, children_cut = 0.0, []
    for sub in activity.sub_activities:
        if sub.ef != longest:
            continue
        cost, cut = _cheapest_cut(sub)
        if not cut:
            return best_cost, best_cut
        children_cost += cost
        children_cut.extend(cut)

    if children_cost < best_cost:
        return children_cost, children_cut
    return best_cost, best_cut


def _crash_incremental(
    root: Optional[Activity],
    budget: Optional[float] = None,
    target: Optional[int] = None,
) -> CrashPlan:
    plan = CrashPlan(strategy=CrashStrategy.INCREMENTAL)
    if root is None:
        plan.achieved = target is None or target <= 0
        return plan

    work = clone_activity(root)
    compute_cpm(work)
    start_duration = work.ef

    while True:
        if target is not None and start_duration - work.ef >= target:
            break
        cost, cut = _cheapest_cut(work)
        if not cut:
            break
        if budget is not None and plan.extra_cost + cost > budget + _COST_TOLERANCE:
            break
        for a in cut:
            a.duration -= 1
            plan.crashed[a.id] = plan.crashed.get(a.id, 0) + 1
        plan.extra_cost += cost
        compute_cpm(work)

    plan.time_saved = start_duration - work.ef
    if target is not None:
        plan.achieved = plan.time_saved >= target
    return plan
