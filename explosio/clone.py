"""
Deep, alias-free copy of an activity tree.

Activities, resource lists, resources, suppliers and `next` lists are
all copied, so no mutation of the clone at any depth is visible on the
source tree. Suppliers shared by several resources of the source stay
shared inside the clone (one copy per source supplier and clone call).
"""

from __future__ import annotations

import copy
from typing import Dict, Optional, TypeVar

from explosio.domain.activity import Activity
from explosio.domain.resources import Resource, Supplier

R = TypeVar("R", bound=Resource)


def clone_activity(root: Optional[Activity]) -> Optional[Activity]:
    """Return a deep copy of the tree rooted at `root` (None for None)."""
    if root is None:
        return None
    return _clone_rec(root, {})


def _clone_supplier(supplier: Optional[Supplier], suppliers: Dict[int, Supplier]) -> Optional[Supplier]:
    if supplier is None:
        return None
    key = id(supplier)
    if key not in suppliers:
        suppliers[key] = copy.copy(supplier)
    return suppliers[key]


def _clone_resource(resource: R, suppliers: Dict[int, Supplier]) -> R:
    cl = copy.copy(resource)
    cl.supplier = _clone_supplier(resource.supplier, suppliers)
    return cl


def _clone_rec(activity: Activity, suppliers: Dict[int, Supplier]) -> Activity:
    return Activity(
        id=activity.id,
        name=activity.name,
        description=activity.description,
        duration=activity.duration,
        min_duration=activity.min_duration,
        crash_cost_step=activity.crash_cost_step,
        humans=[_clone_resource(h, suppliers) for h in activity.humans],
        materials=[_clone_resource(m, suppliers) for m in activity.materials],
        assets=[_clone_resource(a, suppliers) for a in activity.assets],
        sub_activities=[_clone_rec(sub, suppliers) for sub in activity.sub_activities],
        next=list(activity.next),
        es=activity.es,
        ef=activity.ef,
        ls=activity.ls,
        lf=activity.lf,
        slack=activity.slack,
    )
