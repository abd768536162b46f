"""
Structural and resource validation of an activity tree.

Structural pass (pre-order, stops at the first finding):
    - repeated ID (a node reachable twice, i.e. a cycle or a shared node)
    - duration < 0, min_duration < 0, min_duration > duration

Resource pass (whole tree, collects every finding):
    - negative cost, negative quantity, invalid supplier
"""

from __future__ import annotations

import logging
from typing import Optional, Set

from explosio.domain.activity import Activity
from explosio.errors import ExplosioError, InvalidActivityError, ValidationErrors
from explosio.tree import iter_resources

logger = logging.getLogger(__name__)


def validate(root: Optional[Activity]) -> Optional[ExplosioError]:
    """Return the first structural error, the aggregated resource errors, or None."""
    if root is None:
        return InvalidActivityError("root activity is nil")

    err = _validate_structure(root, set())
    if err is not None:
        logger.debug(f"Structural validation failed: {err}")
        return err

    errors = ValidationErrors()
    for activity, resource in iter_resources(root):
        res_err = resource.validate()
        if res_err is not None:
            errors.add(type(res_err)(f"activity {activity.id}: {res_err}"))

    if errors.has_errors():
        return errors
    return None


def _validate_structure(activity: Activity, seen: Set[str]) -> Optional[ExplosioError]:
    if activity.id in seen:
        return InvalidActivityError(f"activity {activity.id}: cycle detected")
    seen.add(activity.id)

    err = activity.validate_basic()
    if err is not None:
        return err

    for sub in activity.sub_activities:
        err = _validate_structure(sub, seen)
        if err is not None:
            return err
    return None
