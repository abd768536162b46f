"""
Tree primitives: pre-order traversal, node count and resource iteration.

Every traversal is linear in the number of nodes and tolerates a None
root.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Tuple

from explosio.domain.activity import Activity
from explosio.domain.resources import Resource


def walk(root: Optional[Activity], visit: Callable[[Activity], None]) -> None:
    """Pre-order: root first, then children left to right."""
    if root is None:
        return
    visit(root)
    for sub in root.sub_activities:
        walk(sub, visit)


def iter_activities(root: Optional[Activity]) -> Iterator[Activity]:
    """Generator form of `walk`, same order."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.sub_activities))


def count_activities(root: Optional[Activity]) -> int:
    if root is None:
        return 0
    return 1 + sum(count_activities(sub) for sub in root.sub_activities)


def for_each_resource(activity: Optional[Activity], visit: Callable[[Resource], None]) -> None:
    """Humans, then materials, then assets of a single activity."""
    if activity is None:
        return
    for resource in activity.resources():
        visit(resource)


def walk_resources(root: Optional[Activity], visit: Callable[[Activity, Resource], None]) -> None:
    """Call `visit(activity, resource)` for every resource of the tree, pre-order."""
    walk(root, lambda a: for_each_resource(a, lambda r: visit(a, r)))


def iter_resources(root: Optional[Activity]) -> Iterator[Tuple[Activity, Resource]]:
    for activity in iter_activities(root):
        for resource in activity.resources():
            yield activity, resource


def resource_display_name(resource: Resource) -> str:
    """Role for humans, name for materials and assets."""
    return resource.display_name
