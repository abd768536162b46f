"""
Fluent construction of activity trees.

    project = Project()
    root = project.start("Espresso", "Serve one espresso", 2)
    grind = project.node("Grind", "Grind beans", 1).with_material("Coffee", "", 0.02, 7)
    root.depends_on(grind)

IDs are generated sequentially per project (ACT-001, ACT-002, ...).
A project wrapped around an existing tree (e.g. a loaded one) continues
after the highest ACT-NNN already present.
The resource helpers on Activity (`with_human`, `with_material`,
`with_asset`) are fail-fast: an invalid resource raises its validation
error instead of being attached.
"""

from __future__ import annotations

import itertools
import logging
import re
import threading
from typing import List, Optional

from explosio.domain.activity import Activity
from explosio.tree import iter_activities

logger = logging.getLogger(__name__)


class Project:
    """Owns the tree root and the ID counter used while building it."""

    ID_PREFIX = "ACT"

    def __init__(self, name: str = "", root: Optional[Activity] = None):
        self.name = name
        self.root = root
        self._counter = itertools.count(self._last_generated_id(root) + 1)
        self._lock = threading.Lock()

    @classmethod
    def _last_generated_id(cls, root: Optional[Activity]) -> int:
        """Highest ACT-NNN suffix already in `root`, 0 if none."""
        pattern = re.compile(rf"{cls.ID_PREFIX}-(\d+)")
        last = 0
        for activity in iter_activities(root):
            match = pattern.fullmatch(activity.id)
            if match:
                last = max(last, int(match.group(1)))
        return last

    def _gen_id(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self.ID_PREFIX}-{n:03d}"

    def start(self, name: str, description: str, duration: int) -> Activity:
        """Create the root node (top-down construction)."""
        self.root = Activity(
            id=self._gen_id(),
            name=name,
            description=description,
            duration=duration,
            min_duration=duration,
        )
        logger.debug(f"Project root {self.root.id} '{name}' created")
        return self.root

    def node(self, name: str, description: str, duration: int) -> Activity:
        """Create a detached node; attach it with `depends_on`."""
        return Activity(
            id=self._gen_id(),
            name=name,
            description=description,
            duration=duration,
            min_duration=duration,
        )


def build_activity(
    activity_id: str,
    name: str,
    duration: int,
    subs: Optional[List[Activity]] = None,
) -> Activity:
    """Minimal node with min_duration == duration, children attached in order."""
    activity = Activity(
        id=activity_id,
        name=name,
        description=name,
        duration=duration,
        min_duration=duration,
    )
    for sub in subs or []:
        activity.add_sub_activity(sub)
    return activity
