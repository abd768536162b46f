"""
Shared fixtures for the explosio tests.
"""
import pytest

from explosio.config import Settings
from explosio.domain import Activity, Project, Supplier, build_activity
from explosio.domain.periods import PeriodType


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test starts from default settings, unaffected by the caller's environment."""
    for var in ("EXPLOSIO_CRASH_STRATEGY", "EXPLOSIO_LOG_LEVEL", "EXPLOSIO_DEFAULT_PERIOD"):
        monkeypatch.delenv(var, raising=False)
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def two_leaf_tree() -> Activity:
    """
    ROOT (1)
      ├── A (2)
      └── B (4)
    """
    a = build_activity("A", "A", 2)
    b = build_activity("B", "B", 4)
    return build_activity("ROOT", "Root", 1, [a, b])


@pytest.fixture
def crashable_tree() -> Activity:
    """
    ROOT (5, not crashable)
      ├── A (10 → 6, 10/min)
      └── B (8 → 5, 3/min)
    """
    a = build_activity("A", "A", 10)
    a.can_crash(6, 10.0)
    b = build_activity("B", "B", 8)
    b.can_crash(5, 3.0)
    return build_activity("ROOT", "Root", 5, [a, b])


@pytest.fixture
def roaster() -> Supplier:
    return Supplier("Roaster", "Green coffee roaster", unit_cost=0.02, available_quantity=1000, period=PeriodType.DAY)


@pytest.fixture
def espresso_project(roaster) -> Project:
    """
    Serve (2 min, barista 12/h)
      ├── Grind (1 min, 7 g coffee @ 0.02 from Roaster)
      └── Heat  (3 min, machine 0.5/use)
    """
    project = Project("Espresso")
    root = project.start("Serve", "Serve one espresso", 2)
    root.with_human("Barista", "Pulls the shot", 12.0, 1)
    grind = project.node("Grind", "Grind beans", 1).with_material("Coffee", "Arabica", 0.02, 7, roaster)
    heat = project.node("Heat", "Heat machine", 3).with_asset("Machine", "Espresso machine", 0.5, 1)
    root.depends_on(grind, heat)
    return project
