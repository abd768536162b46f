"""
Tests for the fluent project builder.
"""
import threading

import pytest

from explosio.domain import Activity, PeriodType, Project, Supplier
from explosio.errors import InvalidPeriodError, NegativeCostError, NegativeQuantityError


class TestProjectBuilder:

    def test_sequential_ids(self):
        project = Project("P")
        root = project.start("Root", "", 5)
        a = project.node("A", "", 1)
        b = project.node("B", "", 1)
        assert [root.id, a.id, b.id] == ["ACT-001", "ACT-002", "ACT-003"]
        assert project.root is root

    def test_ids_per_project(self):
        assert Project().node("x", "", 1).id == Project().node("y", "", 1).id == "ACT-001"

    def test_ids_unique_across_threads(self):
        project = Project()
        ids = []
        lock = threading.Lock()

        def make():
            for _ in range(50):
                activity_id = project.node("n", "", 1).id
                with lock:
                    ids.append(activity_id)

        threads = [threading.Thread(target=make) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(set(ids)) == 400

    def test_numbering_continues_after_existing_ids(self):
        root = Activity(id="ACT-007", sub_activities=[Activity(id="ACT-012"), Activity(id="custom-99")])
        assert Project(root=root).node("n", "", 1).id == "ACT-013"

    def test_not_crashable_by_default(self):
        node = Project().node("A", "", 12)
        assert node.min_duration == 12
        assert node.crashable_minutes == 0

    def test_fluent_chain(self, roaster):
        project = Project()
        root = project.start("Root", "", 5)
        leaf = (
            project.node("Leaf", "", 10)
            .with_human("Welder", "", 30.0, 2)
            .with_material("Steel", "", 4.0, 10, roaster)
            .with_asset("Crane", "", 100.0, 1)
            .can_crash(6, 12.5)
        )
        root.depends_on(leaf)

        assert root.sub_activities == [leaf]
        assert leaf.next == [root.id]
        assert leaf.parent_id == root.id
        assert leaf.materials[0].supplier is roaster
        assert (leaf.min_duration, leaf.crash_cost_step, leaf.crashable_minutes) == (6, 12.5, 4)
        assert [r.display_name for r in leaf.resources()] == ["Welder", "Steel", "Crane"]


class TestFailFast:

    def test_negative_cost_raises(self):
        node = Project().node("A", "", 1)
        with pytest.raises(NegativeCostError):
            node.with_human("Welder", "", -1.0, 1)
        assert node.humans == []

    def test_negative_quantity_raises(self):
        with pytest.raises(NegativeQuantityError):
            Project().node("A", "", 1).with_asset("Crane", "", 1.0, -1)

    def test_bad_supplier_raises(self):
        with pytest.raises(InvalidPeriodError):
            Project().node("A", "", 1).with_material("Steel", "", 1.0, 1, Supplier("Forge", period="eon"))

    def test_supplier_negative_capacity_raises(self):
        supplier = Supplier("Forge", available_quantity=-5, period=PeriodType.DAY)
        with pytest.raises(NegativeQuantityError):
            Project().node("A", "", 1).with_material("Steel", "", 1.0, 1, supplier)


class TestActivity:

    def test_leaf_and_critical(self):
        a = Activity(id="A", duration=3)
        assert a.is_leaf
        assert a.is_critical
        assert a.parent_id is None

    def test_repr(self):
        assert repr(Activity(id="A", name="Cut", duration=3)) == "Activity(id='A', name='Cut', duration=3, children=0)"

    def test_identity_equality(self):
        assert Activity(id="A") != Activity(id="A")
