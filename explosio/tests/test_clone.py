"""
Tests for the deep, alias-free tree copy.
"""
import pytest

from explosio.clone import clone_activity
from explosio.engine import compute_cpm, get_total_cost


def snapshot(activity):
    """Plain-data picture of a tree, for before/after comparisons."""
    return {
        'id': activity.id,
        'name': activity.name,
        'description': activity.description,
        'duration': activity.duration,
        'min_duration': activity.min_duration,
        'crash_cost_step': activity.crash_cost_step,
        'next': list(activity.next),
        'cpm': (activity.es, activity.ef, activity.ls, activity.lf, activity.slack),
        'resources': [
            (type(r).__name__, r.display_name, r.cost_value(), r.quantity,
             None if r.supplier is None else (r.supplier.name, r.supplier.available_quantity, r.supplier.period))
            for r in activity.resources()
        ],
        'children': [snapshot(sub) for sub in activity.sub_activities],
    }


def mutate(activity):
    activity.name += "!"
    activity.description += "!"
    activity.duration += 10
    activity.min_duration += 1
    activity.crash_cost_step += 1.0
    activity.next.append("X")
    activity.es = activity.ef = activity.ls = activity.lf = activity.slack = -1
    for h in activity.humans:
        h.cost_per_h += 1
        h.quantity += 1
    for m in activity.materials:
        m.unit_cost += 1
        m.quantity += 1
        if m.supplier is not None:
            m.supplier.available_quantity += 1
            m.supplier.name += "!"
    for a in activity.assets:
        a.cost_per_use += 1
    if activity.humans:
        activity.humans.append(activity.humans[0])


class TestCloneActivity:

    def test_none(self):
        assert clone_activity(None) is None

    def test_equal_content(self, espresso_project):
        root = espresso_project.root
        compute_cpm(root)
        assert snapshot(clone_activity(root)) == snapshot(root)

    def test_distinct_objects(self, espresso_project):
        root = espresso_project.root
        cl = clone_activity(root)
        assert cl is not root
        assert cl.next is not root.next
        assert cl.sub_activities[0] is not root.sub_activities[0]
        assert cl.sub_activities[0].materials[0] is not root.sub_activities[0].materials[0]
        assert cl.sub_activities[0].materials[0].supplier is not root.sub_activities[0].materials[0].supplier

    @pytest.mark.parametrize("path", [(), (0,), (1,)])
    def test_mutating_clone_leaves_source(self, espresso_project, path):
        root = espresso_project.root
        compute_cpm(root)
        before = snapshot(root)

        cl = clone_activity(root)
        node = cl
        for i in path:
            node = node.sub_activities[i]
        mutate(node)
        node.sub_activities.clear()

        assert snapshot(root) == before

    def test_mutating_source_leaves_clone(self, espresso_project):
        root = espresso_project.root
        cl = clone_activity(root)
        before = snapshot(cl)
        mutate(root.sub_activities[0])
        assert snapshot(cl) == before

    def test_shared_supplier_stays_shared(self, espresso_project, roaster):
        root = espresso_project.root
        root.with_material("Beans", "", 0.01, 3, roaster)
        cl = clone_activity(root)

        s1 = cl.materials[0].supplier
        s2 = cl.sub_activities[0].materials[0].supplier
        assert s1 is s2
        assert s1 is not roaster

    def test_cost_preserved(self, espresso_project):
        root = espresso_project.root
        assert get_total_cost(clone_activity(root)) == pytest.approx(get_total_cost(root))
