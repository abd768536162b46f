"""
Tests for the CPM engine: forward/backward pass, critical path, listings.
"""
import pytest

from explosio.domain import build_activity
from explosio.engine import (
    activities_by_es,
    compute_cpm,
    get_cpm_summary,
    get_critical_path,
    get_total_duration,
    schedule_dataframe,
)
from explosio.engine.cpm import SCHEDULE_COLUMNS


class TestForwardBackwardPass:
    """Timing fields written by compute_cpm."""

    def test_single_leaf(self):
        leaf = build_activity("L", "Leaf", 7)
        compute_cpm(leaf)
        assert (leaf.es, leaf.ef, leaf.ls, leaf.lf, leaf.slack) == (0, 7, 0, 7, 0)

    def test_root_waits_for_longest_child(self, two_leaf_tree):
        compute_cpm(two_leaf_tree)
        assert two_leaf_tree.es == 4
        assert two_leaf_tree.ef == 5

    def test_child_slack(self, two_leaf_tree):
        compute_cpm(two_leaf_tree)
        a, b = two_leaf_tree.sub_activities
        assert a.slack == 2
        assert b.slack == 0
        assert a.lf == two_leaf_tree.ls == 4

    def test_root_slack_is_zero(self, espresso_project):
        root = espresso_project.root
        compute_cpm(root)
        assert root.slack == 0

    def test_es_le_ef_le_lf(self, espresso_project):
        compute_cpm(espresso_project.root)
        for a in activities_by_es(espresso_project.root):
            assert a.es <= a.ef
            assert a.ef <= a.lf
            assert a.slack >= 0

    def test_nested_tree(self):
        # C (3) ← B (2) ← ROOT (1), D (10) ← ROOT
        c = build_activity("C", "C", 3)
        b = build_activity("B", "B", 2, [c])
        d = build_activity("D", "D", 10)
        root = build_activity("ROOT", "Root", 1, [b, d])
        compute_cpm(root)

        assert b.es == 3 and b.ef == 5
        assert root.ef == 11
        assert b.slack == 5
        assert c.slack == 5
        assert d.slack == 0

    def test_recompute_after_change(self, two_leaf_tree):
        compute_cpm(two_leaf_tree)
        two_leaf_tree.sub_activities[1].duration = 1
        compute_cpm(two_leaf_tree)
        assert get_total_duration(two_leaf_tree) == 3

    def test_none_root_is_noop(self):
        compute_cpm(None)
        assert get_total_duration(None) == 0


class TestCriticalPath:

    def test_ties_kept(self):
        a = build_activity("A", "A", 4)
        b = build_activity("B", "B", 4)
        root = build_activity("ROOT", "Root", 1, [a, b])
        compute_cpm(root)
        assert [x.id for x in get_critical_path(root)] == ["ROOT", "A", "B"]

    def test_preorder(self, espresso_project):
        root = espresso_project.root
        compute_cpm(root)
        ids = [a.name for a in get_critical_path(root)]
        assert ids == ["Serve", "Heat"]

    def test_none_root(self):
        assert get_critical_path(None) == []


class TestSummaryAndListings:

    def test_summary(self, espresso_project):
        root = espresso_project.root
        compute_cpm(root)
        summary = get_cpm_summary(root)
        assert summary.total_duration == 5
        assert summary.activity_count == 3
        assert len(summary.critical_path) == 2
        assert summary.to_dict()['critical_path'] == [root.id, root.sub_activities[1].id]

    def test_summary_none(self):
        summary = get_cpm_summary(None)
        assert summary.total_duration == 0
        assert summary.critical_path == []

    def test_activities_by_es_order(self, two_leaf_tree):
        compute_cpm(two_leaf_tree)
        assert [a.id for a in activities_by_es(two_leaf_tree)] == ["A", "B", "ROOT"]

    def test_schedule_dataframe(self, two_leaf_tree):
        compute_cpm(two_leaf_tree)
        df = schedule_dataframe(two_leaf_tree)
        assert list(df.columns) == SCHEDULE_COLUMNS
        assert list(df['id']) == ["A", "B", "ROOT"]
        assert df.loc[df['id'] == "A", 'slack'].iloc[0] == 2
        assert bool(df.loc[df['id'] == "B", 'is_critical'].iloc[0])

    def test_schedule_dataframe_empty(self):
        df = schedule_dataframe(None)
        assert df.empty
        assert list(df.columns) == SCHEDULE_COLUMNS
