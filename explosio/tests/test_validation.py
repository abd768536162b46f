"""
Tests for structural and resource validation.
"""
import pytest

from explosio.domain import (
    Activity,
    HumanResource,
    MaterialResource,
    PeriodType,
    Supplier,
    build_activity,
)
from explosio.engine import validate
from explosio.errors import (
    InvalidActivityError,
    InvalidPeriodError,
    NegativeCostError,
    NegativeQuantityError,
    ValidationErrors,
)


class TestStructure:

    def test_valid_tree(self, espresso_project):
        assert validate(espresso_project.root) is None

    def test_none_root(self):
        err = validate(None)
        assert isinstance(err, InvalidActivityError)
        assert "nil" in str(err)

    def test_repeated_id(self):
        a = build_activity("A", "A", 1)
        dup = build_activity("A", "Again", 1)
        err = validate(build_activity("ROOT", "Root", 1, [a, dup]))
        assert isinstance(err, InvalidActivityError)
        assert "cycle" in str(err)

    def test_shared_node(self):
        shared = build_activity("S", "Shared", 1)
        root = build_activity("ROOT", "Root", 1, [shared, shared])
        assert isinstance(validate(root), InvalidActivityError)

    @pytest.mark.parametrize("duration,min_duration", [(-1, 0), (5, -1), (5, 6)])
    def test_bad_durations(self, duration, min_duration):
        bad = Activity(id="X", duration=duration, min_duration=min_duration)
        err = validate(build_activity("ROOT", "Root", 1, [bad]))
        assert isinstance(err, InvalidActivityError)
        assert "activity X" in str(err)

    def test_structure_checked_before_resources(self):
        bad = Activity(id="X", duration=-1)
        bad.humans.append(HumanResource("Ghost", cost_per_h=-1.0, quantity=1))
        assert isinstance(validate(bad), InvalidActivityError)


class TestResources:

    def test_all_findings_aggregated(self):
        a = build_activity("A", "A", 1)
        a.humans.append(HumanResource("Welder", cost_per_h=-5.0, quantity=1))
        b = build_activity("B", "B", 1)
        b.materials.append(MaterialResource("Steel", unit_cost=1.0, quantity=-2))
        err = validate(build_activity("ROOT", "Root", 1, [a, b]))

        assert isinstance(err, ValidationErrors)
        assert len(err) == 2
        assert len(err.of_type(NegativeCostError)) == 1
        assert len(err.of_type(NegativeQuantityError)) == 1
        assert str(err).startswith("2 validation errors: activity A:")

    def test_invalid_supplier_period(self):
        a = build_activity("A", "A", 1)
        a.materials.append(MaterialResource("Steel", quantity=1, supplier=Supplier("Forge", period="decade")))
        err = validate(a)
        assert isinstance(err, ValidationErrors)
        assert isinstance(err.errors[0], InvalidPeriodError)
        assert "Forge" in str(err)

    def test_negative_supplier_capacity(self):
        supplier = Supplier("Forge", available_quantity=-1, period=PeriodType.DAY)
        a = build_activity("A", "A", 1)
        a.materials.append(MaterialResource("Steel", quantity=1, supplier=supplier))
        err = validate(a)
        assert isinstance(err.errors[0], NegativeQuantityError)

    def test_single_error_message(self):
        a = build_activity("A", "A", 1)
        a.humans.append(HumanResource("Welder", cost_per_h=-5.0, quantity=1))
        err = validate(a)
        assert str(err) == "activity A: human resource Welder has negative cost"


class TestValidationErrors:

    def test_empty(self):
        errors = ValidationErrors()
        assert not errors.has_errors()
        assert str(errors) == "no validation errors"

    def test_add_ignores_none(self):
        errors = ValidationErrors()
        errors.add(None)
        errors.add(NegativeCostError("x"))
        assert len(errors) == 1
        assert list(errors)[0].args == ("x",)
