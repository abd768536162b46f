"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    SUPPLIER CAPACITY ANALYZER
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Demand per supplier for a production target.

Let:
    q_r     quantity of resource r per produced unit
    N       production target (units per target period P_t)
    S(r)    supplier of r, with capacity A_s per own period P_s
    |P|     minutes in period P

Required quantity in the supplier's own period:
    Q_s = Σ_{r : S(r)=s} (q_r · N / |P_t|) · |P_s|

Suppliers needed (fractional, round up to procure):
    n_s = Q_s / A_s          feasible ⇔ A_s > 0

Resources are skipped when |P_t| = 0 or |P_s| = 0 (invalid period).
Suppliers are aggregated by NAME across the whole tree.

Usage check (no period conversion):
    q_r > A_{S(r)}  →  one finding per resource
═══════════════════════════════════════════════════════════════════════════════════════════════════════
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pandas as pd

from explosio.domain.activity import Activity
from explosio.domain.periods import PeriodLike, period_label, period_to_minutes
from explosio.domain.resources import Supplier
from explosio.errors import InvalidSupplierError, ValidationErrors
from explosio.tree import iter_resources

logger = logging.getLogger(__name__)


@dataclass
class SupplierRequirement:
    """
    Demand placed on one supplier by a production target.

    Attributes:
        supplier_name: Supplier name (aggregation key)
        required_quantity: Demand expressed in the supplier's own period
        supplier_period: The supplier's period
        available_quantity: Supplier capacity per own period
        suppliers_needed: required / available (fractional)
        is_feasible: available > 0
    """
    supplier_name: str
    required_quantity: float = 0.0
    supplier_period: PeriodLike = ""
    available_quantity: float = 0.0
    suppliers_needed: float = 0.0
    is_feasible: bool = False

    @property
    def suppliers_to_procure(self) -> Optional[int]:
        """Suppliers needed rounded up (procurement count); None without capacity."""
        if math.isinf(self.suppliers_needed):
            return None
        nearest = round(self.suppliers_needed)
        if math.isclose(self.suppliers_needed, nearest, rel_tol=1e-9, abs_tol=1e-12):
            return int(nearest)
        return math.ceil(self.suppliers_needed)

    @property
    def utilization_pct(self) -> float:
        return self.suppliers_needed * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            'supplier_name': self.supplier_name,
            'required_quantity': round(self.required_quantity, 3),
            'supplier_period': period_label(self.supplier_period),
            'available_quantity': self.available_quantity,
            'suppliers_needed': round(self.suppliers_needed, 3),
            'is_feasible': self.is_feasible,
        }


def calculate_supplier_requirements(
    root: Optional[Activity],
    production_target: float,
    target_period: PeriodLike,
) -> Optional[List[SupplierRequirement]]:
    """
    Aggregate supplier demand for `production_target` units per `target_period`.

    Returns None for a None root, otherwise one requirement per distinct
    supplier name in first-seen (pre-order) order.
    """
    if root is None:
        return None

    target_minutes = period_to_minutes(target_period)
    if target_minutes == 0:
        logger.warning(f"Invalid target period {period_label(target_period)}: no supplier demand computed")

    requirements: Dict[str, SupplierRequirement] = {}
    suppliers: Dict[str, Supplier] = {}

    for activity, resource in iter_resources(root):
        supplier = resource.supplier
        if supplier is None:
            continue
        suppliers[supplier.name] = supplier

        supplier_minutes = supplier.period_minutes
        if target_minutes <= 0 or supplier_minutes <= 0:
            logger.debug(
                f"Skipping {resource.display_name} in {activity.id}: "
                f"invalid period for supplier {supplier.name}"
            )
            continue

        total_quantity = resource.quantity * production_target
        quantity_in_supplier_period = (total_quantity / target_minutes) * supplier_minutes

        req = requirements.get(supplier.name)
        if req is None:
            requirements[supplier.name] = SupplierRequirement(
                supplier_name=supplier.name,
                required_quantity=quantity_in_supplier_period,
                supplier_period=supplier.period,
            )
        else:
            req.required_quantity += quantity_in_supplier_period

    for name, req in requirements.items():
        supplier = suppliers[name]
        req.available_quantity = supplier.available_quantity
        req.suppliers_needed = _ratio(req.required_quantity, supplier.available_quantity)
        req.is_feasible = supplier.available_quantity > 0

    return list(requirements.values())


def _ratio(required: float, available: float) -> float:
    if available != 0:
        return required / available
    if required == 0:
        return 0.0
    return math.inf


def requirements_dataframe(requirements: Optional[List[SupplierRequirement]]) -> pd.DataFrame:
    """Requirements as a DataFrame, one row per supplier."""
    rows = [req.to_dict() for req in requirements or []]
    return pd.DataFrame(rows, columns=[
        'supplier_name', 'required_quantity', 'supplier_period',
        'available_quantity', 'suppliers_needed', 'is_feasible',
    ])


def validate_supplier_usage(root: Optional[Activity]) -> Optional[ValidationErrors]:
    """
    Flag every resource using more units than its supplier's stated capacity.

    The comparison is direct (no period conversion). All findings are
    collected; None when there are none.
    """
    errors = ValidationErrors()
    for activity, resource in iter_resources(root):
        supplier = resource.supplier
        if supplier is None or resource.quantity <= supplier.available_quantity:
            continue
        shortfall = resource.quantity - supplier.available_quantity
        errors.add(InvalidSupplierError(
            f"activity {activity.id}: {resource.category.value} resource {resource.display_name} "
            f"uses {resource.quantity:.1f} units but supplier {supplier.name} only provides "
            f"{supplier.available_quantity:.1f}/{period_label(supplier.period)} "
            f"(short by {shortfall:.1f})"
        ))

    if errors.has_errors():
        logger.debug(f"Supplier usage: {len(errors)} finding(s)")
        return errors
    return None
