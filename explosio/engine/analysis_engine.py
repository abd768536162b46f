"""
AnalysisEngine: one object exposing every analysis over an activity tree.

The engine holds no state between calls except its crash strategy; the
tree is passed in on every call and only CPM fields are written back.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd

from explosio.config import CrashStrategy, Settings
from explosio.domain.activity import Activity
from explosio.domain.periods import PeriodLike
from explosio.engine import cost, cpm, crashing, financial, supplier_capacity, validation
from explosio.engine.cost import CostBreakdown
from explosio.engine.cpm import CPMSummary
from explosio.engine.crashing import CrashPlan
from explosio.engine.financial import FinancialMetrics
from explosio.engine.supplier_capacity import SupplierRequirement
from explosio.errors import ExplosioError, ValidationErrors
from explosio.tree import walk


class AnalysisEngine:
    """
    CPM, cost, financial, crashing, supplier and validation analyses.

    Args:
        crash_strategy: Strategy used by the crashing methods; defaults to
            the configured one (see explosio.config).
    """

    def __init__(self, crash_strategy: Optional[CrashStrategy] = None):
        self.crash_strategy = crash_strategy or Settings.get_crash_strategy()

    # ── Traversal ──

    def walk(self, root: Optional[Activity], visit: Callable[[Activity], None]) -> None:
        walk(root, visit)

    # ── CPM ──

    def compute_cpm(self, root: Optional[Activity]) -> None:
        cpm.compute_cpm(root)

    def get_total_duration(self, root: Optional[Activity]) -> int:
        return cpm.get_total_duration(root)

    def get_critical_path(self, root: Optional[Activity]) -> List[Activity]:
        return cpm.get_critical_path(root)

    def get_cpm_summary(self, root: Optional[Activity]) -> CPMSummary:
        return cpm.get_cpm_summary(root)

    def activities_by_es(self, root: Optional[Activity]) -> List[Activity]:
        return cpm.activities_by_es(root)

    def schedule_dataframe(self, root: Optional[Activity]) -> pd.DataFrame:
        return cpm.schedule_dataframe(root)

    # ── Cost & financials ──

    def get_total_cost(self, root: Optional[Activity]) -> float:
        return cost.get_total_cost(root)

    def get_cost_breakdown(self, root: Optional[Activity]) -> CostBreakdown:
        return cost.get_cost_breakdown(root)

    def get_financials(self, root: Optional[Activity], sell_price: float) -> FinancialMetrics:
        return financial.get_financials(root, sell_price)

    def get_break_even_price(self, root: Optional[Activity]) -> float:
        return financial.get_break_even_price(root)

    def get_financials_for_prices(
        self, root: Optional[Activity], prices: Sequence[float]
    ) -> List[FinancialMetrics]:
        return financial.get_financials_for_prices(root, prices)

    # ── Crashing ──

    def get_max_crash_potential(self, root: Optional[Activity]) -> Tuple[int, float]:
        return crashing.get_max_crash_potential(root)

    def crash_with_budget(self, root: Optional[Activity], max_extra_cost: float) -> CrashPlan:
        return crashing.crash_with_budget(root, max_extra_cost, self.crash_strategy)

    def crash_to_save_time(self, root: Optional[Activity], target_minutes: int) -> CrashPlan:
        return crashing.crash_to_save_time(root, target_minutes, self.crash_strategy)

    # ── Suppliers ──

    def calculate_supplier_requirements(
        self,
        root: Optional[Activity],
        production_target: float,
        target_period: Optional[PeriodLike] = None,
    ) -> Optional[List[SupplierRequirement]]:
        if target_period is None:
            target_period = Settings.get_default_target_period()
        return supplier_capacity.calculate_supplier_requirements(root, production_target, target_period)

    def validate_supplier_usage(self, root: Optional[Activity]) -> Optional[ValidationErrors]:
        return supplier_capacity.validate_supplier_usage(root)

    # ── Validation ──

    def validate(self, root: Optional[Activity]) -> Optional[ExplosioError]:
        return validation.validate(root)
