"""
Analysis engine over activity trees: CPM, cost and financials,
crashing, supplier capacity and validation.
"""

from .cpm import (
    CPMSummary,
    compute_cpm,
    get_total_duration,
    get_critical_path,
    get_cpm_summary,
    activities_by_es,
    schedule_dataframe,
)
from .cost import (
    CostBreakdown,
    get_direct_cost,
    get_total_cost,
    get_cost_breakdown,
)
from .financial import (
    FinancialMetrics,
    get_financials,
    get_break_even_price,
    get_financials_for_prices,
)
from .crashing import (
    CrashCandidate,
    CrashPlan,
    get_max_crash_potential,
    collect_crashable_critical,
    crash_with_budget,
    crash_to_save_time,
)
from .supplier_capacity import (
    SupplierRequirement,
    calculate_supplier_requirements,
    requirements_dataframe,
    validate_supplier_usage,
)
from .validation import validate
from .analysis_engine import AnalysisEngine

__all__ = [
    # CPM
    "CPMSummary",
    "compute_cpm",
    "get_total_duration",
    "get_critical_path",
    "get_cpm_summary",
    "activities_by_es",
    "schedule_dataframe",
    # Cost
    "CostBreakdown",
    "get_direct_cost",
    "get_total_cost",
    "get_cost_breakdown",
    # Financial
    "FinancialMetrics",
    "get_financials",
    "get_break_even_price",
    "get_financials_for_prices",
    # Crashing
    "CrashCandidate",
    "CrashPlan",
    "get_max_crash_potential",
    "collect_crashable_critical",
    "crash_with_budget",
    "crash_to_save_time",
    # Suppliers
    "SupplierRequirement",
    "calculate_supplier_requirements",
    "requirements_dataframe",
    "validate_supplier_usage",
    # Validation
    "validate",
    # Facade
    "AnalysisEngine",
]
