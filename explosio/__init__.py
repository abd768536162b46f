"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    EXPLOSIO — PROJECT ANALYSIS ENGINE
═══════════════════════════════════════════════════════════════════════════════════════════════════════

A project is a tree of activities. Each activity has a duration, optional
crash parameters, and the resources it consumes (labour, materials,
assets), each optionally backed by a capacity-limited supplier.

From the tree the engine derives:
1. Schedule timing (CPM forward/backward pass, slack, critical path)
2. Direct cost, cost breakdown, margin and markup at a sell price
3. Time/cost trade-offs (crashing within a budget or to a time target)
4. Supplier capacity feasibility for a production target
5. What-if scenarios evaluated on isolated copies of the tree

ARCHITECTURE
════════════

    ┌──────────────────────────────────────────────────────────────────────┐
    │                            DOMAIN                                    │
    │   Activity tree  ·  Human / Material / Asset  ·  Supplier  ·  Period │
    │   Project (fluent builder)                                           │
    └───────────────────────────────┬──────────────────────────────────────┘
                                    │
    ┌───────────────────────────────▼──────────────────────────────────────┐
    │                            ENGINE                                    │
    │  ┌─────────┐ ┌─────────┐ ┌───────────┐ ┌──────────┐ ┌────────────┐  │
    │  │ cpm     │ │ cost    │ │ crashing  │ │ supplier │ │ validation │  │
    │  │         │ │ finance │ │           │ │ capacity │ │            │  │
    │  └─────────┘ └─────────┘ └───────────┘ └──────────┘ └────────────┘  │
    │                      AnalysisEngine (facade)                         │
    └───────────────────────────────┬──────────────────────────────────────┘
                                    │
    ┌───────────────────────────────▼──────────────────────────────────────┐
    │   WHAT-IF: clone → overrides → CPM + metrics → comparison            │
    │   PERSISTENCE: pydantic records, suppliers referenced by name        │
    └──────────────────────────────────────────────────────────────────────┘

Times are integer minutes; costs are floats in a single currency.

REFERENCES
──────────
[1] Kelley & Walker (1959). Critical-path planning and scheduling.
[2] PMI (2021). A Guide to the Project Management Body of Knowledge (PMBOK).
"""

from .errors import (
    ExplosioError,
    InvalidPeriodError,
    NegativeQuantityError,
    NegativeCostError,
    InvalidActivityError,
    InvalidSupplierError,
    ValidationErrors,
)
from .domain import (
    PeriodType,
    period_to_minutes,
    is_valid_period,
    Supplier,
    Resource,
    ResourceCategory,
    HumanResource,
    MaterialResource,
    Asset,
    Activity,
    Project,
    build_activity,
)
from .tree import (
    walk,
    iter_activities,
    count_activities,
    for_each_resource,
)
from .clone import clone_activity
from .config import (
    CrashStrategy,
    EngineSettings,
    Settings,
    apply_log_level,
)
from .engine import (
    AnalysisEngine,
    CPMSummary,
    CostBreakdown,
    FinancialMetrics,
    CrashPlan,
    SupplierRequirement,
)
from .whatif import (
    ActivityOverride,
    Scenario,
    ScenarioResult,
    WhatIfEngine,
    ScenarioComparison,
    compare_scenarios,
    results_to_dataframe,
)
from .persistence import (
    ProjectRecord,
    ActivityRecord,
    SupplierRecord,
    project_to_record,
    project_from_record,
    dump_project,
    load_project,
)

__version__ = "1.0.0"

__all__ = [
    # Errors
    "ExplosioError",
    "InvalidPeriodError",
    "NegativeQuantityError",
    "NegativeCostError",
    "InvalidActivityError",
    "InvalidSupplierError",
    "ValidationErrors",
    # Domain
    "PeriodType",
    "period_to_minutes",
    "is_valid_period",
    "Supplier",
    "Resource",
    "ResourceCategory",
    "HumanResource",
    "MaterialResource",
    "Asset",
    "Activity",
    "Project",
    "build_activity",
    # Tree
    "walk",
    "iter_activities",
    "count_activities",
    "for_each_resource",
    "clone_activity",
    # Config
    "CrashStrategy",
    "EngineSettings",
    "Settings",
    "apply_log_level",
    # Engine
    "AnalysisEngine",
    "CPMSummary",
    "CostBreakdown",
    "FinancialMetrics",
    "CrashPlan",
    "SupplierRequirement",
    # What-if
    "ActivityOverride",
    "Scenario",
    "ScenarioResult",
    "WhatIfEngine",
    "ScenarioComparison",
    "compare_scenarios",
    "results_to_dataframe",
    # Persistence
    "ProjectRecord",
    "ActivityRecord",
    "SupplierRecord",
    "project_to_record",
    "project_from_record",
    "dump_project",
    "load_project",
]
