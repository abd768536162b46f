"""
What-if scenarios: overrides applied to clones of a base tree,
evaluated and compared side by side.
"""

from .scenario import (
    ActivityOverride,
    Scenario,
    apply_scenario,
)
from .what_if_engine import (
    ScenarioResult,
    WhatIfEngine,
)
from .comparison import (
    MetricDelta,
    ScenarioComparison,
    compare_scenarios,
    compare_against_baseline,
    results_to_dataframe,
)

__all__ = [
    "ActivityOverride",
    "Scenario",
    "apply_scenario",
    "ScenarioResult",
    "WhatIfEngine",
    "MetricDelta",
    "ScenarioComparison",
    "compare_scenarios",
    "compare_against_baseline",
    "results_to_dataframe",
]
