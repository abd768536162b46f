"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    WHAT-IF ENGINE — Scenario evaluation
═══════════════════════════════════════════════════════════════════════════════════════════════════════

For each scenario s against a base tree T:

    T_s = apply(clone(T), overrides_s)
    CPM(T_s) → duration, critical path
    C(T_s)   → total cost, margin/markup at the scenario sell price
    crash potential of T_s (unconstrained)

The base tree is never mutated. Scenarios are independent of each
other (each one starts from the same base), so they can be evaluated
on separate threads without locking.
═══════════════════════════════════════════════════════════════════════════════════════════════════════
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from explosio.domain.activity import Activity
from explosio.engine.analysis_engine import AnalysisEngine
from explosio.whatif.scenario import Scenario, apply_scenario

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Flat record of one scenario run, for comparison."""
    scenario_name: str
    total_duration: int = 0
    total_cost: float = 0.0
    margin: float = 0.0
    markup: float = 0.0
    is_viable: bool = False
    critical_path_count: int = 0
    time_saved: int = 0
    extra_crash_cost: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class WhatIfEngine:
    """Runs scenarios (clone + overrides + CPM + metrics) against a base tree."""

    def __init__(self, engine: Optional[AnalysisEngine] = None):
        self.engine = engine or AnalysisEngine()

    def run_scenario(
        self,
        base: Optional[Activity],
        scenario: Scenario,
    ) -> Tuple[Optional[Activity], ScenarioResult]:
        """Return the scenario clone (CPM computed) and its result record."""
        cl = apply_scenario(base, scenario)
        if cl is None:
            return None, ScenarioResult(scenario_name=scenario.name)

        self.engine.compute_cpm(cl)
        total_cost = self.engine.get_total_cost(cl)
        fin = self.engine.get_financials(cl, scenario.sell_price)
        critical_path = self.engine.get_critical_path(cl)
        time_saved, extra_crash_cost = self.engine.get_max_crash_potential(cl)

        result = ScenarioResult(
            scenario_name=scenario.name,
            total_duration=cl.ef,
            total_cost=total_cost,
            margin=fin.margin,
            markup=fin.markup,
            is_viable=fin.is_viable,
            critical_path_count=len(critical_path),
            time_saved=time_saved,
            extra_crash_cost=extra_crash_cost,
        )
        logger.info(
            f"Scenario '{scenario.name}': duration={result.total_duration} min, "
            f"cost={result.total_cost:.2f}, margin={result.margin:.2f}"
        )
        return cl, result

    def run_scenarios(
        self,
        base: Optional[Activity],
        scenarios: Sequence[Scenario],
        max_workers: Optional[int] = None,
    ) -> List[ScenarioResult]:
        """
        Run every scenario against the same base; results in input order.

        With `max_workers` > 1 the scenarios are evaluated on a thread pool.
        """
        if max_workers and max_workers > 1 and len(scenarios) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                runs = pool.map(lambda s: self.run_scenario(base, s), scenarios)
                return [result for _, result in runs]
        return [self.run_scenario(base, s)[1] for s in scenarios]
