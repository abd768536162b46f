"""
Scenario comparison: metric deltas between a baseline and a scenario.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from explosio.whatif.what_if_engine import ScenarioResult

# (metric, higher_is_better)
METRICS_CONFIG = [
    ("total_duration", False),
    ("total_cost", False),
    ("margin", True),
    ("markup", True),
    ("critical_path_count", False),
    ("time_saved", True),
    ("extra_crash_cost", False),
]

METRIC_WEIGHTS = {
    "margin": 2.5,
    "total_duration": 2.0,
    "total_cost": 2.0,
    "markup": 1.0,
    "critical_path_count": 0.5,
    "time_saved": 0.5,
    "extra_crash_cost": 0.5,
}

METRIC_LABELS = {
    "total_duration": "Duration",
    "total_cost": "Total cost",
    "margin": "Margin",
    "markup": "Markup",
    "critical_path_count": "Critical activities",
    "time_saved": "Crash potential",
    "extra_crash_cost": "Full crash cost",
}

RESULT_COLUMNS = [
    'scenario_name', 'total_duration', 'total_cost', 'margin', 'markup',
    'is_viable', 'critical_path_count', 'time_saved', 'extra_crash_cost',
]

# Percent-change thresholds, checked in order
SIGNIFICANCE_THRESHOLDS = (("high", 20.0), ("medium", 10.0))


def _percent_change(before: float, after: float) -> float:
    if before == 0:
        return math.copysign(100.0, after) if after != 0 else 0.0
    return (after - before) / abs(before) * 100


@dataclass
class MetricDelta:
    """
    Change of one scenario metric against the baseline.

    Percent change is relative to |baseline|. From a zero baseline
    (no crash potential, no critical activity, break-even margin) any
    change counts as ±100%, signed like the absolute change.
    """
    metric_name: str
    baseline_value: float
    scenario_value: float
    absolute_delta: float = 0.0
    percent_delta: float = 0.0
    is_improvement: bool = False
    significance: str = "low"  # low, medium, high

    def compute(self, higher_is_better: bool = False):
        self.absolute_delta = self.scenario_value - self.baseline_value
        self.percent_delta = _percent_change(self.baseline_value, self.scenario_value)

        gain = self.absolute_delta if higher_is_better else -self.absolute_delta
        self.is_improvement = gain > 0

        magnitude = abs(self.percent_delta)
        self.significance = next(
            (level for level, threshold in SIGNIFICANCE_THRESHOLDS if magnitude >= threshold),
            "low",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'metric': self.metric_name,
            'baseline': self.baseline_value,
            'scenario': self.scenario_value,
            'delta': round(self.absolute_delta, 4),
            'delta_pct': round(self.percent_delta, 2),
            'is_improvement': self.is_improvement,
            'significance': self.significance,
        }


@dataclass
class ScenarioComparison:
    """
    Baseline vs scenario: per-metric deltas, strengths, weaknesses and
    an overall score.
    """
    baseline: ScenarioResult
    scenario: ScenarioResult

    # Computed deltas
    deltas: Dict[str, MetricDelta] = field(default_factory=dict)

    # Analysis results
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    # Overall assessment
    viability_changed: bool = False
    overall_improvement: bool = False
    improvement_score: float = 0.0  # -100 to +100

    def compute_deltas(self):
        for name, higher_better in METRICS_CONFIG:
            delta = MetricDelta(
                metric_name=name,
                baseline_value=float(getattr(self.baseline, name)),
                scenario_value=float(getattr(self.scenario, name)),
            )
            delta.compute(higher_is_better=higher_better)
            self.deltas[name] = delta

        self.viability_changed = self.baseline.is_viable != self.scenario.is_viable
        self._analyze()

    def _analyze(self):
        self.strengths = []
        self.weaknesses = []
        self.recommendations = []

        for name, delta in self.deltas.items():
            if delta.significance not in ("medium", "high"):
                continue
            if delta.is_improvement:
                self.strengths.append(self._format_delta(name, delta))
            else:
                self.weaknesses.append(self._format_delta(name, delta))

        if self.viability_changed:
            if self.scenario.is_viable:
                self.strengths.append("Scenario becomes viable at its sell price")
            else:
                self.weaknesses.append("Scenario is no longer viable at its sell price")

        self._generate_recommendations()

        improvement_count = sum(1 for d in self.deltas.values() if d.is_improvement)
        degradation_count = len(self.deltas) - improvement_count
        self.overall_improvement = improvement_count > degradation_count

        # Weighted average of percent deltas clipped to ±100, signed by improvement
        names = list(self.deltas)
        normalized = np.clip([abs(self.deltas[n].percent_delta) for n in names], 0, 100)
        signs = np.array([1.0 if self.deltas[n].is_improvement else -1.0 for n in names])
        weights = np.array([METRIC_WEIGHTS.get(n, 1.0) for n in names])
        self.improvement_score = float(np.average(signs * normalized, weights=weights)) if names else 0.0

    @staticmethod
    def _format_delta(metric_name: str, delta: MetricDelta) -> str:
        label = METRIC_LABELS.get(metric_name, metric_name)
        direction = "increased" if delta.absolute_delta > 0 else "decreased"
        return (
            f"{label} {direction} {abs(delta.percent_delta):.1f}% "
            f"({delta.baseline_value:.1f} → {delta.scenario_value:.1f})"
        )

    def _generate_recommendations(self):
        if not self.scenario.is_viable:
            self.recommendations.append(
                f"Margin is {self.scenario.margin:.2f}. Raise the sell price above "
                f"{self.scenario.total_cost:.2f} or lower resource costs."
            )

        duration = self.deltas.get("total_duration")
        if duration and not duration.is_improvement and duration.absolute_delta > 0 and self.scenario.time_saved > 0:
            self.recommendations.append(
                f"Duration grew; up to {self.scenario.time_saved} min can be recovered by crashing "
                f"(at most {self.scenario.extra_crash_cost:.2f} extra)."
            )

    @property
    def improvements(self) -> List[str]:
        return [name for name, d in self.deltas.items() if d.is_improvement]

    @property
    def degradations(self) -> List[str]:
        return [name for name, d in self.deltas.items() if d.absolute_delta != 0 and not d.is_improvement]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'baseline': self.baseline.scenario_name,
            'scenario': self.scenario.scenario_name,
            'deltas': {k: d.to_dict() for k, d in self.deltas.items()},
            'strengths': self.strengths,
            'weaknesses': self.weaknesses,
            'recommendations': self.recommendations,
            'viability_changed': self.viability_changed,
            'overall_improvement': self.overall_improvement,
            'improvement_score': round(self.improvement_score, 1),
        }


def compare_scenarios(baseline: ScenarioResult, scenario: ScenarioResult) -> ScenarioComparison:
    comparison = ScenarioComparison(baseline=baseline, scenario=scenario)
    comparison.compute_deltas()
    return comparison


def compare_against_baseline(
    results: Sequence[ScenarioResult],
    baseline_name: Optional[str] = None,
) -> List[ScenarioComparison]:
    """Compare every result with the baseline (first result unless named)."""
    if not results:
        return []
    baseline = results[0]
    if baseline_name is not None:
        matches = [r for r in results if r.scenario_name == baseline_name]
        if not matches:
            raise KeyError(f"baseline scenario '{baseline_name}' not found")
        baseline = matches[0]
    return [compare_scenarios(baseline, r) for r in results if r is not baseline]


def results_to_dataframe(results: Sequence[ScenarioResult]) -> pd.DataFrame:
    """One row per scenario, in input order."""
    return pd.DataFrame([r.to_dict() for r in results], columns=RESULT_COLUMNS)
