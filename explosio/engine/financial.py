"""
Financial metrics against a target sell price.

    Margin  = P - C
    Markup  = Margin / C × 100     (0 when C = 0)
    Viable  ⇔ Margin > 0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from explosio.domain.activity import Activity
from explosio.engine.cost import get_total_cost


@dataclass
class FinancialMetrics:
    total_cost: float = 0.0
    margin: float = 0.0
    markup: float = 0.0
    is_viable: bool = False
    sell_price: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sell_price': round(self.sell_price, 2),
            'total_cost': round(self.total_cost, 2),
            'margin': round(self.margin, 2),
            'markup_pct': round(self.markup, 2),
            'is_viable': self.is_viable,
        }


def get_financials(root: Optional[Activity], sell_price: float) -> FinancialMetrics:
    total_cost = get_total_cost(root)
    margin = sell_price - total_cost
    markup = (margin / total_cost) * 100 if total_cost != 0 else 0.0
    return FinancialMetrics(
        total_cost=total_cost,
        margin=margin,
        markup=markup,
        is_viable=margin > 0,
        sell_price=sell_price,
    )


def get_break_even_price(root: Optional[Activity]) -> float:
    """Sell price at which the margin is zero (the total cost)."""
    if root is None:
        return 0.0
    return get_total_cost(root)


def get_financials_for_prices(
    root: Optional[Activity],
    prices: Sequence[float],
) -> List[FinancialMetrics]:
    return [get_financials(root, price) for price in prices]
