"""Portfolio valuation, P&L and heuristic scoring.

The risk and diversification scores are placeholder heuristics that mirror the
web calculator's numbers. ``risk_score`` moves linearly with
total return and ``diversification_score`` only counts positions; neither is a
statistical measure of volatility or correlation.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from advisor_server.planning.models import Holding, HoldingView, PortfolioMetrics, Recommendation
from advisor_server.planning.validation import require_valid, validate_holdings

RISK_BASELINE = 50.0
RISK_RETURN_WEIGHT = 2.0
DIVERSIFICATION_POINTS_PER_HOLDING = 20.0
DIVERSIFICATION_WARNING_BELOW = 60.0
CONCENTRATION_LIMIT_PERCENT = 40.0


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def holdings_frame(holdings: Sequence[Holding]) -> pd.DataFrame:
    """Per-holding valuation table with value, cost, P&L and allocation percent."""
    require_valid(validate_holdings(holdings))
    data = pd.DataFrame(
        [
            {
                "Symbol": holding.symbol.strip().upper(),
                "Shares": float(holding.shares),
                "Avg_Price": float(holding.avg_price),
                "Current_Price": float(holding.current_price),
            }
            for holding in holdings
        ]
    )
    data["Value"] = data["Shares"] * data["Current_Price"]
    data["Cost"] = data["Shares"] * data["Avg_Price"]
    data["Gain_Loss"] = data["Value"] - data["Cost"]
    data["Allocation"] = data["Value"] / float(data["Value"].sum()) * 100.0
    return data


def build_holding_views(holdings: Sequence[Holding]) -> list[HoldingView]:
    frame = holdings_frame(holdings)
    return [
        HoldingView(
            symbol=row.Symbol,
            shares=float(row.Shares),
            avg_price=float(row.Avg_Price),
            current_price=float(row.Current_Price),
            value=float(row.Value),
            cost=float(row.Cost),
            gain_loss=float(row.Gain_Loss),
            allocation=float(row.Allocation),
        )
        for row in frame.itertuples(index=False)
    ]


def summarize_portfolio(holdings: Sequence[Holding]) -> PortfolioMetrics:
    frame = holdings_frame(holdings)
    total_value = float(frame["Value"].sum())
    total_cost = float(frame["Cost"].sum())
    total_gain_loss = total_value - total_cost
    total_gain_loss_percent = total_gain_loss / total_cost * 100.0
    holding_count = len(frame)

    return PortfolioMetrics(
        total_value=total_value,
        total_cost=total_cost,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=total_gain_loss_percent,
        risk_score=_clamp(RISK_BASELINE + total_gain_loss_percent * RISK_RETURN_WEIGHT),
        diversification_score=_clamp(holding_count * DIVERSIFICATION_POINTS_PER_HOLDING),
        holding_count=holding_count,
    )


def _band(score: float, low_below: float, medium_below: float) -> str:
    if score < low_below:
        return "Low"
    if score < medium_below:
        return "Medium"
    return "High"


def risk_band(risk_score: float) -> str:
    return _band(risk_score, 30.0, 70.0)


def diversification_band(diversification_score: float) -> str:
    return _band(diversification_score, 40.0, 80.0)


def recommendations(metrics: PortfolioMetrics, views: Sequence[HoldingView]) -> list[Recommendation]:
    """Rule-based portfolio notes; rebalancing and performance notes are always present."""
    notes: list[Recommendation] = []
    if metrics.diversification_score < DIVERSIFICATION_WARNING_BELOW:
        notes.append(
            Recommendation(
                title="Improve Diversification",
                detail="Consider adding holdings from different sectors or asset classes to reduce concentration risk.",
            )
        )
    if any(view.allocation > CONCENTRATION_LIMIT_PERCENT for view in views):
        notes.append(
            Recommendation(
                title="High Concentration",
                detail=(
                    "Some positions represent a large portion of your portfolio. "
                    "Consider rebalancing for better risk distribution."
                ),
            )
        )
    notes.append(
        Recommendation(
            title="Regular Rebalancing",
            detail="Review and rebalance your portfolio quarterly to maintain your target allocation.",
        )
    )
    direction = "positive" if metrics.total_gain_loss >= 0 else "negative"
    notes.append(
        Recommendation(
            title="Performance Review",
            detail=f"Your portfolio shows {direction} performance. Consider dollar-cost averaging for consistent growth.",
        )
    )
    return notes
