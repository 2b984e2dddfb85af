"""Immutable input and result records for the projection engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RiskTolerance = Literal["conservative", "moderate", "aggressive"]
RISK_TOLERANCES: tuple[RiskTolerance, ...] = ("conservative", "moderate", "aggressive")


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str
    code: str = "invalid_value"


@dataclass(frozen=True)
class RetirementInput:
    current_age: int
    retirement_age: int
    current_savings: float
    monthly_contribution: float
    expected_return: float
    current_income: float
    replace_income: float


@dataclass(frozen=True)
class RetirementResult:
    total_at_retirement: float
    needed_capital: float
    surplus: float
    monthly_income_at_retirement: float
    years_to_retirement: int
    future_current_savings: float
    future_contributions: float

    @property
    def is_shortfall(self) -> bool:
        return self.surplus < 0


@dataclass(frozen=True)
class GoalInput:
    target_amount: float
    current_amount: float
    monthly_contribution: float
    time_horizon: int
    risk_tolerance: RiskTolerance
    goal_name: str = ""


@dataclass(frozen=True)
class AssetAllocation:
    stocks: int
    bonds: int
    cash: int

    @property
    def total(self) -> int:
        return self.stocks + self.bonds + self.cash


@dataclass(frozen=True)
class GoalResult:
    months_to_goal: int
    total_contributions: float
    expected_returns: float
    recommended_allocation: AssetAllocation
    expected_return_rate: float
    future_value: float
    on_track: bool
    goal_name: str = ""


@dataclass(frozen=True)
class CompoundInput:
    principal: float
    monthly_contribution: float
    annual_return: float
    years: int


@dataclass(frozen=True)
class CompoundResult:
    total_value: float
    total_contributions: float
    total_earnings: float
    return_multiple: float


@dataclass(frozen=True)
class Holding:
    symbol: str
    shares: float
    avg_price: float
    current_price: float


@dataclass(frozen=True)
class HoldingView:
    symbol: str
    shares: float
    avg_price: float
    current_price: float
    value: float
    cost: float
    gain_loss: float
    allocation: float


@dataclass(frozen=True)
class PortfolioMetrics:
    total_value: float
    total_cost: float
    total_gain_loss: float
    total_gain_loss_percent: float
    risk_score: float
    diversification_score: float
    holding_count: int


@dataclass(frozen=True)
class Recommendation:
    title: str
    detail: str


@dataclass(frozen=True)
class AdvisorProfile:
    age: int
    income: float
    current_savings: float
    risk_tolerance: RiskTolerance
    goals: str
    time_horizon: int
