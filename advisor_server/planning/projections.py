"""Retirement, goal and compound-interest projectors."""

from __future__ import annotations

import math

from advisor_server.planning.annuity import future_value_annuity, future_value_lump_sum, monthly_rate
from advisor_server.planning.models import (
    AssetAllocation,
    CompoundInput,
    CompoundResult,
    GoalInput,
    GoalResult,
    RetirementInput,
    RetirementResult,
    RiskTolerance,
    ValidationIssue,
)
from advisor_server.planning.validation import (
    InvalidProjectionInput,
    require_valid,
    validate_compound_input,
    validate_goal_input,
    validate_retirement_input,
)

# 4% sustainable withdrawal rule: capital needed = annual need / 0.04.
SAFE_WITHDRAWAL_RATE = 0.04
CAPITAL_MULTIPLIER = 25

RISK_TIER_RETURNS: dict[RiskTolerance, float] = {
    "conservative": 4.0,
    "moderate": 7.0,
    "aggressive": 10.0,
}

RISK_TIER_ALLOCATIONS: dict[RiskTolerance, AssetAllocation] = {
    "conservative": AssetAllocation(stocks=30, bonds=60, cash=10),
    "moderate": AssetAllocation(stocks=60, bonds=30, cash=10),
    "aggressive": AssetAllocation(stocks=80, bonds=15, cash=5),
}


def _overflow(field: str) -> InvalidProjectionInput:
    return InvalidProjectionInput(
        [
            ValidationIssue(
                field=field,
                code="overflow",
                message=f"{field} is too large to project; shorten the horizon or lower the rate.",
            )
        ]
    )


def project_retirement(data: RetirementInput) -> RetirementResult:
    require_valid(validate_retirement_input(data))

    years_to_retirement = int(data.retirement_age - data.current_age)
    months_to_retirement = years_to_retirement * 12

    try:
        future_current_savings = future_value_lump_sum(data.current_savings, data.expected_return, years_to_retirement)
        future_contributions = future_value_annuity(
            data.monthly_contribution,
            monthly_rate(data.expected_return),
            months_to_retirement,
        )
    except OverflowError as error:
        raise _overflow("expected_return") from error
    total_at_retirement = future_current_savings + future_contributions
    if not math.isfinite(total_at_retirement):
        raise _overflow("expected_return")
    annual_need = data.current_income * data.replace_income / 100.0
    needed_capital = annual_need * CAPITAL_MULTIPLIER

    return RetirementResult(
        total_at_retirement=total_at_retirement,
        needed_capital=needed_capital,
        surplus=total_at_retirement - needed_capital,
        monthly_income_at_retirement=total_at_retirement * SAFE_WITHDRAWAL_RATE / 12.0,
        years_to_retirement=years_to_retirement,
        future_current_savings=future_current_savings,
        future_contributions=future_contributions,
    )


def project_goal(data: GoalInput) -> GoalResult:
    require_valid(validate_goal_input(data))

    remaining = max(data.target_amount - data.current_amount, 0.0)
    try:
        months_to_goal = int(math.ceil(remaining / data.monthly_contribution))
    except OverflowError as error:
        raise _overflow("monthly_contribution") from error

    expected_return = RISK_TIER_RETURNS[data.risk_tolerance]
    horizon = int(data.time_horizon)
    try:
        future_value = future_value_lump_sum(data.current_amount, expected_return, horizon / 12.0) + future_value_annuity(
            data.monthly_contribution,
            monthly_rate(expected_return),
            horizon,
        )
    except OverflowError as error:
        raise _overflow("time_horizon") from error
    if not math.isfinite(future_value):
        raise _overflow("time_horizon")
    total_contributions = data.monthly_contribution * horizon

    return GoalResult(
        months_to_goal=months_to_goal,
        total_contributions=total_contributions,
        expected_returns=future_value - data.current_amount - total_contributions,
        recommended_allocation=RISK_TIER_ALLOCATIONS[data.risk_tolerance],
        expected_return_rate=expected_return,
        future_value=future_value,
        on_track=future_value >= data.target_amount,
        goal_name=data.goal_name,
    )


def project_compound(data: CompoundInput) -> CompoundResult:
    require_valid(validate_compound_input(data))

    months = int(data.years) * 12
    try:
        total_value = future_value_lump_sum(data.principal, data.annual_return, data.years) + future_value_annuity(
            data.monthly_contribution,
            monthly_rate(data.annual_return),
            months,
        )
    except OverflowError as error:
        raise _overflow("years") from error
    if not math.isfinite(total_value):
        raise _overflow("years")
    total_contributions = data.principal + data.monthly_contribution * months
    if total_contributions == 0:
        raise InvalidProjectionInput(
            [
                ValidationIssue(
                    field="principal",
                    code="zero_contributions",
                    message="principal and monthly_contribution cannot both be zero; return multiple is undefined.",
                )
            ]
        )

    return CompoundResult(
        total_value=total_value,
        total_contributions=total_contributions,
        total_earnings=total_value - total_contributions,
        return_multiple=total_value / total_contributions,
    )
