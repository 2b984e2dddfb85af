"""Input validation for the projection engine."""

from __future__ import annotations

import math
from typing import Sequence

from advisor_server.planning.models import (
    RISK_TOLERANCES,
    AdvisorProfile,
    CompoundInput,
    GoalInput,
    Holding,
    RetirementInput,
    ValidationIssue,
)


class InvalidProjectionInput(ValueError):
    """Raised when a projector receives input it cannot project."""

    def __init__(self, issues: Sequence[ValidationIssue]) -> None:
        self.issues = list(issues)
        super().__init__("; ".join(f"{issue.field}: {issue.message}" for issue in self.issues))

    def as_dicts(self) -> list[dict[str, str]]:
        return [{"field": issue.field, "message": issue.message, "code": issue.code} for issue in self.issues]


def _number(value: object) -> float | None:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return float(value)
    return None


def _check_non_negative(issues: list[ValidationIssue], field: str, value: object) -> None:
    number = _number(value)
    if number is None or number < 0:
        issues.append(ValidationIssue(field=field, code="negative_amount", message=f"{field} must be a finite number >= 0."))


def _check_positive(issues: list[ValidationIssue], field: str, value: object) -> None:
    number = _number(value)
    if number is None or number <= 0:
        issues.append(ValidationIssue(field=field, code="non_positive", message=f"{field} must be a finite number > 0."))


def _check_rate(issues: list[ValidationIssue], field: str, value: object) -> None:
    number = _number(value)
    if number is None:
        issues.append(ValidationIssue(field=field, code="invalid_rate", message=f"{field} must be a finite percentage."))
    elif number <= -100.0:
        issues.append(ValidationIssue(field=field, code="invalid_rate", message=f"{field} must be greater than -100%."))


def _check_whole(issues: list[ValidationIssue], field: str, value: object) -> None:
    number = _number(value)
    if number is None or not number.is_integer():
        issues.append(ValidationIssue(field=field, code="not_integer", message=f"{field} must be a whole number."))


def _check_risk(issues: list[ValidationIssue], field: str, value: object) -> None:
    if value not in RISK_TOLERANCES:
        issues.append(
            ValidationIssue(field=field, code="invalid_risk_tolerance", message=f"{field} must be one of {list(RISK_TOLERANCES)}.")
        )


def validate_retirement_input(data: RetirementInput) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    _check_whole(issues, "current_age", data.current_age)
    _check_whole(issues, "retirement_age", data.retirement_age)
    if not issues and data.retirement_age <= data.current_age:
        issues.append(
            ValidationIssue(
                field="retirement_age",
                code="non_positive_horizon",
                message="retirement_age must be greater than current_age.",
            )
        )
    _check_non_negative(issues, "current_savings", data.current_savings)
    _check_non_negative(issues, "monthly_contribution", data.monthly_contribution)
    _check_rate(issues, "expected_return", data.expected_return)
    _check_non_negative(issues, "current_income", data.current_income)
    _check_non_negative(issues, "replace_income", data.replace_income)
    return issues


def validate_goal_input(data: GoalInput) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    _check_positive(issues, "target_amount", data.target_amount)
    _check_non_negative(issues, "current_amount", data.current_amount)
    contribution = _number(data.monthly_contribution)
    if contribution is None or contribution <= 0:
        issues.append(
            ValidationIssue(
                field="monthly_contribution",
                code="infinite_horizon",
                message="monthly_contribution must be > 0 or the goal is never reached.",
            )
        )
    _check_whole(issues, "time_horizon", data.time_horizon)
    _check_positive(issues, "time_horizon", data.time_horizon)
    _check_risk(issues, "risk_tolerance", data.risk_tolerance)
    return issues


def validate_compound_input(data: CompoundInput) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    _check_non_negative(issues, "principal", data.principal)
    _check_non_negative(issues, "monthly_contribution", data.monthly_contribution)
    _check_rate(issues, "annual_return", data.annual_return)
    _check_whole(issues, "years", data.years)
    _check_positive(issues, "years", data.years)
    return issues


def validate_holdings(holdings: Sequence[Holding]) -> list[ValidationIssue]:
    if not holdings:
        return [ValidationIssue(field="holdings", code="empty_portfolio", message="At least one holding is required.")]
    issues: list[ValidationIssue] = []
    for idx, holding in enumerate(holdings):
        prefix = f"holdings[{idx}]"
        if not isinstance(holding.symbol, str) or not holding.symbol.strip():
            issues.append(ValidationIssue(field=f"{prefix}.symbol", code="invalid_symbol", message="symbol must be non-empty."))
        _check_positive(issues, f"{prefix}.shares", holding.shares)
        _check_positive(issues, f"{prefix}.avg_price", holding.avg_price)
        _check_positive(issues, f"{prefix}.current_price", holding.current_price)
    return issues


def validate_advisor_profile(profile: AdvisorProfile) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    _check_whole(issues, "age", profile.age)
    _check_positive(issues, "age", profile.age)
    _check_non_negative(issues, "income", profile.income)
    _check_non_negative(issues, "current_savings", profile.current_savings)
    _check_risk(issues, "risk_tolerance", profile.risk_tolerance)
    _check_whole(issues, "time_horizon", profile.time_horizon)
    _check_positive(issues, "time_horizon", profile.time_horizon)
    if not isinstance(profile.goals, str) or not profile.goals.strip():
        issues.append(ValidationIssue(field="goals", code="missing_goals", message="goals must describe at least one goal."))
    return issues


def require_valid(issues: list[ValidationIssue]) -> None:
    if issues:
        raise InvalidProjectionInput(issues)
