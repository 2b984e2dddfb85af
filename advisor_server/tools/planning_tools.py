"""Financial-planning MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from mcp.server.fastmcp import FastMCP

from advisor_server.lib.formatters import split_sections
from advisor_server.planning.models import AdvisorProfile, CompoundInput, GoalInput, RetirementInput, RiskTolerance
from advisor_server.runtime.response import result_response
from advisor_server.services.base import ServiceResult
from advisor_server.tools.common import tool_timer

if TYPE_CHECKING:
    from advisor_server.tools.registry import ToolServices


def _risk(value: str) -> RiskTolerance:
    return cast(RiskTolerance, value.strip().lower())


def register_planning_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Project retirement savings against the capital needed under the 4% rule.")
    def calculate_retirement(
        current_age: int = 30,
        retirement_age: int = 65,
        current_savings: float = 50000,
        monthly_contribution: float = 1000,
        expected_return: float = 7,
        current_income: float = 75000,
        replace_income: float = 80,
    ) -> str:
        with tool_timer(services.metrics, "calculate_retirement"):
            result = services.planning.retirement(
                RetirementInput(
                    current_age=current_age,
                    retirement_age=retirement_age,
                    current_savings=current_savings,
                    monthly_contribution=monthly_contribution,
                    expected_return=expected_return,
                    current_income=current_income,
                    replace_income=replace_income,
                )
            )
            return result_response(result)

    @mcp.tool(description="Plan a savings goal: months to target, projected growth and a risk-tier allocation.")
    def calculate_goal(
        target_amount: float = 100000,
        current_amount: float = 20000,
        monthly_contribution: float = 2000,
        time_horizon: int = 36,
        risk_tolerance: str = "moderate",
        goal_name: str = "House Down Payment",
    ) -> str:
        with tool_timer(services.metrics, "calculate_goal"):
            result = services.planning.goal(
                GoalInput(
                    target_amount=target_amount,
                    current_amount=current_amount,
                    monthly_contribution=monthly_contribution,
                    time_horizon=time_horizon,
                    risk_tolerance=_risk(risk_tolerance),
                    goal_name=goal_name.strip(),
                )
            )
            return result_response(result)

    @mcp.tool(description="Compound-interest growth of a principal plus monthly contributions.")
    def calculate_compound_interest(
        principal: float = 10000,
        monthly_contribution: float = 500,
        annual_return: float = 8,
        years: int = 20,
    ) -> str:
        with tool_timer(services.metrics, "calculate_compound_interest"):
            result = services.planning.compound(
                CompoundInput(
                    principal=principal,
                    monthly_contribution=monthly_contribution,
                    annual_return=annual_return,
                    years=years,
                )
            )
            return result_response(result)

    @mcp.tool(description="Personalized AI financial-planning advice for an investor profile.")
    def get_personalized_advice(
        age: int = 30,
        income: float = 100000,
        current_savings: float = 50000,
        risk_tolerance: str = "moderate",
        goals: str = "retirement",
        time_horizon: int = 20,
    ) -> str:
        with tool_timer(services.metrics, "get_personalized_advice"):
            result = services.planning.personalized_advice(
                AdvisorProfile(
                    age=age,
                    income=income,
                    current_savings=current_savings,
                    risk_tolerance=_risk(risk_tolerance),
                    goals=goals,
                    time_horizon=time_horizon,
                )
            )
            if result.data is None:
                return result_response(result)
            report = result.data
            shaped = ServiceResult(
                data={
                    "advice": report.analysis,
                    "sections": split_sections(report.analysis),
                    "timestamp": report.timestamp,
                },
                source=result.source,
                warning=result.warning,
                fetched_at=result.fetched_at,
                data_provider=result.data_provider,
                data_license=result.data_license,
            )
            return result_response(shaped)
