"""Financial projection engine."""

from advisor_server.planning.models import (
    AdvisorProfile,
    AssetAllocation,
    CompoundInput,
    CompoundResult,
    GoalInput,
    GoalResult,
    Holding,
    HoldingView,
    PortfolioMetrics,
    Recommendation,
    RetirementInput,
    RetirementResult,
)
from advisor_server.planning.portfolio_metrics import build_holding_views, recommendations, summarize_portfolio
from advisor_server.planning.projections import project_compound, project_goal, project_retirement
from advisor_server.planning.validation import InvalidProjectionInput

__all__ = [
    "AdvisorProfile",
    "AssetAllocation",
    "CompoundInput",
    "CompoundResult",
    "GoalInput",
    "GoalResult",
    "Holding",
    "HoldingView",
    "InvalidProjectionInput",
    "PortfolioMetrics",
    "Recommendation",
    "RetirementInput",
    "RetirementResult",
    "build_holding_views",
    "project_compound",
    "project_goal",
    "project_retirement",
    "recommendations",
    "summarize_portfolio",
]
