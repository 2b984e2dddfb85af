"""Domain tool registry entrypoint."""

from __future__ import annotations

from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from advisor_server.runtime.monitoring import HealthSnapshot, ServerMetrics
from advisor_server.services.advisory_service import AdvisoryService
from advisor_server.services.base import ServiceContext
from advisor_server.services.planning_service import PlanningService
from advisor_server.services.portfolio_service import PortfolioService
from advisor_server.services.research_service import ResearchService
from advisor_server.tools.market_tools import register_market_tools
from advisor_server.tools.planning_tools import register_planning_tools
from advisor_server.tools.portfolio_tools import register_portfolio_tools
from advisor_server.tools.research_tools import register_research_tools
from advisor_server.tools.runtime_tools import register_runtime_tools

PROVIDER_KEYS = ("brave", "groq", "nse")


@dataclass
class ToolServices:
    advisory: AdvisoryService
    planning: PlanningService
    portfolio: PortfolioService
    research: ResearchService
    metrics: ServerMetrics | None
    ctx: ServiceContext

    @property
    def currency(self) -> str:
        return self.ctx.currency

    def health(self) -> HealthSnapshot:
        providers = {key: self.ctx.get_provider(key) is not None for key in PROVIDER_KEYS}
        metrics = self.metrics or ServerMetrics()
        return metrics.snapshot(providers)


def build_tool_services(ctx: ServiceContext) -> ToolServices:
    advisory = AdvisoryService(ctx)
    metrics = ctx.server_metrics if isinstance(ctx.server_metrics, ServerMetrics) else None
    return ToolServices(
        advisory=advisory,
        planning=PlanningService(advisory),
        portfolio=PortfolioService(advisory),
        research=ResearchService(ctx),
        metrics=metrics,
        ctx=ctx,
    )


def register_all_tools(mcp: FastMCP, services: ToolServices) -> None:
    register_planning_tools(mcp, services)
    register_portfolio_tools(mcp, services)
    register_research_tools(mcp, services)
    register_market_tools(mcp, services)
    register_runtime_tools(mcp, services)
