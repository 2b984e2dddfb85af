"""Portfolio-domain MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from advisor_server.lib.formatters import split_sections
from advisor_server.runtime.response import result_response
from advisor_server.services.base import ServiceResult
from advisor_server.tools.common import tool_timer

if TYPE_CHECKING:
    from advisor_server.tools.registry import ToolServices


def register_portfolio_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Value the current holdings: P&L, heuristic risk/diversification scores and allocation.")
    def analyze_portfolio() -> str:
        with tool_timer(services.metrics, "analyze_portfolio"):
            return result_response(services.portfolio.analyze())

    @mcp.tool(description="Add a holding to the portfolio session. current_price defaults to a reference price.")
    def add_holding(symbol: str, shares: float, avg_price: float, current_price: float | None = None) -> str:
        with tool_timer(services.metrics, "add_holding", symbol=symbol):
            return result_response(services.portfolio.add_holding(symbol, shares, avg_price, current_price))

    @mcp.tool(description="Remove the holding at a zero-based position from the portfolio session.")
    def remove_holding(index: int) -> str:
        with tool_timer(services.metrics, "remove_holding"):
            return result_response(services.portfolio.remove_holding(index))

    @mcp.tool(description="AI review of the current holdings: diversification, concentration and rebalancing.")
    def get_ai_portfolio_analysis() -> str:
        with tool_timer(services.metrics, "get_ai_portfolio_analysis"):
            result = services.portfolio.ai_review()
            if result.data is None:
                return result_response(result)
            shaped = ServiceResult(
                data={
                    "analysis": result.data.analysis,
                    "sections": split_sections(result.data.analysis),
                    "timestamp": result.data.timestamp,
                },
                source=result.source,
                warning=result.warning,
                fetched_at=result.fetched_at,
                data_provider=result.data_provider,
                data_license=result.data_license,
            )
            return result_response(shaped)
