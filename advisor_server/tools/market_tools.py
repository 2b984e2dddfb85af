"""Market-dashboard MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from advisor_server.lib.formatters import format_response
from advisor_server.tools.common import ensure_data, source_lines, tool_timer

if TYPE_CHECKING:
    from advisor_server.tools.registry import ToolServices


def register_market_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="AI overview of Kenyan market conditions from live NSE search results.")
    def get_market_overview() -> str:
        with tool_timer(services.metrics, "get_market_overview"):
            result = services.advisory.market_overview()
            report = ensure_data(result.data, result.error)
            return format_response(
                title="Kenyan market overview",
                source=result.source,
                warning=result.warning,
                lines=[f"As of: {report.timestamp}", "", report.analysis, *source_lines(report.search_results)],
            )
