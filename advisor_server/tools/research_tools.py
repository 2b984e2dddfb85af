"""NSE stock research MCP tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from advisor_server.lib.formatters import format_response, line_count, line_money, line_percent, numbered
from advisor_server.providers.models import NseQuote
from advisor_server.services.base import validate_symbol
from advisor_server.services.research_service import change_percent
from advisor_server.tools.common import ensure_data, source_lines, tool_timer

if TYPE_CHECKING:
    from advisor_server.tools.registry import ToolServices


def _mover_text(stock: NseQuote, currency: str) -> str:
    pct = change_percent(stock)
    pct_text = f"{pct:+.2f}%" if pct is not None else "n/a"
    return f"{stock.ticker} ({stock.name}): {currency} {stock.price:.2f} ({stock.change:+.2f}, {pct_text})"


def register_research_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Look up an NSE-listed stock by ticker or name and describe today's trading.")
    def search_nse_stock(term: str) -> str:
        with tool_timer(services.metrics, "search_nse_stock", symbol=term):
            result = services.research.find_stock(term)
            research = ensure_data(result.data, result.error)
            stock = research.stock
            return format_response(
                title=f"{stock.name} ({stock.ticker})",
                source=result.source,
                warning=result.warning,
                lines=[
                    line_money("Price", stock.price, services.currency),
                    line_money("Change", stock.change, services.currency, signed=True),
                    line_percent("Change %", change_percent(stock), signed=True),
                    line_count("Volume", stock.volume),
                    f"As of: {research.timestamp}",
                    "",
                    research.analysis,
                ],
            )

    @mcp.tool(description="Largest absolute price movers on the NSE board.")
    def get_top_movers(limit: int = 6) -> str:
        with tool_timer(services.metrics, "get_top_movers"):
            result = services.research.get_top_movers(limit)
            rows = ensure_data(result.data, result.error)
            lines = numbered(_mover_text(stock, services.currency) for stock in rows)
            return format_response(
                title="NSE top movers",
                source=result.source,
                warning=result.warning,
                lines=lines or ["No price changes recorded on the board."],
            )

    @mcp.tool(description="AI investment insights for an NSE stock grounded on live web search results.")
    def get_stock_ai_insights(symbol: str) -> str:
        with tool_timer(services.metrics, "get_stock_ai_insights", symbol=symbol):
            clean = validate_symbol(symbol)
            result = services.advisory.stock_insights(clean)
            report = ensure_data(result.data, result.error)
            return format_response(
                title=f"AI insights: {clean}",
                source=result.source,
                warning=result.warning,
                lines=[report.analysis, *source_lines(report.search_results)],
            )
