import asyncio
import json

import pytest
from mcp.server.fastmcp import FastMCP

from advisor_server.providers.brave_search import BraveSearchClient
from advisor_server.providers.groq_client import GroqClient
from advisor_server.providers.models import NseQuote, SearchResult
from advisor_server.providers.nse_feed import NseFeedClient
from advisor_server.runtime.monitoring import ServerMetrics
from advisor_server.services.base import ServiceContext
from advisor_server.tools.registry import build_tool_services, register_all_tools


def _call_tool_result_string(mcp: FastMCP, name: str, arguments: dict[str, object]) -> str:
    _, metadata = asyncio.run(mcp.call_tool(name, arguments))
    return str(metadata.get("result") or "")


def _server(providers: dict[str, object] | None = None) -> tuple[FastMCP, object]:
    mcp = FastMCP(name="test-advisor-tools")
    services = build_tool_services(ServiceContext(providers=providers or {}, server_metrics=ServerMetrics()))
    register_all_tools(mcp, services)
    return mcp, services


def _live_providers(monkeypatch) -> dict[str, object]:
    brave = BraveSearchClient("k", "https://search.test")
    groq = GroqClient("k", "m", "https://groq.test")
    feed = NseFeedClient("https://feed.test")
    monkeypatch.setattr(
        brave,
        "search",
        lambda query, count=10: [SearchResult(title="NSE gains", url="https://news.test/1", description="Banks up")],
    )
    monkeypatch.setattr(groq, "complete", lambda prompt: "Outlook is stable.\n\nWatch bank earnings.")
    monkeypatch.setattr(
        feed,
        "list_stocks",
        lambda: [
            NseQuote(ticker="SCOM", name="Safaricom Plc", volume=2_500_000, price=17.5, change=-0.5),
            NseQuote(ticker="EQTY", name="Equity Group Holdings", volume=400_000, price=41.0, change=1.5),
        ],
    )
    return {"brave": brave, "groq": groq, "nse": feed}


def test_all_tools_are_registered() -> None:
    mcp, _ = _server()
    names = {tool.name for tool in asyncio.run(mcp.list_tools())}
    assert names == {
        "calculate_retirement",
        "calculate_goal",
        "calculate_compound_interest",
        "get_personalized_advice",
        "analyze_portfolio",
        "add_holding",
        "remove_holding",
        "get_ai_portfolio_analysis",
        "search_nse_stock",
        "get_top_movers",
        "get_stock_ai_insights",
        "get_market_overview",
        "get_server_health",
    }


def test_calculate_compound_interest_defaults() -> None:
    mcp, _ = _server()
    parsed = json.loads(_call_tool_result_string(mcp, "calculate_compound_interest", {}))
    assert parsed["source"] == "Local projection"
    assert parsed["data"]["total_contributions"] == 130000.0
    assert parsed["data"]["total_value"] > 130000.0
    assert "not a licensed financial advisor" in parsed["disclaimer"]


def test_calculate_goal_returns_allocation() -> None:
    mcp, _ = _server()
    parsed = json.loads(_call_tool_result_string(mcp, "calculate_goal", {"risk_tolerance": "Aggressive"}))
    assert parsed["data"]["recommended_allocation"] == {"stocks": 80, "bonds": 15, "cash": 5}
    assert parsed["data"]["months_to_goal"] == 40
    assert parsed["data"]["goal_name"] == "House Down Payment"


def test_calculate_retirement_invalid_input_is_an_error_envelope() -> None:
    mcp, _ = _server()
    parsed = json.loads(_call_tool_result_string(mcp, "calculate_retirement", {"current_age": 70, "retirement_age": 65}))
    assert parsed["error"] is True
    assert parsed["code"] == "INVALID_INPUT"
    assert parsed["details"][0]["code"] == "non_positive_horizon"


def test_personalized_advice_splits_sections(monkeypatch) -> None:
    mcp, _ = _server(_live_providers(monkeypatch))
    parsed = json.loads(_call_tool_result_string(mcp, "get_personalized_advice", {"goals": "education"}))
    assert parsed["source"] == "Groq"
    assert parsed["data"]["sections"] == ["Outlook is stable.", "Watch bank earnings."]


def test_portfolio_session_round_trip() -> None:
    mcp, _ = _server()
    added = json.loads(_call_tool_result_string(mcp, "add_holding", {"symbol": "nvda", "shares": 2, "avg_price": 500}))
    assert added["data"]["current_price"] == 722.48

    analysis = json.loads(_call_tool_result_string(mcp, "analyze_portfolio", {}))
    assert analysis["data"]["metrics"]["holding_count"] == 4
    assert analysis["data"]["holdings"][-1]["symbol"] == "NVDA"

    removed = json.loads(_call_tool_result_string(mcp, "remove_holding", {"index": 3}))
    assert removed["data"]["symbol"] == "NVDA"
    missing = json.loads(_call_tool_result_string(mcp, "remove_holding", {"index": 3}))
    assert missing["code"] == "NOT_FOUND"


def test_ai_portfolio_analysis_without_provider_falls_back() -> None:
    mcp, _ = _server()
    parsed = json.loads(_call_tool_result_string(mcp, "get_ai_portfolio_analysis", {}))
    assert parsed["data"]["analysis"] == "Unable to generate analysis at this time. Please try again later."
    assert parsed["warning"] == "AI analysis is not configured."


def test_search_nse_stock_text(monkeypatch) -> None:
    mcp, _ = _server(_live_providers(monkeypatch))
    text = _call_tool_result_string(mcp, "search_nse_stock", {"term": "safaricom"})
    assert text.startswith("Safaricom Plc (SCOM)")
    assert "Price: KES 17.50" in text
    assert "Current Trading Analysis for Safaricom Plc (SCOM):" in text
    assert "not a licensed financial advisor" in text


def test_search_nse_stock_not_found_raises(monkeypatch) -> None:
    mcp, _ = _server(_live_providers(monkeypatch))
    with pytest.raises(Exception) as exc:
        _call_tool_result_string(mcp, "search_nse_stock", {"term": "ZZZZ"})
    assert "NOT_FOUND" in str(exc.value)


def test_top_movers_and_ai_tools(monkeypatch) -> None:
    mcp, _ = _server(_live_providers(monkeypatch))
    movers = _call_tool_result_string(mcp, "get_top_movers", {})
    assert movers.index("EQTY") < movers.index("SCOM")

    insights = _call_tool_result_string(mcp, "get_stock_ai_insights", {"symbol": "scom"})
    assert insights.startswith("AI insights: SCOM")
    assert "Source: Groq" in insights
    assert "1. NSE gains (https://news.test/1)" in insights

    overview = _call_tool_result_string(mcp, "get_market_overview", {})
    assert "Outlook is stable." in overview


def test_server_health_counts_calls() -> None:
    mcp, _ = _server({"nse": NseFeedClient("https://feed.test")})
    _call_tool_result_string(mcp, "calculate_compound_interest", {})
    health = json.loads(_call_tool_result_string(mcp, "get_server_health", {}))
    assert health["total_requests"] == 1
    assert health["error_rate"] == 0.0
    assert health["providers"] == {"brave": False, "groq": False, "nse": True}


def test_compound_overflow_is_an_error_envelope() -> None:
    mcp, _ = _server()
    parsed = json.loads(_call_tool_result_string(mcp, "calculate_compound_interest", {"years": 10000}))
    assert parsed["error"] is True
    assert parsed["code"] == "INVALID_INPUT"
    assert parsed["details"][0]["code"] == "overflow"


def test_analyze_portfolio_includes_bands_and_recommendations() -> None:
    mcp, _ = _server()
    parsed = json.loads(_call_tool_result_string(mcp, "analyze_portfolio", {}))
    assert parsed["data"]["risk_band"] == "High"
    assert parsed["data"]["diversification_band"] == "Medium"
    titles = [note["title"] for note in parsed["data"]["recommendations"]]
    assert "Improve Diversification" not in titles
    assert titles[0] == "High Concentration"


def test_invalid_symbol_counts_as_failed_call(monkeypatch) -> None:
    mcp, _ = _server(_live_providers(monkeypatch))
    with pytest.raises(Exception):
        _call_tool_result_string(mcp, "get_stock_ai_insights", {"symbol": "!!"})
    health = json.loads(_call_tool_result_string(mcp, "get_server_health", {}))
    assert health["total_requests"] == 1
    assert health["error_rate"] == 1.0
