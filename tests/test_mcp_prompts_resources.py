import asyncio
import json
from types import SimpleNamespace

import pytest
from mcp.server.fastmcp import FastMCP

from advisor_server.prompts.advisor_prompts import register_advisor_prompts
from advisor_server.resources.planning_resources import register_planning_resources, risk_tier_table
from advisor_server.services.advisory_service import AdvisoryService
from advisor_server.services.base import ServiceContext
from advisor_server.services.portfolio_service import PortfolioService


def _resource_server(holdings=None) -> FastMCP:
    mcp = FastMCP(name="test-resources")
    advisory = AdvisoryService(ServiceContext())
    portfolio = PortfolioService(advisory) if holdings is None else PortfolioService(advisory, holdings=holdings)
    register_planning_resources(mcp, SimpleNamespace(portfolio=portfolio))
    return mcp


def test_prompts_list_and_get_happy_path() -> None:
    mcp = FastMCP(name="test-prompts")
    register_advisor_prompts(mcp)

    prompts = asyncio.run(mcp.list_prompts())
    assert {prompt.name for prompt in prompts} == {"retirement_review", "goal_plan", "portfolio_review", "market_brief"}

    prompt_result = asyncio.run(
        mcp.get_prompt("retirement_review", {"current_age": "35", "retirement_age": "60", "monthly_contribution": "15000"})
    )
    rendered = str(prompt_result.messages[0].content.text)
    assert "calculate_retirement(current_age=35, retirement_age=60" in rendered
    assert "years=25" in rendered


def test_market_brief_adds_symbol_steps() -> None:
    mcp = FastMCP(name="test-prompts-brief")
    register_advisor_prompts(mcp)

    plain = str(asyncio.run(mcp.get_prompt("market_brief", {})).messages[0].content.text)
    assert "search_nse_stock" not in plain

    focused = str(asyncio.run(mcp.get_prompt("market_brief", {"symbol": "scom"})).messages[0].content.text)
    assert "search_nse_stock(term='SCOM')" in focused
    assert "get_stock_ai_insights(symbol='SCOM')" in focused


def test_prompt_invalid_name() -> None:
    mcp = FastMCP(name="test-prompts-invalid-name")
    register_advisor_prompts(mcp)

    with pytest.raises(ValueError, match="Unknown prompt"):
        asyncio.run(mcp.get_prompt("unknown_prompt", {}))


def test_prompt_missing_required_argument() -> None:
    mcp = FastMCP(name="test-prompts-missing-arg")
    register_advisor_prompts(mcp)

    with pytest.raises(ValueError, match="Missing required arguments"):
        asyncio.run(mcp.get_prompt("goal_plan", {}))


def test_retirement_prompt_rejects_inverted_ages() -> None:
    mcp = FastMCP(name="test-prompts-ages")
    register_advisor_prompts(mcp)

    with pytest.raises(Exception):
        asyncio.run(mcp.get_prompt("retirement_review", {"current_age": "65", "retirement_age": "60", "monthly_contribution": "1"}))


def test_risk_tier_resource() -> None:
    mcp = _resource_server()
    resources = asyncio.run(mcp.list_resources())
    uris = {str(resource.uri) for resource in resources}
    assert {"planning://risk-tiers", "portfolio://current"} <= uris

    contents = asyncio.run(mcp.read_resource("planning://risk-tiers"))
    assert contents[0].mime_type == "application/json"
    data = json.loads(contents[0].content)
    assert data == risk_tier_table()
    assert data["conservative"]["allocation"] == {"stocks": 30, "bonds": 60, "cash": 10}
    assert data["aggressive"]["expected_annual_return_percent"] == 10.0


def test_current_portfolio_resource() -> None:
    mcp = _resource_server()
    contents = asyncio.run(mcp.read_resource("portfolio://current"))
    data = json.loads(contents[0].content)
    assert [holding["symbol"] for holding in data["holdings"]] == ["AAPL", "MSFT", "GOOGL"]
    assert data["metrics"]["holding_count"] == 3
    assert data["risk_band"] == "High"
    assert data["diversification_band"] == "Medium"
    assert [note["title"] for note in data["recommendations"]] == [
        "High Concentration",
        "Regular Rebalancing",
        "Performance Review",
    ]


def test_current_portfolio_resource_not_found() -> None:
    mcp = _resource_server(holdings=())
    with pytest.raises(Exception) as exc:
        asyncio.run(mcp.read_resource("portfolio://current"))
    assert "Portfolio resource not found" in str(exc.value)
