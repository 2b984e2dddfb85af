"""Planning and portfolio resource definitions."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from advisor_server.planning.projections import RISK_TIER_ALLOCATIONS, RISK_TIER_RETURNS

if TYPE_CHECKING:
    from advisor_server.tools.registry import ToolServices

RISK_TIERS_URI = "planning://risk-tiers"
CURRENT_PORTFOLIO_URI = "portfolio://current"


def risk_tier_table() -> dict[str, dict[str, object]]:
    return {
        tier: {
            "expected_annual_return_percent": RISK_TIER_RETURNS[tier],
            "allocation": asdict(RISK_TIER_ALLOCATIONS[tier]),
        }
        for tier in RISK_TIER_RETURNS
    }


def register_planning_resources(mcp: FastMCP, services: "ToolServices") -> None:
    @mcp.resource(
        RISK_TIERS_URI,
        name="risk-tiers",
        title="Risk Tolerance Tiers",
        description="Expected annual return and stocks/bonds/cash allocation for each risk tolerance tier.",
        mime_type="application/json",
    )
    def risk_tiers_resource() -> str:
        return json.dumps(risk_tier_table(), ensure_ascii=True)

    @mcp.resource(
        CURRENT_PORTFOLIO_URI,
        name="current-portfolio",
        title="Current Portfolio Session",
        description="Holdings in the current session with their computed metrics.",
        mime_type="application/json",
    )
    def current_portfolio_resource() -> str:
        holdings = services.portfolio.snapshot()
        if not holdings:
            raise ValueError("Portfolio resource not found. Add a holding first.")
        analysis = services.portfolio.analyze()
        report = analysis.data
        payload = {
            "holdings": [asdict(holding) for holding in holdings],
            "metrics": asdict(report.metrics) if report else None,
            "risk_band": report.risk_band if report else None,
            "diversification_band": report.diversification_band if report else None,
            "recommendations": [asdict(note) for note in report.recommendations] if report else [],
        }
        return json.dumps(payload, ensure_ascii=True)
