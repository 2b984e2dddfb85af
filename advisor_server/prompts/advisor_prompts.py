"""MCP prompts for planning, portfolio and market workflows."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP


def _require_text(name: str, value: str) -> str:
    clean = value.strip()
    if not clean:
        raise ValueError(f"Missing required argument: {name}")
    return clean


def register_advisor_prompts(mcp: FastMCP) -> None:
    @mcp.prompt(name="retirement_review", description="Check whether a saver is on track for retirement")
    def retirement_review(current_age: int, retirement_age: int, monthly_contribution: float) -> str:
        """Build the retirement_review prompt message."""
        if retirement_age <= current_age:
            raise ValueError("retirement_age must be greater than current_age")
        return (
            f"Review retirement readiness for a {current_age}-year-old retiring at {retirement_age}. "
            "Call tools in this exact order:\n"
            f"1) calculate_retirement(current_age={current_age}, retirement_age={retirement_age}, "
            f"monthly_contribution={monthly_contribution})\n"
            f"2) calculate_compound_interest(monthly_contribution={monthly_contribution}, "
            f"years={retirement_age - current_age})\n"
            "3) get_personalized_advice(goals='retirement')\n"
            "Output: projected capital, capital needed under the 4% rule, surplus or shortfall, "
            "monthly retirement income, and concrete steps to close any gap."
        )

    @mcp.prompt(name="goal_plan", description="Build a savings plan for a named financial goal")
    def goal_plan(goal_name: str, target_amount: float, risk_tolerance: str = "moderate") -> str:
        """Build the goal_plan prompt message."""
        goal_name = _require_text("goal_name", goal_name)
        risk_tolerance = _require_text("risk_tolerance", risk_tolerance).lower()
        return (
            f"Plan the goal '{goal_name}' with target {target_amount:,.0f}. Call tools in this exact order:\n"
            f"1) calculate_goal(goal_name='{goal_name}', target_amount={target_amount}, "
            f"risk_tolerance='{risk_tolerance}')\n"
            f"2) get_personalized_advice(goals='{goal_name}', risk_tolerance='{risk_tolerance}')\n"
            "Output: months to goal, projected growth, recommended stocks/bonds/cash split and a monthly action plan."
        )

    @mcp.prompt(name="portfolio_review", description="Health check of the current holdings session")
    def portfolio_review() -> str:
        """Build the portfolio_review prompt message."""
        return (
            "Review the current portfolio. Call tools in this exact order:\n"
            "1) analyze_portfolio()\n"
            "2) get_ai_portfolio_analysis()\n"
            "3) get_market_overview()\n"
            "Output: total value and P&L, allocation by holding, the heuristic risk and diversification scores "
            "(state that they are simple heuristics), and rebalancing ideas in the current market context."
        )

    @mcp.prompt(name="market_brief", description="Morning brief on the Nairobi Securities Exchange")
    def market_brief(symbol: str = "") -> str:
        """Build the market_brief prompt message."""
        steps = [
            "1) get_market_overview()",
            "2) get_top_movers(limit=6)",
        ]
        if symbol.strip():
            clean = symbol.strip().upper()
            steps.append(f"3) search_nse_stock(term='{clean}')")
            steps.append(f"4) get_stock_ai_insights(symbol='{clean}')")
        return (
            "Create an NSE market brief. Call tools in this exact order:\n"
            + "\n".join(steps)
            + "\nOutput: market sentiment, key movers, economic factors, opportunities and risks to watch."
        )
