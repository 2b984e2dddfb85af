"""Prompt builders for the completion provider."""

from __future__ import annotations

from typing import Sequence

from advisor_server.planning.models import AdvisorProfile, Holding
from advisor_server.providers.models import SearchResult

MARKET_OVERVIEW_QUERY = "NSE Nairobi Securities Exchange market performance today Kenya stocks"


def stock_search_query(symbol: str) -> str:
    return f"NSE {symbol} stock price Kenya current market data"


def _result_lines(results: Sequence[SearchResult]) -> str:
    if not results:
        return "- No recent search results were available."
    return "\n".join(f"- {item.title}: {item.description}" for item in results)


def build_stock_analysis_prompt(symbol: str, results: Sequence[SearchResult]) -> str:
    return (
        f"Analyze this NSE stock data for {symbol} and provide investment insights:\n\n"
        "Search Results:\n"
        f"{_result_lines(results)}\n\n"
        "Please provide:\n"
        "1. Current price estimate (if available)\n"
        "2. Recent performance analysis\n"
        "3. Investment recommendation (buy/hold/sell)\n"
        "4. Risk assessment\n"
        "5. Key factors affecting the stock\n\n"
        "Focus on Kenyan market context and economic factors."
    )


def build_market_overview_prompt(results: Sequence[SearchResult]) -> str:
    return (
        "Analyze the current Kenyan stock market conditions based on this data:\n\n"
        f"{_result_lines(results)}\n\n"
        "Please provide:\n"
        "1. Overall market sentiment\n"
        "2. Key market movers\n"
        "3. Economic factors affecting the market\n"
        "4. Investment opportunities\n"
        "5. Risk factors to watch\n\n"
        "Focus on actionable insights for Kenyan investors."
    )


def build_planning_advice_prompt(profile: AdvisorProfile, currency: str = "KES") -> str:
    return (
        "Provide personalized financial planning advice for a Kenyan investor with this profile:\n\n"
        f"Age: {profile.age}\n"
        f"Income: {currency} {profile.income:,.0f}\n"
        f"Risk Tolerance: {profile.risk_tolerance}\n"
        f"Investment Goals: {profile.goals}\n"
        f"Time Horizon: {profile.time_horizon} years\n"
        f"Current Savings: {currency} {profile.current_savings:,.0f}\n\n"
        "Consider Kenyan investment options like:\n"
        "- NSE stocks (Safaricom, Equity Bank, KCB, etc.)\n"
        "- Government securities (Treasury Bills, Bonds)\n"
        "- Money market funds\n"
        "- Real estate investment\n"
        "- Pension schemes (NSSF, private pension)\n\n"
        "Provide specific allocation recommendations and explain the reasoning."
    )


def build_portfolio_analysis_prompt(holdings: Sequence[Holding], currency: str = "KES") -> str:
    holdings_data = ", ".join(
        f"{holding.symbol}: {holding.shares:g} shares at {currency} {holding.current_price:,.2f}" for holding in holdings
    )
    return (
        "Analyze this Kenyan stock portfolio and provide recommendations:\n\n"
        f"Holdings: {holdings_data}\n\n"
        "Please assess:\n"
        "1. Portfolio diversification across sectors\n"
        "2. Risk level and concentration\n"
        "3. Performance relative to NSE index\n"
        "4. Rebalancing recommendations\n"
        "5. Additional stocks to consider\n\n"
        "Focus on Kenyan market dynamics and provide actionable advice."
    )
