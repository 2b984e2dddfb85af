"""NSE stock research: board lookup, local trading narrative and top movers."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone

from advisor_server.providers.http import ProviderError
from advisor_server.providers.models import NseQuote
from advisor_server.providers.nse_feed import NseFeedClient
from advisor_server.services.base import (
    ErrorEnvelope,
    ServiceContext,
    ServiceResult,
    envelope_from_provider_error,
    validate_search_term,
)

LOGGER = logging.getLogger(__name__)

HIGH_VOLUME = 100_000
MODERATE_VOLUME = 10_000
DEFAULT_MOVER_LIMIT = 6


@dataclass
class StockResearch:
    stock: NseQuote
    analysis: str
    timestamp: str


def change_percent(stock: NseQuote) -> float | None:
    previous = stock.previous_price
    if previous == 0:
        return None
    return stock.change / previous * 100.0


def volume_status(volume: float) -> str:
    if volume > HIGH_VOLUME:
        return "High"
    if volume > MODERATE_VOLUME:
        return "Moderate"
    return "Low"


def describe_stock(stock: NseQuote, currency: str = "KES") -> str:
    """Deterministic trading narrative built from a single board row."""
    pct = change_percent(stock)
    pct_text = f"{pct:.2f}%" if pct is not None else "n/a"
    if stock.change > 0:
        direction = "positive"
    elif stock.change < 0:
        direction = "negative"
    else:
        direction = "neutral"
    status = volume_status(stock.volume)

    if stock.volume > HIGH_VOLUME:
        volume_note = "High volume suggests strong market participation and liquidity."
    elif stock.volume == 0:
        volume_note = "No trading activity recorded, which may indicate low liquidity or market closure."
    else:
        volume_note = "Moderate volume suggests steady but not exceptional trading activity."

    if stock.change > 0:
        technical = (
            "The positive price movement suggests bullish sentiment in the short term. "
            "Investors may be responding to favorable market conditions or company-specific news."
        )
    elif stock.change < 0:
        technical = (
            "The price decline indicates bearish pressure. This could be due to profit-taking, "
            "market-wide corrections, or company-specific concerns."
        )
    else:
        technical = (
            "The stock shows price stability with no significant movement, "
            "suggesting equilibrium between buyers and sellers."
        )

    if stock.volume == 0:
        risk = "Zero volume indicates potential liquidity risks."
    elif stock.volume < MODERATE_VOLUME:
        risk = "Lower trading volume may present liquidity challenges for large positions."
    else:
        risk = "Adequate liquidity supports easier position entry and exit."

    return "\n\n".join(
        [
            f"Current Trading Analysis for {stock.name} ({stock.ticker}):",
            (
                f"The stock is currently trading at {currency} {stock.price:.2f}, showing a {direction} movement of "
                f"{pct_text} ({currency} {stock.change:.2f}) from the previous session."
            ),
            (
                f"Volume Analysis: Today's trading volume stands at {stock.volume:,.0f} shares, indicating "
                f"{status.lower()} investor interest. {volume_note}"
            ),
            f"Technical Overview: {technical}",
            (
                "Market Context: As part of the Nairobi Securities Exchange, this stock operates within Kenya's "
                "evolving financial landscape. Consider broader economic factors including interest rates, inflation, "
                "and sector-specific developments when making investment decisions."
            ),
            f"Risk Considerations: {risk}",
        ]
    )


def top_movers(stocks: list[NseQuote], limit: int = DEFAULT_MOVER_LIMIT) -> list[NseQuote]:
    moved = [stock for stock in stocks if stock.change != 0]
    return sorted(moved, key=lambda stock: abs(stock.change), reverse=True)[: max(0, limit)]


class ResearchService:
    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx
        self._lock = threading.Lock()
        self._stocks: list[NseQuote] = []
        self._fetched_at: float | None = None

    def _feed(self) -> NseFeedClient | None:
        provider = self.ctx.get_provider("nse")
        return provider if isinstance(provider, NseFeedClient) else None

    @property
    def last_updated(self) -> float | None:
        with self._lock:
            return self._fetched_at

    def list_stocks(self, refresh: bool = False) -> ServiceResult[list[NseQuote]]:
        with self._lock:
            cached = list(self._stocks)
            fetched_at = self._fetched_at
        if cached and not refresh:
            return ServiceResult(data=cached, source="NSE feed", fetched_at=fetched_at, data_provider="NSE feed")

        feed = self._feed()
        if feed is None:
            return ServiceResult(
                data=None,
                error=ErrorEnvelope(code="NOT_CONFIGURED", message="NSE feed URL is not configured.", retriable=False),
            )
        try:
            stocks = feed.list_stocks()
        except ProviderError as error:
            LOGGER.warning("nse feed refresh failed: code=%s status=%s", error.code, error.status)
            if cached:
                return ServiceResult(
                    data=cached,
                    source="NSE feed",
                    warning="Failed to refresh NSE data; showing the last loaded board.",
                    fetched_at=fetched_at,
                    data_provider="NSE feed",
                )
            return ServiceResult(data=None, error=envelope_from_provider_error(error))

        now = time.time()
        with self._lock:
            self._stocks = list(stocks)
            self._fetched_at = now
        LOGGER.info("nse feed refreshed: stocks=%s", len(stocks))
        return ServiceResult(data=list(stocks), source="NSE feed", fetched_at=now, data_provider="NSE feed")

    def find_stock(self, term: str) -> ServiceResult[StockResearch]:
        clean = validate_search_term(term)
        board = self.list_stocks(refresh=True)
        if board.data is None:
            return ServiceResult(data=None, error=board.error)

        needle = clean.upper()
        match = next((stock for stock in board.data if stock.ticker == needle), None)
        if match is None:
            match = next((stock for stock in board.data if needle in stock.name.upper()), None)
        if match is None:
            return ServiceResult(
                data=None,
                source=board.source,
                error=ErrorEnvelope(
                    code="NOT_FOUND",
                    message=f'Stock symbol "{needle}" not found in NSE listings.',
                    retriable=False,
                ),
            )
        research = StockResearch(
            stock=match,
            analysis=describe_stock(match, self.ctx.currency),
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )
        return ServiceResult(
            data=research,
            source=board.source,
            warning=board.warning,
            fetched_at=board.fetched_at,
            data_provider=board.data_provider,
        )

    def get_top_movers(self, limit: int = DEFAULT_MOVER_LIMIT) -> ServiceResult[list[NseQuote]]:
        board = self.list_stocks()
        if board.data is None:
            return ServiceResult(data=None, error=board.error)
        return ServiceResult(
            data=top_movers(board.data, limit),
            source=board.source,
            warning=board.warning,
            fetched_at=board.fetched_at,
            data_provider=board.data_provider,
        )
