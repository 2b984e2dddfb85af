"""In-memory holdings session with metrics and AI review."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from advisor_server.planning.models import Holding, HoldingView, PortfolioMetrics, Recommendation, ValidationIssue
from advisor_server.planning.portfolio_metrics import (
    build_holding_views,
    diversification_band,
    recommendations,
    risk_band,
    summarize_portfolio,
)
from advisor_server.planning.validation import InvalidProjectionInput, require_valid, validate_holdings
from advisor_server.services.advisory_service import AdvisoryReport, AdvisoryService
from advisor_server.services.base import (
    ErrorEnvelope,
    ServiceResult,
    envelope_from_invalid_input,
    local_result,
    validate_symbol,
)

LOGGER = logging.getLogger(__name__)

# Used when a holding is added without a live price.
REFERENCE_PRICES: dict[str, float] = {
    "AAPL": 192.53,
    "MSFT": 418.24,
    "GOOGL": 138.21,
    "TSLA": 238.45,
    "AMZN": 155.89,
    "NVDA": 722.48,
}

SAMPLE_HOLDINGS: tuple[Holding, ...] = (
    Holding(symbol="AAPL", shares=50, avg_price=150.00, current_price=192.53),
    Holding(symbol="MSFT", shares=25, avg_price=300.00, current_price=418.24),
    Holding(symbol="GOOGL", shares=15, avg_price=100.00, current_price=138.21),
)


@dataclass
class PortfolioAnalysis:
    metrics: PortfolioMetrics
    holdings: list[HoldingView]
    risk_band: str
    diversification_band: str
    recommendations: list[Recommendation]


class PortfolioService:
    def __init__(self, advisory: AdvisoryService, holdings: tuple[Holding, ...] = SAMPLE_HOLDINGS) -> None:
        self.advisory = advisory
        self._lock = threading.Lock()
        self._holdings: list[Holding] = list(holdings)

    def snapshot(self) -> tuple[Holding, ...]:
        with self._lock:
            return tuple(self._holdings)

    def add_holding(
        self,
        symbol: str,
        shares: float,
        avg_price: float,
        current_price: float | None = None,
    ) -> ServiceResult[Holding]:
        try:
            clean = validate_symbol(symbol)
        except ValueError as error:
            return ServiceResult(data=None, error=ErrorEnvelope(code="INVALID_INPUT", message=str(error), retriable=False))
        price = current_price if current_price is not None else REFERENCE_PRICES.get(clean, avg_price)
        holding = Holding(symbol=clean, shares=shares, avg_price=avg_price, current_price=price)
        try:
            require_valid(validate_holdings([holding]))
        except InvalidProjectionInput as error:
            return ServiceResult(data=None, error=envelope_from_invalid_input(error))
        with self._lock:
            self._holdings.append(holding)
            count = len(self._holdings)
        LOGGER.info("holding added: symbol=%s shares=%s holdings=%s", clean, shares, count)
        return local_result(holding, "Portfolio session")

    def remove_holding(self, index: int) -> ServiceResult[Holding]:
        with self._lock:
            if index < 0 or index >= len(self._holdings):
                removed = None
            else:
                removed = self._holdings.pop(index)
        if removed is None:
            return ServiceResult(
                data=None,
                error=ErrorEnvelope(code="NOT_FOUND", message=f"No holding at index {index}.", retriable=False),
            )
        LOGGER.info("holding removed: symbol=%s index=%s", removed.symbol, index)
        return local_result(removed, "Portfolio session")

    def analyze(self) -> ServiceResult[PortfolioAnalysis]:
        holdings = self.snapshot()
        try:
            metrics = summarize_portfolio(holdings)
            views = build_holding_views(holdings)
        except InvalidProjectionInput as error:
            return ServiceResult(data=None, error=envelope_from_invalid_input(error))
        return local_result(
            PortfolioAnalysis(
                metrics=metrics,
                holdings=views,
                risk_band=risk_band(metrics.risk_score),
                diversification_band=diversification_band(metrics.diversification_score),
                recommendations=recommendations(metrics, views),
            ),
            "Local portfolio metrics",
        )

    def ai_review(self) -> ServiceResult[AdvisoryReport]:
        holdings = self.snapshot()
        if not holdings:
            return ServiceResult(
                data=None,
                error=envelope_from_invalid_input(
                    InvalidProjectionInput(
                        [ValidationIssue(field="holdings", code="empty_portfolio", message="At least one holding is required.")]
                    )
                ),
            )
        return self.advisory.portfolio_analysis(holdings)
