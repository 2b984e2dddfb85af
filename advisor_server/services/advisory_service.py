"""Search-plus-completion orchestration for AI advisory text."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Sequence

from advisor_server.planning.models import AdvisorProfile, Holding
from advisor_server.prompts.templates import (
    MARKET_OVERVIEW_QUERY,
    build_market_overview_prompt,
    build_planning_advice_prompt,
    build_portfolio_analysis_prompt,
    build_stock_analysis_prompt,
    stock_search_query,
)
from advisor_server.providers.brave_search import BraveSearchClient
from advisor_server.providers.groq_client import GroqClient
from advisor_server.providers.http import ProviderError
from advisor_server.providers.models import SearchResult
from advisor_server.services.base import ServiceContext, ServiceResult

LOGGER = logging.getLogger(__name__)

EMPTY_COMPLETION_TEXT = "Unable to generate analysis at this time."
FAILED_COMPLETION_TEXT = "Unable to generate analysis at this time. Please try again later."
STOCK_RESULT_LIMIT = 5
MARKET_RESULT_LIMIT = 8


@dataclass
class AdvisoryReport:
    analysis: str
    timestamp: str
    search_results: list[SearchResult] = field(default_factory=list)
    symbol: str | None = None


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _join_warnings(*warnings: str | None) -> str | None:
    present = [warning for warning in warnings if warning]
    return " ".join(present) if present else None


class AdvisoryService:
    def __init__(self, ctx: ServiceContext) -> None:
        self.ctx = ctx

    def _search_client(self) -> BraveSearchClient | None:
        provider = self.ctx.get_provider("brave")
        return provider if isinstance(provider, BraveSearchClient) else None

    def _completion_client(self) -> GroqClient | None:
        if not self.ctx.enable_ai_advice:
            return None
        provider = self.ctx.get_provider("groq")
        return provider if isinstance(provider, GroqClient) else None

    def search(self, query: str, limit: int) -> tuple[list[SearchResult], str | None]:
        client = self._search_client()
        if client is None:
            return [], "Web search is not configured; analysis uses no live search context."
        started = time.perf_counter()
        try:
            results = client.search(query, count=self.ctx.search_result_count)
        except ProviderError as error:
            LOGGER.warning("search failed: query=%r code=%s status=%s", query, error.code, error.status)
            return [], "Live market search is unavailable; analysis uses no live search context."
        LOGGER.info(
            "search complete: query=%r results=%s latency_ms=%s",
            query,
            len(results),
            round((time.perf_counter() - started) * 1000, 2),
        )
        return results[:limit], None

    def complete(self, prompt: str) -> tuple[str, str | None, str]:
        """Return ``(text, warning, source)``; never raises for provider failure."""
        client = self._completion_client()
        if client is None:
            return FAILED_COMPLETION_TEXT, "AI analysis is not configured.", "Local fallback"
        started = time.perf_counter()
        try:
            text = client.complete(prompt)
        except ProviderError as error:
            LOGGER.warning("completion failed: code=%s status=%s", error.code, error.status)
            return FAILED_COMPLETION_TEXT, "AI analysis provider is unavailable.", "Local fallback"
        LOGGER.info(
            "completion complete: empty=%s latency_ms=%s",
            text is None,
            round((time.perf_counter() - started) * 1000, 2),
        )
        if not text:
            return EMPTY_COMPLETION_TEXT, "AI analysis provider returned no content.", "Local fallback"
        return text, None, "Groq"

    def _report(
        self,
        prompt: str,
        results: list[SearchResult],
        search_warning: str | None,
        symbol: str | None = None,
    ) -> ServiceResult[AdvisoryReport]:
        analysis, completion_warning, source = self.complete(prompt)
        return ServiceResult(
            data=AdvisoryReport(analysis=analysis, timestamp=_utc_timestamp(), search_results=results, symbol=symbol),
            source=source,
            warning=_join_warnings(search_warning, completion_warning),
            fetched_at=time.time(),
            data_provider=source,
            data_license="Provider terms apply",
        )

    def stock_insights(self, symbol: str) -> ServiceResult[AdvisoryReport]:
        results, warning = self.search(stock_search_query(symbol), STOCK_RESULT_LIMIT)
        return self._report(build_stock_analysis_prompt(symbol, results), results, warning, symbol=symbol)

    def market_overview(self) -> ServiceResult[AdvisoryReport]:
        results, warning = self.search(MARKET_OVERVIEW_QUERY, MARKET_RESULT_LIMIT)
        return self._report(build_market_overview_prompt(results), results, warning)

    def planning_advice(self, profile: AdvisorProfile) -> ServiceResult[AdvisoryReport]:
        return self._report(build_planning_advice_prompt(profile, self.ctx.currency), [], None)

    def portfolio_analysis(self, holdings: Sequence[Holding]) -> ServiceResult[AdvisoryReport]:
        return self._report(build_portfolio_analysis_prompt(holdings, self.ctx.currency), [], None)
