"""Shared tool-layer helpers."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, Sequence

from advisor_server.lib.formatters import numbered
from advisor_server.providers.models import SearchResult
from advisor_server.runtime.monitoring import ServerMetrics, log_tool_event
from advisor_server.services.base import ErrorEnvelope

SLOW_TOOL_MS = 2000.0


def ensure_data(data: object | None, error: ErrorEnvelope | None, default_message: str = "No data returned.") -> object:
    if data is not None:
        return data
    if error:
        raise ValueError(f"[{error.code}] {error.message}")
    raise ValueError(default_message)


@contextmanager
def tool_timer(metrics: ServerMetrics | None, tool: str, symbol: str | None = None) -> Iterator[None]:
    started = time.perf_counter()
    success = False
    try:
        yield
        success = True
    finally:
        latency_ms = (time.perf_counter() - started) * 1000.0
        warning = "slow_response" if latency_ms > SLOW_TOOL_MS else None
        log_tool_event(tool=tool, symbol=symbol, latency_ms=latency_ms, success=success, warning=warning)
        if metrics is not None:
            metrics.record(tool, latency_ms, success)


def source_lines(results: Sequence[SearchResult]) -> list[str]:
    """Numbered citation block for search-grounded analysis, empty when there are no results."""
    if not results:
        return []
    cited = [
        f"{item.title}{f' [{item.published}]' if item.published else ''} ({item.url})" for item in results
    ]
    return ["", "Sources:", *numbered(cited)]
