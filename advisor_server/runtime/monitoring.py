"""Per-tool call accounting for the health endpoint."""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import Any, Callable

LOGGER = logging.getLogger(__name__)


@dataclass
class ToolStats:
    calls: int = 0
    errors: int = 0
    latency_ms: float = 0.0

    @property
    def avg_latency_ms(self) -> float:
        return self.latency_ms / self.calls if self.calls else 0.0


@dataclass
class HealthSnapshot:
    uptime_seconds: float
    total_requests: int
    error_rate: float
    avg_latency_ms: float
    providers: dict[str, bool] = field(default_factory=dict)
    busiest_tool: str | None = None


class ServerMetrics:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started = clock()
        self._lock = threading.Lock()
        self._tools: dict[str, ToolStats] = defaultdict(ToolStats)

    def record(self, tool: str, latency_ms: float, success: bool) -> None:
        with self._lock:
            stats = self._tools[tool]
            stats.calls += 1
            if not success:
                stats.errors += 1
            stats.latency_ms += max(0.0, latency_ms)

    def tool_stats(self, tool: str) -> ToolStats:
        with self._lock:
            stats = self._tools.get(tool)
            return replace(stats) if stats else ToolStats()

    def snapshot(self, providers: dict[str, bool]) -> HealthSnapshot:
        with self._lock:
            calls = sum(stats.calls for stats in self._tools.values())
            errors = sum(stats.errors for stats in self._tools.values())
            latency = sum(stats.latency_ms for stats in self._tools.values())
            busiest = max(self._tools, key=lambda name: self._tools[name].calls) if self._tools else None
        return HealthSnapshot(
            uptime_seconds=round(max(0.0, self._clock() - self._started), 3),
            total_requests=calls,
            error_rate=errors / calls if calls else 0.0,
            avg_latency_ms=latency / calls if calls else 0.0,
            providers=dict(providers),
            busiest_tool=busiest,
        )


def log_tool_event(
    tool: str,
    latency_ms: float,
    success: bool,
    symbol: str | None = None,
    warning: str | None = None,
) -> None:
    event: dict[str, Any] = {"tool": tool, "latency_ms": round(latency_ms, 3), "success": success}
    if symbol:
        event["symbol"] = symbol
    if warning:
        event["warning"] = warning
    LOGGER.log(logging.INFO if success else logging.WARNING, "tool_event %s", json.dumps(event, ensure_ascii=True))
