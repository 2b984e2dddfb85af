import logging

from advisor_server.runtime.monitoring import ServerMetrics, log_tool_event


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_snapshot_aggregates_tool_calls() -> None:
    clock = _Clock()
    metrics = ServerMetrics(clock=clock)
    metrics.record("calculate_goal", 10.0, True)
    metrics.record("calculate_goal", 30.0, False)
    metrics.record("get_top_movers", 20.0, True)
    clock.now = 112.5

    snapshot = metrics.snapshot({"nse": True})
    assert snapshot.uptime_seconds == 12.5
    assert snapshot.total_requests == 3
    assert snapshot.error_rate == 1 / 3
    assert snapshot.avg_latency_ms == 20.0
    assert snapshot.busiest_tool == "calculate_goal"
    assert snapshot.providers == {"nse": True}


def test_tool_stats_are_copies() -> None:
    metrics = ServerMetrics()
    metrics.record("analyze_portfolio", 5.0, True)
    stats = metrics.tool_stats("analyze_portfolio")
    stats.calls = 99
    assert metrics.tool_stats("analyze_portfolio").calls == 1
    assert metrics.tool_stats("unknown").avg_latency_ms == 0.0


def test_empty_snapshot() -> None:
    snapshot = ServerMetrics().snapshot({})
    assert snapshot.total_requests == 0
    assert snapshot.error_rate == 0.0
    assert snapshot.busiest_tool is None


def test_failed_tool_event_logs_warning(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="advisor_server.runtime.monitoring"):
        log_tool_event("search_nse_stock", 12.3456, False, symbol="SCOM")
    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert '"symbol": "SCOM"' in record.getMessage()
    assert '"latency_ms": 12.346' in record.getMessage()
