import pytest

from advisor_server.services.advisory_service import FAILED_COMPLETION_TEXT, AdvisoryService
from advisor_server.services.base import ServiceContext
from advisor_server.services.portfolio_service import PortfolioService


def _service() -> PortfolioService:
    return PortfolioService(AdvisoryService(ServiceContext()))


def test_session_starts_with_sample_holdings() -> None:
    service = _service()
    assert [holding.symbol for holding in service.snapshot()] == ["AAPL", "MSFT", "GOOGL"]


def test_analyze_sample_holdings() -> None:
    result = _service().analyze()
    assert result.error is None
    assert result.source == "Local portfolio metrics"
    assert result.data.metrics.total_value == pytest.approx(22155.65)
    assert result.data.risk_band == "High"
    assert result.data.diversification_band == "Medium"
    assert result.data.recommendations[0].title == "High Concentration"
    assert len(result.data.holdings) == 3


def test_add_holding_uses_reference_price() -> None:
    service = _service()
    result = service.add_holding("tsla", 10, 200.0)
    assert result.data.symbol == "TSLA"
    assert result.data.current_price == 238.45
    assert len(service.snapshot()) == 4


def test_add_holding_unknown_symbol_uses_average_price() -> None:
    service = _service()
    result = service.add_holding("SCOM", 100, 17.5)
    assert result.data.current_price == 17.5
    explicit = service.add_holding("KCB", 10, 30.0, current_price=32.0)
    assert explicit.data.current_price == 32.0


def test_add_holding_rejects_bad_input() -> None:
    service = _service()
    assert service.add_holding("", 1, 1.0).error.code == "INVALID_INPUT"
    bad_shares = service.add_holding("AAPL", 0, 100.0)
    assert bad_shares.error.code == "INVALID_INPUT"
    assert bad_shares.error.details[0]["field"] == "holdings[0].shares"
    assert len(service.snapshot()) == 3


def test_remove_holding_by_index() -> None:
    service = _service()
    removed = service.remove_holding(1)
    assert removed.data.symbol == "MSFT"
    assert [holding.symbol for holding in service.snapshot()] == ["AAPL", "GOOGL"]
    assert service.remove_holding(5).error.code == "NOT_FOUND"
    assert service.remove_holding(-1).error.code == "NOT_FOUND"


def test_empty_session_is_invalid_for_analysis() -> None:
    service = PortfolioService(AdvisoryService(ServiceContext()), holdings=())
    analysis = service.analyze()
    assert analysis.data is None
    assert analysis.error.code == "INVALID_INPUT"
    assert service.ai_review().error.code == "INVALID_INPUT"


def test_ai_review_falls_back_without_provider() -> None:
    result = _service().ai_review()
    assert result.data.analysis == FAILED_COMPLETION_TEXT
    assert result.source == "Local fallback"
