import pytest

from advisor_server.providers.http import ProviderError
from advisor_server.providers.models import NseQuote
from advisor_server.providers.nse_feed import NseFeedClient
from advisor_server.services.base import ServiceContext
from advisor_server.services.research_service import (
    ResearchService,
    change_percent,
    describe_stock,
    top_movers,
    volume_status,
)

BOARD = [
    NseQuote(ticker="SCOM", name="Safaricom Plc", volume=2_500_000, price=17.5, change=-0.5),
    NseQuote(ticker="EQTY", name="Equity Group Holdings", volume=400_000, price=41.0, change=1.5),
    NseQuote(ticker="KCB", name="KCB Group", volume=50_000, price=30.0, change=0.0),
    NseQuote(ticker="EABL", name="East African Breweries", volume=0, price=150.0, change=-3.0),
]


def _service(monkeypatch, stocks=BOARD) -> tuple[ResearchService, list[int]]:
    feed = NseFeedClient("https://feed.test")
    calls: list[int] = []

    def list_stocks():
        calls.append(1)
        if isinstance(stocks, Exception):
            raise stocks
        return list(stocks)

    monkeypatch.setattr(feed, "list_stocks", list_stocks)
    return ResearchService(ServiceContext(providers={"nse": feed})), calls


def test_change_percent_and_volume_status() -> None:
    assert change_percent(NseQuote("A", "A", 0, 11.0, 1.0)) == pytest.approx(10.0)
    assert change_percent(NseQuote("A", "A", 0, 1.0, 1.0)) is None
    assert volume_status(100_001) == "High"
    assert volume_status(100_000) == "Moderate"
    assert volume_status(10_000) == "Low"


def test_describe_stock_has_six_paragraphs() -> None:
    text = describe_stock(NseQuote("EQTY", "Equity Group Holdings", 150_000, 11.0, 1.0))
    paragraphs = text.split("\n\n")
    assert len(paragraphs) == 6
    assert paragraphs[0] == "Current Trading Analysis for Equity Group Holdings (EQTY):"
    assert "KES 11.00" in paragraphs[1]
    assert "positive movement of 10.00%" in paragraphs[1]
    assert "high investor interest" in paragraphs[2]
    assert paragraphs[5].startswith("Risk Considerations: Adequate liquidity")


def test_describe_stock_zero_volume_and_unknown_previous_price() -> None:
    text = describe_stock(NseQuote("NEW", "New Listing", 0, 5.0, 5.0), currency="USD")
    assert "n/a" in text
    assert "USD 5.00" in text
    assert "No trading activity recorded" in text
    assert "Zero volume indicates potential liquidity risks." in text


def test_top_movers_orders_by_absolute_change() -> None:
    movers = top_movers(BOARD)
    assert [stock.ticker for stock in movers] == ["EABL", "EQTY", "SCOM"]
    assert top_movers(BOARD, limit=1)[0].ticker == "EABL"
    assert top_movers(BOARD, limit=0) == []


def test_find_stock_by_ticker_and_name(monkeypatch) -> None:
    service, calls = _service(monkeypatch)
    by_ticker = service.find_stock(" scom ")
    assert by_ticker.data.stock.ticker == "SCOM"
    assert by_ticker.data.analysis.startswith("Current Trading Analysis for Safaricom Plc (SCOM):")

    by_name = service.find_stock("breweries")
    assert by_name.data.stock.ticker == "EABL"
    assert len(calls) == 2


def test_find_stock_not_found(monkeypatch) -> None:
    service, _ = _service(monkeypatch)
    result = service.find_stock("xyz")
    assert result.data is None
    assert result.error.code == "NOT_FOUND"
    assert result.error.message == 'Stock symbol "XYZ" not found in NSE listings.'


def test_find_stock_rejects_blank_term(monkeypatch) -> None:
    service, _ = _service(monkeypatch)
    with pytest.raises(ValueError):
        service.find_stock("   ")


def test_feed_not_configured() -> None:
    service = ResearchService(ServiceContext())
    result = service.get_top_movers()
    assert result.data is None
    assert result.error.code == "NOT_CONFIGURED"


def test_top_movers_uses_cached_board(monkeypatch) -> None:
    service, calls = _service(monkeypatch)
    service.get_top_movers()
    result = service.get_top_movers(limit=2)
    assert [stock.ticker for stock in result.data] == ["EABL", "EQTY"]
    assert len(calls) == 1
    assert service.last_updated is not None


def test_refresh_failure_keeps_previous_board(monkeypatch) -> None:
    service, _ = _service(monkeypatch)
    assert service.list_stocks().data
    feed = service.ctx.get_provider("nse")

    def failing():
        raise ProviderError("nse", "UPSTREAM", "down", 503)

    monkeypatch.setattr(feed, "list_stocks", failing)
    result = service.list_stocks(refresh=True)
    assert [stock.ticker for stock in result.data] == ["SCOM", "EQTY", "KCB", "EABL"]
    assert "Failed to refresh NSE data" in result.warning


def test_refresh_failure_without_board_is_an_error(monkeypatch) -> None:
    service, _ = _service(monkeypatch, stocks=ProviderError("nse", "NETWORK", "offline"))
    result = service.find_stock("SCOM")
    assert result.data is None
    assert result.error.code == "NETWORK"
    assert result.error.retriable is True
