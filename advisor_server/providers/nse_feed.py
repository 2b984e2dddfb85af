"""Nairobi Securities Exchange price-list feed."""

from __future__ import annotations

from advisor_server.providers.http import ProviderError, fetch_json
from advisor_server.providers.models import NseQuote


def _as_number(value: object) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace(",", "").strip())
        except ValueError:
            return 0.0
    return 0.0


class NseFeedClient:
    """Reads the full NSE board as rows of ``{Ticker, Name, Volume, Price, Change}``."""

    def __init__(self, feed_url: str, timeout_seconds: float = 15.0) -> None:
        self.feed_url = feed_url
        self.timeout_seconds = timeout_seconds

    def list_stocks(self) -> list[NseQuote]:
        data = fetch_json(self.feed_url, provider="nse", timeout_seconds=self.timeout_seconds)
        if not isinstance(data, list):
            raise ProviderError("nse", "BAD_RESPONSE", "NSE feed did not return a list of stocks.")
        quotes: list[NseQuote] = []
        for row in data:
            if not isinstance(row, dict):
                continue
            ticker = str(row.get("Ticker") or "").strip().upper()
            if not ticker:
                continue
            quotes.append(
                NseQuote(
                    ticker=ticker,
                    name=str(row.get("Name") or ticker).strip(),
                    volume=_as_number(row.get("Volume")),
                    price=_as_number(row.get("Price")),
                    change=_as_number(row.get("Change")),
                )
            )
        return quotes
