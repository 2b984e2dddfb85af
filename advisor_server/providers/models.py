"""Normalized data models returned by provider clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ProviderName = Literal["brave", "groq", "nse"]


@dataclass(frozen=True)
class SearchResult:
    title: str
    url: str
    description: str
    published: str | None = None


@dataclass(frozen=True)
class NseQuote:
    ticker: str
    name: str
    volume: float
    price: float
    change: float

    @property
    def previous_price(self) -> float:
        return self.price - self.change
