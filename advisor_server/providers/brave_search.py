"""Brave web search client used to ground market commentary."""

from __future__ import annotations

from advisor_server.providers.http import ProviderError, fetch_json
from advisor_server.providers.models import SearchResult


class BraveSearchClient:
    def __init__(self, api_key: str, base_url: str, timeout_seconds: float = 15.0) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

    def search(self, query: str, count: int = 10) -> list[SearchResult]:
        data = fetch_json(
            self.base_url,
            provider="brave",
            timeout_seconds=self.timeout_seconds,
            headers={"X-Subscription-Token": self.api_key, "Accept": "application/json"},
            params={"q": query, "count": max(1, count)},
        )
        if not isinstance(data, dict):
            raise ProviderError("brave", "BAD_RESPONSE", "Brave returned an unexpected search shape.")
        web = data.get("web") or {}
        if not isinstance(web, dict):
            raise ProviderError("brave", "BAD_RESPONSE", "Brave returned an unexpected search shape.")
        rows = web.get("results") or []
        if not isinstance(rows, list):
            raise ProviderError("brave", "BAD_RESPONSE", "Brave returned an unexpected search shape.")
        results: list[SearchResult] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            title = row.get("title")
            url = row.get("url")
            if not isinstance(title, str) or not isinstance(url, str):
                continue
            published = row.get("published") or row.get("page_age")
            results.append(
                SearchResult(
                    title=title,
                    url=url,
                    description=str(row.get("description") or ""),
                    published=str(published) if published else None,
                )
            )
        return results
