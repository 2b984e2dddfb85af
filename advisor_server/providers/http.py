"""HTTP utilities and normalized provider errors."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Literal

import requests
from requests.adapters import HTTPAdapter

from advisor_server.providers.models import ProviderName

ProviderErrorCode = Literal["RATE_LIMIT", "AUTH", "NOT_FOUND", "UPSTREAM", "NETWORK", "BAD_RESPONSE"]
TRANSIENT_CODES = {408, 425, 429, 500, 502, 503, 504}
LOGGER = logging.getLogger(__name__)

_SESSION = requests.Session()
_SESSION.mount("https://", HTTPAdapter(pool_connections=10, pool_maxsize=20))
_SESSION.mount("http://", HTTPAdapter(pool_connections=10, pool_maxsize=20))


@dataclass
class ProviderError(Exception):
    provider: ProviderName
    code: ProviderErrorCode
    message: str
    status: int | None = None

    def __str__(self) -> str:
        return self.message


def map_status_to_code(status: int) -> ProviderErrorCode:
    if status in {401, 403}:
        return "AUTH"
    if status == 404:
        return "NOT_FOUND"
    if status == 429:
        return "RATE_LIMIT"
    return "UPSTREAM"


MAX_RETRY_AFTER_SECONDS = 5.0


def _backoff(attempt: int, retry_after: str | None = None) -> None:
    delay = 0.25 * (2 ** (attempt - 1))
    if retry_after and retry_after.strip().isdigit():
        # Brave and Groq send whole seconds on 429.
        delay = min(float(retry_after), MAX_RETRY_AFTER_SECONDS)
    time.sleep(delay)


def _parse_body(response: requests.Response, provider: ProviderName) -> Any:
    raw = response.text or ""
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as error:
        raise ProviderError(
            provider,
            "BAD_RESPONSE",
            "Provider returned non-JSON content.",
            response.status_code,
        ) from error


def _request_json(
    method: str,
    url: str,
    provider: ProviderName,
    timeout_seconds: float,
    headers: dict[str, str] | None,
    params: dict[str, Any] | None,
    payload: dict[str, Any] | None,
    max_retries: int,
) -> Any:
    attempts = max(1, max_retries)
    last_error: ProviderError | None = None
    for attempt in range(1, attempts + 1):
        try:
            response = _SESSION.request(
                method,
                url,
                params=params,
                headers=headers,
                data=json.dumps(payload) if payload is not None else None,
                timeout=timeout_seconds,
            )
        except requests.RequestException as error:
            mapped = ProviderError(provider, "NETWORK", "Provider request failed due to network error.")
            last_error = mapped
            LOGGER.warning("provider network error: provider=%s attempt=%s error=%s", provider, attempt, error)
            if attempt < attempts:
                _backoff(attempt)
                continue
            raise mapped from error

        if not response.ok:
            mapped = ProviderError(
                provider,
                map_status_to_code(response.status_code),
                f"Provider request failed with status {response.status_code}.",
                response.status_code,
            )
            last_error = mapped
            LOGGER.warning(
                "provider request failed: provider=%s status=%s attempt=%s",
                provider,
                response.status_code,
                attempt,
            )
            if response.status_code in TRANSIENT_CODES and attempt < attempts:
                _backoff(attempt, response.headers.get("Retry-After"))
                continue
            raise mapped

        return _parse_body(response, provider)

    if last_error:
        raise last_error
    raise ProviderError(provider, "UPSTREAM", "Provider request failed.")


def fetch_json(
    url: str,
    provider: ProviderName,
    timeout_seconds: float = 15.0,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
    max_retries: int = 3,
) -> Any:
    """GET JSON with uniform provider/network error mapping."""
    return _request_json("GET", url, provider, timeout_seconds, headers, params, None, max_retries)


def post_json(
    url: str,
    provider: ProviderName,
    payload: dict[str, Any],
    timeout_seconds: float = 15.0,
    headers: dict[str, str] | None = None,
    max_retries: int = 1,
) -> Any:
    """POST a JSON body; completions are not retried by default."""
    return _request_json("POST", url, provider, timeout_seconds, headers, None, payload, max_retries)
