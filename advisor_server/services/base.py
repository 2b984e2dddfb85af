"""Shared service orchestration helpers."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from advisor_server.planning.validation import InvalidProjectionInput
from advisor_server.providers.http import ProviderError

SYMBOL_PATTERN = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")
T = TypeVar("T")


@dataclass
class ErrorEnvelope:
    code: str
    message: str
    retriable: bool = True
    provider: str | None = None
    details: list[dict[str, str]] | None = None


@dataclass
class ServiceResult(Generic[T]):
    data: T | None
    source: str | None = None
    warning: str | None = None
    error: ErrorEnvelope | None = None
    fetched_at: float | None = None
    data_provider: str | None = None
    data_license: str | None = None


@dataclass
class ServiceContext:
    providers: dict[str, object] = field(default_factory=dict)
    currency: str = "KES"
    search_result_count: int = 10
    enable_ai_advice: bool = True
    server_metrics: object | None = None

    def get_provider(self, name: str) -> object | None:
        return self.providers.get(name)


def validate_symbol(symbol: str) -> str:
    clean = symbol.strip().upper()
    if not clean or len(clean) > 10 or not SYMBOL_PATTERN.match(clean):
        raise ValueError("Symbol must be 1-10 chars: A-Z, 0-9, dot, hyphen.")
    return clean


def validate_search_term(term: str) -> str:
    clean = " ".join(term.split())
    if not clean:
        raise ValueError("Search term must not be empty.")
    if len(clean) > 80:
        raise ValueError("Search term must be at most 80 characters.")
    return clean


def envelope_from_provider_error(error: ProviderError) -> ErrorEnvelope:
    retriable = error.code in {"RATE_LIMIT", "NETWORK", "UPSTREAM", "BAD_RESPONSE"}
    return ErrorEnvelope(code=error.code, message=error.message, retriable=retriable, provider=error.provider)


def envelope_from_invalid_input(error: InvalidProjectionInput) -> ErrorEnvelope:
    return ErrorEnvelope(code="INVALID_INPUT", message=str(error), retriable=False, details=error.as_dicts())


def local_result(data: T, source: str) -> ServiceResult[T]:
    return ServiceResult(
        data=data,
        source=source,
        fetched_at=time.time(),
        data_provider=source,
        data_license="Internal calculation",
    )
