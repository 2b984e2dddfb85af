"""JSON envelopes returned by calculator and portfolio tools."""

from __future__ import annotations

import json
import time
from dataclasses import asdict, is_dataclass
from typing import Any

from advisor_server.lib.formatters import FINANCIAL_DISCLAIMER
from advisor_server.services.base import ErrorEnvelope, ServiceResult

DEFAULT_LICENSE = "Provider terms apply"
NO_DATA = ErrorEnvelope(code="DATA_UNAVAILABLE", message="No data returned.", retriable=False)


def _plain(data: Any) -> Any:
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    if isinstance(data, (list, tuple)):
        return [_plain(item) for item in data]
    if isinstance(data, dict):
        return {key: _plain(value) for key, value in data.items()}
    return data


def _provenance(result: ServiceResult[Any]) -> dict[str, Any]:
    now = time.time()
    fetched_at = result.fetched_at or now
    meta: dict[str, Any] = {
        "data_provider": result.data_provider or result.source or "unknown",
        "data_license": result.data_license or DEFAULT_LICENSE,
        "data_freshness": {"timestamp": int(fetched_at), "age_seconds": round(max(0.0, now - fetched_at), 3)},
    }
    if result.source:
        meta["source"] = result.source
    if result.warning:
        meta["warning"] = result.warning
    return meta


def success_response(result: ServiceResult[Any]) -> str:
    payload = {"data": _plain(result.data), "disclaimer": FINANCIAL_DISCLAIMER, **_provenance(result)}
    return json.dumps(payload, ensure_ascii=True)


def error_response(error: ErrorEnvelope) -> str:
    payload: dict[str, Any] = {
        "error": True,
        "code": error.code,
        "message": error.message,
        "retriable": error.retriable,
        "timestamp": int(time.time()),
    }
    if error.provider:
        payload["provider"] = error.provider
    if error.details:
        payload["details"] = error.details
    return json.dumps(payload, ensure_ascii=True)


def result_response(result: ServiceResult[Any]) -> str:
    if result.data is not None:
        return success_response(result)
    return error_response(result.error or NO_DATA)
