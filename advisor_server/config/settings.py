"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_BRAVE_BASE_URL = "https://api.search.brave.com/res/v1/web/search"
DEFAULT_GROQ_BASE_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_GROQ_MODEL = "moonshotai/kimi-k2-instruct-0905"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for local/stdin and HTTP-hosted modes."""

    app_name: str = "finadvisor-ai"
    app_version: str = "1.0.0"
    transport_mode: str = "auto"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    brave_api_key: str | None = None
    brave_base_url: str = DEFAULT_BRAVE_BASE_URL
    groq_api_key: str | None = None
    groq_model: str = DEFAULT_GROQ_MODEL
    groq_base_url: str = DEFAULT_GROQ_BASE_URL
    nse_feed_url: str | None = None
    currency: str = "KES"
    enable_ai_advice: bool = True
    request_timeout_seconds: float = 15.0
    completion_max_tokens: int = 1000
    completion_temperature: float = 0.7
    search_result_count: int = 10
    log_level: str = "INFO"


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _as_float(value: str | None, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    return Settings(
        transport_mode=os.getenv("TRANSPORT_MODE", "auto").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        brave_api_key=os.getenv("BRAVE_API_KEY"),
        brave_base_url=os.getenv("BRAVE_BASE_URL") or DEFAULT_BRAVE_BASE_URL,
        groq_api_key=os.getenv("GROQ_API_KEY"),
        groq_model=os.getenv("GROQ_MODEL") or DEFAULT_GROQ_MODEL,
        groq_base_url=os.getenv("GROQ_BASE_URL") or DEFAULT_GROQ_BASE_URL,
        nse_feed_url=os.getenv("NSE_FEED_URL") or None,
        currency=(os.getenv("CURRENCY") or "KES").strip().upper(),
        enable_ai_advice=_as_bool(os.getenv("ENABLE_AI_ADVICE"), True),
        request_timeout_seconds=_as_float(os.getenv("REQUEST_TIMEOUT_SECONDS"), 15.0),
        completion_max_tokens=_as_int(os.getenv("COMPLETION_MAX_TOKENS"), 1000),
        completion_temperature=_as_float(os.getenv("COMPLETION_TEMPERATURE"), 0.7),
        search_result_count=_as_int(os.getenv("SEARCH_RESULT_COUNT"), 10),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )
