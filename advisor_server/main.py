"""Application entrypoint for the FinAdvisor MCP server."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from dataclasses import asdict

from mcp.server.fastmcp import FastMCP
from starlette.responses import JSONResponse, Response

from advisor_server.config.settings import Settings, get_settings
from advisor_server.prompts.advisor_prompts import register_advisor_prompts
from advisor_server.providers.brave_search import BraveSearchClient
from advisor_server.providers.groq_client import GroqClient
from advisor_server.providers.nse_feed import NseFeedClient
from advisor_server.resources.planning_resources import register_planning_resources
from advisor_server.runtime.monitoring import ServerMetrics
from advisor_server.services.base import ServiceContext
from advisor_server.tools.registry import ToolServices, build_tool_services, register_all_tools

LOGGER = logging.getLogger(__name__)


def resolve_transport_mode(configured_mode: str) -> str:
    if os.getenv("RENDER") and configured_mode == "stdio":
        return "http"
    if configured_mode in {"stdio", "http"}:
        return configured_mode
    if os.getenv("RENDER") or os.getenv("PORT"):
        return "http"
    return "stdio"


def resolve_http_transport(configured_transport: str) -> str:
    if configured_transport in {"sse", "streamable"}:
        return configured_transport
    return "sse"


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport, so logs go to stderr.
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_context(settings: Settings) -> ServiceContext:
    brave_client = (
        BraveSearchClient(settings.brave_api_key, settings.brave_base_url, settings.request_timeout_seconds)
        if settings.brave_api_key
        else None
    )
    groq_client = (
        GroqClient(
            settings.groq_api_key,
            settings.groq_model,
            settings.groq_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            max_tokens=settings.completion_max_tokens,
            temperature=settings.completion_temperature,
        )
        if settings.groq_api_key and settings.enable_ai_advice
        else None
    )
    nse_client = NseFeedClient(settings.nse_feed_url, settings.request_timeout_seconds) if settings.nse_feed_url else None
    return ServiceContext(
        providers={"brave": brave_client, "groq": groq_client, "nse": nse_client},
        currency=settings.currency,
        search_result_count=settings.search_result_count,
        enable_ai_advice=settings.enable_ai_advice,
        server_metrics=ServerMetrics(),
    )


def build_server(settings: Settings) -> tuple[FastMCP, ToolServices]:
    mcp = FastMCP(
        name=settings.app_name,
        host=settings.host,
        port=settings.port,
        streamable_http_path=settings.mcp_path,
    )
    services = build_tool_services(build_context(settings))
    register_all_tools(mcp, services)
    register_advisor_prompts(mcp)
    register_planning_resources(mcp, services)

    @mcp.custom_route(settings.health_path, methods=["GET"])
    async def health_check(_: object) -> Response:
        snapshot = services.health()
        return JSONResponse(
            {
                "status": "ok",
                "service": settings.app_name,
                "version": settings.app_version,
                **asdict(snapshot),
            }
        )

    return mcp, services


async def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    mcp, services = build_server(settings)
    resolved_mode = resolve_transport_mode(settings.transport_mode)
    resolved_http_transport = resolve_http_transport(settings.http_transport)

    missing = [name for name, configured in services.health().providers.items() if not configured]
    if missing:
        LOGGER.warning(
            "providers not configured: %s. Set BRAVE_API_KEY / GROQ_API_KEY / NSE_FEED_URL. "
            "Calculators and portfolio metrics still work offline.",
            ", ".join(missing),
        )
    LOGGER.info("starting server: mode=%s http_transport=%s", resolved_mode, resolved_http_transport)
    if resolved_mode == "stdio":
        await mcp.run_stdio_async()
    elif resolved_http_transport == "streamable":
        await mcp.run_streamable_http_async()
    else:
        await mcp.run_sse_async()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
