"""Runtime and operations tools."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

if TYPE_CHECKING:
    from advisor_server.tools.registry import ToolServices


def register_runtime_tools(mcp: FastMCP, services: ToolServices) -> None:
    @mcp.tool(description="Get server health: uptime, request/error rates, latency and configured providers.")
    def get_server_health() -> str:
        return json.dumps(asdict(services.health()), ensure_ascii=True)
