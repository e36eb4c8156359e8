"""MCP server bootstrap – registers the Serpstat tools and runs the stdio transport."""

from __future__ import annotations

import asyncio
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

from serpstat_mcp.config import Settings, settings
from serpstat_mcp.mcp.registry import ToolRegistry, build_registry
from serpstat_mcp.schemas.common import ToolCall
from serpstat_mcp.services.serpstat_client import SerpstatClient

logger = logging.getLogger("mcp.server")

# ---------------------------------------------------------------------------
# Server factory
# ---------------------------------------------------------------------------


def create_mcp_server(registry: ToolRegistry, config: Settings = settings) -> Server:
    server = Server(config.mcp_server_name, version=config.mcp_server_version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return registry.tool_definitions()

    # Arguments are validated by the tool handlers so that violations come
    # back as tool errors rather than protocol errors.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict | None) -> CallToolResult:
        response = await registry.dispatch(ToolCall(name=name, arguments=arguments or {}))
        return response.to_call_tool_result()

    return server


# ---------------------------------------------------------------------------
# Entry-point: run MCP server over stdio
# ---------------------------------------------------------------------------


async def run_mcp_server(config: Settings = settings) -> None:
    async with SerpstatClient(config) as client:
        registry = build_registry(config, client)
        server = create_mcp_server(registry, config)
        logger.info(
            "Starting MCP server name=%s version=%s tools=%d",
            config.mcp_server_name,
            config.mcp_server_version,
            len(registry),
        )

        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def configure_logging(config: Settings = settings) -> None:
    # stdout carries the protocol stream, so logs go to stderr.
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    configure_logging()
    asyncio.run(run_mcp_server())


if __name__ == "__main__":
    main()
