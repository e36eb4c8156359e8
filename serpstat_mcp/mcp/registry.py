"""Tool registry – name → handler map built once at startup."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from mcp.types import Tool

from serpstat_mcp.config import Settings
from serpstat_mcp.mcp.handler import RemoteCaller, ToolHandler
from serpstat_mcp.schemas.common import ToolCall, ToolResponse
from serpstat_mcp.tools import ALL_TOOLS
from serpstat_mcp.tools.base import ToolSpec

logger = logging.getLogger("mcp.server")


class ToolRegistry:
    """Read-only view over the enabled tool handlers, in catalogue order."""

    def __init__(self, handlers: Iterable[ToolHandler]) -> None:
        table: dict[str, ToolHandler] = {}
        for handler in handlers:
            if handler.name in table:
                raise ValueError(f"Duplicate tool name: {handler.name}")
            table[handler.name] = handler
        self._handlers: Mapping[str, ToolHandler] = MappingProxyType(table)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def get(self, name: str) -> ToolHandler | None:
        return self._handlers.get(name)

    def names(self) -> list[str]:
        return list(self._handlers)

    def tool_definitions(self) -> list[Tool]:
        return [
            Tool(
                name=handler.spec.name,
                description=handler.spec.description,
                inputSchema=handler.spec.input_json_schema(),
            )
            for handler in self._handlers.values()
        ]

    async def dispatch(self, call: ToolCall) -> ToolResponse:
        handler = self._handlers.get(call.name)
        if handler is None:
            logger.warning("unknown tool requested name=%s", call.name)
            return ToolResponse.failure(f"Unknown tool: {call.name}")
        return await handler.handle(call)


def build_registry(
    settings: Settings,
    client: RemoteCaller,
    tools: Iterable[ToolSpec] = ALL_TOOLS,
) -> ToolRegistry:
    """Bind every enabled catalogue entry to *client*.

    Categories listed in ``settings.disabled_tool_categories`` are skipped.
    """
    disabled = settings.disabled_categories
    handlers = [ToolHandler(spec, client) for spec in tools if spec.category not in disabled]
    logger.info("tool registry built tools=%d disabled=%s", len(handlers), ",".join(sorted(disabled)) or "-")
    return ToolRegistry(handlers)
