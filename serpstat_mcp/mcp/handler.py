"""Tool handler – the bridge between an MCP tool call and the request client.

Every tool goes through the same path: validate the raw arguments against
the tool's schema, invoke the remote method with the normalised params and
wrap the outcome in a :class:`ToolResponse`.  Failures never escape as
exceptions; they come back as ``isError`` responses carrying the message.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Protocol

from serpstat_mcp.schemas.common import ToolCall, ToolResponse
from serpstat_mcp.services.errors import SerpstatError
from serpstat_mcp.tools.base import ToolSpec
from serpstat_mcp.validation import ParamsValidationError, validate_or_raise

logger = logging.getLogger("mcp.tools")


class RemoteCaller(Protocol):
    async def call(self, method: str, params: dict[str, Any]) -> Any: ...


class ToolHandler:
    """Runs one catalogue entry against a shared client."""

    def __init__(self, spec: ToolSpec, client: RemoteCaller) -> None:
        self.spec = spec
        self._client = client

    @property
    def name(self) -> str:
        return self.spec.name

    async def handle(self, call: ToolCall) -> ToolResponse:
        t0 = time.perf_counter()

        try:
            params = validate_or_raise(self.spec.input_schema, call.arguments)
        except ParamsValidationError as exc:
            elapsed = round((time.perf_counter() - t0) * 1000, 2)
            logger.info(
                "%s outcome=invalid_params violations=%d ms=%.1f",
                self.name,
                len(exc.violations),
                elapsed,
            )
            return ToolResponse.failure(str(exc))

        try:
            result = await self._client.call(self.spec.method, params)
        except SerpstatError as exc:
            elapsed = round((time.perf_counter() - t0) * 1000, 2)
            logger.info("%s outcome=%s ms=%.1f error=%s", self.name, type(exc).__name__, elapsed, exc)
            return ToolResponse.failure(str(exc))
        except Exception as exc:
            elapsed = round((time.perf_counter() - t0) * 1000, 2)
            logger.exception("%s outcome=unexpected ms=%.1f", self.name, elapsed)
            return ToolResponse.failure(str(exc) or type(exc).__name__)

        elapsed = round((time.perf_counter() - t0) * 1000, 2)
        logger.info("%s method=%s outcome=ok ms=%.1f", self.name, self.spec.method, elapsed)
        return ToolResponse.success(result)
