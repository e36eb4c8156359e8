"""SSE (Server-Sent Events) transport for the Serpstat MCP server.

Exposes the same tool registry over HTTP for web-based MCP clients and
for environments where the stdio transport is not available.

Run with:
    python -m serpstat_mcp.mcp.sse_server

SSE endpoint: GET  /sse
Message post: POST /messages?session_id=<id>
Health check: GET  /health
"""

from __future__ import annotations

import asyncio
import itertools
import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse

from serpstat_mcp.config import Settings, settings
from serpstat_mcp.mcp.registry import ToolRegistry, build_registry
from serpstat_mcp.mcp.server import configure_logging
from serpstat_mcp.schemas.common import ToolCall
from serpstat_mcp.services.serpstat_client import SerpstatClient

logger = logging.getLogger("mcp.sse")

PROTOCOL_VERSION = "2024-11-05"
KEEPALIVE_SECONDS = 30.0

# ---------------------------------------------------------------------------
# JSON-RPC routing
# ---------------------------------------------------------------------------


def _reply(rpc_id: Any, result: dict[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _rpc_error(rpc_id: Any, code: int, message: str) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}


async def handle_rpc(registry: ToolRegistry, body: Any, config: Settings = settings) -> dict[str, Any]:
    """Answer one JSON-RPC request with a response object."""
    if not isinstance(body, dict):
        return _rpc_error(None, -32600, "Invalid request")

    method = body.get("method", "")
    params = body.get("params") or {}
    rpc_id = body.get("id")
    if not isinstance(params, dict):
        return _rpc_error(rpc_id, -32602, "Invalid params")

    if method == "initialize":
        return _reply(
            rpc_id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": config.mcp_server_name, "version": config.mcp_server_version},
            },
        )

    if method == "tools/list":
        tools = registry.tool_definitions()
        return _reply(rpc_id, {"tools": [tool.model_dump(exclude_none=True) for tool in tools]})

    if method == "tools/call":
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            return _rpc_error(rpc_id, -32602, "Tool arguments must be an object")
        response = await registry.dispatch(ToolCall(name=str(params.get("name", "")), arguments=arguments))
        return _reply(rpc_id, response.model_dump(by_alias=True, exclude_none=True))

    return _rpc_error(rpc_id, -32601, f"Method '{method}' not found")


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(registry: ToolRegistry | None = None, config: Settings = settings) -> FastAPI:
    """Build the SSE application.

    Without *registry* the lifespan opens a :class:`SerpstatClient` and
    builds the registry from *config*; tests pass a ready registry.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("MCP SSE transport starting on %s:%s", config.fastapi_host, config.fastapi_port)
        if app.state.registry is not None:
            yield
        else:
            async with SerpstatClient(config) as client:
                app.state.registry = build_registry(config, client)
                yield
        logger.info("MCP SSE transport shutting down")
        app.state.sessions.clear()

    app = FastAPI(
        title="Serpstat MCP Server – SSE Transport",
        version=config.mcp_server_version,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.sessions = {}
    session_ids = itertools.count(1)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "transport": "sse",
            "version": config.mcp_server_version,
        }

    @app.get("/sse")
    async def sse_endpoint(request: Request):
        """Server-Sent Events stream for MCP protocol messages.

        The first event tells the client where to POST its requests;
        responses to those requests are pushed back on this stream.
        """
        session_id = f"session-{next(session_ids)}"
        queue: asyncio.Queue = asyncio.Queue()
        app.state.sessions[session_id] = queue

        async def event_generator():
            yield {"event": "endpoint", "data": f"/messages?session_id={session_id}"}
            try:
                while True:
                    if await request.is_disconnected():
                        break
                    try:
                        message = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                    except asyncio.TimeoutError:
                        yield {"comment": "keepalive"}
                        continue
                    yield {"event": "message", "data": json.dumps(message, default=str)}
            finally:
                app.state.sessions.pop(session_id, None)

        return EventSourceResponse(event_generator())

    @app.post("/messages")
    async def messages_endpoint(request: Request, session_id: str):
        queue = app.state.sessions.get(session_id)
        if queue is None:
            return JSONResponse(
                status_code=404,
                content={"error": f"Session '{session_id}' not found. Connect to /sse first."},
            )

        try:
            body = await request.json()
        except ValueError:
            await queue.put(_rpc_error(None, -32700, "Parse error"))
            return Response(status_code=202, content="Accepted")

        logger.debug("SSE recv session=%s body=%s", session_id, body)
        await queue.put(await handle_rpc(app.state.registry, body, config))
        return Response(status_code=202, content="Accepted")

    return app


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------


def main() -> None:
    import uvicorn

    configure_logging()
    uvicorn.run(create_app(), host=settings.fastapi_host, port=settings.fastapi_port, reload=False)


if __name__ == "__main__":
    main()
