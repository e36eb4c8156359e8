"""Tests for the SSE transport: health, JSON-RPC routing and session handling."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from serpstat_mcp.mcp.registry import build_registry
from serpstat_mcp.mcp.sse_server import create_app, handle_rpc
from serpstat_mcp.tools import ALL_TOOLS

from tests.conftest import make_settings


@pytest.fixture
def registry():
    client = AsyncMock()
    client.call.return_value = {"summary_info": {"left_lines": 10}}
    return build_registry(make_settings(), client)


@pytest.fixture
def sse_app(registry):
    return create_app(registry, make_settings())


# ---------------------------------------------------------------------------
# JSON-RPC routing
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_initialize(registry):
    response = await handle_rpc(registry, {"jsonrpc": "2.0", "id": 1, "method": "initialize"}, make_settings())
    assert response["id"] == 1
    assert response["result"]["serverInfo"]["name"] == "serpstat-mcp-server"
    assert "tools" in response["result"]["capabilities"]


@pytest.mark.asyncio
async def test_tools_list(registry):
    response = await handle_rpc(registry, {"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
    tools = response["result"]["tools"]
    assert len(tools) == len(ALL_TOOLS)
    assert tools[0]["inputSchema"]["type"] == "object"


@pytest.mark.asyncio
async def test_tools_call_invalid_arguments(registry):
    body = {
        "jsonrpc": "2.0",
        "id": 3,
        "method": "tools/call",
        "params": {"name": "get_backlinks_summary", "arguments": {"query": "bad_domain"}},
    }
    response = await handle_rpc(registry, body)
    assert response["result"]["isError"] is True
    assert response["result"]["content"][0]["text"].startswith("Invalid parameters: query:")


@pytest.mark.asyncio
async def test_tools_call_success(registry):
    body = {
        "jsonrpc": "2.0",
        "id": 4,
        "method": "tools/call",
        "params": {"name": "get_backlinks_summary", "arguments": {"query": "example.com"}},
    }
    response = await handle_rpc(registry, body)
    assert "isError" not in response["result"]
    assert '"left_lines": 10' in response["result"]["content"][0]["text"]


@pytest.mark.asyncio
async def test_unknown_method(registry):
    response = await handle_rpc(registry, {"jsonrpc": "2.0", "id": 5, "method": "resources/list"})
    assert response["error"] == {"code": -32601, "message": "Method 'resources/list' not found"}


@pytest.mark.asyncio
async def test_non_object_arguments(registry):
    body = {"id": 6, "method": "tools/call", "params": {"name": "get_credits_stats", "arguments": [1]}}
    response = await handle_rpc(registry, body)
    assert response["error"]["code"] == -32602


@pytest.mark.asyncio
async def test_positional_params_rejected(registry):
    body = {"jsonrpc": "2.0", "id": 8, "method": "tools/call", "params": [1]}
    response = await handle_rpc(registry, body)
    assert response == {"jsonrpc": "2.0", "id": 8, "error": {"code": -32602, "message": "Invalid params"}}


# ---------------------------------------------------------------------------
# HTTP endpoints
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_health(sse_app):
    transport = ASGITransport(app=sse_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "transport": "sse", "version": "1.0.0"}


@pytest.mark.asyncio
async def test_messages_unknown_session(sse_app):
    transport = ASGITransport(app=sse_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post("/messages", params={"session_id": "missing"}, json={"method": "tools/list"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_messages_pushed_to_session_queue(sse_app):
    queue: asyncio.Queue = asyncio.Queue()
    sse_app.state.sessions["session-test"] = queue

    transport = ASGITransport(app=sse_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post(
            "/messages",
            params={"session_id": "session-test"},
            json={"jsonrpc": "2.0", "id": 7, "method": "tools/list"},
        )

    assert response.status_code == 202
    message = queue.get_nowait()
    assert message["id"] == 7
    assert len(message["result"]["tools"]) == len(ALL_TOOLS)


@pytest.mark.asyncio
async def test_messages_parse_error(sse_app):
    queue: asyncio.Queue = asyncio.Queue()
    sse_app.state.sessions["session-bad"] = queue

    transport = ASGITransport(app=sse_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post(
            "/messages",
            params={"session_id": "session-bad"},
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

    assert response.status_code == 202
    assert queue.get_nowait()["error"]["code"] == -32700


@pytest.mark.asyncio
async def test_messages_positional_params_answered_on_stream(sse_app):
    queue: asyncio.Queue = asyncio.Queue()
    sse_app.state.sessions["session-list"] = queue

    transport = ASGITransport(app=sse_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.post(
            "/messages",
            params={"session_id": "session-list"},
            json={"jsonrpc": "2.0", "id": 9, "method": "tools/call", "params": ["get_credits_stats"]},
        )

    assert response.status_code == 202
    assert queue.get_nowait()["error"]["code"] == -32602
