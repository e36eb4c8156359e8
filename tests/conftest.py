"""Shared pytest fixtures – the Serpstat API is replaced by an httpx.MockTransport stub."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio

from serpstat_mcp.config import Settings
from serpstat_mcp.services.serpstat_client import SerpstatClient

TEST_TOKEN = "test-token"


class RemoteStub:
    """Callable handler for ``httpx.MockTransport`` that records every request.

    Each outcome is used for one attempt, the last one repeats forever.
    An outcome is a JSON-able body (answered with 200), a ready
    ``httpx.Response`` or an exception to raise.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes) or [{}]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes[min(len(self.requests), len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return httpx.Response(outcome.status_code, headers=outcome.headers, content=outcome.content)
        return httpx.Response(200, json=outcome)

    @property
    def attempts(self) -> int:
        return len(self.requests)

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "serpstat_api_token": TEST_TOKEN,
        "max_retries": 1,
        "retry_delay_seconds": 0,
        "request_timeout": 5,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def make_client(test_settings):
    """Factory building clients wired to a stub; all of them are closed afterwards."""
    clients: list[SerpstatClient] = []

    def factory(stub: RemoteStub, settings: Settings | None = None) -> SerpstatClient:
        client = SerpstatClient(settings or test_settings, transport=httpx.MockTransport(stub))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def summary_payload() -> dict:
    """A realistic getSummaryV2 result."""
    return {
        "data": {
            "referring_domains": 1523,
            "referring_subdomains": 1801,
            "referring_links": 45210,
            "noFollowLinks": 5012,
            "doFollowLinks": 40198,
            "referring_ips": 1320,
            "referring_subnets": 1104,
            "outlinking_domains": 87,
            "outgoing_links": 412,
            "external_links": 398,
            "domainRank": 54,
        },
        "summary_info": {"left_lines": 998765, "page": 1},
    }
