"""Resilient request client for the Serpstat JSON-RPC API.

One client is shared by every tool handler.  It holds no per-call state:
each :meth:`SerpstatClient.call` builds its own envelope and its own
:class:`RetryState`, so concurrent calls never interfere.

Outcomes are classified as:

* success – the envelope's ``result`` is returned unchanged;
* :class:`ApplicationError` – the envelope carries ``error`` (or a 4xx);
  reported after a single attempt;
* :class:`TransientError` – timeout, connection failure or 5xx; retried
  with a fixed delay up to ``max_retries`` extra attempts;
* :class:`ProtocolError` – no ``result`` and no ``error``, or not JSON.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from serpstat_mcp.config import Settings
from serpstat_mcp.schemas.envelope import RemoteError, RequestEnvelope, ResponseEnvelope
from serpstat_mcp.services.errors import (
    ApplicationError,
    ProtocolError,
    SerpstatError,
    TransientError,
)

logger = logging.getLogger("serpstat.client")


@dataclass
class RetryState:
    """Retry bookkeeping for one logical call."""

    attempts_remaining: int
    last_error: TransientError | None = None


class SerpstatClient:
    """Async client posting request envelopes to the Serpstat API.

    Args:
        settings: Credential, endpoint, timeout and retry policy.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._http = httpx.AsyncClient(
            timeout=settings.request_timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "SerpstatClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def call(self, method: str, params: dict[str, Any]) -> Any:
        """Invoke *method* with already-validated *params* and return its result."""
        envelope = RequestEnvelope.for_call(method, params)
        state = RetryState(attempts_remaining=self._settings.max_retries)
        attempt = 0

        while True:
            attempt += 1
            t0 = time.perf_counter()
            try:
                result = await self._send(envelope)
            except TransientError as exc:
                state.last_error = exc
                elapsed = round((time.perf_counter() - t0) * 1000, 2)
                logger.warning(
                    "serpstat method=%s id=%s attempt=%d outcome=transient ms=%.1f error=%s",
                    method,
                    envelope.id,
                    attempt,
                    elapsed,
                    exc,
                )
            except SerpstatError as exc:
                elapsed = round((time.perf_counter() - t0) * 1000, 2)
                logger.warning(
                    "serpstat method=%s id=%s attempt=%d outcome=%s ms=%.1f error=%s",
                    method,
                    envelope.id,
                    attempt,
                    _outcome(exc),
                    elapsed,
                    exc,
                )
                raise
            else:
                elapsed = round((time.perf_counter() - t0) * 1000, 2)
                logger.info(
                    "serpstat method=%s id=%s attempt=%d outcome=ok ms=%.1f",
                    method,
                    envelope.id,
                    attempt,
                    elapsed,
                )
                return result

            if state.attempts_remaining <= 0:
                logger.error("serpstat method=%s id=%s retries exhausted after %d attempt(s)", method, envelope.id, attempt)
                raise state.last_error

            state.attempts_remaining -= 1
            await asyncio.sleep(self._settings.retry_delay_seconds)

    # -----------------------------------------------------------------------
    # Single attempt
    # -----------------------------------------------------------------------

    async def _send(self, envelope: RequestEnvelope) -> Any:
        try:
            response = await self._http.post(
                self._settings.serpstat_api_url,
                params={"token": self._settings.serpstat_api_token},
                json=envelope.model_dump(),
            )
        except httpx.TimeoutException as exc:
            raise TransientError(f"Serpstat API request timed out: {exc!r}") from exc
        except (httpx.NetworkError, httpx.RemoteProtocolError) as exc:
            raise TransientError(f"Serpstat API connection failed: {exc!r}") from exc
        except httpx.TransportError as exc:
            raise SerpstatError(f"Serpstat API request failed: {exc!r}") from exc

        return _unwrap(response)


def _unwrap(response: httpx.Response) -> Any:
    status = response.status_code
    if status >= 500:
        raise TransientError(f"Serpstat API returned HTTP {status}", status_code=status)

    try:
        payload: Any = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and payload.get("error") is not None:
        error = _remote_error(payload["error"])
        raise ApplicationError(
            f"Serpstat API error: {error.message} (code: {error.code})",
            code=error.code,
            data=error.data,
            status_code=status,
        )

    if status >= 400:
        raise ApplicationError(f"Serpstat API returned HTTP {status}", status_code=status)

    if not isinstance(payload, dict):
        raise ProtocolError(payload=payload)

    try:
        envelope = ResponseEnvelope.model_validate(payload)
    except ValidationError as exc:
        raise ProtocolError(payload=payload) from exc

    if envelope.result is None:
        raise ProtocolError(payload=payload)
    return envelope.result


def _remote_error(raw: Any) -> RemoteError:
    if isinstance(raw, dict):
        try:
            return RemoteError.model_validate(raw)
        except ValidationError:
            return RemoteError(message=str(raw.get("message", raw)))
    return RemoteError(message=str(raw))


def _outcome(exc: SerpstatError) -> str:
    if isinstance(exc, ApplicationError):
        return "application_error"
    if isinstance(exc, ProtocolError):
        return "protocol_error"
    return "failed"
