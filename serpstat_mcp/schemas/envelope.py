"""JSON-RPC style request/response envelopes exchanged with the Serpstat API."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict


class RemoteError(BaseModel):
    """``error`` member of a response envelope."""

    code: int | str | None = None
    message: str = "Unknown error"
    data: Any | None = None


class RequestEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    method: str
    params: dict[str, Any]

    @classmethod
    def for_call(cls, method: str, params: dict[str, Any]) -> "RequestEnvelope":
        """Build an envelope with a fresh correlation id, e.g. ``getSummaryV2_3f2a...``."""
        procedure = method.rsplit(".", 1)[-1]
        return cls(id=f"{procedure}_{uuid.uuid4().hex}", method=method, params=params)


class ResponseEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | int | None = None
    result: Any | None = None
    error: RemoteError | None = None
