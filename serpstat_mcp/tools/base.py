"""ToolSpec – one catalogue row: tool name, remote method and parameter schema."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from serpstat_mcp.validation.schema import Schema


class ToolSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    method: str
    """Remote procedure, e.g. ``SerpstatBacklinksProcedure.getSummaryV2``."""

    category: str
    input_schema: Schema

    def input_json_schema(self) -> dict[str, Any]:
        return self.input_schema.json_schema()
