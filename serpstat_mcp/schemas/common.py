"""Shared tool call / tool response envelopes."""

from __future__ import annotations

import json
from typing import Any, Literal

from mcp import types
from pydantic import BaseModel, ConfigDict, Field


class ToolCall(BaseModel):
    """Inbound request naming a tool and carrying its raw arguments."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Standard envelope for every tool result: ``{content, isError?}``."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextBlock]
    is_error: bool | None = Field(None, alias="isError")

    @classmethod
    def success(cls, data: Any) -> "ToolResponse":
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return cls(content=[TextBlock(text=text)])

    @classmethod
    def failure(cls, message: str) -> "ToolResponse":
        return cls(content=[TextBlock(text=message)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=block.text) for block in self.content],
            isError=bool(self.is_error),
        )
