"""
Description: Tool result envelope
Main features:
    - Single text block holding pretty-printed JSON or an error string
    - Serialized with the protocol's camelCase field names
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# region Result models
class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """
    Uniform result of every tool invocation

    Attributes:
        content: exactly one text block
        is_error: True when the text is an "Error: ..." message
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    content: list[TextContent]
    is_error: bool = Field(default=False, alias="isError")

    @property
    def text(self) -> str:
        return self.content[0].text

    @classmethod
    def from_data(cls, data: Any) -> ToolResult:
        text = data if isinstance(data, str) else json.dumps(data, indent=2, ensure_ascii=False)
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def from_error(cls, error: BaseException | str) -> ToolResult:
        message = str(error) or "Unknown error occurred"
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
# endregion
