"""
Description: Tool descriptor definitions
Main features:
    - ToolInput base models (unknown keys dropped, immutable)
    - ToolSpec data-driven descriptor consumed by the registry
"""

from __future__ import annotations

import string
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# region Input models
class ToolInput(BaseModel):
    """Validated tool arguments"""
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class CamelToolInput(ToolInput):
    """Tool arguments exposed with camelCase names"""
    model_config = ConfigDict(alias_generator=to_camel)
# endregion


# region Descriptor
class ParamDisposition(str, Enum):
    NONE = "none"
    QUERY = "query"
    BODY = "body"


ArgsHook = Callable[[dict[str, Any]], dict[str, Any]]


@dataclass(frozen=True)
class ToolSpec:
    """
    Declarative tool definition

    Attributes:
        name: unique tool name
        description: text shown to the calling agent
        input_model: pydantic model whose schema is the advertised inputSchema
        method: HTTP verb
        path: path template, placeholders use the argument names
        disposition: where non-path arguments go
        shape: optional hook reshaping the remaining arguments
        headers: extra request headers
        skip_empty_body: return early instead of sending an empty body
    """
    name: str
    description: str
    input_model: type[ToolInput]
    method: str
    path: str
    disposition: ParamDisposition = ParamDisposition.NONE
    shape: ArgsHook | None = None
    headers: dict[str, str] = field(default_factory=dict)
    skip_empty_body: bool = False

    @property
    def path_fields(self) -> tuple[str, ...]:
        return tuple(
            name for _, name, _, _ in string.Formatter().parse(self.path) if name
        )

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def to_schema(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }
# endregion
