"""
Description: Tool registry
Main features:
    - Catalog of tool descriptors registered at import time
    - Per-credential registry instances with one generic handler
    - Validation before any network call, error results after it
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from apex_mcp.apex.client import ApexClient
from apex_mcp.apex.models import ToolResult
from apex_mcp.apex.response import normalize_response
from apex_mcp.config import Credentials
from apex_mcp.errors import ApexMCPError, ToolNotFoundError, ToolValidationError
from apex_mcp.tools.base import ParamDisposition, ToolInput, ToolSpec


logger = logging.getLogger(__name__)

NO_FIELDS_TO_UPDATE = "No fields to update"

_CATALOG: dict[str, ToolSpec] = {}


# region Catalog
def register_tool(spec: ToolSpec) -> ToolSpec:
    """Add a descriptor to the global catalog"""
    if not spec.name:
        raise ValueError("Tool spec must define a name")
    if spec.name in _CATALOG:
        raise ValueError(f"Tool {spec.name} already registered")
    _CATALOG[spec.name] = spec
    return spec


def catalog() -> list[ToolSpec]:
    return list(_CATALOG.values())
# endregion


# region Registry
class ToolRegistry:
    """
    Tool registry bound to one set of credentials

    Each instance owns its own ApexClient. The HTTP transport builds one
    instance per request so differently-credentialed callers never share
    state.
    """
    def __init__(
        self,
        credentials: Credentials,
        specs: Iterable[ToolSpec] | None = None,
        client: ApexClient | None = None,
        enabled: Iterable[str] | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Args:
            credentials: immutable token and base URL
            specs: tool descriptors, defaults to the global catalog
            client: Apex client, built from credentials when omitted
            enabled: allow-list of tool names, empty means all
            timeout: HTTP timeout for the default client
        """
        self._credentials = credentials
        self._client = client or ApexClient(credentials, timeout=timeout)

        allowed = {name for name in (enabled or []) if name}
        self._tools: dict[str, ToolSpec] = {}
        for spec in specs if specs is not None else catalog():
            if allowed and spec.name not in allowed:
                continue
            if spec.name in self._tools:
                raise ValueError(f"Tool {spec.name} already registered")
            self._tools[spec.name] = spec

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def client(self) -> ApexClient:
        return self._client

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise ToolNotFoundError(name)
        return spec

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool metadata advertised to callers"""
        return [spec.to_schema() for spec in self._tools.values()]

    def list_resources(self) -> list[dict[str, Any]]:
        return []

    def list_prompts(self) -> list[dict[str, Any]]:
        return []

    def validate(self, name: str, arguments: dict[str, Any] | None) -> ToolInput:
        """
        Validate arguments against the tool's input model

        Raises:
            ToolNotFoundError: unknown tool
            ToolValidationError: arguments do not match the schema
        """
        spec = self.get(name)
        try:
            return spec.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            raise ToolValidationError(name, [dict(error) for error in errors]) from exc

    async def call(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """
        Validate and run a tool

        Validation and lookup errors propagate to the transport. Everything
        after validation is returned as an error ToolResult.
        """
        params = self.validate(name, arguments)
        return await self.invoke(self._tools[name], params)

    async def invoke(self, spec: ToolSpec, params: ToolInput) -> ToolResult:
        """Generic handler shared by every tool"""
        logger.info("Tool call", extra={"tool": spec.name})
        try:
            request_kwargs = self._request_kwargs(spec, params)
            if request_kwargs is None:
                return ToolResult.from_data({"message": NO_FIELDS_TO_UPDATE})

            request = self._client.build(spec.method, **request_kwargs)
            response = await self._client.send(request)
            result = normalize_response(response)
            if result.is_error:
                logger.warning(
                    "Tool execution error: %s",
                    result.text,
                    extra={"tool": spec.name, "status_code": response.status_code},
                )
            return result
        except ApexMCPError as exc:
            logger.warning("Tool execution error: %s", exc, extra={"tool": spec.name})
            return ToolResult.from_error(exc)
        except Exception as exc:
            logger.exception("Unexpected tool failure", extra={"tool": spec.name})
            return ToolResult.from_error(exc)

    def _request_kwargs(self, spec: ToolSpec, params: ToolInput) -> dict[str, Any] | None:
        args = params.model_dump(by_alias=True, exclude_none=True)
        path_values = {name: args.pop(name) for name in spec.path_fields}
        path = spec.path.format(**path_values)
        if spec.shape is not None:
            args = spec.shape(args)

        kwargs: dict[str, Any] = {"path": path, "headers": dict(spec.headers) or None}
        if spec.disposition is ParamDisposition.QUERY:
            kwargs["params"] = args
        elif spec.disposition is ParamDisposition.BODY:
            if not args and spec.skip_empty_body:
                return None
            kwargs["json_body"] = args
        return kwargs
# endregion
