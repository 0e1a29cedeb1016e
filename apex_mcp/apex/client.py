"""
Description: Apex API client
Main features:
    - Sends RequestSpec values with httpx
    - Injects credentials through the header policy
    - Maps network failures to TransportError
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from apex_mcp.apex.request import RequestSpec, build_request
from apex_mcp.apex.response import decode_response
from apex_mcp.config import Credentials
from apex_mcp.errors import TransportError


logger = logging.getLogger(__name__)


# region Apex client
class ApexClient:
    """
    Apex API client

    One instance per registry. Holds no mutable state beyond the immutable
    credentials, so concurrent calls are safe.
    """
    def __init__(
        self,
        credentials: Credentials,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            credentials: token and base URL
            timeout: request timeout in seconds, None disables it
            transport: custom httpx transport (tests use httpx.MockTransport)
        """
        self._credentials = credentials
        self._timeout = timeout
        self._transport = transport

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def build(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> RequestSpec:
        return build_request(
            self._credentials,
            path,
            method=method,
            query_params=params,
            body=json_body,
            headers=headers,
        )

    async def send(self, spec: RequestSpec) -> httpx.Response:
        """
        Perform the HTTP call

        Raises:
            TransportError: connection failure, timeout or protocol error
        """
        logger.debug(
            "Apex request",
            extra={"method": spec.method, "url": spec.url, "query_count": len(spec.query_params)},
        )
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                trust_env=False,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    spec.method,
                    spec.url,
                    params=list(spec.query_params) or None,
                    content=spec.body,
                    headers=spec.headers,
                )
                await response.aread()
                return response
        except httpx.HTTPError as exc:
            detail = str(exc).strip()
            message = f"{exc.__class__.__name__}: {detail}" if detail else exc.__class__.__name__
            raise TransportError(f"Request to {spec.url} failed: {message}") from exc

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Build, send and decode one request

        Raises:
            RemoteAPIError: non-2xx status
            TransportError: network failure or invalid JSON
        """
        spec = self.build(method, path, params=params, json_body=json_body, headers=headers)
        response = await self.send(spec)
        return decode_response(response)
# endregion
