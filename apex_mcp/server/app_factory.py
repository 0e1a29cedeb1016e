"""Application factory for the HTTP transport."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from apex_mcp import __version__
from apex_mcp.apex.client import ApexClient
from apex_mcp.config import Settings, get_settings
from apex_mcp.server.http import router as mcp_router
from apex_mcp.server.streamable_http import MCP_PATH, StreamableHTTPEndpoint, create_session_manager
from apex_mcp.tools.registry import ToolRegistry, catalog


logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create the FastAPI application

    Credentials are resolved here so a missing API key fails at startup.

    Raises:
        ConfigurationError: APEX_API_KEY is missing
    """
    settings = settings or get_settings()
    credentials = settings.credentials()

    known = {spec.name for spec in catalog()}
    unknown = sorted(set(settings.tools.enabled) - known)
    if unknown:
        logger.warning("Ignoring unknown tools in tools.enabled: %s", ", ".join(unknown))

    # credentials are immutable and the registry holds no per-call state
    registry = ToolRegistry(
        credentials,
        client=ApexClient(credentials, timeout=settings.apex.request.timeout, transport=transport),
        enabled=settings.tools.enabled,
    )
    sessions = create_session_manager(registry)

    @asynccontextmanager
    async def _lifespan(_: FastAPI):
        async with sessions.run():
            yield

    app = FastAPI(title="Apex MCP Server", version=__version__, lifespan=_lifespan)
    app.state.settings = settings
    app.state.credentials = credentials
    app.state.apex_transport = transport
    app.state.mcp_sessions = sessions
    app.include_router(mcp_router)
    app.add_route(MCP_PATH, StreamableHTTPEndpoint(sessions), methods=["POST"])

    logger.info(
        "HTTP transport configured",
        extra={
            "api_url": credentials.api_base_url,
            "tools_enabled_count": len(settings.tools.enabled) or len(known),
        },
    )
    return app
