"""
Description: Apex MCP Server entrypoint
Main features:
    - Loads .env and settings, configures logging
    - Runs the stdio transport or the HTTP transport (uvicorn)
    - Exits with status 1 on configuration or startup failure
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from dotenv import load_dotenv
import yaml
from pydantic import ValidationError

from apex_mcp.config import LoggingSettings, Settings, load_settings
from apex_mcp.errors import ConfigurationError
from apex_mcp.utils.logger import setup_logging


logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="apex-mcp", description="Apex MCP server")
    parser.add_argument("--transport", choices=["stdio", "http"], help="override MCP_TRANSPORT")
    parser.add_argument("--host", help="HTTP listen host")
    parser.add_argument("--port", type=int, help="HTTP listen port")
    parser.add_argument("--config", help="path to config.yaml")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    server = settings.server.model_copy(
        update={
            key: value
            for key, value in (
                ("transport", args.transport),
                ("host", args.host),
                ("port", args.port),
            )
            if value is not None
        }
    )
    return settings.model_copy(update={"server": server})


def _run_stdio(settings: Settings) -> None:
    from apex_mcp.server.stdio import serve_stdio
    from apex_mcp.tools.registry import ToolRegistry

    registry = ToolRegistry(
        settings.credentials(),
        enabled=settings.tools.enabled,
        timeout=settings.apex.request.timeout,
    )
    asyncio.run(serve_stdio(registry))


def _run_http(settings: Settings) -> None:
    import uvicorn

    from apex_mcp.server.app_factory import create_app

    app = create_app(settings)
    host, port = settings.server.host, settings.server.port
    logger.info("MCP Server listening on http://%s:%s/mcp", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    try:
        settings = resolve_settings(args)
    except (ConfigurationError, ValidationError, yaml.YAMLError) as exc:
        setup_logging(LoggingSettings())
        logger.error("Invalid configuration: %s", exc)
        return 1
    setup_logging(settings.logging)

    try:
        settings.credentials()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1

    try:
        if settings.server.transport == "stdio":
            _run_stdio(settings)
        else:
            _run_http(settings)
    except KeyboardInterrupt:
        return 0
    except SystemExit as exc:
        # uvicorn exits with 1 when the port cannot be bound
        return int(exc.code or 0)
    except Exception:
        logger.exception("Failed to start %s transport", settings.server.transport)
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
