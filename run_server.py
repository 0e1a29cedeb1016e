"""
Description: Apex MCP Server launch script
Main features:
    - Sets the asyncio policy on Windows
    - Reads config.yaml and .env next to this file
    - Delegates to apex_mcp.main (MCP_TRANSPORT=stdio|http)
"""

from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

# Windows: set the policy before any asyncio use
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

BASE_DIR = Path(__file__).resolve().parent
os.environ.setdefault("CONFIG_PATH", str(BASE_DIR / "config.yaml"))

from dotenv import load_dotenv  # noqa: E402

load_dotenv(BASE_DIR / ".env")

from apex_mcp.main import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
