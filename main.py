# =============================================================================
# main.py  -  Entry Point for the Affinity MCP Server
# =============================================================================
#
# HOW TO RUN:
#   AFFINITY_API_KEY=... uv run python main.py
#   (or put AFFINITY_API_KEY / PORT in a .env file)
#
# WHAT HAPPENS:
#   1. Loads .env into the environment
#   2. Reads settings; exits with status 1 if AFFINITY_API_KEY is missing
#   3. Builds the AppContext (settings + Affinity client + tool registry)
#   4. Serves MCP over streamable HTTP at http://0.0.0.0:PORT/mcp
# =============================================================================

import asyncio
import logging
import sys

from dotenv import load_dotenv

from core.config import load_settings
from core.context import build_context
from core.errors import ConfigError
from tools.mcp_server import serve


def main() -> None:
    # Must happen before load_settings() so .env values are visible.
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigError as exc:
        logging.error(f"Error: {exc}")
        sys.exit(1)

    context = build_context(settings)
    try:
        asyncio.run(serve(context))
    except KeyboardInterrupt:
        logging.info("Shutting down")


if __name__ == "__main__":
    main()
