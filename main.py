# =============================================================================
# main.py  —  Entry Point for the Port.io MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads PORT_CLIENT_ID / PORT_CLIENT_SECRET / PORT_API_URL from .env
#      (variables already set in the environment win)
#   2. Builds the FastMCP server with the six catalog tools
#      (tools/mcp_server.py)
#   3. Serves MCP over stdin/stdout until the host closes the stream
#
# EXIT CODES:
#   0  clean shutdown
#   1  the server could not start
#
# There are no flags or subcommands; configuration is environment-only.
# =============================================================================

import sys

from tools.mcp_server import serve


if __name__ == "__main__":
    sys.exit(serve())
