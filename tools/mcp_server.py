# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the six Port.io catalog tools on a FastMCP server and runs it
#   over stdio.  Each tool is a thin wrapper around run_catalog_tool() in
#   core/catalog.py; the wrapper's typed signature is the tool's parameter
#   schema.
#
# HOW IT WORKS (the flow):
#   1. The MCP host calls a tool by name (e.g., "get_entities")
#   2. FastMCP validates the arguments against the signature below and
#      rejects bad ones before our code runs
#   3. The wrapper hands the arguments to run_catalog_tool()
#   4. The ToolOutcome's text comes back as a single text content block
#
# ERRORS:
#   Tool calls never fail at the protocol level.  Upstream and credential
#   problems come back as text starting with "Error ...".
#
# RUNNING THIS SERVER:
#     a) python main.py
#     b) python -m tools.mcp_server
# =============================================================================

import logging
import sys
from typing import Annotated, Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from mcp.types import TextContent
from pydantic import Field

from core.catalog import CATALOG_TOOLS, DEFAULT_ENTITY_LIMIT, run_catalog_tool
from core.gateway import PortClient
from core.models import ToolOutcome

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP JSON stream, so every log line goes to STDERR.
#
# ANSI colours keep tool traffic easy to scan:
#   CYAN   incoming tool call with its parameters
#   YELLOW intermediate status
#   GREEN  outgoing response summary
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

SERVER_NAME = "port-mcp-server"
SERVER_VERSION = "1.0.0"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, outcome: ToolOutcome) -> list[TextContent]:
    """Log how the call ended in GREEN, then wrap the text for MCP."""
    if outcome.ok:
        logger.info(f"{_GREEN}  ← {tool_name} response: {len(outcome.text)} chars{_RESET}")
    else:
        _log_status(f"{tool_name} failed with {outcome.error_kind}")
    return [TextContent(type="text", text=outcome.text)]


def build_server(port: PortClient) -> FastMCP:
    """Create the MCP server with every catalog tool bound to ``port``."""
    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)

    async def _call(tool_name: str, **params: Any) -> list[TextContent]:
        _log_request(tool_name, **params)
        outcome = await run_catalog_tool(CATALOG_TOOLS[tool_name], port, **params)
        return _log_response(tool_name, outcome)

    def _register(tool_name: str):
        tool = CATALOG_TOOLS[tool_name]
        return mcp.tool(name=tool.name, description=tool.description)

    # =========================================================================
    # TOOL 1: get_entities
    # =========================================================================
    @_register("get_entities")
    async def get_entities(
        blueprint: Annotated[Optional[str], Field(description="Blueprint identifier to filter by")] = None,
        search: Annotated[Optional[str], Field(description="Search term to filter entities")] = None,
        limit: Annotated[
            float, Field(description="Maximum number of entities to return (max 500)")
        ] = DEFAULT_ENTITY_LIMIT,
    ) -> list[TextContent]:
        return await _call("get_entities", blueprint=blueprint, search=search, limit=limit)

    # =========================================================================
    # TOOL 2: get_entity
    # =========================================================================
    @_register("get_entity")
    async def get_entity(
        blueprint: Annotated[str, Field(description="Blueprint identifier")],
        entity: Annotated[str, Field(description="Entity identifier")],
    ) -> list[TextContent]:
        return await _call("get_entity", blueprint=blueprint, entity=entity)

    # =========================================================================
    # TOOL 3: get_scorecard_results
    # =========================================================================
    @_register("get_scorecard_results")
    async def get_scorecard_results(
        blueprint: Annotated[str, Field(description="Blueprint identifier")],
        scorecard: Annotated[Optional[str], Field(description="Specific scorecard identifier")] = None,
        entity: Annotated[Optional[str], Field(description="Specific entity identifier")] = None,
    ) -> list[TextContent]:
        return await _call("get_scorecard_results", blueprint=blueprint, scorecard=scorecard, entity=entity)

    # =========================================================================
    # TOOL 4: get_blueprints
    # =========================================================================
    @_register("get_blueprints")
    async def get_blueprints(
        search: Annotated[Optional[str], Field(description="Search term to filter blueprints")] = None,
    ) -> list[TextContent]:
        return await _call("get_blueprints", search=search)

    # =========================================================================
    # TOOL 5: search_entities
    # =========================================================================
    # ``properties`` is matched exactly against each entity's properties,
    # on the single page of results Port.io returns for ``query``.
    # =========================================================================
    @_register("search_entities")
    async def search_entities(
        query: Annotated[str, Field(description="Search query")],
        blueprint: Annotated[Optional[str], Field(description="Filter by specific blueprint")] = None,
        properties: Annotated[
            Optional[dict[str, Any]], Field(description="Filter by specific property values")
        ] = None,
    ) -> list[TextContent]:
        return await _call("search_entities", query=query, blueprint=blueprint, properties=properties)

    # =========================================================================
    # TOOL 6: get_actions
    # =========================================================================
    @_register("get_actions")
    async def get_actions(
        blueprint: Annotated[Optional[str], Field(description="Filter actions by blueprint")] = None,
    ) -> list[TextContent]:
        return await _call("get_actions", blueprint=blueprint)

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
# .env is loaded here (existing variables win).  Credentials are read but
# only checked on the first tool call, so a misconfigured server still
# starts and lists its tools.
# =============================================================================
def serve() -> int:
    """Run the server over stdio until the host closes the stream.

    Returns the process exit code: 0 on clean shutdown, 1 if startup failed.
    """
    load_dotenv()
    try:
        server = build_server(PortClient.from_env())
        logger.info("Port.io MCP Server running on stdio")
        server.run()
    except KeyboardInterrupt:
        logger.info("Port.io MCP Server stopped")
    except Exception:
        logger.exception("Fatal error in main()")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(serve())
