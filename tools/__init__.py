# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP layer.
#
# ARCHITECTURAL ROLE:
#   tools/ translates between MCP and core/.  mcp_server.py:
#     1. Declares each tool's parameter schema as a typed function signature
#     2. Passes the validated arguments to core.catalog.run_catalog_tool()
#     3. Wraps the resulting text in an MCP text content block
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build endpoints or format responses (that's core/catalog.py
#     and core/formatting.py)
#   - They do NOT talk HTTP (that's core/gateway.py)
# =============================================================================
