# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains everything that talks to the Port.io API:
# configuration, token handling, the HTTP gateway, response formatting and
# the catalog tool pipeline.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or the MCP SDK.  Every module
#   here can be driven from a plain asyncio test with a fake HTTP transport.
#   tools/ is the only layer that knows about the protocol.
# =============================================================================
