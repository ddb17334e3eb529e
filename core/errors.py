"""Errors raised while talking to the Port.io API.

Tool handlers catch every ``PortError`` and report it in-band as text, so
these never cross the MCP boundary.  Argument validation errors are not
part of this hierarchy: FastMCP rejects malformed tool arguments with
pydantic's ``ValidationError`` before a handler runs.
"""

import json
from typing import Any


class PortError(Exception):
    """Base class for everything this package raises."""


class ConfigurationError(PortError):
    """PORT_CLIENT_ID or PORT_CLIENT_SECRET is missing."""


class AuthenticationError(PortError):
    """The token endpoint rejected the credential or could not be reached."""


class UpstreamError(PortError):
    """A catalog endpoint answered with a non-2xx status."""

    def __init__(self, status: int, body: Any, method: str = "", path: str = ""):
        self.status = status
        self.body = body
        self.method = method
        self.path = path
        super().__init__(f"Port API request failed with status {status}: {_short(body)}")


class TransportError(PortError):
    """The request never produced an HTTP response (DNS, connect, read...)."""


class ResponseFormatError(PortError):
    """The upstream JSON did not have the shape a formatter expects."""


def _short(body: Any, limit: int = 300) -> str:
    text = body if isinstance(body, str) else json.dumps(body, default=str)
    return text if len(text) <= limit else text[:limit] + "..."
