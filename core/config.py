# =============================================================================
# core/config.py  —  Port.io connection settings
# =============================================================================
#
# Configuration is entirely environment-driven:
#   PORT_CLIENT_ID      (required)  credential identifier
#   PORT_CLIENT_SECRET  (required)  credential secret
#   PORT_API_URL        (optional)  upstream base URL
#
# Nothing is validated here.  Missing credentials are reported by the
# TokenManager on the first authenticated call, not at startup, so the
# server can still start and list its tools.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "https://api.getport.io"


@dataclass(frozen=True)
class PortSettings:
    """Credential and base URL for the Port.io API."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    api_url: str = DEFAULT_API_URL

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PortSettings":
        """Read settings from ``environ`` (defaults to ``os.environ``).

        Empty strings count as unset.  A trailing slash on the base URL is
        dropped so that paths like ``/v1/entities`` can be appended directly.
        """
        env = os.environ if environ is None else environ
        api_url = env.get("PORT_API_URL") or DEFAULT_API_URL
        return cls(
            client_id=env.get("PORT_CLIENT_ID") or None,
            client_secret=env.get("PORT_CLIENT_SECRET") or None,
            api_url=api_url.rstrip("/"),
        )
