# =============================================================================
# core/gateway.py  —  Authenticated requests to the Port.io API
# =============================================================================
#
# PortClient is the one place that performs catalog HTTP calls.  It asks the
# TokenManager for a bearer token, sends the request with JSON headers and
# returns the parsed body.
#
# ERROR POLICY:
#   Failures are logged here (method + path) and re-raised as PortError
#   subclasses.  The gateway never swallows an error; deciding what the
#   caller sees is the tool layer's job.
#     non-2xx response        → UpstreamError(status, body)
#     no usable response      → TransportError (network failure, bad
#                               URL, redirect loop, undecodable body)
#     token problems          → ConfigurationError / AuthenticationError,
#                               passed through unchanged
# =============================================================================

import logging
import time
from typing import Any, Callable, Optional

import httpx

from core.auth import TokenManager
from core.config import PortSettings
from core.errors import TransportError, UpstreamError

logger = logging.getLogger(__name__)


class PortClient:
    """Thin async wrapper around the Port.io REST API."""

    def __init__(
        self,
        settings: PortSettings,
        http: Optional[httpx.AsyncClient] = None,
        tokens: Optional[TokenManager] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.settings = settings
        self._owns_http = http is None
        self._http = http if http is not None else httpx.AsyncClient()
        if tokens is None:
            tokens = TokenManager(settings, self._http, clock or time.time)
        self.tokens = tokens

    @classmethod
    def from_env(cls) -> "PortClient":
        return cls(PortSettings.from_env())

    async def request(self, method: str, path: str, body: Any = None) -> Any:
        """Send ``method`` to ``api_url + path`` and return the decoded JSON.

        ``path`` starts with ``/v1`` and may already carry a query string.
        """
        token = await self.tokens.get_valid_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        url = f"{self.settings.api_url}{path}"

        try:
            response = await self._http.request(method, url, headers=headers, json=body)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.error("API request failed: %s %s (%s)", method, path, exc)
            raise TransportError(f"Could not reach Port.io API: {exc}") from exc

        if not response.is_success:
            error = UpstreamError(response.status_code, _decode(response), method, path)
            logger.error("API request failed: %s %s -> %s", method, path, response.status_code)
            raise error

        return _decode(response)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
