# =============================================================================
# core/auth.py  —  Access token acquisition & caching
# =============================================================================
#
# Port.io hands out bearer tokens in exchange for a client id/secret pair.
# Tokens are valid for an hour; we treat them as expired after 50 minutes
# so a request never starts with a token that is about to lapse.
#
# The TokenManager is the only stateful object in the process.  It is
# created once per PortClient and holds (token, expires_at).  Both the
# clock and the HTTP client are injected, so tests can step time forward
# and count authentication requests without touching the network.
#
# CONCURRENCY:
#   Two tool calls that find the token expired at the same moment will both
#   authenticate.  Both tokens are valid and the last write wins, so there
#   is no lock.
# =============================================================================

import logging
import time
from typing import Callable, Optional

import httpx

from core.config import PortSettings
from core.errors import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/auth/access_token"
TOKEN_LIFETIME_SECONDS = 50 * 60


class TokenManager:
    """Fetches and caches the Port.io access token."""

    def __init__(
        self,
        settings: PortSettings,
        http: httpx.AsyncClient,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings
        self._http = http
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at: float = 0.0

    @property
    def expires_at(self) -> float:
        return self._expires_at

    def has_valid_token(self) -> bool:
        return self._token is not None and self._clock() < self._expires_at

    async def get_valid_token(self) -> str:
        """Return the cached token, authenticating first if it has expired.

        Raises:
            ConfigurationError: the credential is not configured.
            AuthenticationError: Port.io rejected the credential, could not
                be reached, or answered without an ``accessToken``.
        """
        if self.has_valid_token():
            return self._token

        if not self._settings.has_credentials:
            raise ConfigurationError(
                "PORT_CLIENT_ID and PORT_CLIENT_SECRET environment variables are required"
            )

        url = f"{self._settings.api_url}{TOKEN_PATH}"
        payload = {
            "clientId": self._settings.client_id,
            "clientSecret": self._settings.client_secret,
        }
        try:
            response = await self._http.post(url, json=payload)
            response.raise_for_status()
            token = response.json()["accessToken"]
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, KeyError, TypeError) as exc:
            logger.error("Failed to get access token: %s", exc)
            raise AuthenticationError("Failed to authenticate with Port.io API") from exc

        if not token:
            logger.error("Failed to get access token: empty accessToken in response")
            raise AuthenticationError("Failed to authenticate with Port.io API")

        self._token = token
        self._expires_at = self._clock() + TOKEN_LIFETIME_SECONDS
        logger.info("Obtained Port.io access token (valid for %d minutes)", TOKEN_LIFETIME_SECONDS // 60)
        return token
