"""Token endpoint client: Basic-auth handshake and token refresh."""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError

from cinode_core.exceptions import AuthenticationError
from cinode_core.models.auth import TokenPair

if TYPE_CHECKING:
    from cinode_core.config.settings import Settings

logger = structlog.get_logger()


def basic_auth_header(app_id: str, app_secret: str) -> str:
    """Build 'Basic base64(appId:appSecret)'."""
    raw = f"{app_id}:{app_secret}".encode()
    return "Basic " + base64.b64encode(raw).decode("ascii")


class AuthClient:
    """Exchange app credentials for a token pair and refresh it."""

    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        """Initialize with settings and a shared HTTP client."""
        self._token_endpoint = settings.token_endpoint
        self._http = http
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": basic_auth_header(
                settings.app_id, settings.app_secret.get_secret_value()
            ),
        }

    async def fetch_token(self) -> TokenPair:
        """GET the token endpoint with Basic auth."""
        return await self._request("GET", self._token_endpoint, action="fetch")

    async def refresh_token(self, refresh_token: str) -> TokenPair:
        """POST the refresh token to '<tokenEndpoint>/refresh'."""
        return await self._request(
            "POST",
            f"{self._token_endpoint}/refresh",
            action="refresh",
            json={"refreshToken": refresh_token},
        )

    async def _request(
        self,
        method: str,
        url: str,
        *,
        action: str,
        json: dict[str, str] | None = None,
    ) -> TokenPair:
        """Issue a token request; any failure becomes AuthenticationError."""
        try:
            response = await self._http.request(method, url, headers=self._headers, json=json)
            response.raise_for_status()
            return TokenPair.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error("token_request_failed", action=action, status=e.response.status_code)
            msg = f"Error getting token ({action}): HTTP {e.response.status_code}"
            raise AuthenticationError(msg) from e
        except httpx.HTTPError as e:
            logger.error("token_request_failed", action=action, error=str(e))
            msg = f"Error getting token ({action}): {e}"
            raise AuthenticationError(msg) from e
        except (ValueError, ValidationError) as e:
            logger.error("token_response_invalid", action=action, error=str(e))
            msg = f"Error getting token ({action}): invalid token response"
            raise AuthenticationError(msg) from e
