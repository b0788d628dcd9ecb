"""Authenticated access to the vendor REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from cinode_core.exceptions import EmptyResponseError, HttpStatusError, TransportError

if TYPE_CHECKING:
    from cinode_client.token_store import TokenStore

logger = structlog.get_logger()


class ApiGateway:
    """Issue GET/POST requests with valid bearer headers and map failures.

    Transport failures raise TransportError, non-2xx statuses raise
    HttpStatusError and empty or unparseable bodies raise EmptyResponseError.
    With require_data a JSON null is rejected too, while an empty list is
    a valid answer.
    Nothing is cached.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        tokens: TokenStore,
        api_endpoint: str,
        company_id: str,
    ) -> None:
        """Initialize with a shared HTTP client, token store and API coordinates."""
        self._http = http
        self._tokens = tokens
        self._api_endpoint = api_endpoint.rstrip("/")
        self._company_id = company_id

    def company_path(self, *segments: object) -> str:
        """Build '/companies/<companyId>/<segments...>'."""
        parts = ["companies", self._company_id, *(str(s) for s in segments)]
        return "/" + "/".join(parts)

    async def get(self, path: str, *, require_data: bool = False) -> Any:
        """GET path and return the parsed JSON body."""
        return await self._request("GET", path, require_data=require_data)

    async def post(self, path: str, body: Any, *, require_data: bool = False) -> Any:
        """POST a JSON body to path and return the parsed JSON body."""
        return await self._request("POST", path, body=body, require_data=require_data)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        require_data: bool,
    ) -> Any:
        url = f"{self._api_endpoint}{path}"
        headers = await self._tokens.get_headers()

        try:
            if body is None:
                response = await self._http.request(method, url, headers=headers)
            else:
                response = await self._http.request(method, url, headers=headers, json=body)
        except httpx.HTTPError as e:
            logger.error("api_transport_failed", method=method, path=path, error=str(e))
            msg = f"{method} {path} failed: {e}"
            raise TransportError(msg) from e

        if not response.is_success:
            logger.error("api_status_error", method=method, path=path, status=response.status_code)
            raise HttpStatusError(response.status_code, url)

        try:
            data = response.json()
        except ValueError as e:
            msg = f"{method} {path} returned a body that is not JSON"
            raise EmptyResponseError(msg) from e

        if require_data and data is None:
            msg = f"Empty response from server for {method} {path}"
            raise EmptyResponseError(msg)

        logger.debug("api_request_ok", method=method, path=path, status=response.status_code)
        return data
