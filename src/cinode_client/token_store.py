"""In-memory bearer token lifecycle: fetch once, refresh when expired."""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

import structlog

from cinode_core.constants import JSON_HEADERS
from cinode_core.exceptions import TokenDecodeError

if TYPE_CHECKING:
    from cinode_core.models.auth import TokenPair

logger = structlog.get_logger()


class TokenSource(Protocol):
    """Anything that can issue and renew token pairs (AuthClient, fakes)."""

    async def fetch_token(self) -> TokenPair:
        """Exchange app credentials for a new token pair."""
        ...

    async def refresh_token(self, refresh_token: str) -> TokenPair:
        """Renew an expiring token pair."""
        ...


def decode_token_expiry(token: str) -> float:
    """Return the exp claim (Unix seconds) of a JWT-like access token.

    Raises TokenDecodeError when the token has no payload segment or the
    payload is not base64url JSON with a finite numeric exp.
    """
    parts = token.split(".")
    if len(parts) < 2 or not parts[1]:
        msg = "token has no payload segment"
        raise TokenDecodeError(msg)

    segment = parts[1]
    padded = segment + "=" * (-len(segment) % 4)
    try:
        payload = json.loads(base64.urlsafe_b64decode(padded))
    except (binascii.Error, ValueError) as e:
        msg = f"token payload is not base64url JSON: {e}"
        raise TokenDecodeError(msg) from e

    exp = payload.get("exp") if isinstance(payload, dict) else None
    if isinstance(exp, bool) or not isinstance(exp, int | float) or not math.isfinite(exp):
        msg = "token payload has no finite numeric exp claim"
        raise TokenDecodeError(msg)
    return float(exp)


def is_token_expired(token: str, now: float) -> bool:
    """True when exp is at or before now; malformed tokens count as expired."""
    try:
        exp = decode_token_expiry(token)
    except TokenDecodeError as e:
        logger.warning("token_decode_failed", error=str(e))
        return True
    return now * 1000 >= exp * 1000


class TokenStore:
    """Owns the process-wide token pair.

    ensure_valid() is the single mutation point; it runs under a lock so
    concurrent callers trigger at most one fetch or refresh.
    """

    def __init__(
        self,
        source: TokenSource,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize with a token source and a clock returning Unix seconds."""
        self._source = source
        self._clock = clock
        self._token: TokenPair | None = None
        self._lock = asyncio.Lock()

    @property
    def token(self) -> TokenPair | None:
        """Currently held token pair, if any."""
        return self._token

    def is_expired(self, token: TokenPair) -> bool:
        """Whether the access token of token is expired at the current time."""
        return is_token_expired(token.access_token, self._clock())

    async def ensure_valid(self) -> TokenPair:
        """Return a usable token pair, fetching or refreshing as needed."""
        async with self._lock:
            if self._token is None:
                self._token = await self._source.fetch_token()
                logger.info("token_fetched")
            elif self.is_expired(self._token):
                self._token = await self._source.refresh_token(self._token.refresh_token)
                logger.info("token_refreshed")
            return self._token

    async def get_headers(self) -> dict[str, str]:
        """Headers for an authenticated API request."""
        token = await self.ensure_valid()
        return {"Authorization": f"Bearer {token.access_token}", **JSON_HEADERS}

    def clear(self) -> None:
        """Forget the held token so the next call fetches a new one."""
        self._token = None
