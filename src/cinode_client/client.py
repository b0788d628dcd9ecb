"""Facade wiring auth, gateway, resources and aggregators for one session."""

from __future__ import annotations

import time
from collections.abc import Callable
from types import TracebackType
from typing import TYPE_CHECKING

import httpx
import structlog

from cinode_client.aggregators.candidates import CandidateAggregator
from cinode_client.aggregators.employees import EmployeeAggregator
from cinode_client.auth import AuthClient
from cinode_client.gateway import ApiGateway
from cinode_client.rate_limit import RateLimiter
from cinode_client.resources.candidates import CandidateResource
from cinode_client.resources.employees import EmployeeResource
from cinode_client.token_store import TokenStore

if TYPE_CHECKING:
    from cinode_core.config.settings import Settings
    from cinode_infra.repositories.snapshot_repo import SnapshotRepository

logger = structlog.get_logger()


class CinodeClient:
    """Everything needed to talk to the vendor API, sharing one HTTP client.

    Use as an async context manager; the HTTP client is closed on exit
    unless it was passed in.
    """

    def __init__(
        self,
        settings: Settings,
        repository: SnapshotRepository,
        *,
        http: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.time,
        api_limiter: RateLimiter | None = None,
        event_limiter: RateLimiter | None = None,
    ) -> None:
        """Wire the components from settings; http and limiters are injectable."""
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        self.auth = AuthClient(settings, self.http)
        self.tokens = TokenStore(self.auth, clock=clock)
        self.gateway = ApiGateway(
            self.http, self.tokens, settings.api_endpoint, settings.company_id
        )
        self.employees = EmployeeResource(
            self.gateway, settings.app_url, settings.resume_template
        )
        self.candidates = CandidateResource(self.gateway)

        api_limiter = api_limiter or RateLimiter.from_millis(settings.api_delay_ms, name="api")
        event_limiter = event_limiter or RateLimiter.from_millis(
            settings.event_delay_ms, name="events"
        )
        self.employee_aggregator = EmployeeAggregator(self.employees, repository, api_limiter)
        self.candidate_aggregator = CandidateAggregator(
            self.candidates, self.employees, api_limiter, event_limiter
        )

    async def __aenter__(self) -> CinodeClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this facade created it."""
        if self._owns_http:
            await self.http.aclose()
            logger.debug("http_client_closed")
