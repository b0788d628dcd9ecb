"""Candidate, event, recruitment source and pipeline endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from cinode_client.resources.base import parse_item, parse_items
from cinode_core.models.candidate import (
    Candidate,
    CandidateEvent,
    CandidateRecord,
    CandidateSpecialEvent,
    Pipeline,
    RecruitmentSource,
    Stage,
)

if TYPE_CHECKING:
    from cinode_client.gateway import ApiGateway

logger = structlog.get_logger()


def _is_valid_stage(raw: Any) -> bool:
    try:
        Stage.model_validate(raw)
    except ValidationError:
        return False
    return True


def _lenient_pipeline(raw: Any) -> Any:
    """Drop malformed stages so the pipeline itself still parses."""
    if not isinstance(raw, dict):
        return raw
    stages = raw.get("stages")
    if not isinstance(stages, list):
        logger.warning("pipeline_stages_malformed", pipeline_id=raw.get("id"))
        return {**raw, "stages": []}
    valid = [s for s in stages if _is_valid_stage(s)]
    if len(valid) != len(stages):
        logger.warning("pipeline_stages_skipped", pipeline_id=raw.get("id"))
    return {**raw, "stages": valid}


class CandidateResource:
    """Read candidates and the reference data needed to describe them."""

    def __init__(self, gateway: ApiGateway) -> None:
        """Initialize with a gateway."""
        self._gateway = gateway

    async def list_candidates(self) -> list[Candidate]:
        """GET /companies/{id}/candidates; a null body is an error."""
        data = await self._gateway.get(
            self._gateway.company_path("candidates"), require_data=True
        )
        return parse_items(Candidate, data, "candidates")

    async def get_candidate(self, candidate_id: int) -> CandidateRecord | None:
        """GET /companies/{id}/candidates/{candidateId}; None for an empty body."""
        data = await self._gateway.get(self._gateway.company_path("candidates", candidate_id))
        if not data:
            return None
        return parse_item(CandidateRecord, data, "candidate")

    async def list_events(self, candidate_id: int) -> list[CandidateEvent]:
        """GET /companies/{id}/candidates/{candidateId}/events."""
        data = await self._gateway.get(
            self._gateway.company_path("candidates", candidate_id, "events")
        )
        return parse_items(CandidateEvent, data, "candidate events")

    async def get_event(self, candidate_id: int, event_id: int | str) -> CandidateSpecialEvent:
        """GET /companies/{id}/candidates/{candidateId}/events/{eventId}."""
        data = await self._gateway.get(
            self._gateway.company_path("candidates", candidate_id, "events", event_id)
        )
        return parse_item(CandidateSpecialEvent, data, "candidate event")

    async def list_recruitment_sources(self) -> list[RecruitmentSource]:
        """GET /companies/{id}/candidates/recruitment-sources."""
        data = await self._gateway.get(
            self._gateway.company_path("candidates", "recruitment-sources")
        )
        return parse_items(RecruitmentSource, data, "recruitment sources")

    async def list_pipelines(self) -> list[Pipeline]:
        """GET /companies/{id}/candidates/pipelines."""
        data = await self._gateway.get(self._gateway.company_path("candidates", "pipelines"))
        if isinstance(data, list):
            data = [_lenient_pipeline(raw) for raw in data]
        return parse_items(Pipeline, data, "pipelines")
