"""Candidate enrichment: details, pipeline, stage, source, state and events."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import structlog

from cinode_client.resolvers import (
    describe,
    display_name_for,
    resolve_pipeline,
    resolve_recruitment_source,
    resolve_stage,
    state_key,
)
from cinode_core.exceptions import CinodeError
from cinode_core.models.candidate import (
    CandidateDetails,
    CandidateEventDetails,
    CandidateRecord,
    Pipeline,
    RecruitmentSource,
)

if TYPE_CHECKING:
    from cinode_client.rate_limit import RateLimiter
    from cinode_client.resources.candidates import CandidateResource
    from cinode_client.resources.employees import EmployeeResource
    from cinode_core.models.employee import CompanyUser

logger = structlog.get_logger()


def _id_string(value: object) -> str:
    """Identifier as a string; missing ids become ''."""
    return "" if value is None else str(value)


class CandidateAggregator:
    """Build CandidateDetails for every company candidate.

    Requests run strictly one after another. Each candidate detail fetch is
    paced by limiter and each event detail fetch by event_limiter.
    """

    def __init__(
        self,
        candidates: CandidateResource,
        employees: EmployeeResource,
        limiter: RateLimiter,
        event_limiter: RateLimiter,
    ) -> None:
        """Initialize with endpoint wrappers and the two pacers."""
        self._candidates = candidates
        self._employees = employees
        self._limiter = limiter
        self._event_limiter = event_limiter

    async def get_candidates_with_details(self) -> list[CandidateDetails]:
        """Enrich all candidates in list order.

        A failing candidate is logged and skipped. A failure in one of the
        listing calls the whole batch depends on aborts it with [].
        """
        start = time.monotonic()
        try:
            candidates = await self._candidates.list_candidates()
            sources = await self._candidates.list_recruitment_sources()
            pipelines = await self._candidates.list_pipelines()
            users = await self._employees.list_users()
        except CinodeError as e:
            logger.error("candidates_batch_aborted", error=str(e), error_type=type(e).__name__)
            return []

        logger.info("candidates_batch_start", candidates=len(candidates))
        results: list[CandidateDetails] = []
        for index, candidate in enumerate(candidates):
            await self._limiter.acquire()
            try:
                record = await self._candidates.get_candidate(candidate.id)
                if record is None:
                    logger.warning("candidate_details_empty", candidate_id=candidate.id)
                    continue
                details = await self.enrich(record, sources, pipelines, users)
            except CinodeError as e:
                logger.warning(
                    "candidate_skipped",
                    candidate_id=candidate.id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            results.append(details)
            logger.debug("candidate_enriched", index=index, candidate_id=candidate.id)

        logger.info(
            "candidates_batch_end",
            enriched=len(results),
            skipped=len(candidates) - len(results),
            duration_seconds=round(time.monotonic() - start, 2),
        )
        return results

    async def enrich(
        self,
        record: CandidateRecord,
        sources: list[RecruitmentSource],
        pipelines: list[Pipeline],
        users: list[CompanyUser],
    ) -> CandidateDetails:
        """Resolve references of one candidate and attach its events."""
        pipeline = resolve_pipeline(pipelines, record.pipeline_id)
        stage = resolve_stage(pipeline.stages, record.pipeline_stage_id)
        events = await self.get_candidate_events(record.id, users)

        payload = record.to_payload()
        payload.update(
            {
                "id": record.id,
                "companyId": _id_string(record.company_id),
                "seoId": _id_string(record.seo_id),
                "pipeline": describe(pipeline.title, pipeline.description),
                "stage": describe(stage.title, stage.description),
                "recruitmentSource": resolve_recruitment_source(
                    sources, record.recruitment_source_id
                ),
                "state": state_key(record.state),
                "events": [event.to_payload() for event in events],
            }
        )
        return CandidateDetails.model_validate(payload)

    async def get_candidate_events(
        self, candidate_id: int, users: list[CompanyUser]
    ) -> list[CandidateEventDetails]:
        """Events of a candidate with createdBy/updatedBy resolved to names.

        Listing failures propagate; a failing event detail is skipped.
        """
        events = await self._candidates.list_events(candidate_id)
        results: list[CandidateEventDetails] = []
        for event in events:
            await self._event_limiter.acquire()
            try:
                special = await self._candidates.get_event(
                    event.company_candidate_id or candidate_id, event.id
                )
            except CinodeError as e:
                logger.warning(
                    "candidate_event_skipped",
                    candidate_id=candidate_id,
                    event_id=event.id,
                    error=str(e),
                )
                continue
            results.append(
                CandidateEventDetails(
                    title=event.title,
                    description=event.description,
                    event_date=event.event_date,
                    created_by=display_name_for(users, special.created_by_company_user_id),
                    updated_by=display_name_for(users, special.updated_by_company_user_id),
                    created=special.created,
                    updated=special.updated,
                )
            )
        return results
