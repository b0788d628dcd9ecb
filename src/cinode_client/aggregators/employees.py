"""Employee enrichment, resume statistics and skill search."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from cinode_client.resolvers import build_employee_stats, join_users_with_resumes
from cinode_core.exceptions import CinodeError
from cinode_core.models.employee import (
    CompanyUserWithResume,
    EmployeeDetail,
    EmployeeStats,
    SkilledUser,
    SkillSummary,
    UserProfile,
)

if TYPE_CHECKING:
    from cinode_client.rate_limit import RateLimiter
    from cinode_client.resources.employees import EmployeeResource
    from cinode_infra.repositories.snapshot_repo import SnapshotRepository

logger = structlog.get_logger()


class EmployeeAggregator:
    """Join users with resumes, persist resume bodies and derive stats."""

    def __init__(
        self,
        employees: EmployeeResource,
        repository: SnapshotRepository,
        limiter: RateLimiter,
    ) -> None:
        """Initialize with the employee endpoints, snapshot repository and pacer."""
        self._employees = employees
        self._repository = repository
        self._limiter = limiter

    async def get_users_with_resume_id(self) -> list[CompanyUserWithResume]:
        """Users joined with their resumes; resumes without a user are dropped."""
        users = await self._employees.list_users()
        resumes = await self._employees.list_resumes()
        return join_users_with_resumes(users, resumes)

    async def fetch_employee_details(self) -> list[EmployeeDetail]:
        """Fetch and persist the resume body of every employee with a resume.

        Employees whose resume fetch fails are logged and skipped; already
        persisted employees stay as they are.
        """
        try:
            joined = await self.get_users_with_resume_id()
        except CinodeError as e:
            logger.error("employees_batch_aborted", error=str(e), error_type=type(e).__name__)
            return []

        logger.info("employees_batch_start", employees=len(joined))
        stored: list[EmployeeDetail] = []
        for employee in joined:
            await self._limiter.acquire()
            try:
                body = await self._employees.get_resume(employee.user_id, employee.resume_id)
            except CinodeError as e:
                logger.warning(
                    "employee_skipped",
                    user_id=employee.user_id,
                    resume_id=employee.resume_id,
                    error=str(e),
                )
                continue

            detail = EmployeeDetail(
                user_id=employee.user_id,
                name=employee.name,
                resume_id=employee.resume_id,
                resumes=body,
            )
            await self._repository.save_employee(detail)
            stored.append(detail)

        # Keep earlier snapshots of current users whose fetch failed this time.
        fresh = {d.user_id for d in stored}
        user_ids: list[int] = []
        for user_id in dict.fromkeys(e.user_id for e in joined):
            if user_id in fresh or await self._repository.get_employee(user_id) is not None:
                user_ids.append(user_id)
        await self._repository.set_employee_ids(user_ids)
        pruned = await self._repository.prune_employees(set(user_ids))
        logger.info("employees_batch_end", stored=len(stored), users=len(user_ids), pruned=pruned)
        return stored

    async def read_employee_data(self) -> list[EmployeeDetail]:
        """Persisted employees in stored id order."""
        return await self._repository.list_employees()

    async def get_stats(self) -> EmployeeStats:
        """(userId, resumeId) pairs of the persisted employees.

        Uses one resume-list request and no per-user requests. Returns empty
        stats when the resume list cannot be fetched.
        """
        employees: list[tuple[int, str | None]] = []
        for user_id in await self._repository.get_employee_ids():
            detail = await self._repository.get_employee(user_id)
            employees.append((user_id, detail.name if detail else None))

        try:
            resumes = await self._employees.list_resumes()
        except CinodeError as e:
            logger.error("stats_resume_list_failed", error=str(e))
            return EmployeeStats()

        stats = build_employee_stats(employees, resumes)
        logger.info(
            "stats_computed",
            unique_users=stats.unique_user_count,
            total_resumes=stats.total_resumes,
        )
        return stats

    async def get_user_profile(self, user_id: int) -> UserProfile:
        """Education and languages of one user."""
        return await self._employees.get_profile(user_id)

    async def get_user_skills(self, user_id: int) -> list[SkillSummary]:
        """Skills with work experience of one user."""
        return await self._employees.list_skills(user_id)

    async def search_users_by_skill(self, term: str) -> list[SkilledUser]:
        """Users holding a skill whose synonym equals term (case-insensitive).

        Only users with positive experience in the skill are returned.
        """
        try:
            hits = await self._employees.search_skill(term)
        except CinodeError as e:
            logger.error("skill_search_failed", term=term, error=str(e))
            return []

        wanted = term.lower()
        results: list[SkilledUser] = []
        for hit in hits:
            keyword = next(
                (s for s in hit.skills if s.keyword_synonym_name.lower() == wanted), None
            )
            if keyword is None:
                continue

            await self._limiter.acquire()
            try:
                skill = await self._employees.get_skill(hit.company_user_id, keyword.keyword_id)
            except CinodeError as e:
                logger.warning("skill_lookup_skipped", user_id=hit.company_user_id, error=str(e))
                continue

            if skill.number_of_days_work_experience > 0:
                results.append(
                    SkilledUser(
                        user_id=skill.company_user_id,
                        name=hit.display_name,
                        skill=term,
                        skill_level=skill.level,
                        skill_experience_in_days=skill.number_of_days_work_experience,
                    )
                )
        return results
