"""Pure lookups and joins over already-fetched vendor data.

Nothing here touches the network. Lookup misses resolve to sentinels
(Pipeline.unknown(), Stage.unknown(), an empty display name) and never raise.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from cinode_core.models.candidate import CandidateState, Pipeline, RecruitmentSource, Stage
from cinode_core.models.employee import (
    CompanyUser,
    CompanyUserWithResume,
    EmployeeStats,
    Resume,
    UserResumeEntry,
)


def resolve_pipeline(pipelines: Sequence[Pipeline], pipeline_id: int | None) -> Pipeline:
    """Pipeline with pipeline_id, or the Unknown Pipeline sentinel."""
    for pipeline in pipelines:
        if pipeline.id == pipeline_id:
            return pipeline
    return Pipeline.unknown()


def resolve_stage(stages: object, stage_id: int | None) -> Stage:
    """Stage with stage_id, or the Unknown Stage sentinel.

    stages may be anything the vendor sent; non-lists and non-Stage items
    are ignored.
    """
    if not isinstance(stages, list):
        return Stage.unknown()
    for stage in stages:
        if isinstance(stage, Stage) and stage.id == stage_id:
            return stage
    return Stage.unknown()


def resolve_recruitment_source(
    sources: Sequence[RecruitmentSource], source_id: int | None
) -> str | None:
    """Name of the recruitment source with source_id, None if unknown."""
    if source_id is None:
        return None
    for source in sources:
        if source.id == source_id:
            return source.name
    return None


def state_key(value: int | None) -> str:
    """CandidateState key for an ordinal; unmapped ordinals become 'Open'."""
    return CandidateState.key_for(value)


def describe(title: str | None, description: str | None) -> str:
    """'<title>: <description>' as shown for pipelines and stages."""
    return f"{title or ''}: {description or ''}"


def find_company_user(users: Iterable[CompanyUser], user_id: int | None) -> CompanyUser | None:
    """Company user with user_id, None when absent."""
    if user_id is None:
        return None
    for user in users:
        if user.company_user_id == user_id:
            return user
    return None


def display_name_for(users: Iterable[CompanyUser], user_id: int | None) -> str:
    """'First Last' of the acting user, '' when unresolved."""
    user = find_company_user(users, user_id)
    if user is None:
        return ""
    return user.display_name


def join_users_with_resumes(
    users: Sequence[CompanyUser], resumes: Sequence[Resume]
) -> list[CompanyUserWithResume]:
    """Inner-join resumes to users on companyUserId.

    Resumes whose owner is not in users are dropped. Each resume yields at
    most one row, using the first matching user.
    """
    by_id: dict[int, CompanyUser] = {}
    for user in users:
        by_id.setdefault(user.company_user_id, user)

    joined: list[CompanyUserWithResume] = []
    for resume in resumes:
        user = by_id.get(resume.company_user_id)
        if user is None:
            continue
        joined.append(
            CompanyUserWithResume(
                user_id=resume.company_user_id,
                name=user.display_name,
                resume_id=resume.id,
            )
        )
    return joined


def build_employee_stats(
    employees: Sequence[tuple[int, str | None]], resumes: Sequence[Resume]
) -> EmployeeStats:
    """Flatten (userId, resumeId) pairs for the given employees.

    employees holds (user_id, name) tuples. Pairs are de-duplicated, so a
    resume listed twice, or an employee persisted twice, counts once.
    """
    resumes_by_user: dict[int, list[Resume]] = {}
    for resume in resumes:
        resumes_by_user.setdefault(resume.company_user_id, []).append(resume)

    seen: set[tuple[int, int]] = set()
    entries: list[UserResumeEntry] = []
    for user_id, name in employees:
        for resume in resumes_by_user.get(user_id, []):
            pair = (user_id, resume.id)
            if pair in seen:
                continue
            seen.add(pair)
            entries.append(
                UserResumeEntry(user_id=user_id, name=name or f"User {user_id}", resume_id=resume.id)
            )

    entries.sort(key=lambda e: e.user_id)
    return EmployeeStats(
        users=entries,
        unique_user_count=len({e.user_id for e in entries}),
        total_resumes=len(entries),
    )
