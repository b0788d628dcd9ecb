"""Rich tables for CLI output."""

from __future__ import annotations

from rich.table import Table

from cinode_core.models.candidate import CandidateDetails
from cinode_core.models.employee import (
    EmployeeDetail,
    EmployeeStats,
    SkilledUser,
    SkillSummary,
    UserProfile,
)


def employees_table(employees: list[EmployeeDetail]) -> Table:
    """Persisted employees with their resume summary."""
    table = Table(title=f"Employees ({len(employees)})")
    table.add_column("User ID", justify="right")
    table.add_column("Name")
    table.add_column("Resume ID", justify="right")
    table.add_column("Skills", justify="right")
    table.add_column("Resume URL", overflow="fold")
    for employee in employees:
        table.add_row(
            str(employee.user_id),
            employee.name,
            str(employee.resume_id),
            str(len(employee.resumes.skills)),
            employee.resumes.public_url,
        )
    return table


def stats_table(stats: EmployeeStats) -> Table:
    """(userId, name, resumeId) rows of the stats listing."""
    table = Table(
        title=(
            f"Found {stats.unique_user_count} users with {stats.total_resumes} total resumes "
            f"(avg {stats.average_resumes_per_user:.2f} per user)"
        )
    )
    table.add_column("User ID", justify="right")
    table.add_column("Name")
    table.add_column("Resume ID", justify="right")
    for entry in stats.users:
        table.add_row(str(entry.user_id), entry.name, str(entry.resume_id))
    return table


def candidates_table(candidates: list[CandidateDetails]) -> Table:
    """Candidates with pipeline position and state."""
    table = Table(title=f"Candidates ({len(candidates)})")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Pipeline")
    table.add_column("Stage")
    table.add_column("Source")
    table.add_column("State")
    table.add_column("Events", justify="right")
    for c in candidates:
        table.add_row(
            str(c.id),
            f"{c.first_name or ''} {c.last_name or ''}".strip(),
            c.pipeline,
            c.stage,
            c.recruitment_source or "",
            c.state,
            str(len(c.events)),
        )
    return table


def skilled_users_table(term: str, users: list[SkilledUser]) -> Table:
    """Skill search matches."""
    table = Table(title=f"Users with '{term}' ({len(users)})")
    table.add_column("User ID", justify="right")
    table.add_column("Name")
    table.add_column("Level", justify="right")
    table.add_column("Experience (days)", justify="right")
    for user in users:
        table.add_row(
            str(user.user_id),
            user.name,
            "" if user.skill_level is None else str(user.skill_level),
            str(user.skill_experience_in_days),
        )
    return table


def profile_table(profile: UserProfile, skills: list[SkillSummary]) -> Table:
    table = Table(title=f"User {profile.user_id}, languages: {profile.languages or '-'}")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Detail")
    for edu in profile.education:
        period = f"{edu.start_date or '?'} - {edu.end_date or '?'}"
        table.add_row("education", edu.school_name or "", f"{edu.degree or ''} {period}".strip())
    for skill in skills:
        table.add_row(
            "skill",
            skill.master_synonym,
            f"level {skill.level}, {skill.number_of_days_work_experience} days",
        )
    return table
