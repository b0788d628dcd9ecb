"""Company user, resume, profile and skill endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from cinode_client.resources.base import parse_item, parse_items
from cinode_core.constants import SKILL_SEARCH_LIMIT
from cinode_core.exceptions import MalformedPayloadError
from cinode_core.models.employee import (
    CompanyUser,
    EducationEntry,
    Resume,
    ResumeBody,
    ResumeSkill,
    SkillSearchHit,
    SkillSummary,
    UserProfile,
    UserSkill,
)

if TYPE_CHECKING:
    from cinode_client.gateway import ApiGateway


def _dicts(data: Any) -> list[dict[str, Any]]:
    """Dict items of a JSON list; anything else yields nothing."""
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]


class EmployeeResource:
    """Read company users, their resumes, profiles and skills."""

    def __init__(
        self,
        gateway: ApiGateway,
        app_url: str = "https://app.cinode.com",
        resume_template: str = "teamit-cv",
    ) -> None:
        """Initialize with a gateway and the web coordinates for public resume URLs."""
        self._gateway = gateway
        self._app_url = app_url.rstrip("/")
        self._resume_template = resume_template

    async def list_users(self) -> list[CompanyUser]:
        """GET /companies/{id}/users."""
        data = await self._gateway.get(self._gateway.company_path("users"))
        return parse_items(CompanyUser, data, "users")

    async def list_resumes(self) -> list[Resume]:
        """GET /companies/{id}/resumes."""
        data = await self._gateway.get(self._gateway.company_path("resumes"))
        return parse_items(Resume, data, "resumes")

    def public_resume_url(self, resume_id: int) -> str:
        """Web URL of a resume rendered with the configured template."""
        return f"{self._app_url}/resumes/{resume_id}/{self._resume_template}"

    async def get_resume(self, user_id: int, resume_id: int) -> ResumeBody:
        """Presentation text and enabled skills of one resume."""
        data = await self._gateway.get(
            self._gateway.company_path("users", user_id, "resumes", resume_id)
        )
        resume = data.get("resume") if isinstance(data, dict) else None
        resume = resume if isinstance(resume, dict) else {}

        presentation = resume.get("presentation") or {}
        skills_block = resume.get("skills") or {}
        raw_skills = skills_block.get("data") if isinstance(skills_block, dict) else None
        if not isinstance(raw_skills, list):
            raw_skills = []

        skills = parse_items(
            ResumeSkill,
            [
                {
                    "name": skill.get("name", ""),
                    "level": skill.get("level"),
                    "numberOfDaysWorkExperience": skill.get("numberOfDaysWorkExperience"),
                }
                for skill in raw_skills
                if isinstance(skill, dict) and not skill.get("disabled")
            ],
            "resume skills",
        )
        try:
            return ResumeBody(
                user_id=user_id,
                resume_id=resume_id,
                public_url=self.public_resume_url(resume_id),
                presentation=(
                    presentation.get("description") if isinstance(presentation, dict) else None
                ),
                skills=skills,
            )
        except ValidationError as e:
            msg = f"Malformed resume {resume_id} payload: {e}"
            raise MalformedPayloadError(msg) from e

    async def get_profile(self, user_id: int) -> UserProfile:
        """Education (first translation of each entry) and languages."""
        data = await self._gateway.get(self._gateway.company_path("users", user_id, "profile"))
        data = data if isinstance(data, dict) else {}

        flattened: list[dict[str, Any]] = []
        for entry in _dicts(data.get("education")):
            translations = _dicts(entry.get("translations"))
            first = translations[0] if translations else {}
            flattened.append(
                {
                    "schoolName": first.get("schoolName"),
                    "programName": first.get("programName"),
                    "degree": first.get("degree"),
                    "startDate": entry.get("startDate"),
                    "endDate": entry.get("endDate"),
                }
            )
        education = parse_items(EducationEntry, flattened, "education")

        cultures: list[str] = []
        for lang in _dicts(data.get("languages")):
            language = lang.get("language")
            culture = language.get("culture") if isinstance(language, dict) else None
            if isinstance(culture, str) and culture:
                cultures.append(culture)
        return UserProfile(user_id=user_id, education=education, languages=", ".join(cultures))

    async def list_skills(self, user_id: int) -> list[SkillSummary]:
        """Skills of a user that carry work experience."""
        data = await self._gateway.get(self._gateway.company_path("users", user_id, "skills"))

        flattened: list[dict[str, Any]] = []
        for raw in _dicts(data):
            keyword = raw.get("keyword")
            keyword = keyword if isinstance(keyword, dict) else {}
            raw_synonyms = keyword.get("synonyms")
            synonyms = raw_synonyms if isinstance(raw_synonyms, list) else []
            flattened.append(
                {
                    "masterSynonym": keyword.get("masterSynonym", ""),
                    "synonyms": ", ".join(s for s in synonyms if isinstance(s, str)),
                    "level": raw.get("level"),
                    "numberOfDaysWorkExperience": raw.get("numberOfDaysWorkExperience") or 0,
                }
            )
        skills = parse_items(SkillSummary, flattened, "user skills")
        return [s for s in skills if s.number_of_days_work_experience > 0]

    async def get_skill(self, user_id: int, skill_id: int) -> UserSkill:
        """GET /companies/{id}/users/{userId}/skills/{skillId}."""
        data = await self._gateway.get(
            self._gateway.company_path("users", user_id, "skills", skill_id)
        )
        return parse_item(UserSkill, data, "user skill")

    async def search_skill(self, term: str, limit: int = SKILL_SEARCH_LIMIT) -> list[SkillSearchHit]:
        """POST /companies/{id}/skills/search/term."""
        data = await self._gateway.post(
            self._gateway.company_path("skills", "search", "term"),
            {"term": term, "limit": limit},
        )
        hits = data.get("hits") if isinstance(data, dict) else None
        return parse_items(SkillSearchHit, hits or [], "skill search hits")
