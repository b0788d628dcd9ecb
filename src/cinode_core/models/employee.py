"""Company user, resume and employee snapshot models."""

from __future__ import annotations

from pydantic import AliasChoices, Field

from cinode_core.models.base import VendorModel


class CompanyUser(VendorModel):
    """A company user (employee) as listed by the vendor."""

    company_user_id: int = Field(description="Vendor id of the company user")
    first_name: str | None = Field(default=None, description="First name")
    last_name: str | None = Field(default=None, description="Last name")

    @property
    def display_name(self) -> str:
        """First and last name joined by a space, missing parts left out."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Resume(VendorModel):
    """Resume list entry."""

    id: int = Field(description="Resume id")
    company_user_id: int = Field(description="Owner of the resume")


class CompanyUserWithResume(VendorModel):
    """A company user joined with one of their resumes."""

    user_id: int = Field(description="Company user id")
    name: str = Field(description="Display name")
    resume_id: int = Field(description="Resume id")


class ResumeSkill(VendorModel):
    """An enabled skill listed on a resume."""

    name: str = Field(description="Skill name")
    level: int | None = Field(default=None, description="Skill level (1-5)")
    number_of_days_work_experience: int | None = Field(
        default=None, description="Days of work experience with the skill"
    )


class ResumeBody(VendorModel):
    """Presentation text and enabled skills of one resume."""

    user_id: int = Field(description="Company user id")
    resume_id: int = Field(description="Resume id")
    public_url: str = Field(description="Public web URL of the resume")
    presentation: str | None = Field(default=None, description="Presentation text")
    skills: list[ResumeSkill] = Field(default_factory=list, description="Enabled skills")


class EmployeeDetail(VendorModel):
    """Persisted snapshot of one employee and their resume body."""

    user_id: int = Field(description="Company user id")
    name: str = Field(description="Display name")
    resume_id: int = Field(description="Resume id the body was fetched for")
    resumes: ResumeBody = Field(description="Resume body")


class UserResumeEntry(VendorModel):
    """One (user, resume) pair in the stats listing."""

    user_id: int
    name: str
    resume_id: int


class EmployeeStats(VendorModel):
    """Resume statistics over the persisted employees."""

    users: list[UserResumeEntry] = Field(default_factory=list)
    unique_user_count: int = 0
    total_resumes: int = 0

    @property
    def average_resumes_per_user(self) -> float:
        """Mean resumes per user, 0.0 when there are no users."""
        if not self.unique_user_count:
            return 0.0
        return self.total_resumes / self.unique_user_count


class EducationEntry(VendorModel):
    """Education entry flattened from the first translation."""

    school_name: str | None = None
    program_name: str | None = None
    degree: str | None = None
    start_date: str | None = None
    end_date: str | None = None


class UserProfile(VendorModel):
    """Education and languages of a company user."""

    user_id: int
    education: list[EducationEntry] = Field(default_factory=list)
    languages: str = Field(default="", description="Comma separated language cultures")


class SkillSummary(VendorModel):
    """A user skill with its keyword synonyms."""

    master_synonym: str
    synonyms: str = Field(default="", description="Comma separated synonyms")
    level: int | None = None
    number_of_days_work_experience: int = 0


class UserSkill(VendorModel):
    """A single skill record of a company user."""

    company_user_id: int
    level: int | None = None
    number_of_days_work_experience: int = 0


class SkilledUser(VendorModel):
    """A company user matched by a skill search."""

    user_id: int
    name: str
    skill: str
    skill_level: int | None = None
    skill_experience_in_days: int = 0


class SkillKeyword(VendorModel):
    """Skill keyword reference inside a skill search hit."""

    keyword_id: int
    keyword_synonym_name: str = ""


class SkillSearchHit(VendorModel):
    """A user returned by the skill term search."""

    company_user_id: int
    first_name: str | None = Field(
        default=None, validation_alias=AliasChoices("firstName", "firstname", "first_name")
    )
    last_name: str | None = Field(
        default=None, validation_alias=AliasChoices("lastName", "lastname", "last_name")
    )
    skills: list[SkillKeyword] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        """First and last name joined by a space."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
