"""Domain models for cinode-sync."""

from cinode_core.models.auth import TokenPair
from cinode_core.models.base import VendorModel
from cinode_core.models.candidate import (
    Candidate,
    CandidateDetails,
    CandidateEvent,
    CandidateEventDetails,
    CandidateRecord,
    CandidateSpecialEvent,
    CandidateState,
    Pipeline,
    RecruitmentSource,
    Stage,
)
from cinode_core.models.employee import (
    CompanyUser,
    CompanyUserWithResume,
    EducationEntry,
    EmployeeDetail,
    EmployeeStats,
    Resume,
    ResumeBody,
    ResumeSkill,
    SkilledUser,
    SkillKeyword,
    SkillSearchHit,
    SkillSummary,
    UserProfile,
    UserResumeEntry,
    UserSkill,
)

__all__ = [
    "Candidate",
    "CandidateDetails",
    "CandidateEvent",
    "CandidateEventDetails",
    "CandidateRecord",
    "CandidateSpecialEvent",
    "CandidateState",
    "CompanyUser",
    "CompanyUserWithResume",
    "EducationEntry",
    "EmployeeDetail",
    "EmployeeStats",
    "Pipeline",
    "RecruitmentSource",
    "Resume",
    "ResumeBody",
    "ResumeSkill",
    "SkillKeyword",
    "SkillSearchHit",
    "SkillSummary",
    "SkilledUser",
    "Stage",
    "TokenPair",
    "UserProfile",
    "UserResumeEntry",
    "UserSkill",
    "VendorModel",
]
