"""Shared constants for cinode-sync."""

from __future__ import annotations

# Snapshot store keys
EMPLOYEE_IDS_KEY = "employeeIds"
EMPLOYEE_KEY_PREFIX = "employee:"
CANDIDATES_KEY = "candidates"

# Skill search page size
SKILL_SEARCH_LIMIT = 100

# HTTP headers sent with every authenticated API request
JSON_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

# Column order of the candidate Excel export
CANDIDATE_EXPORT_COLUMNS: list[str] = [
    "firstName",
    "lastName",
    "email",
    "phone",
    "title",
    "availableFromDate",
    "birthYear",
    "campaignCode",
    "companyId",
    "createdDateTime",
    "currencyId",
    "currentEmployer",
    "description",
    "events",
    "gender",
    "id",
    "internalId",
    "isMobile",
    "lastTouchDateTime",
    "linkedInUrl",
    "offeredSalary",
    "periodOfNoticeDays",
    "pipeline",
    "pipelineId",
    "stage",
    "pipelineStageId",
    "rating",
    "recruitmentManager",
    "recruitmentSource",
    "salaryRequirement",
    "seoId",
    "state",
    "updatedDateTime",
]


def employee_key(user_id: int) -> str:
    """Store key of one persisted employee."""
    return f"{EMPLOYEE_KEY_PREFIX}{user_id}"
