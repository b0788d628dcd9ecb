"""Tests for the endpoint wrappers against a fake API."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest

from cinode_client.auth import AuthClient
from cinode_client.gateway import ApiGateway
from cinode_client.resources.candidates import CandidateResource
from cinode_client.resources.employees import EmployeeResource
from cinode_client.token_store import TokenStore
from cinode_core.config.settings import Settings
from cinode_core.exceptions import MalformedPayloadError
from tests.mocks.mock_api import MockApi
from tests.mocks.mock_factories import (
    candidate_payload,
    pipeline_payload,
    resume_body_payload,
    resume_payload,
    user_payload,
)


@asynccontextmanager
async def _resources(
    settings: Settings, api: MockApi
) -> AsyncIterator[tuple[EmployeeResource, CandidateResource]]:
    async with api.client() as http:
        gateway = ApiGateway(
            http, TokenStore(AuthClient(settings, http)), settings.api_endpoint, settings.company_id
        )
        yield EmployeeResource(gateway, settings.app_url), CandidateResource(gateway)


@pytest.mark.unit
class TestEmployeeResource:
    """Test user, resume, profile and skill endpoints."""

    @pytest.mark.asyncio
    async def test_list_users_and_resumes(self, settings: Settings, api: MockApi) -> None:
        """Listings parse into models."""
        api.add_company("GET", "/users", [user_payload(1), user_payload(2, "Alan", "Turing")])
        api.add_company("GET", "/resumes", [resume_payload(100, 1)])
        async with _resources(settings, api) as (employees, _):
            users = await employees.list_users()
            resumes = await employees.list_resumes()
        assert [u.display_name for u in users] == ["Ada Lovelace", "Alan Turing"]
        assert resumes[0].company_user_id == 1

    @pytest.mark.asyncio
    async def test_malformed_items_skipped(self, settings: Settings, api: MockApi) -> None:
        """Items missing required fields are skipped."""
        api.add_company("GET", "/users", [user_payload(1), {"firstName": "NoId"}])
        async with _resources(settings, api) as (employees, _):
            users = await employees.list_users()
        assert len(users) == 1

    @pytest.mark.asyncio
    async def test_non_list_listing_raises(self, settings: Settings, api: MockApi) -> None:
        """A listing that is not a list is malformed."""
        api.add_company("GET", "/users", {"users": []})
        async with _resources(settings, api) as (employees, _):
            with pytest.raises(MalformedPayloadError):
                await employees.list_users()

    @pytest.mark.asyncio
    async def test_get_resume(self, settings: Settings, api: MockApi) -> None:
        """Resume body keeps enabled skills and builds the public URL."""
        api.add_company("GET", "/users/1/resumes/100", resume_body_payload())
        async with _resources(settings, api) as (employees, _):
            body = await employees.get_resume(1, 100)
        assert body.presentation == "Backend developer"
        assert [s.name for s in body.skills] == ["Python"]
        assert body.public_url == "https://app.test/resumes/100/teamit-cv"

    @pytest.mark.asyncio
    async def test_get_resume_without_body(self, settings: Settings, api: MockApi) -> None:
        """A resume without presentation or skills yields empty values."""
        api.add_company("GET", "/users/1/resumes/100", {})
        async with _resources(settings, api) as (employees, _):
            body = await employees.get_resume(1, 100)
        assert body.presentation is None
        assert body.skills == []

    @pytest.mark.asyncio
    async def test_get_resume_skips_malformed_skills(
        self, settings: Settings, api: MockApi
    ) -> None:
        """Skills with a null name or bad level are dropped, the rest kept."""
        api.add_company(
            "GET",
            "/users/1/resumes/100",
            resume_body_payload(
                skills=[
                    {"name": None, "level": 3},
                    {"name": "Rust", "level": "expert"},
                    {"name": "Python", "level": 5},
                    "not a skill",
                ]
            ),
        )
        async with _resources(settings, api) as (employees, _):
            body = await employees.get_resume(1, 100)
        assert [s.name for s in body.skills] == ["Python"]

    @pytest.mark.asyncio
    async def test_get_profile_skips_malformed_entries(
        self, settings: Settings, api: MockApi
    ) -> None:
        """Non-dict education and language entries are ignored."""
        api.add_company(
            "GET",
            "/users/1/profile",
            {
                "education": [
                    "junk",
                    {"startDate": "2010", "translations": "junk"},
                    {"translations": [{"schoolName": 7}]},
                ],
                "languages": ["sv", {"language": "sv"}, {"language": {"culture": "en-GB"}}],
            },
        )
        async with _resources(settings, api) as (employees, _):
            profile = await employees.get_profile(1)
        assert len(profile.education) == 1
        assert profile.education[0].start_date == "2010"
        assert profile.education[0].school_name is None
        assert profile.languages == "en-GB"

    @pytest.mark.asyncio
    async def test_get_profile(self, settings: Settings, api: MockApi) -> None:
        """Education uses the first translation and languages are joined."""
        api.add_company(
            "GET",
            "/users/1/profile",
            {
                "education": [
                    {
                        "startDate": "2010",
                        "endDate": "2014",
                        "translations": [
                            {"schoolName": "KTH", "programName": "CS", "degree": "MSc"},
                            {"schoolName": "Other"},
                        ],
                    }
                ],
                "languages": [
                    {"language": {"culture": "sv-SE"}},
                    {"language": {"culture": "en-GB"}},
                ],
            },
        )
        async with _resources(settings, api) as (employees, _):
            profile = await employees.get_profile(1)
        assert profile.education[0].school_name == "KTH"
        assert profile.education[0].start_date == "2010"
        assert profile.languages == "sv-SE, en-GB"

    @pytest.mark.asyncio
    async def test_list_skills_keeps_experience(self, settings: Settings, api: MockApi) -> None:
        """Only skills with work experience are returned."""
        api.add_company(
            "GET",
            "/users/1/skills",
            [
                {
                    "level": 4,
                    "numberOfDaysWorkExperience": 365,
                    "keyword": {"masterSynonym": "Python", "synonyms": ["py", "python3"]},
                },
                {"level": 1, "numberOfDaysWorkExperience": 0, "keyword": {"masterSynonym": "Go"}},
            ],
        )
        async with _resources(settings, api) as (employees, _):
            skills = await employees.list_skills(1)
        assert len(skills) == 1
        assert skills[0].master_synonym == "Python"
        assert skills[0].synonyms == "py, python3"

    @pytest.mark.asyncio
    async def test_list_skills_skips_malformed_entries(
        self, settings: Settings, api: MockApi
    ) -> None:
        """Non-dict entries and non-numeric day counts are dropped."""
        api.add_company(
            "GET",
            "/users/1/skills",
            [
                "junk",
                {"numberOfDaysWorkExperience": "lots", "keyword": {"masterSynonym": "Go"}},
                {"numberOfDaysWorkExperience": 30, "keyword": "Rust"},
                {
                    "numberOfDaysWorkExperience": 90,
                    "keyword": {"masterSynonym": "Python", "synonyms": ["py", 3]},
                },
            ],
        )
        async with _resources(settings, api) as (employees, _):
            skills = await employees.list_skills(1)
        assert [s.master_synonym for s in skills] == ["", "Python"]
        assert skills[1].synonyms == "py"

    @pytest.mark.asyncio
    async def test_search_skill(self, settings: Settings, api: MockApi) -> None:
        """Skill search posts term and limit and parses hits."""
        api.add_company(
            "POST",
            "/skills/search/term",
            {
                "hits": [
                    {
                        "companyUserId": 1,
                        "firstName": "Ada",
                        "lastName": "Lovelace",
                        "skills": [{"keywordId": 5, "keywordSynonymName": "Python"}],
                    }
                ]
            },
        )
        async with _resources(settings, api) as (employees, _):
            hits = await employees.search_skill("python")
        assert hits[0].skills[0].keyword_id == 5
        assert json.loads(api.requests[-1].content) == {"term": "python", "limit": 100}


@pytest.mark.unit
class TestCandidateResource:
    """Test candidate endpoints."""

    @pytest.mark.asyncio
    async def test_get_candidate(self, settings: Settings, api: MockApi) -> None:
        """Candidate detail parses into a record with extras."""
        api.add_company("GET", "/candidates/1", candidate_payload(1))
        async with _resources(settings, api) as (_, candidates):
            record = await candidates.get_candidate(1)
        assert record is not None
        assert record.pipeline_stage_id == 10
        assert record.to_payload()["email"] == "grace@example.com"

    @pytest.mark.asyncio
    async def test_get_candidate_null(self, settings: Settings, api: MockApi) -> None:
        """A null candidate body returns None."""
        api.add_company("GET", "/candidates/1", None)
        async with _resources(settings, api) as (_, candidates):
            assert await candidates.get_candidate(1) is None

    @pytest.mark.asyncio
    async def test_list_pipelines_drops_bad_stages(self, settings: Settings, api: MockApi) -> None:
        """Malformed stages are dropped without losing the pipeline."""
        api.add_company(
            "GET",
            "/candidates/pipelines",
            [
                pipeline_payload(1, stages=[{"id": 10, "title": "Screen"}, {"title": "no id"}]),
                {**pipeline_payload(2), "stages": "oops"},
            ],
        )
        async with _resources(settings, api) as (_, candidates):
            pipelines = await candidates.list_pipelines()
        assert [p.id for p in pipelines] == [1, 2]
        assert [s.id for s in pipelines[0].stages] == [10]
        assert pipelines[1].stages == []

    @pytest.mark.asyncio
    async def test_list_pipelines_drops_only_invalid_stage(
        self, settings: Settings, api: MockApi
    ) -> None:
        """A stage with a null title or bad probability leaves its siblings intact."""
        api.add_company(
            "GET",
            "/candidates/pipelines",
            [
                pipeline_payload(
                    1,
                    stages=[
                        {"id": 10, "title": "Screen"},
                        {"id": 11, "title": None},
                        {"id": 12, "title": "Offer", "probability": "high"},
                    ],
                )
            ],
        )
        async with _resources(settings, api) as (_, candidates):
            pipelines = await candidates.list_pipelines()
        assert [p.id for p in pipelines] == [1]
        assert [s.id for s in pipelines[0].stages] == [10]

    @pytest.mark.asyncio
    async def test_events(self, settings: Settings, api: MockApi) -> None:
        """Event list and event detail parse."""
        api.add_company(
            "GET",
            "/candidates/1/events",
            [{"id": 7, "companyCandidateId": 1, "title": "Call"}],
        )
        api.add_company(
            "GET",
            "/candidates/1/events/7",
            {"id": 7, "createdByCompanyUserId": 2, "created": "2024-01-01"},
        )
        async with _resources(settings, api) as (_, candidates):
            events = await candidates.list_events(1)
            special = await candidates.get_event(1, events[0].id)
        assert events[0].title == "Call"
        assert special.created_by_company_user_id == 2

    @pytest.mark.asyncio
    async def test_recruitment_sources(self, settings: Settings, api: MockApi) -> None:
        """Recruitment sources parse."""
        api.add_company("GET", "/candidates/recruitment-sources", [{"id": 3, "name": "LinkedIn"}])
        async with _resources(settings, api) as (_, candidates):
            sources = await candidates.list_recruitment_sources()
        assert sources[0].name == "LinkedIn"
