"""Integration test fixtures: real client, store and exporter over a fake API."""

from __future__ import annotations

from pathlib import Path

import pytest

from cinode_core.config.settings import Settings
from tests.mocks.mock_api import MockApi
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with every output path under tmp_path."""
    return make_settings(
        data_dir=tmp_path / "data",
        export_path=tmp_path / "candidates.xlsx",
        download_dir=tmp_path / "downloads",
    )


@pytest.fixture
def api() -> MockApi:
    """Fake vendor API with users, resumes and one candidate routed."""
    api = MockApi()
    api.add_company(
        "GET",
        "/users",
        [
            {"companyUserId": 1, "firstName": "Ada", "lastName": "Lovelace"},
            {"companyUserId": 2, "firstName": "Alan", "lastName": "Turing"},
        ],
    )
    api.add_company(
        "GET",
        "/resumes",
        [
            {"id": 100, "companyUserId": 1},
            {"id": 200, "companyUserId": 2},
            {"id": 900, "companyUserId": 77},
        ],
    )
    api.add_company("GET", "/candidates", [{"id": 1}])
    api.add_company("GET", "/candidates/recruitment-sources", [{"id": 3, "name": "LinkedIn"}])
    api.add_company(
        "GET",
        "/candidates/pipelines",
        [{"id": 1, "title": "Hiring", "description": "", "stages": [{"id": 10, "title": "Screen"}]}],
    )
    api.add_company(
        "GET",
        "/candidates/1",
        {
            "id": 1,
            "firstName": "Grace",
            "lastName": "Hopper",
            "pipelineId": 1,
            "pipelineStageId": 10,
            "recruitmentSourceId": 3,
            "state": 0,
        },
    )
    api.add_company("GET", "/candidates/1/events", [{"id": 5, "title": "Call"}])
    api.add_company(
        "GET",
        "/candidates/1/events/5",
        {"id": 5, "createdByCompanyUserId": 2, "updatedByCompanyUserId": 1},
    )
    return api
