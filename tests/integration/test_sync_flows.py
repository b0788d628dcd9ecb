"""End-to-end sync flows: API to snapshot store to Excel."""

from __future__ import annotations

import pytest
from openpyxl import load_workbook

from cinode_client.client import CinodeClient
from cinode_client.exporters.excel import SHEET_NAME, export_candidates_to_excel
from cinode_core.config.settings import Settings
from cinode_core.constants import CANDIDATE_EXPORT_COLUMNS
from cinode_infra.repositories.snapshot_repo import SnapshotRepository
from cinode_infra.store.factory import create_snapshot_store
from tests.mocks.mock_api import MockApi
from tests.mocks.mock_factories import resume_body_payload


@pytest.mark.integration
class TestCandidateSync:
    """Candidates are enriched, stored and exported."""

    @pytest.mark.asyncio
    async def test_candidate_enriched_stored_and_exported(
        self, settings: Settings, api: MockApi
    ) -> None:
        """The single candidate resolves pipeline, stage, state and event names."""
        repository = SnapshotRepository(create_snapshot_store(settings))
        async with api.client() as http:
            async with CinodeClient(settings, repository, http=http) as client:
                candidates = await client.candidate_aggregator.get_candidates_with_details()

        assert len(candidates) == 1
        details = candidates[0]
        assert details.state == "Open"
        assert details.pipeline == "Hiring: "
        assert details.stage == "Screen: "
        assert details.recruitment_source == "LinkedIn"
        assert details.events[0].created_by == "Alan Turing"
        assert details.events[0].updated_by == "Ada Lovelace"
        assert api.calls("GET", "https://api.test/token") == 1

        await repository.save_candidates(candidates)
        stored = await repository.list_candidates()
        assert stored == candidates

        path = export_candidates_to_excel(stored, settings.export_path)
        ws = load_workbook(path)[SHEET_NAME]
        row = {h.value: c.value for h, c in zip(ws[1], ws[2], strict=True)}
        assert list(row) == CANDIDATE_EXPORT_COLUMNS
        assert row["stage"] == "Screen: "
        assert row["state"] == "Open"
        repository.close()

    @pytest.mark.asyncio
    async def test_invalid_sibling_stage_keeps_pipeline(
        self, settings: Settings, api: MockApi
    ) -> None:
        """A stage with a null title does not hide its pipeline or valid siblings."""
        api.add_company(
            "GET",
            "/candidates/pipelines",
            [
                {
                    "id": 1,
                    "title": "Hiring",
                    "description": "d",
                    "stages": [{"id": 10, "title": "Screen"}, {"id": 11, "title": None}],
                }
            ],
        )
        repository = SnapshotRepository(create_snapshot_store(settings))
        async with api.client() as http:
            async with CinodeClient(settings, repository, http=http) as client:
                candidates = await client.candidate_aggregator.get_candidates_with_details()
        repository.close()

        assert [(c.pipeline, c.stage) for c in candidates] == [("Hiring: d", "Screen: ")]


@pytest.mark.integration
class TestEmployeeSync:
    """Employees are fetched, persisted and summarized."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("backend", ["json", "disk"])
    async def test_update_then_stats(self, settings: Settings, api: MockApi, backend: str) -> None:
        """Update stores joined employees; stats use the stored ids."""
        settings.store_backend = backend  # type: ignore[assignment]
        api.add_company("GET", "/users/1/resumes/100", resume_body_payload("Ada's resume"))
        api.add_company("GET", "/users/2/resumes/200", {"message": "gone"}, status=500)

        repository = SnapshotRepository(create_snapshot_store(settings))
        async with api.client() as http:
            async with CinodeClient(settings, repository, http=http) as client:
                stored = await client.employee_aggregator.fetch_employee_details()
                employees = await client.employee_aggregator.read_employee_data()
                stats = await client.employee_aggregator.get_stats()

        assert [e.user_id for e in stored] == [1]
        assert [e.resumes.presentation for e in employees] == ["Ada's resume"]
        assert await repository.get_employee_ids() == [1]
        assert stats.unique_user_count == 1
        assert [(u.user_id, u.resume_id) for u in stats.users] == [(1, 100)]
        repository.close()

    @pytest.mark.asyncio
    async def test_malformed_resume_skill_does_not_abort_batch(
        self, settings: Settings, api: MockApi
    ) -> None:
        """A null skill name drops that skill; both employees are still stored."""
        api.add_company(
            "GET",
            "/users/1/resumes/100",
            resume_body_payload(skills=[{"name": None, "level": 3}]),
        )
        api.add_company("GET", "/users/2/resumes/200", resume_body_payload("Alan's resume"))

        repository = SnapshotRepository(create_snapshot_store(settings))
        async with api.client() as http:
            async with CinodeClient(settings, repository, http=http) as client:
                stored = await client.employee_aggregator.fetch_employee_details()

        assert [e.user_id for e in stored] == [1, 2]
        assert stored[0].resumes.skills == []
        assert [s.name for s in stored[1].resumes.skills] == ["Python"]
        assert await repository.get_employee_ids() == [1, 2]
        repository.close()
