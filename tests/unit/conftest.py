"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cinode_core.config.settings import Settings
from cinode_infra.repositories.snapshot_repo import SnapshotRepository
from cinode_infra.store.json_store import JsonFileSnapshotStore
from tests.mocks.mock_api import MockApi
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Return test Settings with every output path under tmp_path."""
    return make_settings(
        data_dir=tmp_path / "data",
        export_path=tmp_path / "candidates.xlsx",
        download_dir=tmp_path / "downloads",
    )


@pytest.fixture
def api() -> MockApi:
    """Return a fresh fake vendor API."""
    return MockApi()


@pytest.fixture
def repository(tmp_path: Path) -> SnapshotRepository:
    """Return a repository over a JSON snapshot file in tmp_path."""
    return SnapshotRepository(JsonFileSnapshotStore(tmp_path / "snapshot.json"))
