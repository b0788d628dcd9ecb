"""Snapshot store selection from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from cinode_infra.store.disk_store import DiskSnapshotStore
from cinode_infra.store.json_store import JsonFileSnapshotStore

if TYPE_CHECKING:
    from cinode_core.config.settings import Settings
    from cinode_core.interfaces.store import SnapshotStore

logger = structlog.get_logger()

JSON_SNAPSHOT_FILENAME = "snapshot.json"
DISK_SNAPSHOT_DIRNAME = "kv"


def create_snapshot_store(settings: Settings) -> SnapshotStore:
    """Build the snapshot store configured by store_backend."""
    if settings.store_backend == "disk":
        directory = settings.data_dir / DISK_SNAPSHOT_DIRNAME
        logger.debug("snapshot_store_selected", backend="disk", path=str(directory))
        return DiskSnapshotStore(directory)

    path = settings.data_dir / JSON_SNAPSHOT_FILENAME
    logger.debug("snapshot_store_selected", backend="json", path=str(path))
    return JsonFileSnapshotStore(path)
