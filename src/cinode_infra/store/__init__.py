"""Snapshot store backends and factory."""

from cinode_infra.store.disk_store import DiskSnapshotStore
from cinode_infra.store.factory import create_snapshot_store
from cinode_infra.store.json_store import JsonFileSnapshotStore

__all__ = [
    "DiskSnapshotStore",
    "JsonFileSnapshotStore",
    "create_snapshot_store",
]
