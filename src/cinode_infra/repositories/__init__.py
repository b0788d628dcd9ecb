"""Domain repositories on top of the snapshot store."""

from cinode_infra.repositories.snapshot_repo import SnapshotRepository

__all__ = ["SnapshotRepository"]
