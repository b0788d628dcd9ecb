"""Public interface re-exports for cinode_core."""

from cinode_core.interfaces.store import SnapshotStore

__all__ = [
    "SnapshotStore",
]
