"""Abstract snapshot store interface."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SnapshotStore(Protocol):
    """Durable key/value store for aggregated snapshots.

    Values are JSON-compatible objects (dicts, lists, scalars).
    """

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key, or None if not found."""
        ...

    async def set(self, key: str, value: Any) -> None:
        """Store a value under key, replacing any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key from the store."""
        ...

    async def keys(self, prefix: str = "") -> list[str]:
        """Return the sorted keys starting with prefix."""
        ...

    def close(self) -> None:
        """Release any resources held by the store."""
        ...
