"""diskcache-backed implementation of SnapshotStore."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import diskcache

from cinode_core.exceptions import SnapshotStoreError


class DiskSnapshotStore:
    """Persistent snapshot store backed by diskcache (SQLite under the hood).

    Values are stored as JSON strings so the on-disk data stays readable by
    other tools.
    """

    def __init__(self, directory: Path) -> None:
        """Initialize with a store directory."""
        directory.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(str(directory))

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        raw = await asyncio.to_thread(self._cache.get, key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError) as e:
            msg = f"Corrupt snapshot entry {key!r}: {e}"
            raise SnapshotStoreError(msg) from e

    async def set(self, key: str, value: Any) -> None:
        """Store a value without expiry."""
        await asyncio.to_thread(self._cache.set, key, json.dumps(value))

    async def delete(self, key: str) -> None:
        """Delete a key from the store."""
        await asyncio.to_thread(self._cache.delete, key)

    async def keys(self, prefix: str = "") -> list[str]:
        """Return the sorted keys starting with prefix."""
        all_keys = await asyncio.to_thread(lambda: list(self._cache.iterkeys()))
        return sorted(str(k) for k in all_keys if str(k).startswith(prefix))

    def close(self) -> None:
        """Close the store."""
        self._cache.close()
