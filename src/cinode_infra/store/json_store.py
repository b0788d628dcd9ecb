"""Flat JSON-file implementation of SnapshotStore."""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import structlog

from cinode_core.exceptions import SnapshotStoreError

logger = structlog.get_logger()


class JsonFileSnapshotStore:
    """Snapshot store keeping every key in one pretty-printed JSON document.

    Writes go to a temporary file that replaces the document, so a crash
    mid-write leaves the previous snapshot intact.
    """

    def __init__(self, path: Path) -> None:
        """Initialize with the path of the JSON document."""
        self._path = path
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        """Location of the JSON document."""
        return self._path

    def _read(self) -> dict[str, Any]:
        """Load the whole document; a missing file is an empty store."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            msg = f"Failed to read snapshot file {self._path}: {e}"
            raise SnapshotStoreError(msg) from e
        if not isinstance(data, dict):
            msg = f"Snapshot file {self._path} does not hold a JSON object"
            raise SnapshotStoreError(msg)
        return data

    def _write(self, data: dict[str, Any]) -> None:
        """Atomically replace the document."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            msg = f"Failed to write snapshot file {self._path}: {e}"
            raise SnapshotStoreError(msg) from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

    async def get(self, key: str) -> Any | None:
        """Retrieve a value by key."""
        data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set(self, key: str, value: Any) -> None:
        """Store a value under key."""
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            data[key] = value
            await asyncio.to_thread(self._write, data)
        logger.debug("snapshot_written", path=str(self._path), key=key)

    async def delete(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""
        async with self._lock:
            data = await asyncio.to_thread(self._read)
            if data.pop(key, None) is not None:
                await asyncio.to_thread(self._write, data)

    async def keys(self, prefix: str = "") -> list[str]:
        """Return the sorted keys starting with prefix."""
        data = await asyncio.to_thread(self._read)
        return sorted(k for k in data if k.startswith(prefix))

    def close(self) -> None:
        """Nothing to release; present for parity with DiskSnapshotStore."""
