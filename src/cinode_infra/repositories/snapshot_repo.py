"""Employee and candidate snapshots on top of a SnapshotStore."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from cinode_core.constants import (
    CANDIDATES_KEY,
    EMPLOYEE_IDS_KEY,
    EMPLOYEE_KEY_PREFIX,
    employee_key,
)
from cinode_core.exceptions import SnapshotStoreError
from cinode_core.models.candidate import CandidateDetails
from cinode_core.models.employee import EmployeeDetail

if TYPE_CHECKING:
    from cinode_core.interfaces.store import SnapshotStore

logger = structlog.get_logger()


class SnapshotRepository:
    """Read and write the persisted employee and candidate snapshots."""

    def __init__(self, store: SnapshotStore) -> None:
        """Initialize with a snapshot store."""
        self._store = store

    async def save_employee(self, employee: EmployeeDetail) -> None:
        """Persist one employee under employee:<userId>."""
        await self._store.set(employee_key(employee.user_id), employee.to_payload())

    async def set_employee_ids(self, user_ids: list[int]) -> None:
        """Persist the list of employee ids."""
        await self._store.set(EMPLOYEE_IDS_KEY, list(user_ids))

    async def get_employee_ids(self) -> list[int]:
        """Return the persisted employee ids, empty if none were stored."""
        value = await self._store.get(EMPLOYEE_IDS_KEY)
        if value is None:
            return []
        if not isinstance(value, list):
            msg = f"{EMPLOYEE_IDS_KEY} is not a list"
            raise SnapshotStoreError(msg)
        return [int(v) for v in value]

    async def prune_employees(self, keep: set[int]) -> int:
        """Delete persisted employees whose id is not in keep; return how many went."""
        removed = 0
        for key in await self._store.keys(EMPLOYEE_KEY_PREFIX):
            if int(key.removeprefix(EMPLOYEE_KEY_PREFIX)) not in keep:
                await self._store.delete(key)
                removed += 1
        return removed

    async def get_employee(self, user_id: int) -> EmployeeDetail | None:
        """Return one persisted employee, or None if absent."""
        value = await self._store.get(employee_key(user_id))
        if value is None:
            return None
        try:
            return EmployeeDetail.model_validate(value)
        except ValidationError as e:
            msg = f"Corrupt employee snapshot for user {user_id}: {e}"
            raise SnapshotStoreError(msg) from e

    async def list_employees(self) -> list[EmployeeDetail]:
        """Return every persisted employee in stored id order."""
        employees: list[EmployeeDetail] = []
        for user_id in await self.get_employee_ids():
            employee = await self.get_employee(user_id)
            if employee is None:
                logger.warning("employee_snapshot_missing", user_id=user_id)
                continue
            employees.append(employee)
        return employees

    async def save_candidates(self, candidates: list[CandidateDetails]) -> None:
        """Replace the persisted candidate collection."""
        await self._store.set(CANDIDATES_KEY, [c.to_payload() for c in candidates])
        logger.info("candidates_saved", count=len(candidates))

    async def list_candidates(self) -> list[CandidateDetails]:
        """Return the persisted candidates, empty if none were stored."""
        value = await self._store.get(CANDIDATES_KEY)
        if not value:
            return []
        try:
            return [CandidateDetails.model_validate(item) for item in value]
        except (TypeError, ValidationError) as e:
            msg = f"Corrupt candidate snapshot: {e}"
            raise SnapshotStoreError(msg) from e

    def close(self) -> None:
        """Close the underlying store."""
        self._store.close()
