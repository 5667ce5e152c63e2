"""Record store kept in a single JSON file.

Every operation loads the whole array into memory. Mutations transform the
in-memory copy and then replace the file atomically (write a temp file in the
same directory, fsync, ``os.replace``), so a crash leaves either the old or
the new snapshot on disk, never a partial one.

There is no locking. Two concurrent writers each load the same snapshot and
the later rewrite silently drops the earlier one's change (last write wins).
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping

from ..errors import DuplicateEmailError, StorageError
from ..records import ID_FIELD, Record, with_full_name
from . import query
from .base import (
    DepartmentCount,
    EmployeeStore,
    FindOptions,
    FindResult,
    merge_changes,
    prepare_new_record,
    validate_changes,
)

logger = logging.getLogger(__name__)


class FileEmployeeStore(EmployeeStore):
    """Employee records persisted as one JSON array."""

    backend_name = "file"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    # ------------------------------------------------------------------
    # Snapshot I/O
    # ------------------------------------------------------------------
    def _read_snapshot(self) -> list[Record]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Could not read {self.path}") from exc

        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StorageError(f"{self.path} does not contain valid JSON") from exc
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            raise StorageError(f"{self.path} must hold a JSON array of objects")
        return [with_full_name(item) for item in data]

    def _write_snapshot(self, records: list[Record]) -> None:
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                json.dump(records, handle, indent=2)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write {self.path}") from exc

    async def _load(self) -> list[Record]:
        return await asyncio.to_thread(self._read_snapshot)

    async def _save(self, records: list[Record]) -> None:
        await asyncio.to_thread(self._write_snapshot, records)

    @staticmethod
    def _index_of(records: list[Record], record_id: str) -> int:
        for index, record in enumerate(records):
            if record.get(ID_FIELD) == record_id:
                return index
        return -1

    @staticmethod
    def _email_taken(records: list[Record], email: str, exclude_id: str | None = None) -> bool:
        return any(
            record.get("email") == email and record.get(ID_FIELD) != exclude_id
            for record in records
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def find(self, search: str | None = None, options: FindOptions | None = None) -> FindResult:
        records = await self._load()
        return query.apply_query(records, search, options or FindOptions())

    async def find_by_id(self, record_id: str) -> Record | None:
        records = await self._load()
        index = self._index_of(records, record_id)
        return records[index] if index >= 0 else None

    async def count_active(self) -> int:
        return query.count_active(await self._load())

    async def department_summary(self) -> list[DepartmentCount]:
        return query.summarize_departments(await self._load())

    async def average_active_salary(self) -> float:
        return query.average_salary(await self._load())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    async def create(self, candidate: Mapping[str, Any]) -> Record:
        record = prepare_new_record(candidate)
        records = await self._load()
        if self._email_taken(records, record["email"]):
            raise DuplicateEmailError(record["email"])

        records.append(record)
        await self._save(records)
        logger.info("Created employee %s", record[ID_FIELD])
        return record

    async def update(self, record_id: str, partial: Mapping[str, Any]) -> Record | None:
        changes = validate_changes(partial)
        records = await self._load()
        index = self._index_of(records, record_id)
        if index < 0:
            return None
        if "email" in changes and self._email_taken(records, changes["email"], exclude_id=record_id):
            raise DuplicateEmailError(changes["email"])

        updated = merge_changes(records[index], changes)
        records[index] = updated
        await self._save(records)
        logger.info("Updated employee %s", record_id)
        return updated

    async def delete(self, record_id: str) -> Record | None:
        records = await self._load()
        index = self._index_of(records, record_id)
        if index < 0:
            return None

        removed = records.pop(index)
        await self._save(records)
        logger.info("Deleted employee %s", record_id)
        return removed
