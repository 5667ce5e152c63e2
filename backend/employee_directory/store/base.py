"""The record store contract shared by the file and database backends."""
from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..errors import ValidationError
from ..records import (
    DEFAULT_SORT_FIELD,
    ID_FIELD,
    Record,
    format_timestamp,
    new_id,
    next_updated_at,
    utcnow,
    with_full_name,
)
from ..validation import normalize, validate


@dataclass
class FindOptions:
    """Sort and page settings for :meth:`EmployeeStore.find`."""

    sort_field: str = DEFAULT_SORT_FIELD
    descending: bool = False
    skip: int = 0
    limit: int | None = None


@dataclass
class FindResult:
    records: list[Record] = field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class DepartmentCount:
    department: str
    count: int


def prepare_new_record(candidate: Mapping[str, Any]) -> Record:
    """Validate ``candidate`` in full and build the record to persist.

    Raises :class:`ValidationError` listing every violated rule.
    """
    errors = validate(candidate)
    if errors:
        raise ValidationError(errors)
    values = normalize(candidate)
    now = utcnow()
    stamp = format_timestamp(now)
    record = {
        ID_FIELD: new_id(),
        **values,
        "hireDate": values.get("hireDate") or stamp,
        "isActive": values.get("isActive", True),
        "createdAt": stamp,
        "updatedAt": stamp,
    }
    return with_full_name(record)


def validate_changes(partial: Mapping[str, Any]) -> Record:
    """Validate the fields present in ``partial`` and return their canonical form."""
    errors = validate(partial, is_partial=True)
    if errors:
        raise ValidationError(errors)
    return normalize(partial)


def merge_changes(existing: Record, changes: Mapping[str, Any]) -> Record:
    """Shallow-merge validated ``changes`` over ``existing`` and refresh ``updatedAt``."""
    merged = {**existing, **changes}
    merged["updatedAt"] = next_updated_at(existing.get("updatedAt"))
    return with_full_name(merged)


class EmployeeStore(abc.ABC):
    """Persistence for employee records.

    Both implementations validate input, enforce email uniqueness across all
    records and recompute ``fullName`` on every read and write. Lookups that
    miss return ``None`` instead of raising.
    """

    backend_name = "abstract"

    @abc.abstractmethod
    async def find(self, search: str | None = None, options: FindOptions | None = None) -> FindResult:
        """Filter by ``search``, sort, then page; ``total`` counts every match."""

    @abc.abstractmethod
    async def find_by_id(self, record_id: str) -> Record | None:
        ...

    @abc.abstractmethod
    async def create(self, candidate: Mapping[str, Any]) -> Record:
        """Persist a new record.

        Raises ValidationError or DuplicateEmailError.
        """

    @abc.abstractmethod
    async def update(self, record_id: str, partial: Mapping[str, Any]) -> Record | None:
        """Merge ``partial`` over the stored record.

        Raises ValidationError or DuplicateEmailError; returns None for an
        unknown id.
        """

    @abc.abstractmethod
    async def delete(self, record_id: str) -> Record | None:
        """Remove the record permanently and return it."""

    @abc.abstractmethod
    async def count_active(self) -> int:
        ...

    @abc.abstractmethod
    async def department_summary(self) -> list[DepartmentCount]:
        ...

    @abc.abstractmethod
    async def average_active_salary(self) -> float:
        ...

    async def is_empty(self) -> bool:
        result = await self.find(options=FindOptions(limit=1))
        return result.total == 0

    async def close(self) -> None:
        """Release backend resources."""
