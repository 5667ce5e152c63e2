"""Record store backed by a SQL database through SQLAlchemy's async engine.

Filtering, sorting, paging and the summary aggregates run as SQL so that the
database's own planner does the work.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Mapping

from sqlalchemy import func, or_, select, true
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from ..database import build_engine, build_session_factory
from ..errors import DuplicateEmailError, StorageError
from ..models import Base, Employee
from ..records import ID_FIELD, Record, as_utc, format_timestamp, parse_timestamp, with_full_name
from .base import (
    DepartmentCount,
    EmployeeStore,
    FindOptions,
    FindResult,
    merge_changes,
    prepare_new_record,
    validate_changes,
)
from .query import resolve_sort_field

logger = logging.getLogger(__name__)

# Record field -> ORM attribute.
COLUMNS = {
    ID_FIELD: Employee.id,
    "firstName": Employee.first_name,
    "lastName": Employee.last_name,
    "email": Employee.email,
    "phone": Employee.phone,
    "position": Employee.position,
    "department": Employee.department,
    "salary": Employee.salary,
    "hireDate": Employee.hire_date,
    "isActive": Employee.is_active,
    "createdAt": Employee.created_at,
    "updatedAt": Employee.updated_at,
}
_TIMESTAMP_FIELDS = ("hireDate", "createdAt", "updatedAt")
_SEARCH_COLUMNS = (
    Employee.first_name,
    Employee.last_name,
    Employee.email,
    Employee.position,
    Employee.department,
)
_ACTIVE = Employee.is_active == true()


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_record(row: Employee) -> Record:
    record: dict[str, Any] = {}
    for field, column in COLUMNS.items():
        value = getattr(row, column.key)
        if field in _TIMESTAMP_FIELDS:
            value = format_timestamp(as_utc(value))
        elif field == "salary":
            value = float(value)
        record[field] = value
    return with_full_name(record)


def _apply(row: Employee, record: Mapping[str, Any]) -> None:
    for field, column in COLUMNS.items():
        if field == ID_FIELD or field not in record:
            continue
        value = record[field]
        if field in _TIMESTAMP_FIELDS:
            value = parse_timestamp(value)
        setattr(row, column.key, value)


class SqlEmployeeStore(EmployeeStore):
    """Employee records stored in the ``employees`` table."""

    backend_name = "database"

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlEmployeeStore":
        return cls(build_engine(database_url))

    async def create_schema(self) -> None:
        """Create missing tables; there are no migrations."""

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise StorageError("Could not create the employees table") from exc

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StorageError("Database operation failed") from exc

    @staticmethod
    async def _email_taken(session: AsyncSession, email: str, exclude_id: str | None = None) -> bool:
        stmt = select(Employee.id).where(Employee.email == email)
        if exclude_id is not None:
            stmt = stmt.where(Employee.id != exclude_id)
        result = await session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    async def find(self, search: str | None = None, options: FindOptions | None = None) -> FindResult:
        options = options or FindOptions()
        conditions = []
        if search:
            pattern = f"%{_escape_like(search)}%"
            conditions.append(or_(*(column.ilike(pattern, escape="\\") for column in _SEARCH_COLUMNS)))

        sort_column = COLUMNS[resolve_sort_field(options.sort_field)]
        ordering = sort_column.desc() if options.descending else sort_column.asc()
        stmt = select(Employee).where(*conditions).order_by(ordering, Employee.id.asc())
        if options.skip:
            stmt = stmt.offset(max(options.skip, 0))
        if options.limit is not None:
            stmt = stmt.limit(max(options.limit, 0))

        async with self._session() as session:
            total = await session.scalar(select(func.count()).select_from(Employee).where(*conditions))
            result = await session.execute(stmt)
            records = [_to_record(row) for row in result.scalars().all()]
        return FindResult(records=records, total=total or 0)

    async def find_by_id(self, record_id: str) -> Record | None:
        async with self._session() as session:
            row = await session.get(Employee, record_id)
            return _to_record(row) if row is not None else None

    async def count_active(self) -> int:
        async with self._session() as session:
            total = await session.scalar(select(func.count()).select_from(Employee).where(_ACTIVE))
        return total or 0

    async def department_summary(self) -> list[DepartmentCount]:
        headcount = func.count().label("headcount")
        stmt = (
            select(Employee.department, headcount)
            .where(_ACTIVE)
            .group_by(Employee.department)
            .order_by(headcount.desc(), Employee.department.asc())
        )
        async with self._session() as session:
            result = await session.execute(stmt)
            return [DepartmentCount(department=row[0], count=row[1]) for row in result.all()]

    async def average_active_salary(self) -> float:
        async with self._session() as session:
            average = await session.scalar(select(func.avg(Employee.salary)).where(_ACTIVE))
        return float(average) if average is not None else 0.0

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    async def create(self, candidate: Mapping[str, Any]) -> Record:
        record = prepare_new_record(candidate)
        async with self._session() as session:
            if await self._email_taken(session, record["email"]):
                raise DuplicateEmailError(record["email"])

            row = Employee(id=record[ID_FIELD])
            _apply(row, record)
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                # Lost a race against another insert of the same email.
                await session.rollback()
                raise DuplicateEmailError(record["email"]) from exc
            await session.refresh(row)
            created = _to_record(row)

        logger.info("Created employee %s", created[ID_FIELD])
        return created

    async def update(self, record_id: str, partial: Mapping[str, Any]) -> Record | None:
        changes = validate_changes(partial)
        async with self._session() as session:
            row = await session.get(Employee, record_id)
            if row is None:
                return None
            if "email" in changes and await self._email_taken(session, changes["email"], exclude_id=record_id):
                raise DuplicateEmailError(changes["email"])

            _apply(row, merge_changes(_to_record(row), changes))
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateEmailError(changes.get("email", "")) from exc
            await session.refresh(row)
            updated = _to_record(row)

        logger.info("Updated employee %s", record_id)
        return updated

    async def delete(self, record_id: str) -> Record | None:
        async with self._session() as session:
            row = await session.get(Employee, record_id)
            if row is None:
                return None
            removed = _to_record(row)
            await session.delete(row)
            await session.commit()

        logger.info("Deleted employee %s", record_id)
        return removed
