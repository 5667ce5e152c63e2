"""Field names and helpers shared by every representation of an employee record.

Records travel through the stores as plain dictionaries keyed by the wire
names (``_id``, ``firstName``, ``hireDate`` ...). Timestamps are kept as
ISO-8601 UTC strings with a fixed microsecond precision so that both backends
produce identical values and lexical order matches chronological order.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any

Record = dict[str, Any]

ID_FIELD = "_id"

STRING_FIELDS = ("firstName", "lastName", "email", "phone", "position", "department")
EDITABLE_FIELDS = STRING_FIELDS + ("salary", "hireDate", "isActive")
SEARCH_FIELDS = ("firstName", "lastName", "email", "position", "department")
SORTABLE_FIELDS = EDITABLE_FIELDS + ("createdAt", "updatedAt")
DEFAULT_SORT_FIELD = "lastName"


def new_id() -> str:
    """Return a fresh, collision resistant record identifier."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return as_utc(value).isoformat(timespec="microseconds")


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 date or datetime (or a date object) into an aware UTC datetime.

    Raises ``ValueError`` for anything else.
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"not a timestamp: {value!r}")
    return as_utc(datetime.fromisoformat(value.strip()))


def next_updated_at(previous: str | None) -> str:
    """Return a timestamp strictly later than ``previous``."""
    now = utcnow()
    if previous:
        floor = parse_timestamp(previous) + timedelta(microseconds=1)
        if now < floor:
            now = floor
    return format_timestamp(now)


def full_name(record: Record) -> str:
    return f"{record.get('firstName', '')} {record.get('lastName', '')}"


def with_full_name(record: Record) -> Record:
    """Return a copy of ``record`` whose derived ``fullName`` is recomputed."""
    result = dict(record)
    result["fullName"] = full_name(result)
    return result


def is_active(record: Record) -> bool:
    """A record is active unless its flag is explicitly false."""
    return record.get("isActive") is not False
