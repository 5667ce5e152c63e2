"""In-memory filter, sort, paginate and aggregate over employee records.

The file backend runs every query through these functions. The database
backend expresses the same rules in SQL.
"""
from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from ..records import (
    DEFAULT_SORT_FIELD,
    ID_FIELD,
    SEARCH_FIELDS,
    SORTABLE_FIELDS,
    Record,
    is_active,
)
from .base import DepartmentCount, FindOptions, FindResult


def resolve_sort_field(field: str | None) -> str:
    return field if field in SORTABLE_FIELDS else DEFAULT_SORT_FIELD


def matches_search(record: Record, search: str | None) -> bool:
    """Case-insensitive substring match of ``search`` against any searchable field."""
    if not search:
        return True
    needle = search.lower()
    for field in SEARCH_FIELDS:
        value = record.get(field)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


def sort_records(records: Iterable[Record], field: str | None, descending: bool = False) -> list[Record]:
    """Sort by ``field`` with ``_id`` ascending as the tie-break in both directions."""
    field = resolve_sort_field(field)
    # Both sorts are stable and ``reverse`` keeps equal keys in their prior order.
    ordered = sorted(records, key=lambda r: r.get(ID_FIELD, ""))
    return sorted(ordered, key=lambda r: _sort_key(r.get(field)), reverse=descending)


def _sort_key(value):
    # Missing values from hand-edited files sort after everything else ascending.
    return (value is None, value if value is not None else "")


def paginate(records: Sequence[Record], skip: int = 0, limit: int | None = None) -> list[Record]:
    skip = max(skip, 0)
    if limit is None:
        return list(records[skip:])
    return list(records[skip:skip + max(limit, 0)])


def apply_query(records: Iterable[Record], search: str | None, options: FindOptions) -> FindResult:
    matching = [record for record in records if matches_search(record, search)]
    ordered = sort_records(matching, options.sort_field, options.descending)
    return FindResult(records=paginate(ordered, options.skip, options.limit), total=len(matching))


def count_active(records: Iterable[Record]) -> int:
    return sum(1 for record in records if is_active(record))


def summarize_departments(records: Iterable[Record]) -> list[DepartmentCount]:
    """Active records per department, largest first, ties by department name."""
    counts = Counter(record.get("department") for record in records if is_active(record))
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [DepartmentCount(department=department, count=count) for department, count in ordered]


def average_salary(records: Iterable[Record]) -> float:
    """Mean salary of active records, 0.0 when there are none."""
    salaries = [float(record.get("salary") or 0) for record in records if is_active(record)]
    if not salaries:
        return 0.0
    return sum(salaries) / len(salaries)
