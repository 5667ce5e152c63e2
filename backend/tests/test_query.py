"""Unit tests for the in-memory query helpers."""
from employee_directory.store import FindOptions
from employee_directory.store.query import (
    apply_query,
    average_salary,
    count_active,
    matches_search,
    paginate,
    sort_records,
    summarize_departments,
)


def _record(_id, last_name, department="Ops", salary=100.0, **extra):
    return {
        "_id": _id,
        "firstName": "Pat",
        "lastName": last_name,
        "email": f"{_id}@example.com",
        "position": "Analyst",
        "department": department,
        "salary": salary,
        **extra,
    }


RECORDS = [
    _record("c", "Young", "Ops", 300.0),
    _record("a", "Xu", "Sales", 100.0),
    _record("b", "Young", "Ops", 200.0, isActive=False),
]


def test_empty_search_matches_everything() -> None:
    assert all(matches_search(record, None) for record in RECORDS)
    assert all(matches_search(record, "") for record in RECORDS)


def test_search_ignores_unsearched_fields() -> None:
    assert not matches_search(RECORDS[0], "300")
    assert matches_search(RECORDS[0], "ANALY")


def test_sort_breaks_ties_by_id_in_both_directions() -> None:
    ascending = sort_records(RECORDS, "lastName")
    descending = sort_records(RECORDS, "lastName", descending=True)

    assert [r["_id"] for r in ascending] == ["a", "b", "c"]
    assert [r["_id"] for r in descending] == ["b", "c", "a"]


def test_paginate_handles_bounds() -> None:
    assert paginate(RECORDS, skip=2, limit=5) == RECORDS[2:]
    assert paginate(RECORDS, skip=10, limit=5) == []
    assert paginate(RECORDS, skip=1) == RECORDS[1:]


def test_apply_query_reports_total_before_paging() -> None:
    result = apply_query(RECORDS, "young", FindOptions(sort_field="salary", skip=1, limit=1))

    assert result.total == 2
    assert [r["_id"] for r in result.records] == ["c"]


def test_aggregates_skip_inactive_records() -> None:
    assert count_active(RECORDS) == 2
    assert average_salary(RECORDS) == 200.0
    assert [(d.department, d.count) for d in summarize_departments(RECORDS)] == [("Ops", 1), ("Sales", 1)]


def test_average_of_nothing_is_zero() -> None:
    assert average_salary([]) == 0.0


def test_sort_puts_missing_values_last() -> None:
    records = [_record("a", None), _record("b", "Young"), {"_id": "c", "firstName": "Pat"}]

    ascending = sort_records(records, "lastName")
    descending = sort_records(records, "lastName", descending=True)

    assert [r["_id"] for r in ascending] == ["b", "a", "c"]
    assert [r["_id"] for r in descending] == ["a", "c", "b"]
