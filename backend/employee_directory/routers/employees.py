"""Employee endpoints for the FastAPI backend."""
import math
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ..dependencies import get_store
from ..records import DEFAULT_SORT_FIELD, Record
from ..schemas import (
    DepartmentStat,
    EmployeeList,
    EmployeeRead,
    ErrorResponse,
    Message,
    Pagination,
    StatsSummary,
)
from ..store import EmployeeStore, FindOptions

router = APIRouter(prefix="/api/employees", tags=["employees"])

NOT_FOUND = "Employee not found"
_bad_request = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_not_found = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


def _require(record: Record | None) -> Record:
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return record


@router.get("", response_model=EmployeeList)
async def list_employees(
    search: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sort_by: str = Query(DEFAULT_SORT_FIELD, alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    store: EmployeeStore = Depends(get_store),
) -> EmployeeList:
    """Return one page of employees matching the optional search term."""

    options = FindOptions(
        sort_field=sort_by,
        descending=sort_order == "desc",
        skip=(page - 1) * limit,
        limit=limit,
    )
    result = await store.find(search, options)
    total_pages = math.ceil(result.total / limit)
    return EmployeeList(
        employees=[EmployeeRead.model_validate(record) for record in result.records],
        pagination=Pagination(
            current_page=page,
            total_pages=total_pages,
            total_employees=result.total,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
    )


@router.get("/stats/summary", response_model=StatsSummary)
async def stats_summary(store: EmployeeStore = Depends(get_store)) -> StatsSummary:
    """Headcount, per-department counts and average salary of active employees."""

    departments = await store.department_summary()
    return StatsSummary(
        total_employees=await store.count_active(),
        department_stats=[
            DepartmentStat(department=item.department, count=item.count) for item in departments
        ],
        average_salary=await store.average_active_salary(),
    )


@router.get("/{employee_id}", response_model=EmployeeRead, responses=_not_found)
async def get_employee(employee_id: str, store: EmployeeStore = Depends(get_store)) -> Record:
    return _require(await store.find_by_id(employee_id))


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    responses=_bad_request,
)
async def create_employee(
    payload: dict[str, Any] = Body(...),
    store: EmployeeStore = Depends(get_store),
) -> Record:
    """Create an employee; the store validates and rejects duplicate emails."""

    return await store.create(payload)


@router.put(
    "/{employee_id}",
    response_model=EmployeeRead,
    responses={**_bad_request, **_not_found},
)
async def update_employee(
    employee_id: str,
    payload: dict[str, Any] = Body(...),
    store: EmployeeStore = Depends(get_store),
) -> Record:
    """Overwrite the supplied fields of an employee."""

    return _require(await store.update(employee_id, payload))


@router.delete("/{employee_id}", response_model=Message, responses=_not_found)
async def delete_employee(employee_id: str, store: EmployeeStore = Depends(get_store)) -> Message:
    """Permanently remove an employee."""

    _require(await store.delete(employee_id))
    return Message(message="Employee deleted successfully")
