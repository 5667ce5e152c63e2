"""Pydantic schemas used across the backend API."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes snake_case fields under camelCase names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeeRead(CamelModel):
    """Employee representation returned by the API."""

    id: str = Field(alias="_id")
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    position: str
    department: str
    salary: float
    hire_date: datetime
    is_active: bool
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_employees: int
    has_next: bool
    has_prev: bool


class EmployeeList(BaseModel):
    """One page of employees plus paging metadata."""

    employees: list[EmployeeRead]
    pagination: Pagination


class DepartmentStat(BaseModel):
    department: str = Field(alias="_id")
    count: int

    model_config = ConfigDict(populate_by_name=True)


class StatsSummary(CamelModel):
    """Aggregates over active employees."""

    total_employees: int
    department_stats: list[DepartmentStat]
    average_salary: float


class Message(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
