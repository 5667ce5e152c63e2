"""Reusable FastAPI dependencies."""
from fastapi import Request

from .store import EmployeeStore


def get_store(request: Request) -> EmployeeStore:
    """Return the record store chosen for this process at startup."""

    return request.app.state.store
