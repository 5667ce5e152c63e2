"""Demo employees loaded into an empty store at startup."""
from __future__ import annotations

import logging
from typing import Any

from .store import EmployeeStore

logger = logging.getLogger(__name__)

SAMPLE_EMPLOYEES: list[dict[str, Any]] = [
    {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@company.com",
        "phone": "5551234567",
        "position": "Software Engineer",
        "department": "Engineering",
        "salary": 75000,
        "hireDate": "2023-01-15T00:00:00.000Z",
    },
    {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane.smith@company.com",
        "phone": "5551234568",
        "position": "Product Manager",
        "department": "Product",
        "salary": 85000,
        "hireDate": "2023-02-01T00:00:00.000Z",
    },
    {
        "firstName": "Mike",
        "lastName": "Johnson",
        "email": "mike.johnson@company.com",
        "phone": "5551234569",
        "position": "UI/UX Designer",
        "department": "Design",
        "salary": 65000,
        "hireDate": "2023-03-10T00:00:00.000Z",
    },
    {
        "firstName": "Sarah",
        "lastName": "Williams",
        "email": "sarah.williams@company.com",
        "phone": "5551234570",
        "position": "DevOps Engineer",
        "department": "Engineering",
        "salary": 80000,
        "hireDate": "2023-01-20T00:00:00.000Z",
    },
    {
        "firstName": "David",
        "lastName": "Brown",
        "email": "david.brown@company.com",
        "phone": "5551234571",
        "position": "Marketing Manager",
        "department": "Marketing",
        "salary": 70000,
        "hireDate": "2023-04-05T00:00:00.000Z",
    },
]


async def seed_sample_data(store: EmployeeStore) -> int:
    """Create the sample employees when the store holds no records.

    Returns the number of records created.
    """

    if not await store.is_empty():
        logger.info("Sample data already exists")
        return 0

    for payload in SAMPLE_EMPLOYEES:
        await store.create(payload)
    logger.info("Created %d sample employees", len(SAMPLE_EMPLOYEES))
    return len(SAMPLE_EMPLOYEES)
