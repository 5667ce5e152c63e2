"""Employee record stores and the startup-time backend selection."""
from __future__ import annotations

import logging

from sqlalchemy.exc import ArgumentError, InvalidRequestError

from ..config import Settings
from .base import DepartmentCount, EmployeeStore, FindOptions, FindResult
from .file_store import FileEmployeeStore
from .sql_store import SqlEmployeeStore

logger = logging.getLogger(__name__)

__all__ = [
    "DepartmentCount",
    "EmployeeStore",
    "FileEmployeeStore",
    "FindOptions",
    "FindResult",
    "SqlEmployeeStore",
    "build_store",
]


async def build_store(settings: Settings) -> EmployeeStore:
    """Pick the backend once for the whole process.

    A usable ``database_url`` selects the database store (its tables are
    created if missing); anything else falls back to the JSON file store.
    """

    if settings.database_url:
        try:
            store = SqlEmployeeStore.from_url(settings.database_url)
        except (ArgumentError, InvalidRequestError, ImportError) as exc:
            logger.warning("Ignoring unusable DATABASE_URL (%s); using file storage", exc)
        else:
            await store.create_schema()
            logger.info("Using database storage at %s", store.engine.url.render_as_string(hide_password=True))
            return store

    logger.info("Using file storage at %s", settings.data_file)
    return FileEmployeeStore(settings.data_file)
