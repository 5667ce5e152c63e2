"""SQLAlchemy models used by the database-backed store."""
from .base import Base
from .employee import Employee

__all__ = ["Base", "Employee"]
