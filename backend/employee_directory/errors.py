"""Exceptions raised by the employee record stores."""
from __future__ import annotations

from typing import Iterable


class EmployeeStoreError(Exception):
    """Base class for every error raised by a record store."""


class ValidationError(EmployeeStoreError):
    """One or more field rules were violated by a candidate record."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


class DuplicateEmailError(EmployeeStoreError):
    """Another record already uses the normalized email address."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email already exists")


class StorageError(EmployeeStoreError):
    """The durable medium could not be read or written."""
