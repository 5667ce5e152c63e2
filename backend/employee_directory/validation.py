"""Field rules for candidate employee records.

``validate`` only reports problems; it never touches a store. ``normalize``
turns an already validated candidate into the canonical stored form.
"""
from __future__ import annotations

import math
import re
from typing import Any, Mapping

from .records import EDITABLE_FIELDS, format_timestamp, parse_timestamp

EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$", re.ASCII)
MAX_EMAIL_LENGTH = 254
PHONE_DIGITS = 10

_REQUIRED_TEXT = (
    ("firstName", "First name is required"),
    ("lastName", "Last name is required"),
)
_REQUIRED_TAIL_TEXT = (
    ("position", "Position is required"),
    ("department", "Department is required"),
)

_MISSING = object()


def _blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def phone_digits(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return ""
    return re.sub(r"\D", "", str(value))


def coerce_salary(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None when it is not a usable number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _check_text(
    candidate: Mapping[str, Any], rules, is_partial: bool, errors: list[str]
) -> None:
    for field, message in rules:
        value = candidate.get(field, _MISSING)
        if is_partial and value is _MISSING:
            continue
        if _blank(value):
            errors.append(message)


def validate(candidate: Mapping[str, Any], is_partial: bool = False) -> list[str]:
    """Return every rule violated by ``candidate``; an empty list means valid.

    With ``is_partial`` only the fields present in ``candidate`` are checked,
    which is what an update needs.
    """
    errors: list[str] = []

    def present(field: str) -> bool:
        return not is_partial or field in candidate

    _check_text(candidate, _REQUIRED_TEXT, is_partial, errors)

    if present("email"):
        email = candidate.get("email")
        if _blank(email):
            errors.append("Email is required")
        else:
            email = email.strip()
            if len(email) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(email):
                errors.append("Please enter a valid email")

    if present("phone"):
        if len(phone_digits(candidate.get("phone"))) != PHONE_DIGITS:
            errors.append("Please enter a valid 10-digit phone number")

    _check_text(candidate, _REQUIRED_TAIL_TEXT, is_partial, errors)

    if present("salary"):
        salary = coerce_salary(candidate.get("salary"))
        if salary is None or salary < 0:
            errors.append("Salary must be a non-negative number")

    # Optional on creation: absent or null means "use the default".
    hire_date = candidate.get("hireDate", _MISSING)
    if hire_date is not _MISSING and not (hire_date is None and not is_partial):
        try:
            parse_timestamp(hire_date)
        except (TypeError, ValueError, OverflowError):
            errors.append("Please enter a valid hire date")

    active = candidate.get("isActive", _MISSING)
    if active is not _MISSING and not (active is None and not is_partial):
        if not isinstance(active, bool):
            errors.append("Active flag must be true or false")

    return errors


def normalize(candidate: Mapping[str, Any]) -> dict[str, Any]:
    """Canonical form of the known fields present in a validated candidate.

    Unknown keys and store-managed keys (id, timestamps, fullName) are dropped.
    Null optional fields are dropped too so that defaults apply.
    """
    result: dict[str, Any] = {}
    for field in EDITABLE_FIELDS:
        if field not in candidate:
            continue
        value = candidate[field]
        if field == "email":
            result[field] = value.strip().lower()
        elif field == "phone":
            result[field] = phone_digits(value)
        elif field == "salary":
            result[field] = coerce_salary(value)
        elif field == "hireDate":
            if value is not None:
                result[field] = format_timestamp(parse_timestamp(value))
        elif field == "isActive":
            if value is not None:
                result[field] = value
        else:
            result[field] = value.strip()
    return result
