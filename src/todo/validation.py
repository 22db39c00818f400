"""Field validation shared by the HTTP routes and the CLI.

Validation returns a tagged result instead of raising: either ``Valid()`` or
``Invalid(field, message)`` carrying the first failing field.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional, Type, Union

from .models import TodoCategory, TodoPriority, TodoStatus

INVALID_PRIORITY = "Invalid Todo Priority"
INVALID_STATUS = "Invalid Todo Status"
INVALID_CATEGORY = "Invalid Todo Category"
INVALID_DUE_DATE = "Invalid Due Date"

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class Valid:
    """All supplied fields passed validation."""


@dataclass(frozen=True)
class Invalid:
    """The first field that failed validation."""

    field: str
    message: str


ValidationResult = Union[Valid, Invalid]


def _provided(value: Optional[str]) -> bool:
    return value is not None and value != ""


def _is_member(enum_cls: Type[Enum], value: str) -> bool:
    return value in {member.value for member in enum_cls}


def parse_due_date(value: Optional[str]) -> Optional[date]:
    """Parse a ``yyyy-M-d`` style date. Returns None when unparsable."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def normalize_due_date(value: str) -> str:
    """Render a parseable date string as ``yyyy-MM-dd``.

    Raises:
        ValueError: value is not a valid calendar date
    """
    parsed = parse_due_date(value)
    if parsed is None:
        raise ValueError(f"Not a valid date: {value!r}")
    return parsed.isoformat()


def validate_todo_fields(
    priority: Optional[str] = None,
    status: Optional[str] = None,
    category: Optional[str] = None,
    due_date: Optional[str] = None,
) -> ValidationResult:
    """Check fields in the order priority, status, category, dueDate."""
    if _provided(priority) and not _is_member(TodoPriority, priority):
        return Invalid("priority", INVALID_PRIORITY)
    if _provided(status) and not _is_member(TodoStatus, status):
        return Invalid("status", INVALID_STATUS)
    if _provided(category) and not _is_member(TodoCategory, category):
        return Invalid("category", INVALID_CATEGORY)
    if _provided(due_date) and parse_due_date(due_date) is None:
        return Invalid("dueDate", INVALID_DUE_DATE)
    return Valid()
