from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TodoPriority(str, Enum):
    """Todo priority levels."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class TodoStatus(str, Enum):
    """Todo progress states. Values are stored verbatim in the todo table."""

    TO_DO = "TO DO"
    IN_PROGRESS = "IN PROGRESS"
    DONE = "DONE"


class TodoCategory(str, Enum):
    """Todo categories."""

    WORK = "WORK"
    HOME = "HOME"
    LEARNING = "LEARNING"


@dataclass(slots=True)
class TodoItem:
    """A persisted row of the todo table."""

    id: int
    todo: Optional[str]
    priority: Optional[str]
    status: Optional[str]
    category: Optional[str]
    due_date: Optional[str]


@dataclass(slots=True)
class TodoUpdate:
    """Partial update payload. ``None`` means the field was not supplied."""

    todo: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[str] = None
