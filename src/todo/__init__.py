"""Todo domain shared by the HTTP server and the CLI."""

from .models import TodoCategory, TodoItem, TodoPriority, TodoStatus, TodoUpdate
from .repository import TodoRepository, UpdateClause, build_update_clause
from .validation import (
    Invalid,
    Valid,
    ValidationResult,
    normalize_due_date,
    parse_due_date,
    validate_todo_fields,
)

__all__ = [
    "TodoCategory",
    "TodoItem",
    "TodoPriority",
    "TodoStatus",
    "TodoUpdate",
    "TodoRepository",
    "UpdateClause",
    "build_update_clause",
    "Invalid",
    "Valid",
    "ValidationResult",
    "normalize_due_date",
    "parse_due_date",
    "validate_todo_fields",
]
