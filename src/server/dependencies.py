"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from src.todo import TodoItem, TodoRepository
from src.todo_service.config import Config
from src.todo_service.logger import setup_logger

from .schemas import TodoResponse

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def resolve_project_path(path: str | Path) -> Path:
    """Anchor a relative configured path at the project root."""
    resolved = Path(path)
    if not resolved.is_absolute():
        resolved = PROJECT_ROOT / resolved
    return resolved


config = Config.from_yaml()
setup_logger(log_level=config.log_level, log_file=str(resolve_project_path(config.log_file)))


@lru_cache(maxsize=1)
def get_todo_repository() -> TodoRepository:
    """Singleton TodoRepository holding the shared connection.

    TODO_APP_DB_PATH takes precedence over the configured database path.
    """
    db_path = resolve_project_path(os.getenv("TODO_APP_DB_PATH") or config.database.path)
    return TodoRepository(db_path=db_path)


def close_todo_repository() -> None:
    """Close the shared connection if one was opened."""
    if get_todo_repository.cache_info().currsize:
        get_todo_repository().close()
        get_todo_repository.cache_clear()


def serialize_todo(item: TodoItem) -> TodoResponse:
    """Convert domain TodoItem to API response."""
    return TodoResponse(
        id=item.id,
        todo=item.todo,
        priority=item.priority,
        status=item.status,
        category=item.category,
        due_date=item.due_date,
    )
