from __future__ import annotations

import logging
import os
import sqlite3
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .models import TodoItem, TodoUpdate

logger = logging.getLogger(__name__)

# Column and success message, in the order fields are applied.
UPDATE_FIELDS: tuple[tuple[str, str], ...] = (
    ("todo", "Todo Updated"),
    ("priority", "Priority Updated"),
    ("status", "Status Updated"),
    ("category", "Category Updated"),
    ("due_date", "Due Date Updated"),
)


@dataclass
class UpdateClause:
    """Assignments and parameters for a partial ``UPDATE todo SET ...``."""

    assignments: list[str] = field(default_factory=list)
    params: list[object] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.assignments

    @property
    def sql(self) -> str:
        return ", ".join(self.assignments)


def build_update_clause(update: TodoUpdate) -> UpdateClause:
    """Build one assignment per supplied field.

    The message names only the last field processed, so an update touching
    status and category reports "Category Updated".
    """
    clause = UpdateClause()
    for column, message in UPDATE_FIELDS:
        value = getattr(update, column)
        if value is None:
            continue
        clause.assignments.append(f"{column} = ?")
        clause.params.append(value)
        clause.message = message
    return clause


class TodoRepository:
    """SQLite-backed todo table sharing one connection across calls."""

    def __init__(self, db_path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "todoApplication.db"
        env_path = os.getenv("TODO_APP_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._conn = self._connect()
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        logger.info("Opened todo database at %s", self.db_path)
        return conn

    def _initialize(self) -> None:
        with self._lock:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS todo (
                    id INTEGER PRIMARY KEY,
                    todo TEXT,
                    priority TEXT,
                    status TEXT,
                    category TEXT,
                    due_date TEXT
                )
                """
            )
            self._conn.execute("CREATE INDEX IF NOT EXISTS idx_todo_due ON todo(due_date)")
            self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.info("Closed todo database at %s", self.db_path)

    @staticmethod
    def _row_to_item(row: sqlite3.Row) -> TodoItem:
        return TodoItem(
            id=row["id"],
            todo=row["todo"],
            priority=row["priority"],
            status=row["status"],
            category=row["category"],
            due_date=row["due_date"],
        )

    def _fetchall(self, sql: str, params: tuple | list = ()) -> list[TodoItem]:
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [self._row_to_item(row) for row in rows]

    def _write(self, sql: str, params: tuple | list) -> int:
        with self._lock:
            cursor = self._conn.execute(sql, params)
            self._conn.commit()
            return cursor.rowcount

    def list(
        self,
        search_q: str = "",
        priority: str = "",
        status: str = "",
        category: str = "",
    ) -> list[TodoItem]:
        """Case-sensitive substring filter on each column; empty filters match all."""
        conditions: list[str] = []
        params: list[object] = []
        filters = (
            ("todo", search_q),
            ("priority", priority),
            ("status", status),
            ("category", category),
        )
        for column, value in filters:
            if value:
                conditions.append(f"instr({column}, ?) > 0")
                params.append(value)

        sql = "SELECT * FROM todo"
        if conditions:
            sql += f" WHERE {' AND '.join(conditions)}"
        return self._fetchall(sql, params)

    def get(self, todo_id: int) -> Optional[TodoItem]:
        with self._lock:
            row = self._conn.execute("SELECT * FROM todo WHERE id = ?", (todo_id,)).fetchone()
        return self._row_to_item(row) if row else None

    def agenda(self, due_date: str) -> list[TodoItem]:
        """Rows due on ``due_date`` (already normalized to yyyy-MM-dd)."""
        return self._fetchall("SELECT * FROM todo WHERE due_date = ?", (due_date,))

    def create(
        self,
        todo_id: int,
        todo: Optional[str],
        priority: Optional[str],
        status: Optional[str],
        category: Optional[str],
        due_date: Optional[str],
    ) -> None:
        self._write(
            """
            INSERT INTO todo (id, todo, priority, status, category, due_date)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (todo_id, todo, priority, status, category, due_date),
        )
        logger.info("Created todo %s", todo_id)

    def update(self, todo_id: int, update: TodoUpdate) -> Optional[str]:
        """Apply a partial update and return the success message.

        Returns None without touching the table when no field was supplied.
        """
        clause = build_update_clause(update)
        if clause.is_empty:
            return None
        self._write(f"UPDATE todo SET {clause.sql} WHERE id = ?", [*clause.params, todo_id])
        logger.info("Updated todo %s: %s", todo_id, clause.message)
        return clause.message

    def delete(self, todo_id: int) -> bool:
        deleted = self._write("DELETE FROM todo WHERE id = ?", (todo_id,))
        logger.info("Deleted todo %s (rows=%d)", todo_id, deleted)
        return deleted > 0
