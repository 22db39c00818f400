#!/usr/bin/env python3
"""
Todo CLI - local access to the todo table without running the server

Usage:
    python -m src.todo list [--search-q TEXT] [--priority P] [--status S] [--category C] [--format json|text]
    python -m src.todo get --id ID [--format json|text]
    python -m src.todo agenda --date YYYY-MM-DD [--format json|text]
    python -m src.todo add --id ID --todo TEXT [--priority P] [--status S] [--category C] [--due-date YYYY-MM-DD]
    python -m src.todo update --id ID [--todo TEXT] [--priority P] [--status S] [--category C] [--due-date YYYY-MM-DD]
    python -m src.todo delete --id ID
"""

from __future__ import annotations

import argparse
import json
import sqlite3
import sys
from typing import Any, Dict, List, Optional

from .models import TodoItem, TodoUpdate
from .repository import TodoRepository
from .validation import (
    INVALID_DUE_DATE,
    Invalid,
    normalize_due_date,
    parse_due_date,
    validate_todo_fields,
)


def format_todo_text(todo: TodoItem) -> str:
    """Render a todo as a single line"""
    due = todo.due_date or "-"
    return f"[{todo.id}] {todo.status} | {todo.priority} | {todo.category} | due: {due} | {todo.todo}"


def format_todo_json(todo: TodoItem) -> Dict[str, Any]:
    """Render a todo in the same shape as the HTTP API"""
    return {
        "id": todo.id,
        "todo": todo.todo,
        "priority": todo.priority,
        "status": todo.status,
        "category": todo.category,
        "dueDate": todo.due_date,
    }


def _print_items(items: List[TodoItem], output_format: str) -> None:
    if output_format == "json":
        print(json.dumps([format_todo_json(item) for item in items], ensure_ascii=False))
    elif not items:
        print("No todos found.")
    else:
        for item in items:
            print(format_todo_text(item))


def _reject(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def cmd_list(
    repo: TodoRepository,
    search_q: str,
    priority: str,
    status: str,
    category: str,
    output_format: str,
) -> int:
    """List todos matching the filters"""
    result = validate_todo_fields(priority=priority, status=status, category=category)
    if isinstance(result, Invalid):
        return _reject(result.message)
    _print_items(repo.list(search_q, priority, status, category), output_format)
    return 0


def cmd_get(repo: TodoRepository, todo_id: int, output_format: str) -> int:
    """Show a single todo"""
    todo = repo.get(todo_id)
    if todo is None:
        if output_format == "json":
            print(json.dumps({}))
        else:
            print(f"No todo with ID {todo_id}.")
        return 0
    if output_format == "json":
        print(json.dumps(format_todo_json(todo), ensure_ascii=False))
    else:
        print(format_todo_text(todo))
    return 0


def cmd_agenda(repo: TodoRepository, due_date: str, output_format: str) -> int:
    """List todos due on a date"""
    if parse_due_date(due_date) is None:
        return _reject(INVALID_DUE_DATE)
    _print_items(repo.agenda(normalize_due_date(due_date)), output_format)
    return 0


def cmd_add(
    repo: TodoRepository,
    todo_id: int,
    todo: str,
    priority: Optional[str],
    status: Optional[str],
    category: Optional[str],
    due_date: Optional[str],
) -> int:
    """Add a todo"""
    result = validate_todo_fields(
        priority=priority, status=status, category=category, due_date=due_date
    )
    if isinstance(result, Invalid):
        return _reject(result.message)
    repo.create(
        todo_id,
        todo,
        priority,
        status,
        category,
        normalize_due_date(due_date) if due_date else due_date,
    )
    print("Todo Successfully Added")
    return 0


def cmd_update(repo: TodoRepository, todo_id: int, update: TodoUpdate) -> int:
    """Update the given fields of a todo"""
    result = validate_todo_fields(
        priority=update.priority,
        status=update.status,
        category=update.category,
        due_date=update.due_date,
    )
    if isinstance(result, Invalid):
        return _reject(result.message)
    if update.due_date:
        update.due_date = normalize_due_date(update.due_date)
    message = repo.update(todo_id, update)
    if message is None:
        return _reject("No Fields To Update")
    print(message)
    return 0


def cmd_delete(repo: TodoRepository, todo_id: int) -> int:
    """Delete a todo"""
    repo.delete(todo_id)
    print("Todo Deleted")
    return 0


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="output format (default: text)",
    )


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--priority", help="HIGH | MEDIUM | LOW")
    parser.add_argument("--status", help="'TO DO' | 'IN PROGRESS' | DONE")
    parser.add_argument("--category", help="WORK | HOME | LEARNING")
    parser.add_argument("--due-date", help="due date (YYYY-MM-DD)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Todo CLI - read and edit the todo table directly",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLite database file (default: data/todoApplication.db)",
    )

    subparsers = parser.add_subparsers(dest="command", help="command to run", required=True)

    parser_list = subparsers.add_parser("list", help="list todos")
    parser_list.add_argument("--search-q", default="", help="substring of the todo text")
    parser_list.add_argument("--priority", default="")
    parser_list.add_argument("--status", default="")
    parser_list.add_argument("--category", default="")
    _add_format_argument(parser_list)

    parser_get = subparsers.add_parser("get", help="show a single todo")
    parser_get.add_argument("--id", type=int, required=True)
    _add_format_argument(parser_get)

    parser_agenda = subparsers.add_parser("agenda", help="list todos due on a date")
    parser_agenda.add_argument("--date", required=True, help="YYYY-MM-DD")
    _add_format_argument(parser_agenda)

    parser_add = subparsers.add_parser("add", help="add a todo")
    parser_add.add_argument("--id", type=int, required=True)
    parser_add.add_argument("--todo", required=True, help="todo text")
    _add_field_arguments(parser_add)

    parser_update = subparsers.add_parser("update", help="update fields of a todo")
    parser_update.add_argument("--id", type=int, required=True)
    parser_update.add_argument("--todo", help="new todo text")
    _add_field_arguments(parser_update)

    parser_delete = subparsers.add_parser("delete", help="delete a todo")
    parser_delete.add_argument("--id", type=int, required=True)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    args = build_parser().parse_args(argv)

    repo = TodoRepository(db_path=args.db_path if args.db_path else None)
    try:
        if args.command == "list":
            return cmd_list(
                repo, args.search_q, args.priority, args.status, args.category, args.format
            )
        elif args.command == "get":
            return cmd_get(repo, args.id, args.format)
        elif args.command == "agenda":
            return cmd_agenda(repo, args.date, args.format)
        elif args.command == "add":
            return cmd_add(
                repo,
                args.id,
                args.todo,
                args.priority,
                args.status,
                args.category,
                args.due_date,
            )
        elif args.command == "update":
            update = TodoUpdate(
                todo=args.todo,
                priority=args.priority,
                status=args.status,
                category=args.category,
                due_date=args.due_date,
            )
            return cmd_update(repo, args.id, update)
        elif args.command == "delete":
            return cmd_delete(repo, args.id)
        return _reject(f"Unknown command: {args.command}")
    except (sqlite3.Error, OverflowError) as exc:
        return _reject(f"Database error: {exc}")
    finally:
        repo.close()


if __name__ == "__main__":
    sys.exit(main())
