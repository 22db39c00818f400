"""Todo and agenda endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse

from src.todo import (
    Invalid,
    TodoRepository,
    TodoUpdate,
    normalize_due_date,
    parse_due_date,
    validate_todo_fields,
)
from src.todo.validation import INVALID_DUE_DATE

from ..dependencies import get_todo_repository, serialize_todo
from ..schemas import TodoCreateRequest, TodoResponse, TodoUpdateRequest

logger = logging.getLogger(__name__)

TODO_ADDED = "Todo Successfully Added"
TODO_DELETED = "Todo Deleted"
NO_FIELDS_TO_UPDATE = "No Fields To Update"


def _bad_request(message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=400)


def _rejected(result: Invalid) -> PlainTextResponse:
    logger.info("Rejected %s: %s", result.field, result.message)
    return _bad_request(result.message)


def _normalized(due_date: Optional[str]) -> Optional[str]:
    return normalize_due_date(due_date) if due_date else due_date


def register_todo_routes(app: FastAPI) -> None:
    """Register todo CRUD and agenda endpoints."""

    @app.get("/todos", response_model=List[TodoResponse])
    async def list_todos(
        search_q: str = "",
        priority: str = "",
        status: str = "",
        category: str = "",
        repo: TodoRepository = Depends(get_todo_repository),
    ):
        """List todos whose columns contain every given filter."""
        result = validate_todo_fields(priority=priority, status=status, category=category)
        if isinstance(result, Invalid):
            return _rejected(result)
        try:
            todos = await asyncio.to_thread(repo.list, search_q, priority, status, category)
        except Exception as exc:
            logger.exception("Failed to list todos: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list todos") from exc
        return [serialize_todo(todo) for todo in todos]

    @app.get("/todos/{todo_id}", response_model=TodoResponse)
    async def get_todo(todo_id: int, repo: TodoRepository = Depends(get_todo_repository)):
        """Fetch a single todo. A missing row yields an empty object."""
        try:
            todo = await asyncio.to_thread(repo.get, todo_id)
        except Exception as exc:
            logger.exception("Failed to get todo %s: %s", todo_id, exc)
            raise HTTPException(status_code=500, detail="Failed to get todo") from exc
        if todo is None:
            return JSONResponse(content={})
        return serialize_todo(todo)

    @app.get("/agenda", response_model=List[TodoResponse])
    async def get_agenda(
        date: Optional[str] = None,
        repo: TodoRepository = Depends(get_todo_repository),
    ):
        """List todos due on the given date."""
        if parse_due_date(date) is None:
            logger.info("Rejected agenda date: %r", date)
            return _bad_request(INVALID_DUE_DATE)
        try:
            todos = await asyncio.to_thread(repo.agenda, normalize_due_date(date))
        except Exception as exc:
            logger.exception("Failed to load agenda for %s: %s", date, exc)
            raise HTTPException(status_code=500, detail="Failed to load agenda") from exc
        return [serialize_todo(todo) for todo in todos]

    @app.post("/todos", response_class=PlainTextResponse)
    async def create_todo(
        request: TodoCreateRequest,
        repo: TodoRepository = Depends(get_todo_repository),
    ):
        """Create a todo with the caller-supplied id."""
        result = validate_todo_fields(
            priority=request.priority,
            status=request.status,
            category=request.category,
            due_date=request.due_date,
        )
        if isinstance(result, Invalid):
            return _rejected(result)
        try:
            await asyncio.to_thread(
                repo.create,
                request.id,
                request.todo,
                request.priority,
                request.status,
                request.category,
                _normalized(request.due_date),
            )
        except Exception as exc:
            logger.exception("Failed to create todo %s: %s", request.id, exc)
            raise HTTPException(status_code=500, detail="Failed to create todo") from exc
        return TODO_ADDED

    @app.put("/todos/{todo_id}", response_class=PlainTextResponse)
    async def update_todo(
        todo_id: int,
        request: TodoUpdateRequest,
        repo: TodoRepository = Depends(get_todo_repository),
    ):
        """Update the supplied fields; the reply names the last one applied."""
        result = validate_todo_fields(
            priority=request.priority,
            status=request.status,
            category=request.category,
            due_date=request.due_date,
        )
        if isinstance(result, Invalid):
            return _rejected(result)
        update = TodoUpdate(
            todo=request.todo,
            priority=request.priority,
            status=request.status,
            category=request.category,
            due_date=_normalized(request.due_date),
        )
        try:
            message = await asyncio.to_thread(repo.update, todo_id, update)
        except Exception as exc:
            logger.exception("Failed to update todo %s: %s", todo_id, exc)
            raise HTTPException(status_code=500, detail="Failed to update todo") from exc
        if message is None:
            return _bad_request(NO_FIELDS_TO_UPDATE)
        return message

    @app.delete("/todos/{todo_id}", response_class=PlainTextResponse)
    async def delete_todo(todo_id: int, repo: TodoRepository = Depends(get_todo_repository)):
        """Delete a todo. Succeeds whether or not the row existed."""
        try:
            await asyncio.to_thread(repo.delete, todo_id)
        except Exception as exc:
            logger.exception("Failed to delete todo %s: %s", todo_id, exc)
            raise HTTPException(status_code=500, detail="Failed to delete todo") from exc
        return TODO_DELETED
