"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Enum and date fields stay plain strings; the route handlers validate them.


class TodoResponse(BaseModel):
    """Serialized todo row, with due_date exposed as dueDate."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    todo: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")


class TodoCreateRequest(BaseModel):
    """Request body for creating a todo."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Caller-supplied todo id")
    todo: Optional[str] = None
    priority: Optional[str] = Field(default=None, description="HIGH | MEDIUM | LOW")
    status: Optional[str] = Field(default=None, description="TO DO | IN PROGRESS | DONE")
    category: Optional[str] = Field(default=None, description="WORK | HOME | LEARNING")
    due_date: Optional[str] = Field(default=None, alias="dueDate", description="yyyy-MM-dd")


class TodoUpdateRequest(BaseModel):
    """Request body for a partial todo update."""

    model_config = ConfigDict(populate_by_name=True)

    todo: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")
