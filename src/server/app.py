"""FastAPI application bootstrap."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .dependencies import close_todo_repository, get_todo_repository
from .routes import register_todo_routes


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Open the shared connection once per process; a bad database path aborts startup.
    get_todo_repository()
    try:
        yield
    finally:
        close_todo_repository()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Todo Agenda API", version="1.0.0", lifespan=lifespan)

    register_todo_routes(app)

    return app


app = create_app()
