"""Request-scoped dependencies shared by the route modules."""

from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from ..config import Settings
from ..db.session import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session(request: Request) -> Iterator[Session]:
    """One session per request, closed when the response is sent."""
    with get_database(request).session() as session:
        yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
