"""Database engine and session helpers."""

from .session import Database

__all__ = ["Database"]
