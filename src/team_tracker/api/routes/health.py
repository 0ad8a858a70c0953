"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...db.session import Database
from ..dependencies import get_database

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(database: Database = Depends(get_database)) -> dict:
    """Check the database connection and report row counts per table."""
    try:
        counts = database.table_counts()
    except Exception as exc:
        return {
            "connected": False,
            "path": str(database.path),
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }

    return {
        "connected": True,
        "path": str(database.path),
        "tables": counts,
        "message": f"Database connected. Found {counts.get('locations', 0)} locations.",
    }
