"""Statistics services."""

from .service import DEFAULT_ACTIVE_WINDOW, get_statistics

__all__ = ["get_statistics", "DEFAULT_ACTIVE_WINDOW"]
