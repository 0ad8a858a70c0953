"""Route group exports."""

from . import health, locations, statistics, teams, visits

__all__ = ["health", "locations", "visits", "teams", "statistics"]
