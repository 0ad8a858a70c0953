"""Team management services."""

from .service import create_team, delete_team, list_teams, update_team

__all__ = ["list_teams", "create_team", "update_team", "delete_team"]
