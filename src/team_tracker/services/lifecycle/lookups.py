"""Existence checks run before any write.

SQLite foreign keys stay disabled so that deleting a team keeps its history;
references are therefore validated here, inside the caller's transaction.
"""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from ...models.tables import Location, Team
from ..errors import NotFound


def require_team(session: Session, team_id: int) -> Team:
    team = session.get(Team, team_id)
    if team is None:
        raise NotFound(f"Team {team_id} not found")
    return team


def require_location(session: Session, location_id: int) -> Location:
    location = session.get(Location, location_id)
    if location is None:
        raise NotFound(f"Location {location_id} not found")
    return location


def require_locations(session: Session, location_ids: Iterable[int]) -> list[int]:
    """Return the ids de-duplicated in request order, or raise for the first unknown one."""
    unique_ids = list(dict.fromkeys(location_ids))
    if not unique_ids:
        return unique_ids

    found = set(session.scalars(select(Location.id).where(Location.id.in_(unique_ids))))
    missing = [location_id for location_id in unique_ids if location_id not in found]
    if missing:
        raise NotFound(f"Location(s) not found: {missing}")
    return unique_ids
