"""Location queries: the full list, the candidate pool and per-location status."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from ...models.domain import LocationStatus
from ...models.tables import Location, LocationVisit


def _format_timestamp(value: datetime | str | None) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value or ""


def list_locations(session: Session) -> list[Location]:
    return list(session.scalars(select(Location).order_by(Location.id)))


def get_available_locations(session: Session) -> list[Location]:
    """Locations not yet preached, by name. This is the pool planners assign from."""
    stmt = select(Location).where(Location.is_preached.is_(False)).order_by(Location.name, Location.id)
    return list(session.scalars(stmt))


def get_location_status(session: Session) -> list[LocationStatus]:
    """Derive last visit, visit count and preached state for every location.

    ``is_preached`` is true when any visit in the history was preached, not only
    the latest one. ``last_visit`` is an empty string for unvisited locations.
    """
    preached_visit = case((LocationVisit.is_preached.is_(True), 1), else_=0)
    stmt = (
        select(
            Location.id,
            Location.name,
            Location.latitude,
            Location.longitude,
            func.max(LocationVisit.visit_date).label("last_visit"),
            func.count(LocationVisit.id).label("visit_count"),
            func.coalesce(func.max(preached_visit), 0).label("preached_visits"),
        )
        .outerjoin(LocationVisit, LocationVisit.location_id == Location.id)
        .group_by(Location.id)
        .order_by(Location.id)
    )

    statuses: list[LocationStatus] = []
    for row in session.execute(stmt):
        statuses.append(
            LocationStatus(
                id=row.id,
                name=row.name,
                latitude=row.latitude,
                longitude=row.longitude,
                is_preached=bool(row.preached_visits),
                last_visit=_format_timestamp(row.last_visit),
                visit_count=row.visit_count,
            )
        )
    return statuses
