"""Point-in-time counters derived from the visit history."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ...models.domain import Statistics, to_naive_utc, utc_now
from ...models.tables import Location, LocationVisit

DEFAULT_ACTIVE_WINDOW = timedelta(hours=24)


def _count(session: Session, stmt) -> int:
    return int(session.scalar(stmt) or 0)


def get_statistics(
    session: Session,
    now: Optional[datetime] = None,
    active_window: timedelta = DEFAULT_ACTIVE_WINDOW,
) -> Statistics:
    """Compute the dashboard counters from current store state.

    Nothing is cached. ``preached_locations`` counts distinct locations with a
    preached visit, read from the events rather than the location flag.
    ``active_teams`` counts teams with a visit in the trailing window ending at
    ``now``; the window slides, it is not aligned to calendar days, and visits
    dated after ``now`` fall outside it.
    """
    reference = to_naive_utc(now) if now else utc_now()
    cutoff = reference - active_window

    total_locations = _count(session, select(func.count()).select_from(Location))
    preached_locations = _count(
        session,
        select(func.count(func.distinct(LocationVisit.location_id))).where(LocationVisit.is_preached.is_(True)),
    )
    active_teams = _count(
        session,
        select(func.count(func.distinct(LocationVisit.team_id))).where(
            LocationVisit.visit_date >= cutoff,
            LocationVisit.visit_date <= reference,
        ),
    )
    total_visits = _count(session, select(func.count()).select_from(LocationVisit))

    return Statistics(
        total_locations=total_locations,
        preached_locations=preached_locations,
        active_teams=active_teams,
        total_visits=total_visits,
    )
