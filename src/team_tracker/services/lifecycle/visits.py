"""Recording visits and reading the visit history."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ...models.domain import VisitHistoryEntry, to_naive_utc, utc_now
from ...models.tables import Location, LocationVisit, Team
from ...persistence.locations import mark_location_preached
from ...persistence.transactions import transaction
from .lookups import require_location, require_team

logger = logging.getLogger(__name__)


def record_visit(
    session: Session,
    location_id: int,
    team_id: int,
    *,
    visit_date: Optional[datetime] = None,
    is_preached: bool = False,
    notes: str = "",
) -> LocationVisit:
    """Append a visit event and, for a preached visit, flag the location.

    Both writes share one transaction: if flagging the location fails the visit
    insert is rolled back too. Calling this twice records two visits.

    Raises:
        NotFound: the location or team does not exist
        StorageFailure: the transaction could not be committed
    """
    with transaction(session, "record visit"):
        require_location(session, location_id)
        require_team(session, team_id)

        visit = LocationVisit(
            location_id=location_id,
            team_id=team_id,
            visit_date=to_naive_utc(visit_date) if visit_date else utc_now(),
            is_preached=is_preached,
            notes=notes or "",
        )
        session.add(visit)
        session.flush()

        if is_preached:
            mark_location_preached(session, location_id)

    logger.info(
        f"Recorded visit {visit.id}: location={location_id} team={team_id} preached={is_preached}"
    )
    return visit


def get_location_visits(session: Session, location_id: int) -> list[LocationVisit]:
    """Visits of one location, newest first."""
    stmt = (
        select(LocationVisit)
        .where(LocationVisit.location_id == location_id)
        .order_by(LocationVisit.visit_date.desc(), LocationVisit.id.desc())
    )
    return list(session.scalars(stmt))


def get_visit_history(session: Session) -> list[VisitHistoryEntry]:
    """Every visit with its team and location names, newest first.

    Visits of a deleted team are kept with ``team_name`` set to None.
    """
    stmt = (
        select(
            LocationVisit.id,
            LocationVisit.visit_date,
            Team.name.label("team_name"),
            Location.name.label("location_name"),
            LocationVisit.is_preached,
            LocationVisit.notes,
        )
        .join(Location, Location.id == LocationVisit.location_id)
        .outerjoin(Team, Team.id == LocationVisit.team_id)
        .order_by(LocationVisit.visit_date.desc(), LocationVisit.id.desc())
    )
    return [
        VisitHistoryEntry(
            id=row.id,
            visit_date=row.visit_date,
            team_name=row.team_name,
            location_name=row.location_name,
            is_preached=bool(row.is_preached),
            notes=row.notes or "",
        )
        for row in session.execute(stmt)
    ]
