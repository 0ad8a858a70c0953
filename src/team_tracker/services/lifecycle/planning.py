"""Dated visit plans for a team."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models.domain import PlannedVisitView, utc_now
from ...models.tables import Location, PlannedVisit
from ...persistence.transactions import transaction
from ..errors import PlanConflict
from .lookups import require_locations, require_team

logger = logging.getLogger(__name__)


def plan_visits(session: Session, team_id: int, location_ids: Sequence[int], planned_date: date) -> int:
    """Plan a visit to each location on ``planned_date``, all or nothing.

    Any (location, date) pair that is already planned, by this team or another,
    rolls back the whole batch.

    Returns:
        Number of planned visits created (0 for an empty batch)

    Raises:
        NotFound: the team or one of the locations does not exist
        PlanConflict: a location is already planned for that date
    """
    if not location_ids:
        return 0

    with transaction(session, "plan visits"):
        require_team(session, team_id)
        require_locations(session, location_ids)

        created_at = utc_now()
        session.add_all(
            PlannedVisit(
                location_id=location_id,
                team_id=team_id,
                planned_date=planned_date,
                created_at=created_at,
            )
            for location_id in location_ids
        )
        try:
            session.flush()
        except IntegrityError as exc:
            logger.warning(f"Plan for team {team_id} on {planned_date} conflicts with an existing plan: {exc}")
            raise PlanConflict(
                f"One or more locations are already planned for {planned_date.isoformat()}"
            ) from exc

    logger.info(f"Planned {len(location_ids)} visits for team {team_id} on {planned_date}")
    return len(location_ids)


def get_planned_visits(session: Session, team_id: int, today: Optional[date] = None) -> list[PlannedVisitView]:
    """Plans dated today or later, by date then location name.

    Older plans stay in the table; they are only filtered out here.
    """
    cutoff = today or utc_now().date()
    stmt = (
        select(PlannedVisit.location_id, Location.name, PlannedVisit.planned_date, PlannedVisit.status)
        .join(Location, Location.id == PlannedVisit.location_id)
        .where(PlannedVisit.team_id == team_id, PlannedVisit.planned_date >= cutoff)
        .order_by(PlannedVisit.planned_date, Location.name)
    )
    return [
        PlannedVisitView(
            location_id=row.location_id,
            location_name=row.name,
            planned_date=row.planned_date,
            status=row.status,
        )
        for row in session.execute(stmt)
    ]
