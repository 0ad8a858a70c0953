"""Durable team-to-location assignments."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ...models.domain import TeamAssignmentView, utc_now
from ...models.tables import Location, TeamAssignment
from ...persistence.transactions import transaction
from ..errors import NotFound
from .lookups import require_locations, require_team

logger = logging.getLogger(__name__)


def assign_locations(session: Session, team_id: int, location_ids: Sequence[int]) -> int:
    """Assign locations to a team, skipping pairs that already exist.

    Safe to retry: repeating a call, or racing another call for the same pairs,
    never creates a second row per (team, location).

    Returns:
        Number of new assignments

    Raises:
        NotFound: the team or one of the locations does not exist
        StorageFailure: the batch was rolled back
    """
    if not location_ids:
        return 0

    with transaction(session, "assign locations"):
        require_team(session, team_id)
        unique_ids = require_locations(session, location_ids)

        assigned_date = utc_now()
        stmt = (
            sqlite_insert(TeamAssignment.__table__)
            .values(
                [
                    {
                        "team_id": team_id,
                        "location_id": location_id,
                        "is_completed": False,
                        "assigned_date": assigned_date,
                    }
                    for location_id in unique_ids
                ]
            )
            .on_conflict_do_nothing(index_elements=["team_id", "location_id"])
        )
        created = session.execute(stmt).rowcount

    logger.info(
        f"Assigned {created} new location(s) to team {team_id} "
        f"({len(unique_ids) - created} already assigned)"
    )
    return created


def update_assignment_status(
    session: Session,
    team_id: int,
    assignment_id: int,
    is_completed: bool,
    *,
    strict: bool = False,
) -> int:
    """Mark an assignment completed or not.

    Completing stamps ``completed_date`` with the current time; reverting
    clears it. The update is scoped by both ids, so an assignment belonging
    to another team matches zero rows. That is a silent no-op unless
    ``strict`` is set, in which case it raises NotFound.

    Returns:
        Number of rows updated (0 or 1)
    """
    with transaction(session, "update assignment"):
        result = session.execute(
            update(TeamAssignment)
            .where(TeamAssignment.id == assignment_id, TeamAssignment.team_id == team_id)
            .values(
                is_completed=is_completed,
                completed_date=utc_now() if is_completed else None,
            )
        )
        updated = result.rowcount
        if updated == 0:
            if strict:
                raise NotFound(f"Assignment {assignment_id} not found for team {team_id}")
            logger.info(f"Assignment {assignment_id} does not belong to team {team_id}; nothing updated")

    return updated


def get_team_assignments(session: Session, team_id: int) -> list[TeamAssignmentView]:
    """Outstanding assignments first, then completed ones, each by location name."""
    stmt = (
        select(TeamAssignment, Location.name)
        .join(Location, Location.id == TeamAssignment.location_id)
        .where(TeamAssignment.team_id == team_id)
        .order_by(TeamAssignment.is_completed, Location.name)
    )
    return [
        TeamAssignmentView(
            id=assignment.id,
            location_id=assignment.location_id,
            location_name=location_name,
            is_completed=assignment.is_completed,
            assigned_date=assignment.assigned_date,
            completed_date=assignment.completed_date,
        )
        for assignment, location_name in session.execute(stmt)
    ]
