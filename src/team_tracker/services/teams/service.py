"""Team management."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ...models.tables import Team
from ...persistence.transactions import transaction
from ..errors import InvalidInput, NotFound

logger = logging.getLogger(__name__)


def _clean(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidInput(f"Team {field} is required")
    return cleaned


def list_teams(session: Session) -> list[Team]:
    return list(session.scalars(select(Team).order_by(Team.id)))


def create_team(session: Session, name: str, leader: str) -> Team:
    team = Team(name=_clean(name, "name"), leader=_clean(leader, "leader"))
    with transaction(session, "create team"):
        session.add(team)
    logger.info(f"Created team {team.id} ({team.name})")
    return team


def update_team(session: Session, team_id: int, name: str, leader: str) -> Team:
    cleaned_name = _clean(name, "name")
    cleaned_leader = _clean(leader, "leader")
    with transaction(session, "update team"):
        team = session.get(Team, team_id)
        if team is None:
            raise NotFound(f"Team {team_id} not found")
        team.name = cleaned_name
        team.leader = cleaned_leader
    return team


def delete_team(session: Session, team_id: int) -> bool:
    """Delete the team row only.

    Visits, plans and assignments of the team are kept and keep pointing at the
    removed id. Deleting an unknown id is not an error.

    Returns:
        True if a team was deleted
    """
    with transaction(session, "delete team"):
        deleted = session.execute(delete(Team).where(Team.id == team_id)).rowcount
    if deleted:
        logger.info(f"Deleted team {team_id}; its history is kept")
    return bool(deleted)
