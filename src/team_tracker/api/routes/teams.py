"""Team, planning and assignment endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ...config import Settings
from ...schemas.teams import (
    AssignmentStatusRequest,
    AssignRequest,
    MessageResponse,
    PlannedVisitModel,
    PlanRequest,
    TeamAssignmentModel,
    TeamModel,
    TeamRequest,
)
from ...services.lifecycle import (
    assign_locations,
    get_planned_visits,
    get_team_assignments,
    plan_visits,
    update_assignment_status,
)
from ...services.teams import create_team, delete_team, list_teams, update_team
from ..dependencies import get_session, get_settings
from ..errors import http_error

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=List[TeamModel], status_code=status.HTTP_200_OK)
def get_teams(session: Session = Depends(get_session)) -> List[TeamModel]:
    try:
        return [TeamModel.model_validate(team) for team in list_teams(session)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch teams") from exc


@router.post("", response_model=TeamModel, status_code=status.HTTP_201_CREATED)
def add_team(payload: TeamRequest, session: Session = Depends(get_session)) -> TeamModel:
    try:
        return TeamModel.model_validate(create_team(session, payload.name, payload.leader))
    except Exception as exc:
        raise http_error(exc, "Failed to create team") from exc


@router.put("/{team_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def edit_team(
    payload: TeamRequest,
    team_id: int = Path(..., description="Team identifier"),
    session: Session = Depends(get_session),
) -> MessageResponse:
    try:
        update_team(session, team_id, payload.name, payload.leader)
    except Exception as exc:
        raise http_error(exc, "Failed to update team") from exc
    return MessageResponse(message="Team updated successfully")


@router.delete("/{team_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def remove_team(
    team_id: int = Path(..., description="Team identifier"),
    session: Session = Depends(get_session),
) -> MessageResponse:
    """Delete a team. Its visits, plans and assignments are kept."""
    try:
        delete_team(session, team_id)
    except Exception as exc:
        raise http_error(exc, "Failed to delete team") from exc
    return MessageResponse(message="Team deleted successfully")


@router.post("/{team_id}/plan", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def plan_team_visits(
    payload: PlanRequest,
    team_id: int = Path(..., description="Team identifier"),
    session: Session = Depends(get_session),
) -> MessageResponse:
    """Plan visits for a date. The batch is rejected as a whole if any location is already planned that day."""
    try:
        plan_visits(session, team_id, payload.location_ids, payload.planned_date)
    except Exception as exc:
        raise http_error(exc, "Failed to plan visits") from exc
    return MessageResponse(message="Visits planned successfully")


@router.get("/{team_id}/planned", response_model=List[PlannedVisitModel], status_code=status.HTTP_200_OK)
def planned_visits(
    team_id: int = Path(..., description="Team identifier"),
    session: Session = Depends(get_session),
) -> List[PlannedVisitModel]:
    try:
        return [PlannedVisitModel.model_validate(item) for item in get_planned_visits(session, team_id)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch planned visits") from exc


@router.get("/{team_id}/assignments", response_model=List[TeamAssignmentModel], status_code=status.HTTP_200_OK)
def team_assignments(
    team_id: int = Path(..., description="Team identifier"),
    session: Session = Depends(get_session),
) -> List[TeamAssignmentModel]:
    try:
        return [TeamAssignmentModel.model_validate(item) for item in get_team_assignments(session, team_id)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch assignments") from exc


@router.post("/{team_id}/assignments", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def assign_team_locations(
    payload: AssignRequest,
    team_id: int = Path(..., description="Team identifier"),
    session: Session = Depends(get_session),
) -> MessageResponse:
    """Assign locations to a team. Pairs that already exist are skipped, so retries are safe."""
    try:
        assign_locations(session, team_id, payload.location_ids)
    except Exception as exc:
        raise http_error(exc, "Failed to assign locations") from exc
    return MessageResponse(message="Locations assigned successfully")


@router.put(
    "/{team_id}/assignments/{assignment_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
)
def update_assignment(
    payload: AssignmentStatusRequest,
    team_id: int = Path(..., description="Team identifier"),
    assignment_id: int = Path(..., description="Assignment identifier"),
    session: Session = Depends(get_session),
    app_settings: Settings = Depends(get_settings),
) -> MessageResponse:
    try:
        update_assignment_status(
            session,
            team_id,
            assignment_id,
            payload.is_completed,
            strict=app_settings.strict_assignment_updates,
        )
    except Exception as exc:
        raise http_error(exc, "Failed to update assignment") from exc
    return MessageResponse(message="Assignment updated successfully")
