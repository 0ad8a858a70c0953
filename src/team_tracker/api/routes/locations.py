"""Location endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ...schemas.locations import LocationModel, LocationStatusModel
from ...schemas.visits import VisitModel
from ...services.lifecycle import (
    get_available_locations,
    get_location_status,
    get_location_visits,
    list_locations,
)
from ..dependencies import get_session
from ..errors import http_error

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=List[LocationModel], status_code=status.HTTP_200_OK)
def get_locations(session: Session = Depends(get_session)) -> List[LocationModel]:
    try:
        return [LocationModel.model_validate(location) for location in list_locations(session)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch locations") from exc


@router.get("/available", response_model=List[LocationModel], status_code=status.HTTP_200_OK)
def get_available(session: Session = Depends(get_session)) -> List[LocationModel]:
    """Locations not preached yet, sorted by name."""
    try:
        return [LocationModel.model_validate(location) for location in get_available_locations(session)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch locations") from exc


@router.get("/status", response_model=List[LocationStatusModel], status_code=status.HTTP_200_OK)
def get_status(session: Session = Depends(get_session)) -> List[LocationStatusModel]:
    try:
        return [LocationStatusModel.model_validate(item) for item in get_location_status(session)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch location statuses") from exc


@router.get("/{location_id}/visits", response_model=List[VisitModel], status_code=status.HTTP_200_OK)
def get_visits(
    location_id: int = Path(..., description="Location identifier"),
    session: Session = Depends(get_session),
) -> List[VisitModel]:
    """Visit history of one location, newest first."""
    try:
        return [VisitModel.model_validate(visit) for visit in get_location_visits(session, location_id)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch visits") from exc
