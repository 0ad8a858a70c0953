"""Statistics endpoint."""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...config import Settings
from ...schemas.statistics import StatisticsResponse
from ...services.statistics import get_statistics
from ..dependencies import get_session, get_settings
from ..errors import http_error

router = APIRouter(tags=["statistics"])


@router.get("/statistics", response_model=StatisticsResponse, status_code=status.HTTP_200_OK)
def statistics(
    session: Session = Depends(get_session),
    app_settings: Settings = Depends(get_settings),
) -> StatisticsResponse:
    try:
        stats = get_statistics(session, active_window=timedelta(hours=app_settings.active_team_window_hours))
    except Exception as exc:
        raise http_error(exc, "Failed to fetch statistics") from exc
    return StatisticsResponse.model_validate(stats)
