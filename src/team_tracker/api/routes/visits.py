"""Visit endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...schemas.visits import VisitCreateRequest, VisitHistoryModel, VisitModel
from ...services.lifecycle import get_visit_history, record_visit
from ..dependencies import get_session
from ..errors import http_error

router = APIRouter(prefix="/visits", tags=["visits"])


@router.post("", response_model=VisitModel, status_code=status.HTTP_201_CREATED)
def create_visit(payload: VisitCreateRequest, session: Session = Depends(get_session)) -> VisitModel:
    """Record a visit. Not idempotent: repeating the request records another visit."""
    try:
        visit = record_visit(
            session,
            payload.location_id,
            payload.team_id,
            visit_date=payload.visit_date,
            is_preached=payload.is_preached,
            notes=payload.notes or "",
        )
        return VisitModel.model_validate(visit)
    except Exception as exc:
        raise http_error(exc, "Failed to record visit") from exc


@router.get("/history", response_model=List[VisitHistoryModel], status_code=status.HTTP_200_OK)
def visit_history(session: Session = Depends(get_session)) -> List[VisitHistoryModel]:
    try:
        return [VisitHistoryModel.model_validate(entry) for entry in get_visit_history(session)]
    except Exception as exc:
        raise http_error(exc, "Failed to fetch visit history") from exc
