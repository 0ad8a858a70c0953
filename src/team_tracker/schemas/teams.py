"""Pydantic request/response models for team, planning and assignment endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TeamRequest(BaseModel):
    name: str
    leader: str


class TeamModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    leader: str


class MessageResponse(BaseModel):
    message: str


class PlanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location_ids: List[int] = Field(default_factory=list, description="Locations to visit on the planned date.")
    planned_date: date = Field(..., alias="date", description="Planned date (YYYY-MM-DD).")


class PlannedVisitModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    location_id: int
    location_name: str
    planned_date: date
    status: str


class AssignRequest(BaseModel):
    location_ids: List[int] = Field(default_factory=list, description="Locations to assign to the team.")


class AssignmentStatusRequest(BaseModel):
    is_completed: bool


class TeamAssignmentModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    location_name: str
    is_completed: bool
    assigned_date: datetime
    completed_date: Optional[datetime] = None
