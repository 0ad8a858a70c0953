"""Visit API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VisitCreateRequest(BaseModel):
    location_id: int = Field(..., description="Visited location.")
    team_id: int = Field(..., description="Team that made the visit.")
    is_preached: bool = Field(default=False, description="Whether the location was preached on this visit.")
    notes: Optional[str] = Field(default="", description="Free-form notes captured with the visit.")
    visit_date: Optional[datetime] = Field(
        default=None,
        description="When the visit happened. Defaults to the time the request is received.",
    )


class VisitModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    team_id: int
    visit_date: datetime
    is_preached: bool
    notes: str


class VisitHistoryModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    visit_date: datetime
    team_name: Optional[str] = None
    location_name: str
    is_preached: bool
    notes: str
