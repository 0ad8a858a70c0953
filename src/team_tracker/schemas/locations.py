"""Location API schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class LocationModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float


class LocationStatusModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float
    is_preached: bool
    last_visit: str
    visit_count: int
