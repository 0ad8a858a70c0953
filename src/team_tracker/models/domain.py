"""Domain records derived from the store and the placemark file."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (SQLite keeps no offsets)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(slots=True, frozen=True)
class PlacemarkRecord:
    """A named point taken from the placemark document, already in (lat, lon) order."""

    name: str
    latitude: float
    longitude: float


@dataclass(slots=True)
class LocationStatus:
    """Per-location summary derived from the visit history."""

    id: int
    name: str
    latitude: float
    longitude: float
    is_preached: bool
    last_visit: str
    visit_count: int


@dataclass(slots=True)
class TeamAssignmentView:
    id: int
    location_id: int
    location_name: str
    is_completed: bool
    assigned_date: datetime
    completed_date: Optional[datetime]


@dataclass(slots=True)
class PlannedVisitView:
    location_id: int
    location_name: str
    planned_date: date
    status: str = "planned"


@dataclass(slots=True)
class VisitHistoryEntry:
    id: int
    visit_date: datetime
    team_name: Optional[str]
    location_name: str
    is_preached: bool
    notes: str


@dataclass(slots=True)
class Statistics:
    total_locations: int
    preached_locations: int
    active_teams: int
    total_visits: int
