"""Assignment and visit lifecycle operations."""

from .assignments import assign_locations, get_team_assignments, update_assignment_status
from .locations import get_available_locations, get_location_status, list_locations
from .planning import get_planned_visits, plan_visits
from .visits import get_location_visits, get_visit_history, record_visit

__all__ = [
    "record_visit",
    "get_location_visits",
    "get_visit_history",
    "plan_visits",
    "get_planned_visits",
    "assign_locations",
    "update_assignment_status",
    "get_team_assignments",
    "list_locations",
    "get_available_locations",
    "get_location_status",
]
