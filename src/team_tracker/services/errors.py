"""Error taxonomy shared by the services and the API layer."""

from __future__ import annotations


class TrackerError(Exception):
    """Base class for errors raised by the tracker services."""


class InvalidInput(TrackerError, ValueError):
    """A request field is missing or malformed. Not worth retrying."""


class NotFound(TrackerError, LookupError):
    """A referenced team, location or assignment does not exist."""


class StorageFailure(TrackerError, RuntimeError):
    """A transaction or connection error. The unit of work was rolled back."""


class PlanConflict(StorageFailure):
    """A planned visit already exists for the same location and date."""
