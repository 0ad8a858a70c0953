"""Location persistence: bulk import and the preached flag."""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session

from ..db.session import Database
from ..models.domain import PlacemarkRecord
from ..models.tables import Location
from .transactions import transaction

logger = logging.getLogger(__name__)


def save_locations_to_database(database: Database, records: Sequence[PlacemarkRecord]) -> int:
    """Insert all records in one transaction.

    Args:
        database: Target store
        records: Parsed placemarks in (lat, lon) order

    Returns:
        Number of locations created. Nothing is committed when the insert fails.
    """
    if not records:
        return 0

    with database.session() as session:
        with transaction(session, "import locations"):
            session.add_all(
                Location(name=record.name, latitude=record.latitude, longitude=record.longitude)
                for record in records
            )

    logger.info(f"Successfully imported {len(records)} locations")
    return len(records)


def mark_location_preached(session: Session, location_id: int) -> None:
    """Set the preached flag. The flag is never cleared here or anywhere else."""
    session.execute(
        update(Location)
        .where(Location.id == location_id)
        .values(is_preached=True)
    )
