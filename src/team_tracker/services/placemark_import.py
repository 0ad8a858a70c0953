"""Startup import of the placemark file into the location store."""

from __future__ import annotations

import logging
from pathlib import Path

from ..data.placemarks_repository import load_placemarks
from ..db.session import Database
from ..persistence.locations import save_locations_to_database
from .errors import StorageFailure

logger = logging.getLogger(__name__)


def import_locations(database: Database, source: Path, *, required: bool = False) -> int:
    """Populate locations from ``source`` once.

    A missing or unreadable file, or a failed insert, leaves the store with no
    locations. It is logged as a warning unless ``required`` is set, in which
    case the error propagates and startup is aborted.
    """
    try:
        records = load_placemarks(source)
        created = save_locations_to_database(database, records)
    except (FileNotFoundError, ValueError, StorageFailure) as exc:
        if required:
            raise
        logger.warning(f"Error populating locations: {exc}")
        return 0

    logger.info(f"Total locations in database: {created}")
    return created
