from pathlib import Path

import pytest
from sqlalchemy import func, select

from team_tracker.db.session import Database
from team_tracker.models.domain import PlacemarkRecord
from team_tracker.models.tables import Location
from team_tracker.persistence.locations import save_locations_to_database
from team_tracker.services.errors import StorageFailure
from team_tracker.services.placemark_import import import_locations


SAMPLE_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark><name>Site A</name><Point><coordinates>-76.0,36.8,0</coordinates></Point></Placemark>
    <Placemark><name></name><Point><coordinates>-75.0,35.0,0</coordinates></Point></Placemark>
  </Document>
</kml>
"""


def _location_count(database: Database) -> int:
    with database.session() as session:
        return session.scalar(select(func.count()).select_from(Location))


def test_import_creates_one_location_per_named_placemark(database: Database, tmp_path: Path) -> None:
    kml_path = tmp_path / "fields.kml"
    kml_path.write_text(SAMPLE_KML, encoding="utf-8")

    created = import_locations(database, kml_path)

    assert created == 1
    with database.session() as session:
        locations = session.scalars(select(Location)).all()
    assert len(locations) == 1
    assert locations[0].name == "Site A"
    assert locations[0].latitude == pytest.approx(36.8)
    assert locations[0].longitude == pytest.approx(-76.0)
    assert locations[0].is_preached is False


def test_missing_file_is_tolerated_by_default(database: Database, tmp_path: Path) -> None:
    assert import_locations(database, tmp_path / "missing.kml") == 0
    assert _location_count(database) == 0


def test_missing_file_aborts_when_import_is_required(database: Database, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        import_locations(database, tmp_path / "missing.kml", required=True)


def test_failed_bulk_insert_commits_nothing(tmp_path: Path) -> None:
    database = Database(tmp_path / "no_schema.db")
    records = [PlacemarkRecord("A", 1.0, 2.0), PlacemarkRecord("B", 3.0, 4.0)]

    # no schema yet, so the insert fails inside the transaction
    with pytest.raises(StorageFailure):
        save_locations_to_database(database, records)

    database.create_schema()
    assert _location_count(database) == 0
    database.dispose()


def test_storage_failure_during_import_leaves_zero_locations(tmp_path: Path) -> None:
    database = Database(tmp_path / "no_schema.db")
    kml_path = tmp_path / "fields.kml"
    kml_path.write_text(SAMPLE_KML, encoding="utf-8")

    assert import_locations(database, kml_path) == 0
    database.dispose()


def test_non_finite_placemark_does_not_abort_the_import(database: Database, tmp_path: Path) -> None:
    kml_path = tmp_path / "fields.kml"
    kml_path.write_text(
        """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark><name>Good</name><Point><coordinates>-76.0,36.8,0</coordinates></Point></Placemark>
    <Placemark><name>Bad</name><Point><coordinates>nan,inf,0</coordinates></Point></Placemark>
  </Document>
</kml>
""",
        encoding="utf-8",
    )

    assert import_locations(database, kml_path) == 1
    with database.session() as session:
        assert session.scalars(select(Location.name)).all() == ["Good"]
