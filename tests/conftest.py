from pathlib import Path

import pytest

from team_tracker.db.session import Database
from team_tracker.models.tables import Location, Team


@pytest.fixture
def database(tmp_path: Path):
    db = Database(tmp_path / "tracker.db", busy_timeout=10.0)
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture
def session(database: Database):
    with database.session() as db_session:
        yield db_session


@pytest.fixture
def make_team(session):
    def _make_team(name: str = "Team", leader: str = "Leader") -> Team:
        team = Team(name=name, leader=leader)
        session.add(team)
        session.commit()
        return team

    return _make_team


@pytest.fixture
def make_location(session):
    def _make_location(name: str, lat: float = 36.8, lon: float = -76.0) -> Location:
        location = Location(name=name, latitude=lat, longitude=lon)
        session.add(location)
        session.commit()
        return location

    return _make_location
