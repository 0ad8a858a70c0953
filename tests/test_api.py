from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from team_tracker.config import Settings
from team_tracker.main import create_app


SAMPLE_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark><name>Site A</name><Point><coordinates>-76.0,36.8,0</coordinates></Point></Placemark>
    <Folder>
      <name>Fields</name>
      <Placemark><name>Site B</name><Point><coordinates>-76.1,36.9,0</coordinates></Point></Placemark>
      <Placemark><name>Site C</name><Point><coordinates>-76.2,37.0,0</coordinates></Point></Placemark>
    </Folder>
  </Document>
</kml>
"""

FUTURE_DAY = "2999-01-01"
PAST_DAY = "2000-01-01"


def _settings(tmp_path: Path, **overrides) -> Settings:
    kml_path = tmp_path / "fields.kml"
    kml_path.write_text(SAMPLE_KML, encoding="utf-8")
    values = {
        "database_path": tmp_path / "api.db",
        "placemark_file": kml_path,
        "frontend_allowed_origins": ("http://localhost:3000",),
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def api_client(tmp_path: Path):
    app = create_app(_settings(tmp_path))
    with TestClient(app) as client:
        yield client


def _create_team(client: TestClient, name: str = "North", leader: str = "Kim") -> dict:
    response = client.post("/api/teams", json={"name": name, "leader": leader})
    assert response.status_code == 201
    return response.json()


def _location_ids(client: TestClient) -> dict[str, int]:
    return {item["name"]: item["id"] for item in client.get("/api/locations").json()}


def test_startup_imports_placemarks(api_client: TestClient) -> None:
    response = api_client.get("/api/locations")

    assert response.status_code == 200
    payload = response.json()
    assert [item["name"] for item in payload] == ["Site A", "Site B", "Site C"]
    assert payload[0]["latitude"] == pytest.approx(36.8)
    assert payload[0]["longitude"] == pytest.approx(-76.0)


def test_startup_recreates_existing_database(tmp_path: Path) -> None:
    app_settings = _settings(tmp_path)
    app_settings.database_path.write_bytes(b"not a sqlite database")

    with TestClient(create_app(app_settings)) as client:
        assert len(client.get("/api/locations").json()) == 3


def test_startup_without_placemark_file_runs_with_no_locations(tmp_path: Path) -> None:
    app_settings = _settings(tmp_path, placemark_file=tmp_path / "missing.kml")

    with TestClient(create_app(app_settings)) as client:
        assert client.get("/api/locations").json() == []
        assert client.get("/api/statistics").json()["total_locations"] == 0


def test_team_crud(api_client: TestClient) -> None:
    team = _create_team(api_client)
    assert team["name"] == "North"

    update = api_client.put(f"/api/teams/{team['id']}", json={"name": "North East", "leader": "Park"})
    assert update.status_code == 200
    assert api_client.get("/api/teams").json() == [{"id": team["id"], "name": "North East", "leader": "Park"}]

    assert api_client.put("/api/teams/999", json={"name": "X", "leader": "Y"}).status_code == 404
    assert api_client.delete(f"/api/teams/{team['id']}").status_code == 200
    assert api_client.get("/api/teams").json() == []


def test_invalid_bodies_are_rejected(api_client: TestClient) -> None:
    assert api_client.post("/api/teams", json={"name": "North"}).status_code == 400
    assert api_client.post("/api/teams", json={"name": " ", "leader": "Kim"}).status_code == 400
    assert api_client.post("/api/visits", json={"location_id": "abc", "team_id": 1}).status_code == 400
    assert api_client.post("/api/teams/1/plan", json={"location_ids": [1]}).status_code == 400


def test_record_visit_and_read_status(api_client: TestClient) -> None:
    team = _create_team(api_client)
    locations = _location_ids(api_client)

    response = api_client.post(
        "/api/visits",
        json={"location_id": locations["Site A"], "team_id": team["id"], "is_preached": True, "notes": "done"},
    )

    assert response.status_code == 201
    visit = response.json()
    assert visit["id"] > 0
    assert visit["is_preached"] is True
    assert visit["notes"] == "done"

    statuses = {item["id"]: item for item in api_client.get("/api/locations/status").json()}
    assert statuses[locations["Site A"]]["visit_count"] == 1
    assert statuses[locations["Site A"]]["is_preached"] is True
    assert statuses[locations["Site B"]]["last_visit"] == ""

    available = [item["name"] for item in api_client.get("/api/locations/available").json()]
    assert available == ["Site B", "Site C"]

    visits = api_client.get(f"/api/locations/{locations['Site A']}/visits").json()
    assert [v["id"] for v in visits] == [visit["id"]]

    history = api_client.get("/api/visits/history").json()
    assert history[0]["team_name"] == "North"
    assert history[0]["location_name"] == "Site A"


def test_record_visit_for_unknown_team_is_not_found(api_client: TestClient) -> None:
    locations = _location_ids(api_client)

    response = api_client.post("/api/visits", json={"location_id": locations["Site A"], "team_id": 77})

    assert response.status_code == 404
    assert api_client.get("/api/statistics").json()["total_visits"] == 0


def test_planning_flow(api_client: TestClient) -> None:
    team = _create_team(api_client)
    other = _create_team(api_client, name="South")
    locations = _location_ids(api_client)
    site_a, site_b = locations["Site A"], locations["Site B"]

    assert api_client.post(f"/api/teams/{team['id']}/plan", json={"location_ids": [], "date": FUTURE_DAY}).status_code == 200
    assert api_client.post(f"/api/teams/{team['id']}/plan", json={"location_ids": [site_a], "date": FUTURE_DAY}).status_code == 200
    assert api_client.post(f"/api/teams/{team['id']}/plan", json={"location_ids": [site_b], "date": PAST_DAY}).status_code == 200

    conflict = api_client.post(
        f"/api/teams/{other['id']}/plan", json={"location_ids": [site_b, site_a], "date": FUTURE_DAY}
    )
    assert conflict.status_code == 409

    planned = api_client.get(f"/api/teams/{team['id']}/planned").json()
    assert planned == [
        {"location_id": site_a, "location_name": "Site A", "planned_date": FUTURE_DAY, "status": "planned"}
    ]
    assert api_client.get(f"/api/teams/{other['id']}/planned").json() == []


def test_assignment_flow(api_client: TestClient) -> None:
    team = _create_team(api_client)
    other = _create_team(api_client, name="South")
    locations = _location_ids(api_client)
    body = {"location_ids": [locations["Site B"], locations["Site A"]]}

    assert api_client.post(f"/api/teams/{team['id']}/assignments", json=body).status_code == 200
    assert api_client.post(f"/api/teams/{team['id']}/assignments", json=body).status_code == 200

    assignments = api_client.get(f"/api/teams/{team['id']}/assignments").json()
    assert [a["location_name"] for a in assignments] == ["Site A", "Site B"]
    first = assignments[0]

    done = api_client.put(f"/api/teams/{team['id']}/assignments/{first['id']}", json={"is_completed": True})
    assert done.status_code == 200
    assignments = api_client.get(f"/api/teams/{team['id']}/assignments").json()
    assert [(a["location_name"], a["is_completed"]) for a in assignments] == [("Site B", False), ("Site A", True)]
    assert assignments[1]["completed_date"] is not None

    # another team's id in the path matches nothing and is ignored
    mismatch = api_client.put(f"/api/teams/{other['id']}/assignments/{first['id']}", json={"is_completed": False})
    assert mismatch.status_code == 200
    assert api_client.get(f"/api/teams/{team['id']}/assignments").json()[1]["is_completed"] is True

    undone = api_client.put(f"/api/teams/{team['id']}/assignments/{first['id']}", json={"is_completed": False})
    assert undone.status_code == 200
    reverted = [a for a in api_client.get(f"/api/teams/{team['id']}/assignments").json() if a["id"] == first["id"]]
    assert reverted[0]["completed_date"] is None


def test_assignment_mismatch_is_not_found_in_strict_mode(tmp_path: Path) -> None:
    app = create_app(_settings(tmp_path, strict_assignment_updates=True))
    with TestClient(app) as client:
        team = _create_team(client)
        other = _create_team(client, name="South")
        location_id = _location_ids(client)["Site A"]
        client.post(f"/api/teams/{team['id']}/assignments", json={"location_ids": [location_id]})
        (assignment,) = client.get(f"/api/teams/{team['id']}/assignments").json()

        response = client.put(
            f"/api/teams/{other['id']}/assignments/{assignment['id']}", json={"is_completed": True}
        )

        assert response.status_code == 404


def test_assign_unknown_location_is_not_found(api_client: TestClient) -> None:
    team = _create_team(api_client)

    response = api_client.post(f"/api/teams/{team['id']}/assignments", json={"location_ids": [9999]})

    assert response.status_code == 404
    assert api_client.get(f"/api/teams/{team['id']}/assignments").json() == []


def test_statistics_endpoint(api_client: TestClient) -> None:
    team = _create_team(api_client)
    locations = _location_ids(api_client)
    api_client.post("/api/visits", json={"location_id": locations["Site A"], "team_id": team["id"], "is_preached": True})
    api_client.post("/api/visits", json={"location_id": locations["Site B"], "team_id": team["id"]})

    response = api_client.get("/api/statistics")

    assert response.status_code == 200
    assert response.json() == {
        "total_locations": 3,
        "preached_locations": 1,
        "active_teams": 1,
        "total_visits": 2,
    }


def test_health_endpoints(api_client: TestClient) -> None:
    assert api_client.get("/api/health").json() == {"status": "ok"}

    database = api_client.get("/api/health/database").json()
    assert database["connected"] is True
    assert database["tables"]["locations"] == 3


def test_cors_allows_configured_origin_with_credentials(api_client: TestClient) -> None:
    response = api_client.options(
        "/api/teams",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "PATCH"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"
    assert "PATCH" in response.headers["access-control-allow-methods"]


def test_cors_rejects_other_origins(api_client: TestClient) -> None:
    response = api_client.options(
        "/api/teams",
        headers={"Origin": "http://evil.example", "Access-Control-Request-Method": "GET"},
    )

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_root_reports_service_diagnostics(api_client: TestClient) -> None:
    payload = api_client.get("/").json()

    assert payload["status"] == "running"
    assert payload["health"] == "/api/health"
