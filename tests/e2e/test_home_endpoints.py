from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from homehub.main.app import create_app

DEMO = {"X-Demo-Mode": "true"}


@pytest.fixture()
def client(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    for name in ("HUE_BRIDGE_IP", "HUE_APP_KEY", "HIVE_ACCESS_TOKEN", "SPOTIFY_ACCESS_TOKEN"):
        monkeypatch.delenv(name, raising=False)

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def test_list_services(client):
    demo = client.get("/api/v2/services", headers=DEMO).json()["services"]
    real = client.get("/api/v2/services").json()["services"]

    assert [service["id"] for service in demo] == ["hue", "hive", "spotify"]
    assert all(service["connected"] for service in demo)
    assert not any(service["connected"] for service in real)


def test_demo_home(client):
    response = client.get("/api/v2/home", headers=DEMO)

    assert response.status_code == 200
    home = response.json()
    assert [room["id"] for room in home["rooms"]] == [
        "hue:bedroom",
        "hue:kitchen",
        "hue:living-room",
    ]
    assert [zone["id"] for zone in home["zones"]] == ["hue:downstairs", "hue:upstairs"]
    assert {device["id"] for device in home["devices"]} == {
        "hive:heating",
        "hive:hotwater",
        "spotify:living-room-speaker",
        "spotify:kitchen-speaker",
    }
    assert home["summary"]["total_lights"] == 12
    assert home["summary"]["lights_on"] == 10


def test_demo_query_parameter(client):
    home = client.get("/api/v2/home?demo=1").json()
    assert len(home["rooms"]) == 3


def test_real_home_without_connections_is_empty(client):
    response = client.get("/api/v2/home")

    assert response.status_code == 200
    assert response.json()["rooms"] == []
    assert response.json()["devices"] == []


def test_room_commands(client):
    client.get("/api/v2/home", headers=DEMO)

    response = client.put(
        "/api/v2/home/rooms/hue:kitchen/devices",
        json={"state": {"on": False}},
        headers=DEMO,
    )
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(response.json()["updated_lights"]) == 3

    room = client.get("/api/v2/home/rooms/home-kitchen", headers=DEMO).json()
    assert room["id"] == "hue:kitchen"
    assert room["stats"]["lights_on"] == 0


def test_device_and_scene_commands(client):
    client.get("/api/v2/home", headers=DEMO)

    heating = client.put(
        "/api/v2/home/devices/hive:heating",
        json={"state": {"targetTemperature": 23}},
        headers=DEMO,
    )
    scene = client.post("/api/v2/home/scenes/hue:relax/activate", headers=DEMO)

    assert heating.status_code == 200
    assert heating.json()["applied_state"] == {"targetTemperature": 23.0}
    assert scene.status_code == 200
    assert scene.json()["success"] is True


@pytest.mark.parametrize(
    "path, status_code",
    [
        ("/api/v2/home/devices/nest:thermostat", 404),
        ("/api/v2/home/devices/thermostat", 400),
        ("/api/v2/home/zones/hue:attic/devices", 404),
    ],
)
def test_routing_errors(client, path, status_code):
    response = client.put(path, json={"state": {"on": True}}, headers=DEMO)
    assert response.status_code == status_code


def test_unsupported_operation_is_400(client):
    response = client.post("/api/v2/home/scenes/hive:evening/activate", headers=DEMO)
    assert response.status_code == 400


def test_dashboard(client):
    demo = client.get("/api/v2/home/dashboard", headers=DEMO)
    real = client.get("/api/v2/home/dashboard")

    assert demo.status_code == 200
    assert demo.json()["summary"]["scene_count"] == 8
    assert len(demo.json()["services"]) == 3
    assert real.status_code == 502


def test_status_feed_and_demo_reset(client):
    first = client.get("/api/v2/services/hive/status", headers=DEMO).json()
    client.put(
        "/api/v2/home/devices/hive:hotwater",
        json={"state": {"isOn": True}},
        headers=DEMO,
    )
    second = client.get("/api/v2/services/hive/status", headers=DEMO).json()

    assert first["changes"] is None
    assert second["changes"]["hotWater"]["isOn"] is True

    assert client.post("/api/v2/services/hive/reset-demo").status_code == 204
    third = client.get("/api/v2/services/hive/status", headers=DEMO).json()
    assert third["snapshot"]["hotWater"]["isOn"] is False


def test_connect_flow(client):
    pairing = client.post(
        "/api/v2/services/hue/connect",
        json={"credentials": {"bridge_ip": "10.0.0.2"}},
    )
    unknown = client.post("/api/v2/services/nest/connect", json={"credentials": {}})

    assert pairing.status_code == 200
    assert pairing.json()["requires_pairing"] is True
    assert unknown.status_code == 404


def test_demo_disconnect(client):
    assert client.post("/api/v2/services/spotify/disconnect", headers=DEMO).status_code == 204

    home = client.get("/api/v2/home", headers=DEMO).json()
    assert not any(device["service_id"] == "spotify" for device in home["devices"])
