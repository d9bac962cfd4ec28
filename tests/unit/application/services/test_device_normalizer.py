from __future__ import annotations

import pytest

from homehub.application.services.device_normalizer import (
    enrich_light,
    is_enriched_light,
    normalize_dashboard_light,
    normalize_hive_hot_water,
    normalize_hive_thermostat,
    normalize_hue_light,
    normalize_light,
    normalize_spotify_device,
    transform_room_to_home_format,
)
from homehub.domain.entities.dashboard import DashboardGroup, GroupStats
from homehub.domain.entities.device import DeviceType, Scene, Zone

RAW_LIGHT = {
    "id": "9f3c-uuid",
    "on": {"on": True},
    "dimming": {"brightness": 80},
    "color": {"xy": {"x": 0.3, "y": 0.3}},
    "metadata": {"name": "Bedroom Lamp"},
}


class _ExplodingSlugs:
    def get_slug(self, *args, **kwargs):
        raise AssertionError("enriched records must not be slugged again")


def test_normalize_hue_light(slug_service) -> None:
    device = normalize_hue_light(RAW_LIGHT, slug_service)

    assert device.id == "hue:bedroom-lamp"
    assert device.vendor_id == "9f3c-uuid"
    assert device.type == DeviceType.LIGHT
    assert device.state == {"on": True, "brightness": 80, "xy": {"x": 0.3, "y": 0.3}}
    assert device.capabilities == ["on", "dimming", "color"]


def test_normalize_hue_light_tolerates_partial_records(slug_service) -> None:
    device = normalize_hue_light({"id": "bare"}, slug_service)

    assert device.name == "Light"
    assert device.state == {"on": False, "brightness": 0}
    assert device.capabilities == ["on"]


def test_records_without_vendor_id_are_not_mapped(slug_service, slug_repository) -> None:
    lamp = normalize_hue_light({"metadata": {"name": "Lamp"}}, slug_service)
    other = enrich_light({"metadata": {"name": "Desk"}}, slug_service)

    assert lamp.id == "hue:lamp"
    assert lamp.vendor_id is None
    assert other.id == "desk"
    assert slug_service.get_uuid("hue", "lamp") is None
    assert slug_repository.saves == 0

    real = normalize_hue_light(
        {"id": "uuid-1", "metadata": {"name": "Lamp"}}, slug_service
    )
    assert real.id == "hue:lamp"
    assert slug_service.get_uuid("hue", "lamp") == "uuid-1"


def test_enrich_light_stashes_vendor_id(slug_service) -> None:
    light = enrich_light(RAW_LIGHT, slug_service)

    assert light.id == "bedroom-lamp"
    assert light.vendor_id == "9f3c-uuid"
    assert light.color_source == "xy"
    assert "vendor_id" not in light.to_dict()


@pytest.mark.parametrize(
    ("record", "expected"),
    [
        ({"color_temperature": {"mirek": 300}}, "temperature"),
        ({"on": {"on": True}}, "fallback"),
        ({}, None),
    ],
)
def test_enrich_light_color_source(slug_service, record, expected) -> None:
    light = enrich_light({"id": "x", **record}, slug_service)
    assert light.color_source == expected


def test_enriched_lights_never_touch_slug_service(slug_service) -> None:
    enriched = enrich_light(RAW_LIGHT, slug_service)
    as_dict = {**enriched.to_dict(), "vendor_id": enriched.vendor_id}

    for record in (enriched, as_dict):
        assert is_enriched_light(record)
        device = normalize_light(record, _ExplodingSlugs())
        assert device.id == "hue:bedroom-lamp"
        assert device.vendor_id == "9f3c-uuid"


def test_normalize_light_dispatches_raw_records(slug_service) -> None:
    assert not is_enriched_light(RAW_LIGHT)
    assert normalize_light(RAW_LIGHT, slug_service).id == "hue:bedroom-lamp"


def test_dashboard_light_renormalization_is_stable(slug_service) -> None:
    enriched = enrich_light(RAW_LIGHT, slug_service)

    assert normalize_dashboard_light(enriched) == normalize_dashboard_light(enriched)


def test_normalize_hive_devices() -> None:
    thermostat = normalize_hive_thermostat(
        {"id": "h1", "currentTemperature": 19.5, "targetTemperature": 21, "isHeating": True}
    )
    hot_water = normalize_hive_hot_water({"id": "w1", "isOn": True, "mode": "manual"})

    assert thermostat.id == "hive:heating"
    assert thermostat.type == DeviceType.THERMOSTAT
    assert thermostat.state["mode"] == "off"
    assert thermostat.capabilities == ["temperature", "targetTemperature", "mode"]
    assert hot_water.id == "hive:hotwater"
    assert hot_water.state == {"isOn": True, "mode": "manual"}


def test_normalize_hive_thermostat_without_readings() -> None:
    thermostat = normalize_hive_thermostat({})
    assert thermostat.name == "Central Heating"
    assert thermostat.capabilities == ["mode"]


def test_normalize_spotify_device(slug_service) -> None:
    speaker = normalize_spotify_device(
        {"id": "abc123", "name": "Kitchen Speaker", "isActive": True, "volumePercent": 30},
        slug_service,
    )

    assert speaker.id == "spotify:kitchen-speaker"
    assert speaker.type == DeviceType.SPEAKER
    assert speaker.state == {"isActive": True, "volume": 30}
    assert speaker.capabilities == ["playback", "volume"]


def test_transform_room_to_home_format(slug_service) -> None:
    group = DashboardGroup(
        id="bedroom",
        name="Bedroom",
        stats=GroupStats(),
        lights=[enrich_light(RAW_LIGHT, slug_service)],
        scenes=[Scene(id="relax", name="Relax")],
        vendor_id="room-uuid",
    )

    room = transform_room_to_home_format(group)
    zone = transform_room_to_home_format(group, zone=True)

    assert room.id == "hue:bedroom"
    assert [device.id for device in room.devices] == ["hue:bedroom-lamp"]
    assert [scene.id for scene in room.scenes] == ["hue:relax"]
    assert not isinstance(room, Zone)
    assert isinstance(zone, Zone)
