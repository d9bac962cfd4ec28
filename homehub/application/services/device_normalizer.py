"""
Device Normalizer - Application Layer

Converts vendor records into the unified ``Device`` / ``Room`` shapes. The
normalizers never raise on partially populated records: absent sub-fields
fall back to neutral values and only present sub-fields add capabilities.

Two record families exist for lights. Raw bridge records carry the vendor
UUID in ``id`` and go through the slug service. Enriched records (see
``enrich_light``) already carry the slug in ``id`` and the UUID in
``vendor_id``; they must never be slugged again.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from homehub.application.services.slug_mapping_service import (
    SlugMappingService,
    generate_slug,
)
from homehub.domain.entities.dashboard import DashboardGroup, DashboardLight
from homehub.domain.entities.device import (
    Device,
    DeviceType,
    Room,
    Scene,
    create_device,
    create_room,
    make_flat_id,
)
from homehub.shared.consts import (
    HIVE_SERVICE_ID,
    HUE_SERVICE_ID,
    SPOTIFY_SERVICE_ID,
)

Record = Mapping[str, Any]
LightRecord = Union[DashboardLight, Record]

HEATING_DEVICE_ID = "heating"
HOT_WATER_DEVICE_ID = "hotwater"


def _light_name(light: Record, default: str) -> str:
    return (light.get("metadata") or {}).get("name") or default


def _slug_for(
    slugs: SlugMappingService, namespace: str, vendor_id: str, name: str
) -> str:
    # Records without a vendor id get a name slug that is never stored
    if not vendor_id:
        return generate_slug(name)
    return slugs.get_slug(namespace, vendor_id, name)


def _color_source(light: Record) -> Optional[str]:
    if (light.get("color") or {}).get("xy"):
        return "xy"
    if (light.get("color_temperature") or {}).get("mirek"):
        return "temperature"
    if (light.get("on") or {}).get("on"):
        return "fallback"
    return None


def normalize_hue_light(light: Record, slugs: SlugMappingService) -> Device:
    """Normalize a raw bridge light record."""
    state: Dict[str, Any] = {
        "on": bool((light.get("on") or {}).get("on", False)),
        "brightness": (light.get("dimming") or {}).get("brightness", 0),
    }
    xy = (light.get("color") or {}).get("xy")
    if xy:
        state["xy"] = xy
    mirek = (light.get("color_temperature") or {}).get("mirek")
    if mirek:
        state["colorTemperature"] = mirek

    capabilities = ["on"]
    if light.get("dimming"):
        capabilities.append("dimming")
    if light.get("color"):
        capabilities.append("color")
    if light.get("color_temperature"):
        capabilities.append("colorTemperature")

    name = _light_name(light, "Light")
    vendor_id = light.get("id") or ""
    slug = _slug_for(slugs, HUE_SERVICE_ID, vendor_id, name)

    return create_device(
        local_id=slug,
        name=name,
        type=DeviceType.LIGHT,
        service_id=HUE_SERVICE_ID,
        state=state,
        capabilities=capabilities,
        vendor_id=vendor_id or None,
    )


def normalize_hive_thermostat(heating: Record) -> Device:
    state = {
        "currentTemperature": heating.get("currentTemperature"),
        "targetTemperature": heating.get("targetTemperature"),
        "isHeating": bool(heating.get("isHeating", False)),
        "mode": heating.get("mode") or "off",
    }

    capabilities = []
    if heating.get("currentTemperature") is not None:
        capabilities.append("temperature")
    if "targetTemperature" in heating:
        capabilities.append("targetTemperature")
    capabilities.append("mode")

    return create_device(
        local_id=HEATING_DEVICE_ID,
        name=heating.get("name") or "Central Heating",
        type=DeviceType.THERMOSTAT,
        service_id=HIVE_SERVICE_ID,
        state=state,
        capabilities=capabilities,
        vendor_id=heating.get("id"),
    )


def normalize_hive_hot_water(hot_water: Record) -> Device:
    return create_device(
        local_id=HOT_WATER_DEVICE_ID,
        name=hot_water.get("name") or "Hot Water",
        type=DeviceType.HOT_WATER,
        service_id=HIVE_SERVICE_ID,
        state={
            "isOn": bool(hot_water.get("isOn", False)),
            "mode": hot_water.get("mode") or "off",
        },
        capabilities=["on", "mode"],
        vendor_id=hot_water.get("id"),
    )


def normalize_spotify_device(player: Record, slugs: SlugMappingService) -> Device:
    """Normalize a playback device of the media backend into a speaker."""
    name = player.get("name") or "Speaker"
    vendor_id = player.get("id") or ""
    state: Dict[str, Any] = {"isActive": bool(player.get("isActive", False))}

    capabilities = ["playback"]
    if player.get("volumePercent") is not None:
        state["volume"] = player["volumePercent"]
        capabilities.append("volume")

    return create_device(
        local_id=_slug_for(slugs, SPOTIFY_SERVICE_ID, vendor_id, name),
        name=name,
        type=DeviceType.SPEAKER,
        service_id=SPOTIFY_SERVICE_ID,
        state=state,
        capabilities=capabilities,
        vendor_id=vendor_id or None,
    )


def enrich_light(light: Record, slugs: SlugMappingService) -> DashboardLight:
    """
    Lighting precomputation: slug id, flattened state, color source.

    The bridge UUID is kept in ``vendor_id`` for commands.
    """
    name = _light_name(light, "Unknown")
    vendor_id = light.get("id") or ""
    return DashboardLight(
        id=_slug_for(slugs, HUE_SERVICE_ID, vendor_id, name),
        name=name,
        on=bool((light.get("on") or {}).get("on", False)),
        brightness=(light.get("dimming") or {}).get("brightness", 0),
        color_source=_color_source(light),
        xy=(light.get("color") or {}).get("xy"),
        mirek=(light.get("color_temperature") or {}).get("mirek"),
        vendor_id=vendor_id or None,
    )


def is_enriched_light(light: LightRecord) -> bool:
    """Whether ``id`` is already a slug backed by a stashed vendor id."""
    if isinstance(light, DashboardLight):
        return True
    return "vendor_id" in light


def normalize_dashboard_light(light: LightRecord) -> Device:
    """Normalize an enriched light without touching the slug service."""
    if isinstance(light, DashboardLight):
        light = {**light.to_dict(), "vendor_id": light.vendor_id}

    state: Dict[str, Any] = {
        "on": bool(light.get("on", False)),
        "brightness": light.get("brightness") or 0,
    }
    capabilities = ["on", "dimming"]
    if light.get("xy"):
        state["xy"] = light["xy"]
        capabilities.append("color")
    if light.get("mirek"):
        state["colorTemperature"] = light["mirek"]
        capabilities.append("colorTemperature")

    return create_device(
        local_id=light.get("id") or "",
        name=light.get("name") or "Light",
        type=DeviceType.LIGHT,
        service_id=HUE_SERVICE_ID,
        state=state,
        capabilities=capabilities,
        vendor_id=light.get("vendor_id"),
    )


def normalize_light(light: LightRecord, slugs: SlugMappingService) -> Device:
    """Normalize either light family."""
    if is_enriched_light(light):
        return normalize_dashboard_light(light)
    return normalize_hue_light(light, slugs)


def transform_room_to_home_format(
    group: DashboardGroup, zone: bool = False
) -> Room:
    """
    Turn a dashboard room or zone into a home ``Room``/``Zone``.

    Group, scene and device ids become flat ``hue:<slug>`` ids.
    """
    devices: List[Device] = [normalize_dashboard_light(light) for light in group.lights]
    scenes = [
        Scene(id=make_flat_id(HUE_SERVICE_ID, scene.id), name=scene.name)
        for scene in group.scenes
    ]
    return create_room(
        id=make_flat_id(HUE_SERVICE_ID, group.id),
        name=group.name,
        devices=devices,
        scenes=scenes,
        service_id=HUE_SERVICE_ID,
        zone=zone,
    )
