"""
Room and zone hierarchy for the lighting bridge.

A group (room or zone) lists children that are either lights or devices;
a device owns one or more light services. The lights of a group are the
union of both paths, deduplicated, restricted to lights the bridge reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from homehub.domain.entities.dashboard import DashboardSummary, GroupStats, MotionZone
from homehub.domain.entities.device import round_half_up

BridgeRecord = Dict[str, Any]

# Brightness assumed for a light that is on but reports no dimming
DEFAULT_ON_BRIGHTNESS = 50


@dataclass(slots=True)
class GroupMembership:
    vendor_id: str
    name: str
    light_ids: List[str] = field(default_factory=list)
    lights: List[BridgeRecord] = field(default_factory=list)


def record_name(record: BridgeRecord, default: str) -> str:
    return (record.get("metadata") or {}).get("name") or default


def light_is_on(light: BridgeRecord) -> bool:
    return bool((light.get("on") or {}).get("on", False))


def build_device_light_map(devices: Iterable[BridgeRecord]) -> Dict[str, List[str]]:
    """Map each device id to the ids of the light services it owns."""
    device_lights: Dict[str, List[str]] = {}
    for device in devices:
        device_lights[device["id"]] = [
            service["rid"]
            for service in device.get("services") or []
            if service.get("rtype") == "light"
        ]
    return device_lights


def build_group_hierarchy(
    lights: Iterable[BridgeRecord],
    groups: Iterable[BridgeRecord],
    devices: Iterable[BridgeRecord],
    default_name: str = "Unknown Room",
) -> List[GroupMembership]:
    """
    Resolve the lights of every group.

    Groups whose children resolve to no known light are left out.
    """
    light_map = {light["id"]: light for light in lights}
    device_lights = build_device_light_map(devices)

    hierarchy: List[GroupMembership] = []
    for group in groups:
        light_ids: List[str] = []
        for child in group.get("children") or []:
            if child.get("rtype") == "device":
                light_ids.extend(device_lights.get(child.get("rid"), []))
            elif child.get("rtype") == "light":
                light_ids.append(child.get("rid"))

        resolved_ids = [
            light_id for light_id in dict.fromkeys(light_ids) if light_id in light_map
        ]
        if not resolved_ids:
            continue

        hierarchy.append(
            GroupMembership(
                vendor_id=group["id"],
                name=record_name(group, default_name),
                light_ids=resolved_ids,
                lights=[light_map[light_id] for light_id in resolved_ids],
            )
        )
    return hierarchy


def calculate_group_stats(lights: Iterable[BridgeRecord]) -> GroupStats:
    """On count, total, and mean brightness over the lights that are on."""
    lights = list(lights)
    lights_on = [light for light in lights if light_is_on(light)]
    if not lights_on:
        return GroupStats(
            lights_on_count=0, total_lights=len(lights), average_brightness=0
        )

    total_brightness = 0.0
    for light in lights_on:
        brightness = (light.get("dimming") or {}).get("brightness")
        total_brightness += (
            DEFAULT_ON_BRIGHTNESS if brightness is None else brightness
        )

    return GroupStats(
        lights_on_count=len(lights_on),
        total_lights=len(lights),
        average_brightness=round_half_up(total_brightness / len(lights_on)),
    )


def scenes_for_group(
    scenes: Iterable[BridgeRecord],
    group_id: str,
    group_type: Optional[str] = None,
) -> List[BridgeRecord]:
    """Scenes targeting a group, sorted by name."""
    matching = []
    for scene in scenes:
        target = scene.get("group") or {}
        if target.get("rid") != group_id:
            continue
        if group_type and target.get("rtype") != group_type:
            continue
        matching.append(scene)
    return sorted(matching, key=lambda scene: record_name(scene, "Unknown Scene"))


def parse_motion_zones(
    behaviors: Iterable[BridgeRecord], motion_areas: Iterable[BridgeRecord]
) -> List[MotionZone]:
    """
    Combine motion behaviours (names) with motion areas (live status).

    Only behaviours driven by a ``convenience_area_motion`` service count.
    """
    area_status: Dict[str, BridgeRecord] = {area["id"]: area for area in motion_areas}

    zones = []
    for behavior in behaviors:
        motion_service = (
            ((behavior.get("configuration") or {}).get("motion") or {}).get(
                "motion_service"
            )
            or {}
        )
        if motion_service.get("rtype") != "convenience_area_motion":
            continue

        area = area_status.get(motion_service.get("rid"), {})
        motion = area.get("motion") or {}
        zones.append(
            MotionZone(
                id=behavior["id"],
                name=record_name(behavior, "Unknown Zone"),
                motion_detected=bool(motion.get("motion", False)),
                enabled=bool(behavior.get("enabled", False))
                and bool(area)
                and area.get("enabled") is not False,
                reachable=motion.get("motion_valid") is not False,
                last_changed=(motion.get("motion_report") or {}).get("changed"),
            )
        )
    return sorted(zones, key=lambda zone: zone.name)


def calculate_dashboard_summary(
    lights: List[BridgeRecord], room_count: int, scene_count: int
) -> DashboardSummary:
    return DashboardSummary(
        total_lights=len(lights),
        lights_on=sum(1 for light in lights if light_is_on(light)),
        room_count=room_count,
        scene_count=scene_count,
    )
