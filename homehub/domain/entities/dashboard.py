"""Lighting dashboard entities built by the dashboard compositor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .device import Scene


@dataclass(slots=True)
class DashboardLight:
    """
    A light after lighting-specific enrichment.

    ``id`` is already the external slug; ``vendor_id`` is the bridge UUID
    needed to send commands back.
    """

    id: str
    name: str
    on: bool = False
    brightness: float = 0
    color_source: Optional[str] = None
    xy: Optional[Dict[str, float]] = None
    mirek: Optional[int] = None
    vendor_id: Optional[str] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "on": self.on,
            "brightness": self.brightness,
            "color_source": self.color_source,
            "xy": self.xy,
            "mirek": self.mirek,
        }


@dataclass(slots=True)
class GroupStats:
    lights_on_count: int = 0
    total_lights: int = 0
    average_brightness: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lights_on_count": self.lights_on_count,
            "total_lights": self.total_lights,
            "average_brightness": self.average_brightness,
        }


@dataclass(slots=True)
class DashboardGroup:
    """A room or zone with its resolved lights."""

    id: str
    name: str
    stats: GroupStats
    lights: List[DashboardLight] = field(default_factory=list)
    scenes: List[Scene] = field(default_factory=list)
    vendor_id: Optional[str] = field(default=None, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "stats": self.stats.to_dict(),
            "lights": [light.to_dict() for light in self.lights],
            "scenes": [scene.to_dict() for scene in self.scenes],
        }


@dataclass(slots=True)
class MotionZone:
    id: str
    name: str
    motion_detected: bool = False
    enabled: bool = True
    reachable: bool = True
    last_changed: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "motion_detected": self.motion_detected,
            "enabled": self.enabled,
            "reachable": self.reachable,
            "last_changed": self.last_changed,
        }


@dataclass(slots=True)
class DashboardSummary:
    total_lights: int = 0
    lights_on: int = 0
    room_count: int = 0
    scene_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_lights": self.total_lights,
            "lights_on": self.lights_on,
            "room_count": self.room_count,
            "scene_count": self.scene_count,
        }


@dataclass(slots=True)
class Dashboard:
    summary: DashboardSummary
    rooms: List[DashboardGroup] = field(default_factory=list)
    zones: List[DashboardGroup] = field(default_factory=list)
    motion_zones: List[MotionZone] = field(default_factory=list)

    def find_room(self, room_id: str) -> Optional[DashboardGroup]:
        return next((room for room in self.rooms if room.id == room_id), None)

    def find_zone(self, zone_id: str) -> Optional[DashboardGroup]:
        return next((zone for zone in self.zones if zone.id == zone_id), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "rooms": [room.to_dict() for room in self.rooms],
            "zones": [zone.to_dict() for zone in self.zones],
            "motion_zones": [zone.to_dict() for zone in self.motion_zones],
        }
