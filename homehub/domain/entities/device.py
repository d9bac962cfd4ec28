"""
Home domain entities.

Every identifier that leaves the core is flat: ``<service_id>:<local_id>``.
The vendor UUID behind a device is kept in ``vendor_id`` for command routing
and is never part of ``to_dict`` output.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import EntityValidationError

FLAT_ID_SEPARATOR = ":"


class DeviceType(str, Enum):
    """Kinds of device exposed in the home model."""

    LIGHT = "light"
    THERMOSTAT = "thermostat"
    HOT_WATER = "hotWater"
    SENSOR = "sensor"
    SPEAKER = "speaker"


def make_flat_id(service_id: str, local_id: str) -> str:
    """Prefix a local id with its service, leaving already-flat ids alone."""
    prefix = f"{service_id}{FLAT_ID_SEPARATOR}"
    if local_id.startswith(prefix):
        return local_id
    return f"{prefix}{local_id}"


def split_flat_id(identifier: str) -> Tuple[Optional[str], str]:
    """
    Split ``service:local`` into its parts.

    Returns ``(None, identifier)`` for a bare id. Only the first separator
    counts, so local ids may themselves contain colons.
    """
    service_id, separator, local_id = identifier.partition(FLAT_ID_SEPARATOR)
    if not separator:
        return None, identifier
    return service_id, local_id


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(slots=True)
class Device:
    """A device in the unified home model."""

    id: str
    name: str
    type: DeviceType
    service_id: str
    state: Dict[str, Any] = field(default_factory=dict)
    capabilities: List[str] = field(default_factory=list)
    vendor_id: Optional[str] = field(default=None, repr=False)

    @property
    def local_id(self) -> str:
        return split_flat_id(self.id)[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "service_id": self.service_id,
            "state": dict(self.state),
            "capabilities": list(self.capabilities),
        }


def create_device(
    *,
    local_id: str,
    name: str,
    type: DeviceType | str,
    service_id: str,
    state: Optional[Dict[str, Any]] = None,
    capabilities: Optional[Iterable[str]] = None,
    vendor_id: Optional[str] = None,
) -> Device:
    """
    Build a device with a flat id.

    Raises:
        EntityValidationError: If id, name or type are missing or invalid.
    """
    if not local_id:
        raise EntityValidationError("Device id is required")
    if not name:
        raise EntityValidationError("Device name is required")
    if not type:
        raise EntityValidationError("Device type is required")
    try:
        device_type = DeviceType(type)
    except ValueError:
        raise EntityValidationError(f"Invalid device type: {type}")

    return Device(
        id=make_flat_id(service_id, local_id),
        name=name,
        type=device_type,
        service_id=service_id,
        state=dict(state or {}),
        capabilities=list(dict.fromkeys(capabilities or [])),
        vendor_id=vendor_id,
    )


@dataclass(slots=True)
class Scene:
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(slots=True)
class RoomStats:
    total_devices: int
    lights_on: int
    average_brightness: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_devices": self.total_devices,
            "lights_on": self.lights_on,
            "average_brightness": self.average_brightness,
        }


def calculate_room_stats(devices: Iterable[Device]) -> RoomStats:
    """Count devices and average the brightness of the lights that are on."""
    devices = list(devices)
    lights_on = [
        device
        for device in devices
        if device.type == DeviceType.LIGHT and device.state.get("on")
    ]
    average = 0
    if lights_on:
        total = sum(device.state.get("brightness") or 0 for device in lights_on)
        average = round_half_up(total / len(lights_on))
    return RoomStats(
        total_devices=len(devices),
        lights_on=len(lights_on),
        average_brightness=average,
    )


@dataclass(slots=True)
class Room:
    """A physical room; ``home_room_id`` groups rooms of several services."""

    id: str
    name: str
    devices: List[Device] = field(default_factory=list)
    scenes: List[Scene] = field(default_factory=list)
    service_id: Optional[str] = None
    home_room_id: Optional[str] = None

    @property
    def stats(self) -> RoomStats:
        return calculate_room_stats(self.devices)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "service_id": self.service_id,
            "home_room_id": self.home_room_id,
            "devices": [device.to_dict() for device in self.devices],
            "scenes": [scene.to_dict() for scene in self.scenes],
            "stats": self.stats.to_dict(),
        }


@dataclass(slots=True)
class Zone(Room):
    """A backend-defined grouping that may span several rooms."""


def create_room(
    *,
    id: str,
    name: str,
    devices: Optional[List[Device]] = None,
    scenes: Optional[List[Scene]] = None,
    service_id: Optional[str] = None,
    zone: bool = False,
) -> Room:
    if not id:
        raise EntityValidationError("Room id is required")
    if not name:
        raise EntityValidationError("Room name is required")
    room_class = Zone if zone else Room
    return room_class(
        id=id,
        name=name,
        devices=list(devices or []),
        scenes=list(scenes or []),
        service_id=service_id,
    )


@dataclass(slots=True)
class HomeSummary:
    total_lights: int
    lights_on: int
    room_count: int
    scene_count: int
    home_device_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_lights": self.total_lights,
            "lights_on": self.lights_on,
            "room_count": self.room_count,
            "scene_count": self.scene_count,
            "home_device_count": self.home_device_count,
        }


@dataclass(slots=True)
class Home:
    """Merged view of every connected backend."""

    rooms: List[Room] = field(default_factory=list)
    devices: List[Device] = field(default_factory=list)
    zones: List[Zone] = field(default_factory=list)

    @property
    def summary(self) -> HomeSummary:
        total_lights = 0
        lights_on = 0
        scene_count = 0
        for room in self.rooms:
            lights = [d for d in room.devices if d.type == DeviceType.LIGHT]
            total_lights += len(lights)
            lights_on += sum(1 for light in lights if light.state.get("on"))
            scene_count += len(room.scenes)
        return HomeSummary(
            total_lights=total_lights,
            lights_on=lights_on,
            room_count=len(self.rooms),
            scene_count=scene_count,
            home_device_count=len(self.devices),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rooms": [room.to_dict() for room in self.rooms],
            "devices": [device.to_dict() for device in self.devices],
            "zones": [zone.to_dict() for zone in self.zones],
            "summary": self.summary.to_dict(),
        }
