"""
Home DTOs - Application Layer

Serializable views of the home model. Vendor ids never appear here; every
id is a flat ``service:local`` id.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from homehub.domain.entities.device import Device, Home, Room, Scene
from homehub.domain.entities.service import UpdateResult


class DeviceDTO(BaseModel):
    """DTO for a unified device."""

    id: str = Field(description="Flat device id (service:local)")
    name: str = Field(description="Display name")
    type: str = Field(description="Device type")
    service_id: str = Field(description="Owning service")
    state: Dict[str, Any] = Field(default_factory=dict, description="Device state")
    capabilities: List[str] = Field(
        default_factory=list, description="Supported state fields"
    )

    @classmethod
    def from_domain(cls, device: Device) -> "DeviceDTO":
        return cls(**device.to_dict())

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "hue:bedroom-lamp",
                "name": "Bedroom Lamp",
                "type": "light",
                "service_id": "hue",
                "state": {"on": True, "brightness": 80},
                "capabilities": ["on", "dimming"],
            }
        }
    }


class SceneDTO(BaseModel):
    id: str = Field(description="Flat scene id")
    name: str = Field(description="Scene name")

    @classmethod
    def from_domain(cls, scene: Scene) -> "SceneDTO":
        return cls(id=scene.id, name=scene.name)


class RoomStatsDTO(BaseModel):
    total_devices: int = Field(description="Number of devices in the room")
    lights_on: int = Field(description="Number of lights currently on")
    average_brightness: int = Field(
        description="Mean brightness of the lights that are on"
    )


class RoomDTO(BaseModel):
    """DTO for a room or zone."""

    id: str = Field(description="Flat room id")
    name: str = Field(description="Room name")
    service_id: Optional[str] = Field(default=None, description="Owning service")
    home_room_id: Optional[str] = Field(
        default=None, description="Home room grouping rooms across services"
    )
    devices: List[DeviceDTO] = Field(default_factory=list)
    scenes: List[SceneDTO] = Field(default_factory=list)
    stats: RoomStatsDTO

    @classmethod
    def from_domain(cls, room: Room) -> "RoomDTO":
        stats = room.stats
        return cls(
            id=room.id,
            name=room.name,
            service_id=room.service_id,
            home_room_id=room.home_room_id,
            devices=[DeviceDTO.from_domain(device) for device in room.devices],
            scenes=[SceneDTO.from_domain(scene) for scene in room.scenes],
            stats=RoomStatsDTO(
                total_devices=stats.total_devices,
                lights_on=stats.lights_on,
                average_brightness=stats.average_brightness,
            ),
        )


class HomeSummaryDTO(BaseModel):
    total_lights: int
    lights_on: int
    room_count: int
    scene_count: int
    home_device_count: int


class HomeDTO(BaseModel):
    """DTO for the merged home."""

    rooms: List[RoomDTO] = Field(default_factory=list)
    devices: List[DeviceDTO] = Field(
        default_factory=list, description="Devices that belong to no room"
    )
    zones: List[RoomDTO] = Field(default_factory=list)
    summary: HomeSummaryDTO

    @classmethod
    def from_domain(cls, home: Home) -> "HomeDTO":
        return cls(
            rooms=[RoomDTO.from_domain(room) for room in home.rooms],
            devices=[DeviceDTO.from_domain(device) for device in home.devices],
            zones=[RoomDTO.from_domain(zone) for zone in home.zones],
            summary=HomeSummaryDTO(**home.summary.to_dict()),
        )


class StateUpdateDTO(BaseModel):
    """Simple state to apply, e.g. ``{"on": true, "brightness": 50}``."""

    state: Dict[str, Any] = Field(description="State fields to apply")

    model_config = {
        "json_schema_extra": {"example": {"state": {"on": True, "brightness": 50}}}
    }


class UpdateResultDTO(BaseModel):
    success: bool = Field(description="Whether every contacted backend succeeded")
    target_id: Optional[str] = Field(default=None, description="Addressed id")
    applied_state: Dict[str, Any] = Field(default_factory=dict)
    updated_lights: List[Dict[str, Any]] = Field(default_factory=list)
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(
        cls, result: Optional[UpdateResult], target_id: str
    ) -> "UpdateResultDTO":
        if result is None:
            return cls(success=False, target_id=target_id)
        return cls(**result.to_dict())
