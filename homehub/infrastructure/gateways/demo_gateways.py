"""
In-memory demo gateways.

Each instance owns a private copy of the demo data; commands mutate only
that copy and ``reset`` restores the initial state.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Sequence, Tuple

from homehub.domain.entities.errors import GatewayError
from homehub.domain.gateways.hive_gateway import IHiveGateway
from homehub.domain.gateways.hue_bridge_gateway import BridgeRecord, IHueBridgeGateway
from homehub.domain.gateways.spotify_gateway import ISpotifyGateway
from homehub.infrastructure.gateways import demo_data
from homehub.infrastructure.gateways.hue_bridge_gateway import to_bridge_state


class DemoHueBridgeGateway(IHueBridgeGateway):
    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._lights: List[BridgeRecord] = copy.deepcopy(demo_data.HUE_LIGHTS)
        self._resources: Dict[str, List[BridgeRecord]] = copy.deepcopy(
            demo_data.HUE_RESOURCES
        )

    async def get_lights(self) -> List[BridgeRecord]:
        return copy.deepcopy(self._lights)

    async def get_rooms(self) -> List[BridgeRecord]:
        return copy.deepcopy(demo_data.HUE_ROOMS)

    async def get_devices(self) -> List[BridgeRecord]:
        return copy.deepcopy(demo_data.HUE_DEVICES)

    async def get_scenes(self) -> List[BridgeRecord]:
        return copy.deepcopy(demo_data.HUE_SCENES)

    async def get_zones(self) -> List[BridgeRecord]:
        return copy.deepcopy(demo_data.HUE_ZONES)

    async def get_resource(self, resource_type: str) -> List[BridgeRecord]:
        return copy.deepcopy(self._resources.get(resource_type, []))

    async def update_light(self, light_id: str, state: Dict[str, Any]) -> None:
        light = next((light for light in self._lights if light["id"] == light_id), None)
        if light is None:
            raise GatewayError("hue", f"Light not found: {light_id}", 404)
        for key, value in to_bridge_state(state).items():
            light[key] = {**(light.get(key) or {}), **value}

    async def update_lights(
        self, updates: Sequence[Tuple[str, Dict[str, Any]]]
    ) -> None:
        for light_id, state in updates:
            await self.update_light(light_id, state)

    async def activate_scene(self, scene_id: str) -> None:
        scene = next(
            (scene for scene in demo_data.HUE_SCENES if scene["id"] == scene_id), None
        )
        if scene is None:
            raise GatewayError("hue", f"Scene not found: {scene_id}", 404)

        group_id = scene["group"]["rid"]
        groups = demo_data.HUE_ROOMS + demo_data.HUE_ZONES
        group = next(group for group in groups if group["id"] == group_id)
        device_lights = {
            device["id"]: [service["rid"] for service in device["services"]]
            for device in demo_data.HUE_DEVICES
        }
        light_ids = []
        for child in group["children"]:
            if child["rtype"] == "device":
                light_ids.extend(device_lights.get(child["rid"], []))
            else:
                light_ids.append(child["rid"])

        action = demo_data.HUE_SCENE_ACTIONS.get(scene_id, {"on": True})
        await self.update_lights([(light_id, action) for light_id in light_ids])


class DemoHiveGateway(IHiveGateway):
    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._status = copy.deepcopy(demo_data.HIVE_STATUS)

    async def get_status(self) -> Dict[str, Any]:
        return copy.deepcopy(self._status)

    async def set_target_temperature(self, temperature: float) -> Dict[str, Any]:
        heating = self._status["heating"]
        heating["targetTemperature"] = temperature
        heating["mode"] = "manual"
        heating["isHeating"] = temperature > heating["currentTemperature"]
        return {"targetTemperature": temperature}

    async def set_hot_water(self, is_on: bool) -> Dict[str, Any]:
        self._status["hotWater"]["isOn"] = is_on
        self._status["hotWater"]["mode"] = "manual"
        return {"isOn": is_on}


class DemoSpotifyGateway(ISpotifyGateway):
    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._devices = copy.deepcopy(demo_data.SPOTIFY_DEVICES)
        self._playback: Optional[Dict[str, Any]] = copy.deepcopy(
            demo_data.SPOTIFY_PLAYBACK
        )

    async def get_devices(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._devices)

    async def get_playback(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._playback)

    async def play(self, device_id: Optional[str] = None) -> None:
        if device_id:
            await self.transfer_playback(device_id, play=True)
        elif self._playback:
            self._playback["isPlaying"] = True

    async def pause(self, device_id: Optional[str] = None) -> None:
        if self._playback:
            self._playback["isPlaying"] = False

    async def set_volume(
        self, volume_percent: int, device_id: Optional[str] = None
    ) -> None:
        device = self._find(device_id) if device_id else self._active()
        device["volumePercent"] = max(0, min(100, int(volume_percent)))

    async def transfer_playback(self, device_id: str, play: bool = False) -> None:
        target = self._find(device_id)
        for device in self._devices:
            device["isActive"] = device is target
        if self._playback:
            self._playback["device"] = {"id": target["id"], "name": target["name"]}
            if play:
                self._playback["isPlaying"] = True

    def _find(self, device_id: str) -> Dict[str, Any]:
        for device in self._devices:
            if device["id"] == device_id:
                return device
        raise GatewayError("spotify", f"Device not found: {device_id}", 404)

    def _active(self) -> Dict[str, Any]:
        for device in self._devices:
            if device["isActive"]:
                return device
        raise GatewayError("spotify", "No active device", 404)
