"""
Home Service - Application Layer

Aggregates every connected plugin into one ``Home`` and routes commands
addressed by flat ids (``service:local``) back to the owning plugin.

Fetches run concurrently and fail independently: a plugin that raises or
times out contributes nothing to the current answer, the others are kept.
Routing problems are never swallowed; they surface as ``RoutingError``.
"""

import asyncio
from dataclasses import replace
from typing import Any, Awaitable, Dict, List, Optional, Tuple, TypeVar

from homehub.application.services.room_mapping_service import RoomMappingService
from homehub.application.services.service_registry import ServiceRegistry
from homehub.domain.entities.device import (
    Device,
    Home,
    Room,
    Zone,
    make_flat_id,
    split_flat_id,
)
from homehub.domain.entities.errors import (
    InvalidIdentifierError,
    UnknownServiceError,
    UnsupportedOperationError,
)
from homehub.domain.entities.service import (
    Capability,
    ServiceOverview,
    UpdateResult,
)
from homehub.domain.gateways.service_plugin import IServicePlugin
from homehub.shared.logging import get_logger
from homehub.shared.request_context import current_demo_mode

logger = get_logger(__name__)

T = TypeVar("T")

_OPERATION_NAMES = {
    Capability.DEVICE_UPDATES: "device updates",
    Capability.SCENES: "scene activation",
    Capability.ROOM_UPDATES: "room updates",
    Capability.ZONE_UPDATES: "zone updates",
}


class HomeService:
    """Unified home model over all registered plugins."""

    def __init__(
        self,
        registry: ServiceRegistry,
        room_mapping_service: RoomMappingService,
        default_service_id: str = "hue",
        fetch_timeout: Optional[float] = None,
        demo_room_mapping_service: Optional[RoomMappingService] = None,
    ) -> None:
        self._registry = registry
        self._room_mappings = room_mapping_service
        self._demo_room_mappings = demo_room_mapping_service or room_mapping_service
        self._default_service_id = default_service_id
        self._fetch_timeout = fetch_timeout

    async def get_home(self, demo_mode: Optional[bool] = None) -> Home:
        """
        Merge rooms, zones and devices of every connected plugin.

        Args:
            demo_mode: Mode to resolve plugins in; the request mode if None

        Returns:
            Home: Contributions of every plugin that answered
        """
        demo_mode = self._resolve_mode(demo_mode)
        plugins = [
            plugin
            for plugin in self._registry.get_all(demo_mode)
            if self._is_connected(plugin, demo_mode)
        ]
        logger.info(
            "home.fetch_started",
            demo_mode=demo_mode,
            plugins=[plugin.service_id for plugin in plugins],
        )

        contributions = await asyncio.gather(
            *(self._collect(plugin, demo_mode) for plugin in plugins)
        )

        home = Home()
        for rooms, devices in contributions:
            for room in rooms:
                if isinstance(room, Zone):
                    home.zones.append(room)
                else:
                    home.rooms.append(room)
            home.devices.extend(devices)

        logger.info(
            "home.fetched",
            rooms=len(home.rooms),
            zones=len(home.zones),
            devices=len(home.devices),
        )
        return home

    async def get_room(
        self, room_id: str, demo_mode: Optional[bool] = None
    ) -> Optional[Room]:
        """Find a room by flat id or home room id."""
        home = await self.get_home(demo_mode)
        for room in home.rooms + home.zones:
            if room.id == room_id or room.home_room_id == room_id:
                return room
        return None

    async def update_device(
        self, device_id: str, state: Dict[str, Any], demo_mode: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        """
        Route a state change to the plugin owning ``device_id``.

        Raises:
            InvalidIdentifierError: If the id is not ``service:local``
            UnknownServiceError: If no plugin is registered for the service
            UnsupportedOperationError: If the plugin cannot update devices
        """
        service_id, local_id = self._decode(device_id, "device")
        plugin = self._route(
            service_id, device_id, Capability.DEVICE_UPDATES, demo_mode
        )
        logger.info("home.device_update", device_id=device_id, service_id=service_id)
        return await plugin.update_device(local_id, state)

    async def activate_scene(
        self, scene_id: str, demo_mode: Optional[bool] = None
    ) -> Optional[UpdateResult]:
        service_id, local_id = self._decode(scene_id, "scene")
        plugin = self._route(service_id, scene_id, Capability.SCENES, demo_mode)
        logger.info("home.scene_activation", scene_id=scene_id, service_id=service_id)
        return await plugin.activate_scene(local_id)

    async def update_room_devices(
        self, room_id: str, state: Dict[str, Any], demo_mode: Optional[bool] = None
    ) -> UpdateResult:
        """
        Apply ``state`` to every device of a room.

        A flat id targets one plugin. A bare id is first looked up as a home
        room and fanned out to every backend room grouped under it; ids
        unknown to the room mapping go to the default service.
        """
        targets = self._room_targets(room_id, self._resolve_mode(demo_mode))
        return await self._fan_out(
            room_id, targets, state, Capability.ROOM_UPDATES, demo_mode
        )

    async def update_zone_devices(
        self, zone_id: str, state: Dict[str, Any], demo_mode: Optional[bool] = None
    ) -> UpdateResult:
        targets = [self._decode_group(zone_id, "zone")]
        return await self._fan_out(
            zone_id, targets, state, Capability.ZONE_UPDATES, demo_mode
        )

    async def get_services_overview(
        self, demo_mode: Optional[bool] = None
    ) -> List[ServiceOverview]:
        """Metadata and connection status of every registered plugin."""
        demo_mode = self._resolve_mode(demo_mode)
        plugins = self._registry.get_all(demo_mode)
        statuses = await asyncio.gather(
            *(
                self._with_timeout(plugin.get_connection_status(demo_mode))
                for plugin in plugins
            ),
            return_exceptions=True,
        )

        overviews = []
        for plugin, status in zip(plugins, statuses):
            if isinstance(status, BaseException):
                logger.error(
                    "home.status_failed",
                    service_id=plugin.service_id,
                    error=str(status),
                )
                overviews.append(
                    ServiceOverview(
                        metadata=plugin.get_metadata(),
                        connected=False,
                        details={"error": str(status) or type(status).__name__},
                    )
                )
                continue
            overviews.append(
                ServiceOverview(
                    metadata=plugin.get_metadata(),
                    connected=status.connected,
                    details=status.details,
                )
            )
        return overviews

    async def _collect(
        self, plugin: IServicePlugin, demo_mode: bool
    ) -> Tuple[List[Room], List[Device]]:
        service_id = plugin.service_id
        rooms: List[Room] = []
        devices: List[Device] = []

        fetches = []
        if plugin.supports(Capability.ROOMS):
            fetches.append(("rooms", self._with_timeout(plugin.get_rooms(demo_mode))))
        if plugin.supports(Capability.DEVICES):
            fetches.append(
                ("devices", self._with_timeout(plugin.get_devices(demo_mode)))
            )

        results = await asyncio.gather(
            *(fetch for _, fetch in fetches), return_exceptions=True
        )
        for (kind, _), result in zip(fetches, results):
            if isinstance(result, BaseException):
                logger.error(
                    "home.plugin_fetch_failed",
                    service_id=service_id,
                    resource=kind,
                    error=str(result) or type(result).__name__,
                )
                continue
            try:
                if kind == "rooms":
                    rooms = [
                        self._adopt_room(service_id, room, demo_mode)
                        for room in result or []
                    ]
                else:
                    devices = [
                        self._adopt_device(service_id, device)
                        for device in result or []
                    ]
            except Exception as e:
                logger.error(
                    "home.plugin_records_invalid",
                    service_id=service_id,
                    resource=kind,
                    error=str(e) or type(e).__name__,
                )
        return rooms, devices

    def _adopt_room(self, service_id: str, room: Room, demo_mode: bool) -> Room:
        flat_id = make_flat_id(service_id, room.id)
        local_id = split_flat_id(flat_id)[1]
        home_room_id = None
        if not isinstance(room, Zone):
            home_room_id = self._mappings(demo_mode).map_service_room(
                service_id, local_id, room.name
            )
        return replace(
            room,
            id=flat_id,
            service_id=service_id,
            home_room_id=home_room_id,
            devices=[self._adopt_device(service_id, device) for device in room.devices],
            scenes=[
                replace(scene, id=make_flat_id(service_id, scene.id))
                for scene in room.scenes
            ],
        )

    @staticmethod
    def _adopt_device(service_id: str, device: Device) -> Device:
        return replace(
            device, id=make_flat_id(service_id, device.id), service_id=service_id
        )

    def _is_connected(self, plugin: IServicePlugin, demo_mode: bool) -> bool:
        try:
            return bool(plugin.is_connected(demo_mode))
        except Exception as e:
            logger.error(
                "home.connection_check_failed",
                service_id=plugin.service_id,
                error=str(e),
            )
            return False

    async def _fan_out(
        self,
        target_id: str,
        targets: List[Tuple[str, str]],
        state: Dict[str, Any],
        capability: Capability,
        demo_mode: Optional[bool],
    ) -> UpdateResult:
        routed = [
            (service_id, local_id, self._route(service_id, target_id, capability, demo_mode))
            for service_id, local_id in targets
        ]
        logger.info(
            "home.group_update",
            target_id=target_id,
            targets=[f"{service_id}:{local_id}" for service_id, local_id, _ in routed],
        )

        if len(routed) == 1:
            _, local_id, plugin = routed[0]
            result = await self._dispatch_group_update(plugin, capability, local_id, state)
            if result is None:
                return UpdateResult(success=False, target_id=target_id)
            return replace(result, target_id=target_id)

        results = await asyncio.gather(
            *(
                self._dispatch_group_update(plugin, capability, local_id, state)
                for _, local_id, plugin in routed
            ),
            return_exceptions=True,
        )

        success = True
        updated_lights: List[Dict[str, Any]] = []
        outcomes = []
        for (service_id, local_id, _), result in zip(routed, results):
            outcome: Dict[str, Any] = {"service_id": service_id, "room_id": local_id}
            if isinstance(result, BaseException):
                logger.error(
                    "home.group_update_failed",
                    service_id=service_id,
                    room_id=local_id,
                    error=str(result),
                )
                outcome.update(success=False, error=str(result))
                success = False
            elif result is None or not result.success:
                outcome["success"] = False
                success = False
            else:
                outcome["success"] = True
                updated_lights.extend(result.updated_lights)
            outcomes.append(outcome)

        return UpdateResult(
            success=success,
            target_id=target_id,
            applied_state=dict(state),
            updated_lights=updated_lights,
            details={"results": outcomes},
        )

    @staticmethod
    def _dispatch_group_update(
        plugin: IServicePlugin,
        capability: Capability,
        local_id: str,
        state: Dict[str, Any],
    ) -> Awaitable[Optional[UpdateResult]]:
        if capability == Capability.ZONE_UPDATES:
            return plugin.update_zone_devices(local_id, state)
        return plugin.update_room_devices(local_id, state)

    def _room_targets(
        self, room_id: str, demo_mode: bool
    ) -> List[Tuple[str, str]]:
        service_id, _ = split_flat_id(room_id)
        if service_id is None:
            refs = self._mappings(demo_mode).get_service_room_ids(room_id)
            if refs:
                return [(ref.service_id, ref.room_id) for ref in refs]
        return [self._decode_group(room_id, "room")]

    def _decode_group(self, group_id: str, kind: str) -> Tuple[str, str]:
        service_id, local_id = split_flat_id(group_id)
        if service_id is None:
            service_id = self._default_service_id
        if not service_id or not local_id:
            raise InvalidIdentifierError(group_id, kind)
        return service_id, local_id

    @staticmethod
    def _decode(identifier: str, kind: str) -> Tuple[str, str]:
        service_id, local_id = split_flat_id(identifier)
        if not service_id or not local_id:
            raise InvalidIdentifierError(identifier, kind)
        return service_id, local_id

    def _route(
        self,
        service_id: str,
        identifier: str,
        capability: Capability,
        demo_mode: Optional[bool],
    ) -> IServicePlugin:
        plugin = self._registry.get(service_id, self._resolve_mode(demo_mode))
        if plugin is None:
            raise UnknownServiceError(service_id, identifier)
        if not plugin.supports(capability):
            raise UnsupportedOperationError(
                service_id, _OPERATION_NAMES[capability], identifier
            )
        return plugin

    async def _with_timeout(self, awaitable: Awaitable[T]) -> T:
        if self._fetch_timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._fetch_timeout)

    def _mappings(self, demo_mode: bool) -> RoomMappingService:
        return self._demo_room_mappings if demo_mode else self._room_mappings

    @staticmethod
    def _resolve_mode(demo_mode: Optional[bool]) -> bool:
        return current_demo_mode() if demo_mode is None else demo_mode
