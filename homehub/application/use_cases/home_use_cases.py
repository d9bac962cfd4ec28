"""
Home Use Cases - Application Layer

This module defines use cases for reading the merged home and for sending
commands to devices, rooms, zones and scenes through flat ids.
"""

import asyncio
from typing import Any, Dict, Optional

from homehub.application.dtos.home_dto import HomeDTO, RoomDTO, UpdateResultDTO
from homehub.application.services.dashboard_service import DashboardService
from homehub.application.services.home_service import HomeService
from homehub.application.services.service_registry import ServiceRegistry
from homehub.domain.entities.errors import ResourceNotFoundError, UnknownServiceError
from homehub.shared import get_logger
from homehub.shared.request_context import current_demo_mode

logger = get_logger(__name__)


class GetHomeUseCase:
    """Use case for retrieving the merged home."""

    def __init__(self, home_service: HomeService) -> None:
        self._home_service = home_service

    async def execute(self, demo_mode: Optional[bool] = None) -> HomeDTO:
        home = await self._home_service.get_home(demo_mode)
        return HomeDTO.from_domain(home)


class GetRoomUseCase:
    """Use case for retrieving one room by flat or home room id."""

    def __init__(self, home_service: HomeService) -> None:
        self._home_service = home_service

    async def execute(self, room_id: str, demo_mode: Optional[bool] = None) -> RoomDTO:
        """
        Raises:
            ResourceNotFoundError: If no connected service reports the room
        """
        room = await self._home_service.get_room(room_id, demo_mode)
        if room is None:
            raise ResourceNotFoundError("room", room_id)
        return RoomDTO.from_domain(room)


class UpdateDeviceUseCase:
    def __init__(self, home_service: HomeService) -> None:
        self._home_service = home_service

    async def execute(
        self,
        device_id: str,
        state: Dict[str, Any],
        demo_mode: Optional[bool] = None,
    ) -> UpdateResultDTO:
        result = await self._home_service.update_device(device_id, state, demo_mode)
        return UpdateResultDTO.from_domain(result, device_id)


class ActivateSceneUseCase:
    def __init__(self, home_service: HomeService) -> None:
        self._home_service = home_service

    async def execute(
        self, scene_id: str, demo_mode: Optional[bool] = None
    ) -> UpdateResultDTO:
        result = await self._home_service.activate_scene(scene_id, demo_mode)
        return UpdateResultDTO.from_domain(result, scene_id)


class UpdateRoomDevicesUseCase:
    def __init__(self, home_service: HomeService) -> None:
        self._home_service = home_service

    async def execute(
        self,
        room_id: str,
        state: Dict[str, Any],
        demo_mode: Optional[bool] = None,
    ) -> UpdateResultDTO:
        result = await self._home_service.update_room_devices(
            room_id, state, demo_mode
        )
        return UpdateResultDTO.from_domain(result, room_id)


class UpdateZoneDevicesUseCase:
    def __init__(self, home_service: HomeService) -> None:
        self._home_service = home_service

    async def execute(
        self,
        zone_id: str,
        state: Dict[str, Any],
        demo_mode: Optional[bool] = None,
    ) -> UpdateResultDTO:
        result = await self._home_service.update_zone_devices(
            zone_id, state, demo_mode
        )
        return UpdateResultDTO.from_domain(result, zone_id)


class GetDashboardOverviewUseCase:
    """Lighting dashboard merged with the status of every service."""

    def __init__(
        self,
        registry: ServiceRegistry,
        home_service: HomeService,
        dashboard_service: DashboardService,
        lighting_service_id: str = "hue",
    ) -> None:
        self._registry = registry
        self._home_service = home_service
        self._dashboard_service = dashboard_service
        self._lighting_service_id = lighting_service_id

    async def execute(self, demo_mode: Optional[bool] = None) -> Dict[str, Any]:
        """
        Raises:
            UnknownServiceError: If the lighting service is not registered
            GatewayError: If the lighting bridge cannot be read
        """
        demo_mode = current_demo_mode() if demo_mode is None else demo_mode
        plugin = self._registry.get(self._lighting_service_id, demo_mode)
        if plugin is None:
            raise UnknownServiceError(self._lighting_service_id)

        dashboard, services = await asyncio.gather(
            plugin.get_status(demo_mode),
            self._home_service.get_services_overview(demo_mode),
        )
        logger.info(
            "dashboard.overview_composed",
            rooms=len(dashboard.rooms),
            services=len(services),
        )
        return self._dashboard_service.compose_overview(dashboard, services)
