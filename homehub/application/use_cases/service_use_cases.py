"""Use cases for listing, connecting and polling service plugins."""

from typing import Any, Dict, Optional

from homehub.application.dtos.service_dto import (
    ConnectResultDTO,
    ServiceDTO,
    ServiceSnapshotDTO,
    ServicesResponseDTO,
)
from homehub.application.services.change_feed_service import ChangeFeedService
from homehub.application.services.home_service import HomeService
from homehub.application.services.service_registry import ServiceRegistry
from homehub.domain.entities.errors import UnknownServiceError
from homehub.domain.gateways.service_plugin import IServicePlugin
from homehub.shared import get_logger
from homehub.shared.request_context import current_demo_mode

logger = get_logger(__name__)


def _require_plugin(
    registry: ServiceRegistry, service_id: str, demo_mode: Optional[bool]
) -> IServicePlugin:
    plugin = registry.get(service_id, demo_mode)
    if plugin is None:
        raise UnknownServiceError(service_id)
    return plugin


class ListServicesUseCase:
    """Use case responsible for listing every service with its status."""

    def __init__(self, home_service: HomeService) -> None:
        self._home_service = home_service

    async def execute(self, demo_mode: Optional[bool] = None) -> ServicesResponseDTO:
        overviews = await self._home_service.get_services_overview(demo_mode)
        return ServicesResponseDTO(
            services=[ServiceDTO.from_domain(overview) for overview in overviews]
        )


class ConnectServiceUseCase:
    def __init__(self, registry: ServiceRegistry) -> None:
        self._registry = registry

    async def execute(
        self,
        service_id: str,
        credentials: Dict[str, Any],
        demo_mode: Optional[bool] = None,
    ) -> ConnectResultDTO:
        demo_mode = current_demo_mode() if demo_mode is None else demo_mode
        plugin = _require_plugin(self._registry, service_id, demo_mode)
        if demo_mode and not credentials:
            credentials = plugin.get_demo_credentials() or {}

        result = await plugin.connect(credentials, demo_mode)
        logger.info(
            "services.connect",
            service_id=service_id,
            success=result.success,
            requires_pairing=result.requires_pairing,
            requires_2fa=result.requires_2fa,
        )
        return ConnectResultDTO.from_domain(result)


class DisconnectServiceUseCase:
    def __init__(
        self, registry: ServiceRegistry, change_feed_service: ChangeFeedService
    ) -> None:
        self._registry = registry
        self._change_feed = change_feed_service

    async def execute(
        self, service_id: str, demo_mode: Optional[bool] = None
    ) -> None:
        plugin = _require_plugin(self._registry, service_id, demo_mode)
        await plugin.disconnect()
        self._change_feed.forget(service_id)
        logger.info("services.disconnected", service_id=service_id)


class ResetDemoUseCase:
    """Restore the demo data of one service."""

    def __init__(self, registry: ServiceRegistry) -> None:
        self._registry = registry

    def execute(self, service_id: str) -> None:
        plugin = _require_plugin(self._registry, service_id, True)
        plugin.reset_demo()
        logger.info("services.demo_reset", service_id=service_id)


class GetServiceStatusUseCase:
    """Current snapshot of a service and the delta since the last poll."""

    def __init__(self, change_feed_service: ChangeFeedService) -> None:
        self._change_feed = change_feed_service

    async def execute(
        self, service_id: str, demo_mode: Optional[bool] = None
    ) -> ServiceSnapshotDTO:
        snapshot, changes = await self._change_feed.poll(service_id, demo_mode)
        return ServiceSnapshotDTO(
            service_id=service_id, snapshot=snapshot, changes=changes
        )
