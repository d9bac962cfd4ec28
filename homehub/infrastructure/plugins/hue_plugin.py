"""
Hue Plugin - Infrastructure Layer

Adapts a lighting bridge to the service plugin contract. Room, zone, scene
and light ids exposed by this plugin are slugs; the bridge UUIDs needed for
commands are looked up through the slug mapping service or taken from the
enriched dashboard records.
"""

from abc import abstractmethod
from typing import Any, Callable, Dict, List, Optional

from homehub.application.services.change_feed_service import to_payload
from homehub.application.services.dashboard_service import DashboardService
from homehub.application.services.device_normalizer import (
    transform_room_to_home_format,
)
from homehub.application.services.slug_mapping_service import SlugMappingService
from homehub.domain.entities.dashboard import Dashboard, DashboardGroup
from homehub.domain.entities.device import Room
from homehub.domain.entities.errors import GatewayError, ResourceNotFoundError
from homehub.domain.entities.service import (
    AuthType,
    Capability,
    ConnectionStatus,
    ConnectResult,
    UpdateResult,
)
from homehub.domain.gateways.hue_bridge_gateway import IHueBridgeGateway
from homehub.domain.gateways.service_plugin import IServicePlugin
from homehub.domain.services.change_detection import detect_room_changes
from homehub.infrastructure.gateways.demo_data import DEMO_APP_KEY, DEMO_BRIDGE_IP
from homehub.infrastructure.gateways.demo_gateways import DemoHueBridgeGateway
from homehub.infrastructure.repositories.credentials_store import CredentialsStore
from homehub.shared.consts import HUE_SCENE_NAMESPACE, HUE_SERVICE_ID
from homehub.shared.logging import get_logger

logger = get_logger(__name__)

HueGatewayFactory = Callable[..., IHueBridgeGateway]


class HuePluginBase(IServicePlugin):
    service_id = HUE_SERVICE_ID
    display_name = "Philips Hue"
    description = "Lights, rooms, zones and scenes of a Hue bridge"
    auth_type = AuthType.PAIRING
    capabilities = frozenset(
        {
            Capability.ROOMS,
            Capability.DEVICE_UPDATES,
            Capability.ROOM_UPDATES,
            Capability.ZONE_UPDATES,
            Capability.SCENES,
            Capability.CHANGE_DETECTION,
        }
    )

    def __init__(
        self,
        dashboard_service: DashboardService,
        slug_mapping_service: SlugMappingService,
    ) -> None:
        self._dashboard_service = dashboard_service
        self._slugs = slug_mapping_service

    @abstractmethod
    def _gateway(self) -> IHueBridgeGateway:
        """Gateway of the connected bridge; raises if there is none."""

    async def get_status(self, demo_mode: bool = False) -> Dashboard:
        return await self._dashboard_service.get_dashboard(self._gateway())

    async def get_rooms(self, demo_mode: bool = False) -> List[Room]:
        dashboard = await self.get_status(demo_mode)
        rooms = [transform_room_to_home_format(room) for room in dashboard.rooms]
        zones = [
            transform_room_to_home_format(zone, zone=True) for zone in dashboard.zones
        ]
        return rooms + zones

    async def update_device(
        self, device_id: str, state: Dict[str, Any]
    ) -> UpdateResult:
        """
        Apply ``state`` to one light.

        Raises:
            ResourceNotFoundError: If the slug is not a known light
        """
        light_id = self._slugs.get_uuid(HUE_SERVICE_ID, device_id)
        if light_id is None:
            raise ResourceNotFoundError("light", device_id)

        await self._gateway().update_light(light_id, state)
        logger.info("hue.light_updated", light=device_id, state=state)
        return UpdateResult(success=True, target_id=device_id, applied_state=dict(state))

    async def activate_scene(self, scene_id: str) -> UpdateResult:
        vendor_id = self._slugs.get_uuid(HUE_SCENE_NAMESPACE, scene_id)
        if vendor_id is None:
            raise ResourceNotFoundError("scene", scene_id)

        await self._gateway().activate_scene(vendor_id)
        logger.info("hue.scene_activated", scene=scene_id)
        return UpdateResult(success=True, target_id=scene_id)

    async def update_room_devices(
        self, room_id: str, state: Dict[str, Any]
    ) -> UpdateResult:
        dashboard = await self.get_status()
        return await self._update_group(dashboard.find_room(room_id), "room", room_id, state)

    async def update_zone_devices(
        self, zone_id: str, state: Dict[str, Any]
    ) -> UpdateResult:
        dashboard = await self.get_status()
        return await self._update_group(dashboard.find_zone(zone_id), "zone", zone_id, state)

    def detect_changes(self, previous: Any, current: Any) -> Optional[Dict[str, Any]]:
        if previous is None or current is None:
            return None
        return detect_room_changes(to_payload(previous), to_payload(current))

    async def _update_group(
        self,
        group: Optional[DashboardGroup],
        kind: str,
        group_id: str,
        state: Dict[str, Any],
    ) -> UpdateResult:
        if group is None:
            raise ResourceNotFoundError(kind, group_id)

        lights = [light for light in group.lights if light.vendor_id]
        await self._gateway().update_lights(
            [(light.vendor_id, state) for light in lights]
        )
        logger.info(f"hue.{kind}_updated", group=group_id, lights=len(lights))
        return UpdateResult(
            success=True,
            target_id=group_id,
            applied_state=dict(state),
            updated_lights=[{**light.to_dict(), **state} for light in lights],
        )


class HuePlugin(HuePluginBase):
    """Plugin for a real bridge on the local network."""

    def __init__(
        self,
        dashboard_service: DashboardService,
        slug_mapping_service: SlugMappingService,
        credentials_store: CredentialsStore,
        gateway_factory: HueGatewayFactory,
        default_bridge_ip: Optional[str] = None,
        default_app_key: Optional[str] = None,
    ) -> None:
        super().__init__(dashboard_service, slug_mapping_service)
        self._credentials = credentials_store
        self._gateway_factory = gateway_factory
        self._default_bridge_ip = default_bridge_ip
        self._default_app_key = default_app_key
        self._bridge: Optional[IHueBridgeGateway] = None

    async def initialize(self) -> None:
        if self._default_bridge_ip and self._default_app_key:
            stored = self._credentials.set_default(
                self.service_id,
                {"bridge_ip": self._default_bridge_ip, "app_key": self._default_app_key},
            )
            if stored:
                logger.info("hue.credentials_seeded", bridge_ip=self._default_bridge_ip)

    async def connect(
        self, credentials: Dict[str, Any], demo_mode: bool = False
    ) -> ConnectResult:
        bridge_ip = credentials.get("bridge_ip") or credentials.get("bridgeIp")
        app_key = credentials.get("app_key") or credentials.get("appKey")
        if not bridge_ip:
            return ConnectResult(success=False, error="bridge_ip is required")
        if not app_key:
            return ConnectResult(
                success=False,
                requires_pairing=True,
                details={"bridge_ip": bridge_ip},
            )

        gateway = self._gateway_factory(bridge_ip=bridge_ip, app_key=app_key)
        try:
            await gateway.get_lights()
        except GatewayError as e:
            logger.warning("hue.connect_failed", bridge_ip=bridge_ip, error=str(e))
            return ConnectResult(success=False, error=e.message)

        self._credentials.set(self.service_id, {"bridge_ip": bridge_ip, "app_key": app_key})
        self._bridge = gateway
        logger.info("hue.connected", bridge_ip=bridge_ip)
        return ConnectResult(success=True, details={"bridge_ip": bridge_ip})

    async def disconnect(self) -> None:
        self._bridge = None
        logger.info("hue.disconnected")

    def is_connected(self, demo_mode: bool = False) -> bool:
        return self.has_credentials()

    async def get_connection_status(self, demo_mode: bool = False) -> ConnectionStatus:
        credentials = self._credentials.get(self.service_id) or {}
        return ConnectionStatus(
            connected=bool(credentials),
            details={"bridge_ip": credentials.get("bridge_ip")},
        )

    def has_credentials(self) -> bool:
        return self._credentials.has(self.service_id)

    async def clear_credentials(self) -> None:
        self._credentials.clear(self.service_id)
        self._bridge = None

    def _gateway(self) -> IHueBridgeGateway:
        if self._bridge is None:
            credentials = self._credentials.get(self.service_id)
            if not credentials:
                raise GatewayError(self.service_id, "Bridge is not connected")
            self._bridge = self._gateway_factory(
                bridge_ip=credentials["bridge_ip"], app_key=credentials["app_key"]
            )
        return self._bridge


class HueDemoPlugin(HuePluginBase):
    """Always-connected plugin over the in-memory demo bridge."""

    def __init__(
        self,
        dashboard_service: DashboardService,
        slug_mapping_service: SlugMappingService,
        gateway: Optional[DemoHueBridgeGateway] = None,
    ) -> None:
        super().__init__(dashboard_service, slug_mapping_service)
        self._demo_gateway = gateway or DemoHueBridgeGateway()

    async def connect(
        self, credentials: Dict[str, Any], demo_mode: bool = True
    ) -> ConnectResult:
        return ConnectResult(success=True, details={"bridge_ip": DEMO_BRIDGE_IP})

    async def disconnect(self) -> None:
        pass

    def is_connected(self, demo_mode: bool = True) -> bool:
        return True

    async def get_connection_status(self, demo_mode: bool = True) -> ConnectionStatus:
        return ConnectionStatus(
            connected=True, details={"bridge_ip": DEMO_BRIDGE_IP, "demo": True}
        )

    def has_credentials(self) -> bool:
        return True

    async def clear_credentials(self) -> None:
        pass

    def get_demo_credentials(self) -> Dict[str, Any]:
        return {"bridge_ip": DEMO_BRIDGE_IP, "app_key": DEMO_APP_KEY}

    def reset_demo(self) -> None:
        self._demo_gateway.reset()
        logger.info("hue.demo_reset")

    def _gateway(self) -> IHueBridgeGateway:
        return self._demo_gateway
