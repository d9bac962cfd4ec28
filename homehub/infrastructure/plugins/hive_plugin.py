"""
Hive Plugin - Infrastructure Layer

Adapts the heating cloud to the service plugin contract. The account holds
one thermostat and one hot water controller, exposed under the fixed local
ids ``heating`` and ``hotwater``.
"""

from abc import abstractmethod
from typing import Any, Callable, Dict, List, Optional

from homehub.application.services.device_normalizer import (
    HEATING_DEVICE_ID,
    HOT_WATER_DEVICE_ID,
    normalize_hive_hot_water,
    normalize_hive_thermostat,
)
from homehub.domain.entities.device import Device
from homehub.domain.entities.errors import (
    GatewayError,
    ResourceNotFoundError,
    UnsupportedOperationError,
)
from homehub.domain.entities.service import (
    AuthType,
    Capability,
    ConnectionStatus,
    ConnectResult,
    UpdateResult,
)
from homehub.domain.gateways.hive_gateway import IHiveGateway
from homehub.domain.gateways.service_plugin import IServicePlugin
from homehub.domain.services.change_detection import detect_heating_changes
from homehub.infrastructure.gateways.demo_data import DEMO_ACCESS_TOKEN
from homehub.infrastructure.gateways.demo_gateways import DemoHiveGateway
from homehub.infrastructure.repositories.credentials_store import CredentialsStore
from homehub.shared.consts import HIVE_SERVICE_ID
from homehub.shared.logging import get_logger

logger = get_logger(__name__)

HiveGatewayFactory = Callable[..., IHiveGateway]


class HivePluginBase(IServicePlugin):
    service_id = HIVE_SERVICE_ID
    display_name = "Hive Heating"
    description = "Central heating and hot water"
    auth_type = AuthType.TWO_FACTOR
    capabilities = frozenset(
        {Capability.DEVICES, Capability.DEVICE_UPDATES, Capability.CHANGE_DETECTION}
    )

    @abstractmethod
    def _gateway(self) -> IHiveGateway:
        """Gateway of the signed-in account; raises if there is none."""

    async def get_status(self, demo_mode: bool = False) -> Dict[str, Any]:
        return await self._gateway().get_status()

    async def get_devices(self, demo_mode: bool = False) -> List[Device]:
        status = await self.get_status(demo_mode)
        devices = []
        if status.get("heating"):
            devices.append(normalize_hive_thermostat(status["heating"]))
        if status.get("hotWater"):
            devices.append(normalize_hive_hot_water(status["hotWater"]))
        return devices

    async def update_device(
        self, device_id: str, state: Dict[str, Any]
    ) -> UpdateResult:
        """
        Apply ``state`` to the thermostat or the hot water controller.

        Raises:
            ResourceNotFoundError: If ``device_id`` is neither controller
            UnsupportedOperationError: If ``state`` holds nothing the
                controller accepts
        """
        gateway = self._gateway()
        if device_id == HEATING_DEVICE_ID:
            if "targetTemperature" not in state:
                raise UnsupportedOperationError(
                    self.service_id, "this heating state change", device_id
                )
            applied = await gateway.set_target_temperature(
                float(state["targetTemperature"])
            )
        elif device_id == HOT_WATER_DEVICE_ID:
            if "isOn" not in state:
                raise UnsupportedOperationError(
                    self.service_id, "this hot water state change", device_id
                )
            applied = await gateway.set_hot_water(bool(state["isOn"]))
        else:
            raise ResourceNotFoundError("device", device_id)

        logger.info("hive.device_updated", device=device_id, state=applied)
        return UpdateResult(success=True, target_id=device_id, applied_state=applied)

    def detect_changes(self, previous: Any, current: Any) -> Optional[Dict[str, Any]]:
        return detect_heating_changes(previous, current)


class HivePlugin(HivePluginBase):
    """Plugin for a real heating account, signed in with an access token."""

    def __init__(
        self,
        credentials_store: CredentialsStore,
        gateway_factory: HiveGatewayFactory,
        default_access_token: Optional[str] = None,
    ) -> None:
        self._credentials = credentials_store
        self._gateway_factory = gateway_factory
        self._default_access_token = default_access_token
        self._client: Optional[IHiveGateway] = None

    async def initialize(self) -> None:
        if self._default_access_token:
            self._credentials.set_default(
                self.service_id, {"access_token": self._default_access_token}
            )

    async def connect(
        self, credentials: Dict[str, Any], demo_mode: bool = False
    ) -> ConnectResult:
        access_token = credentials.get("access_token") or credentials.get("accessToken")
        if not access_token:
            # Sign-in with username, password and code happens outside this process
            return ConnectResult(
                success=False,
                requires_2fa=bool(credentials.get("username")),
                error="access_token is required",
            )

        gateway = self._gateway_factory(access_token=access_token)
        try:
            await gateway.get_status()
        except GatewayError as e:
            logger.warning("hive.connect_failed", error=str(e))
            return ConnectResult(success=False, error=e.message)

        self._credentials.set(self.service_id, {"access_token": access_token})
        self._client = gateway
        logger.info("hive.connected")
        return ConnectResult(success=True)

    async def disconnect(self) -> None:
        self._client = None
        logger.info("hive.disconnected")

    def is_connected(self, demo_mode: bool = False) -> bool:
        return self.has_credentials()

    async def get_connection_status(self, demo_mode: bool = False) -> ConnectionStatus:
        return ConnectionStatus(connected=self.has_credentials())

    def has_credentials(self) -> bool:
        return self._credentials.has(self.service_id)

    async def clear_credentials(self) -> None:
        self._credentials.clear(self.service_id)
        self._client = None

    def _gateway(self) -> IHiveGateway:
        if self._client is None:
            credentials = self._credentials.get(self.service_id)
            if not credentials:
                raise GatewayError(self.service_id, "Not signed in")
            self._client = self._gateway_factory(
                access_token=credentials["access_token"]
            )
        return self._client


class HiveDemoPlugin(HivePluginBase):
    def __init__(self, gateway: Optional[DemoHiveGateway] = None) -> None:
        self._demo_gateway = gateway or DemoHiveGateway()
        self._connected = True

    async def connect(
        self, credentials: Dict[str, Any], demo_mode: bool = True
    ) -> ConnectResult:
        self._connected = True
        return ConnectResult(success=True, details={"demo": True})

    async def disconnect(self) -> None:
        self._connected = False

    def is_connected(self, demo_mode: bool = True) -> bool:
        return self._connected

    async def get_connection_status(self, demo_mode: bool = True) -> ConnectionStatus:
        return ConnectionStatus(connected=self._connected, details={"demo": True})

    def has_credentials(self) -> bool:
        return True

    async def clear_credentials(self) -> None:
        self._connected = False

    def get_demo_credentials(self) -> Dict[str, Any]:
        return {"access_token": DEMO_ACCESS_TOKEN}

    def reset_demo(self) -> None:
        self._demo_gateway.reset()
        self._connected = True
        logger.info("hive.demo_reset")

    def _gateway(self) -> IHiveGateway:
        return self._demo_gateway
