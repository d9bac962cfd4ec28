"""
Spotify Plugin - Infrastructure Layer

Adapts the media cloud to the service plugin contract. Playback devices
are exposed as speakers with slug ids in the ``spotify`` namespace.
"""

from abc import abstractmethod
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

from homehub.application.services.device_normalizer import normalize_spotify_device
from homehub.application.services.slug_mapping_service import SlugMappingService
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
from homehub.domain.gateways.service_plugin import IServicePlugin
from homehub.domain.gateways.spotify_gateway import ISpotifyGateway
from homehub.domain.services.change_detection import detect_playback_changes
from homehub.infrastructure.gateways.demo_data import DEMO_ACCESS_TOKEN
from homehub.infrastructure.gateways.demo_gateways import DemoSpotifyGateway
from homehub.infrastructure.repositories.credentials_store import CredentialsStore
from homehub.shared.consts import SPOTIFY_SERVICE_ID
from homehub.shared.logging import get_logger

logger = get_logger(__name__)

SpotifyGatewayFactory = Callable[..., ISpotifyGateway]

AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
OAUTH_SCOPES = "user-read-playback-state user-modify-playback-state"


class SpotifyPluginBase(IServicePlugin):
    service_id = SPOTIFY_SERVICE_ID
    display_name = "Spotify"
    description = "Playback devices and now playing"
    auth_type = AuthType.OAUTH
    capabilities = frozenset(
        {Capability.DEVICES, Capability.DEVICE_UPDATES, Capability.CHANGE_DETECTION}
    )

    def __init__(self, slug_mapping_service: SlugMappingService) -> None:
        self._slugs = slug_mapping_service

    @abstractmethod
    def _gateway(self) -> ISpotifyGateway:
        """Gateway of the authorized account; raises if there is none."""

    async def get_status(self, demo_mode: bool = False) -> Dict[str, Any]:
        gateway = self._gateway()
        devices = await gateway.get_devices()
        playback = await gateway.get_playback()
        return {"devices": devices, "playback": playback}

    async def get_devices(self, demo_mode: bool = False) -> List[Device]:
        players = await self._gateway().get_devices()
        return [normalize_spotify_device(player, self._slugs) for player in players]

    async def update_device(
        self, device_id: str, state: Dict[str, Any]
    ) -> UpdateResult:
        """
        Change volume, make a speaker the active one, or play/pause on it.

        Raises:
            ResourceNotFoundError: If the slug is not a known speaker
            UnsupportedOperationError: If ``state`` holds nothing a speaker
                accepts
        """
        player_id = self._slugs.get_uuid(SPOTIFY_SERVICE_ID, device_id)
        if player_id is None:
            raise ResourceNotFoundError("device", device_id)
        if not {"volume", "isActive", "isPlaying"} & state.keys():
            raise UnsupportedOperationError(
                self.service_id, "this speaker state change", device_id
            )

        gateway = self._gateway()
        if state.get("isActive"):
            await gateway.transfer_playback(player_id, play=bool(state.get("isPlaying")))
        if "volume" in state:
            await gateway.set_volume(int(state["volume"]), device_id=player_id)
        if "isPlaying" in state and not state.get("isActive"):
            if state["isPlaying"]:
                await gateway.play(player_id)
            else:
                await gateway.pause(player_id)

        logger.info("spotify.device_updated", device=device_id, state=state)
        return UpdateResult(success=True, target_id=device_id, applied_state=dict(state))

    def detect_changes(self, previous: Any, current: Any) -> Optional[Dict[str, Any]]:
        return detect_playback_changes(previous, current)


class SpotifyPlugin(SpotifyPluginBase):
    """Plugin for a real account, authorized with an OAuth access token."""

    def __init__(
        self,
        slug_mapping_service: SlugMappingService,
        credentials_store: CredentialsStore,
        gateway_factory: SpotifyGatewayFactory,
        client_id: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        default_access_token: Optional[str] = None,
    ) -> None:
        super().__init__(slug_mapping_service)
        self._credentials = credentials_store
        self._gateway_factory = gateway_factory
        self._client_id = client_id
        self._redirect_uri = redirect_uri
        self._default_access_token = default_access_token
        self._client: Optional[ISpotifyGateway] = None

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
            if not self._client_id:
                return ConnectResult(success=False, error="access_token is required")
            return ConnectResult(success=False, auth_url=self.authorization_url())

        self._credentials.set(self.service_id, {"access_token": access_token})
        self._client = self._gateway_factory(access_token=access_token)
        logger.info("spotify.connected")
        return ConnectResult(success=True)

    def authorization_url(self) -> str:
        query = {
            "client_id": self._client_id,
            "response_type": "code",
            "scope": OAUTH_SCOPES,
        }
        if self._redirect_uri:
            query["redirect_uri"] = self._redirect_uri
        return f"{AUTHORIZE_URL}?{urlencode(query)}"

    async def disconnect(self) -> None:
        self._client = None
        logger.info("spotify.disconnected")

    def is_connected(self, demo_mode: bool = False) -> bool:
        return self.has_credentials()

    async def get_connection_status(self, demo_mode: bool = False) -> ConnectionStatus:
        return ConnectionStatus(connected=self.has_credentials())

    def has_credentials(self) -> bool:
        return self._credentials.has(self.service_id)

    async def clear_credentials(self) -> None:
        self._credentials.clear(self.service_id)
        self._client = None

    def _gateway(self) -> ISpotifyGateway:
        if self._client is None:
            credentials = self._credentials.get(self.service_id)
            if not credentials:
                raise GatewayError(self.service_id, "Not authorized")
            self._client = self._gateway_factory(
                access_token=credentials["access_token"]
            )
        return self._client


class SpotifyDemoPlugin(SpotifyPluginBase):
    def __init__(
        self,
        slug_mapping_service: SlugMappingService,
        gateway: Optional[DemoSpotifyGateway] = None,
    ) -> None:
        super().__init__(slug_mapping_service)
        self._demo_gateway = gateway or DemoSpotifyGateway()
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
        logger.info("spotify.demo_reset")

    def _gateway(self) -> ISpotifyGateway:
        return self._demo_gateway
