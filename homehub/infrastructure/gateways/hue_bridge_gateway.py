"""Lighting bridge gateway implementation (CLIP v2) - Infrastructure layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from homehub.domain.entities.errors import GatewayError
from homehub.domain.gateways.hue_bridge_gateway import BridgeRecord, IHueBridgeGateway
from homehub.shared import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "hue"


def to_bridge_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate a simple state into the bridge format.

    ``{"on": true, "brightness": 50}`` becomes
    ``{"on": {"on": true}, "dimming": {"brightness": 50}}``. Unknown keys are
    dropped.
    """
    bridge_state: Dict[str, Any] = {}
    if "on" in state:
        bridge_state["on"] = {"on": bool(state["on"])}
    if state.get("brightness") is not None:
        bridge_state["dimming"] = {"brightness": state["brightness"]}
    if state.get("xy"):
        bridge_state["color"] = {"xy": state["xy"]}
    if state.get("colorTemperature"):
        bridge_state["color_temperature"] = {"mirek": state["colorTemperature"]}
    return bridge_state


class HueBridgeGateway(IHueBridgeGateway):
    """HTTP client for one lighting bridge."""

    def __init__(
        self,
        bridge_ip: str,
        app_key: str,
        verify_ssl: bool = False,
        timeout: float = 10.0,
    ):
        """
        Initialize the bridge gateway.

        Args:
            bridge_ip: Address of the bridge on the local network
            app_key: Application key obtained by pairing
            verify_ssl: Whether to verify the bridge certificate (bridges
                ship a self-signed one)
            timeout: Request timeout in seconds
        """
        self.base_url = f"https://{bridge_ip}/clip/v2/resource"
        self.bridge_ip = bridge_ip
        self.app_key = app_key
        self.verify_ssl = verify_ssl
        self.timeout = timeout

    async def get_lights(self) -> List[BridgeRecord]:
        return await self.get_resource("light")

    async def get_rooms(self) -> List[BridgeRecord]:
        return await self.get_resource("room")

    async def get_devices(self) -> List[BridgeRecord]:
        return await self.get_resource("device")

    async def get_scenes(self) -> List[BridgeRecord]:
        return await self.get_resource("scene")

    async def get_zones(self) -> List[BridgeRecord]:
        return await self.get_resource("zone")

    async def get_resource(self, resource_type: str) -> List[BridgeRecord]:
        payload = await self._request("GET", resource_type)
        errors = payload.get("errors") or []
        if errors:
            logger.warning(
                "hue.resource.errors", resource_type=resource_type, errors=errors
            )
        return payload.get("data") or []

    async def update_light(self, light_id: str, state: Dict[str, Any]) -> None:
        await self._request("PUT", f"light/{light_id}", to_bridge_state(state))

    async def update_lights(
        self, updates: Sequence[Tuple[str, Dict[str, Any]]]
    ) -> None:
        for light_id, state in updates:
            await self.update_light(light_id, state)

    async def activate_scene(self, scene_id: str) -> None:
        await self._request("PUT", f"scene/{scene_id}", {"recall": {"action": "active"}})

    async def _request(
        self, method: str, path: str, body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        url = f"{self.base_url}/{path}"
        headers = {"hue-application-key": self.app_key}

        logger.debug("hue.request", method=method, url=url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, verify=self.verify_ssl
            ) as client:
                response = await client.request(method, url, headers=headers, json=body)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "hue.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise GatewayError(
                SERVICE_NAME,
                f"Bridge returned HTTP {e.response.status_code}: {e.response.text}",
                e.response.status_code,
            ) from e

        except httpx.RequestError as e:
            logger.error("hue.request_error", error=str(e), url=url)
            raise GatewayError(
                SERVICE_NAME, f"Failed to communicate with bridge: {str(e)}"
            ) from e
