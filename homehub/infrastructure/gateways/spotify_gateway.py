"""Media playback gateway implementation - Infrastructure layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from homehub.domain.entities.errors import GatewayError
from homehub.domain.gateways.spotify_gateway import ISpotifyGateway
from homehub.shared import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "spotify"


def parse_device(device: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": device.get("id"),
        "name": device.get("name"),
        "type": device.get("type"),
        "isActive": bool(device.get("is_active", False)),
        "volumePercent": device.get("volume_percent"),
    }


def parse_playback(playback: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not playback:
        return None
    item = playback.get("item") or {}
    artists = item.get("artists") or []
    device = playback.get("device")
    return {
        "isPlaying": bool(playback.get("is_playing", False)),
        "track": {
            "id": item.get("id"),
            "name": item.get("name"),
            "artist": ", ".join(artist.get("name", "") for artist in artists),
        }
        if item
        else None,
        "device": parse_device(device) if device else None,
    }


class SpotifyGateway(ISpotifyGateway):
    """HTTP client for the media playback Web API."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.spotify.com/v1",
        timeout: float = 10.0,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_devices(self) -> List[Dict[str, Any]]:
        payload = await self._request("GET", "me/player/devices")
        return [parse_device(device) for device in (payload or {}).get("devices", [])]

    async def get_playback(self) -> Optional[Dict[str, Any]]:
        return parse_playback(await self._request("GET", "me/player"))

    async def play(self, device_id: Optional[str] = None) -> None:
        await self._request("PUT", "me/player/play", params=self._device(device_id))

    async def pause(self, device_id: Optional[str] = None) -> None:
        await self._request("PUT", "me/player/pause", params=self._device(device_id))

    async def set_volume(
        self, volume_percent: int, device_id: Optional[str] = None
    ) -> None:
        params = {"volume_percent": max(0, min(100, int(volume_percent)))}
        params.update(self._device(device_id))
        await self._request("PUT", "me/player/volume", params=params)

    async def transfer_playback(self, device_id: str, play: bool = False) -> None:
        await self._request(
            "PUT", "me/player", body={"device_ids": [device_id], "play": play}
        )

    @staticmethod
    def _device(device_id: Optional[str]) -> Dict[str, str]:
        return {"device_id": device_id} if device_id else {}

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/{path}"
        headers = {"Authorization": f"Bearer {self.access_token}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, url, headers=headers, json=body, params=params
                )
                response.raise_for_status()
                # 204 No Content: nothing playing or command accepted
                if response.status_code == 204 or not response.content:
                    return None
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "spotify.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise GatewayError(
                SERVICE_NAME,
                f"Playback API returned HTTP {e.response.status_code}",
                e.response.status_code,
            ) from e

        except httpx.RequestError as e:
            logger.error("spotify.request_error", error=str(e), url=url)
            raise GatewayError(
                SERVICE_NAME, f"Failed to communicate with playback API: {str(e)}"
            ) from e
