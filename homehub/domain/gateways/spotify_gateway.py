"""
Spotify Gateway Interface - Domain Layer

Status shape::

    {
        "devices": [{"id", "name", "type", "isActive", "volumePercent"}],
        "playback": {"isPlaying", "track": {"id", "name", "artist"},
                     "device": {...}} | None,
    }
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class ISpotifyGateway(ABC):
    """Interface for the media playback cloud."""

    @abstractmethod
    async def get_devices(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def get_playback(self) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def play(self, device_id: Optional[str] = None) -> None:
        pass

    @abstractmethod
    async def pause(self, device_id: Optional[str] = None) -> None:
        pass

    @abstractmethod
    async def set_volume(
        self, volume_percent: int, device_id: Optional[str] = None
    ) -> None:
        pass

    @abstractmethod
    async def transfer_playback(self, device_id: str, play: bool = False) -> None:
        pass
