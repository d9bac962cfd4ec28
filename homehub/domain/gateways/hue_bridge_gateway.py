"""
Hue Bridge Gateway Interface - Domain Layer

Resource listings are returned unwrapped (the ``data`` array of the CLIP v2
API), one dictionary per vendor record.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence, Tuple

BridgeRecord = Dict[str, Any]


class IHueBridgeGateway(ABC):
    """Interface for a lighting bridge."""

    @abstractmethod
    async def get_lights(self) -> List[BridgeRecord]:
        pass

    @abstractmethod
    async def get_rooms(self) -> List[BridgeRecord]:
        pass

    @abstractmethod
    async def get_devices(self) -> List[BridgeRecord]:
        pass

    @abstractmethod
    async def get_scenes(self) -> List[BridgeRecord]:
        pass

    @abstractmethod
    async def get_zones(self) -> List[BridgeRecord]:
        pass

    @abstractmethod
    async def get_resource(self, resource_type: str) -> List[BridgeRecord]:
        """Any other CLIP v2 resource, e.g. ``behavior_instance``."""
        pass

    @abstractmethod
    async def update_light(self, light_id: str, state: Dict[str, Any]) -> None:
        """
        Apply a simple state (``on``, ``brightness``) to one light.

        Args:
            light_id: Bridge UUID of the light
            state: Simple state; translation to the bridge format is the
                gateway's concern
        """
        pass

    @abstractmethod
    async def update_lights(
        self, updates: Sequence[Tuple[str, Dict[str, Any]]]
    ) -> None:
        """Apply ``(light_id, state)`` pairs."""
        pass

    @abstractmethod
    async def activate_scene(self, scene_id: str) -> None:
        pass
