"""
Service Plugin Contract - Domain Layer

Every backend (lighting bridge, heating cloud, media cloud) is adapted to
this contract. A plugin states which optional parts it offers through its
``capabilities`` set; the optional methods default to empty answers so a
plugin never raises merely because it lacks a feature.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from homehub.domain.entities.device import Device, Room
from homehub.domain.entities.service import (
    AuthType,
    Capability,
    ConnectionStatus,
    ConnectResult,
    ServiceMetadata,
    UpdateResult,
)

MANDATORY_METHODS = (
    "connect",
    "disconnect",
    "is_connected",
    "get_connection_status",
    "get_status",
    "has_credentials",
    "clear_credentials",
)


class IServicePlugin(ABC):
    """Interface for a backend adapter."""

    service_id: ClassVar[str] = "base"
    display_name: ClassVar[str] = "Base Plugin"
    description: ClassVar[str] = "Base service plugin"
    auth_type: ClassVar[AuthType] = AuthType.NONE
    capabilities: ClassVar[FrozenSet[Capability]] = frozenset()

    async def initialize(self) -> None:
        """Called once when the application starts."""

    async def shutdown(self) -> None:
        """Called once when the application stops."""

    @abstractmethod
    async def connect(
        self, credentials: Dict[str, Any], demo_mode: bool = False
    ) -> ConnectResult:
        """
        Connect to the backend.

        Args:
            credentials: Backend specific credential fields
            demo_mode: Whether the demo universe is being addressed

        Returns:
            ConnectResult: Success, an error, or the next auth step
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Drop the session with the backend."""

    @abstractmethod
    def is_connected(self, demo_mode: bool = False) -> bool:
        """Whether the backend can currently be queried."""

    @abstractmethod
    async def get_connection_status(self, demo_mode: bool = False) -> ConnectionStatus:
        """Connection state plus backend specific details."""

    @abstractmethod
    async def get_status(self, demo_mode: bool = False) -> Any:
        """Snapshot of the backend, the input of ``detect_changes``."""

    @abstractmethod
    def has_credentials(self) -> bool:
        """Whether credentials are stored for this backend."""

    @abstractmethod
    async def clear_credentials(self) -> None:
        """Forget stored credentials."""

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    async def get_rooms(self, demo_mode: bool = False) -> List[Room]:
        return []

    async def get_devices(self, demo_mode: bool = False) -> List[Device]:
        return []

    async def update_device(
        self, device_id: str, state: Dict[str, Any]
    ) -> Optional[UpdateResult]:
        return None

    async def update_room_devices(
        self, room_id: str, state: Dict[str, Any]
    ) -> Optional[UpdateResult]:
        return None

    async def update_zone_devices(
        self, zone_id: str, state: Dict[str, Any]
    ) -> Optional[UpdateResult]:
        return None

    async def activate_scene(self, scene_id: str) -> Optional[UpdateResult]:
        return None

    def detect_changes(self, previous: Any, current: Any) -> Optional[Any]:
        """
        Minimal delta between two snapshots for incremental push.

        Returns ``None`` when either snapshot is missing or nothing changed.
        """
        return None

    def get_demo_credentials(self) -> Optional[Dict[str, Any]]:
        return None

    def reset_demo(self) -> None:
        """Restore demo data to its initial state."""

    def get_metadata(self) -> ServiceMetadata:
        return ServiceMetadata(
            id=self.service_id,
            display_name=self.display_name,
            description=self.description,
            auth_type=self.auth_type,
            capabilities=sorted(self.capabilities, key=lambda c: c.value),
        )


def validate_plugin(plugin: Any) -> List[str]:
    """
    Names of mandatory contract methods the candidate does not implement.

    Works for ``IServicePlugin`` subclasses and for duck-typed objects.
    """
    missing = []
    for name in MANDATORY_METHODS:
        method = getattr(plugin, name, None)
        if not callable(method) or getattr(method, "__isabstractmethod__", False):
            missing.append(name)
    return missing
