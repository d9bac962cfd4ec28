"""Value objects describing service plugins and their answers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Capability(str, Enum):
    """Optional parts of the plugin contract a backend may offer."""

    ROOMS = "rooms"
    DEVICES = "devices"
    DEVICE_UPDATES = "device_updates"
    ROOM_UPDATES = "room_updates"
    ZONE_UPDATES = "zone_updates"
    SCENES = "scenes"
    CHANGE_DETECTION = "change_detection"


class AuthType(str, Enum):
    NONE = "none"
    PAIRING = "pairing"
    TWO_FACTOR = "2fa"
    OAUTH = "oauth"


@dataclass(slots=True)
class ServiceMetadata:
    id: str
    display_name: str
    description: str
    auth_type: AuthType
    capabilities: List[Capability] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "description": self.description,
            "auth_type": self.auth_type.value,
            "capabilities": [capability.value for capability in self.capabilities],
        }


@dataclass(slots=True)
class ConnectResult:
    """Outcome of ``connect``; at most one of the follow-up flags is set."""

    success: bool = False
    error: Optional[str] = None
    requires_pairing: bool = False
    requires_2fa: bool = False
    session: Optional[str] = None
    auth_url: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ConnectionStatus:
    connected: bool
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class UpdateResult:
    success: bool
    target_id: Optional[str] = None
    applied_state: Dict[str, Any] = field(default_factory=dict)
    updated_lights: List[Dict[str, Any]] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "target_id": self.target_id,
            "applied_state": dict(self.applied_state),
            "updated_lights": list(self.updated_lights),
            "details": dict(self.details),
        }


@dataclass(slots=True)
class ServiceOverview:
    """Metadata plus live connection state of one service."""

    metadata: ServiceMetadata
    connected: bool
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.metadata.to_dict(),
            "connected": self.connected,
            "details": dict(self.details),
        }
