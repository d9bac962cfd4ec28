"""DTOs for the service (plugin) endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from homehub.domain.entities.service import ConnectResult, ServiceOverview


class ServiceDTO(BaseModel):
    """A registered service with its live connection state."""

    id: str = Field(description="Service id")
    display_name: str = Field(description="Human readable name")
    description: str = Field(description="What the service controls")
    auth_type: str = Field(description="Authentication flow of the service")
    capabilities: List[str] = Field(default_factory=list)
    connected: bool = Field(description="Whether the service can be queried")
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, overview: ServiceOverview) -> "ServiceDTO":
        return cls(**overview.to_dict())

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "hue",
                "display_name": "Philips Hue",
                "description": "Control Philips Hue lights",
                "auth_type": "pairing",
                "capabilities": ["rooms", "scenes"],
                "connected": True,
                "details": {"bridge_ip": "192.168.1.10"},
            }
        }
    }


class ServicesResponseDTO(BaseModel):
    services: List[ServiceDTO] = Field(default_factory=list)


class ConnectRequestDTO(BaseModel):
    credentials: Dict[str, Any] = Field(
        default_factory=dict, description="Service specific credential fields"
    )


class ConnectResultDTO(BaseModel):
    success: bool
    error: Optional[str] = None
    requires_pairing: bool = False
    requires_2fa: bool = False
    session: Optional[str] = None
    auth_url: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, result: ConnectResult) -> "ConnectResultDTO":
        return cls(
            success=result.success,
            error=result.error,
            requires_pairing=result.requires_pairing,
            requires_2fa=result.requires_2fa,
            session=result.session,
            auth_url=result.auth_url,
            details=result.details,
        )


class ServiceSnapshotDTO(BaseModel):
    """Raw backend snapshot plus the delta to a previous snapshot."""

    service_id: str
    snapshot: Any = None
    changes: Optional[Any] = Field(
        default=None, description="Delta to the previous snapshot, null if none"
    )
