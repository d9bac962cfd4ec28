"""
Domain Entities Package

This package contains the core domain entities of the home model.
"""

from .dashboard import (
    Dashboard,
    DashboardGroup,
    DashboardLight,
    DashboardSummary,
    GroupStats,
    MotionZone,
)
from .device import (
    Device,
    DeviceType,
    Home,
    HomeSummary,
    Room,
    RoomStats,
    Scene,
    Zone,
    create_device,
    create_room,
    make_flat_id,
    split_flat_id,
)
from .errors import (
    ConfigurationError,
    DomainError,
    EntityValidationError,
    GatewayError,
    InvalidIdentifierError,
    PluginRegistrationError,
    ResourceNotFoundError,
    RoutingError,
    UnknownServiceError,
    UnsupportedOperationError,
)
from .service import (
    AuthType,
    Capability,
    ConnectionStatus,
    ConnectResult,
    ServiceMetadata,
    ServiceOverview,
    UpdateResult,
)

__all__ = [
    "AuthType",
    "Capability",
    "ConfigurationError",
    "ConnectResult",
    "ConnectionStatus",
    "Dashboard",
    "DashboardGroup",
    "DashboardLight",
    "DashboardSummary",
    "Device",
    "DeviceType",
    "DomainError",
    "EntityValidationError",
    "GatewayError",
    "GroupStats",
    "Home",
    "HomeSummary",
    "InvalidIdentifierError",
    "MotionZone",
    "PluginRegistrationError",
    "ResourceNotFoundError",
    "Room",
    "RoomStats",
    "RoutingError",
    "Scene",
    "ServiceMetadata",
    "ServiceOverview",
    "UnknownServiceError",
    "UnsupportedOperationError",
    "UpdateResult",
    "Zone",
    "create_device",
    "create_room",
    "make_flat_id",
    "split_flat_id",
]
