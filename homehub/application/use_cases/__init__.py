"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data between
the presentation layer and the application services.
"""

from .home_use_cases import (
    ActivateSceneUseCase,
    GetDashboardOverviewUseCase,
    GetHomeUseCase,
    GetRoomUseCase,
    UpdateDeviceUseCase,
    UpdateRoomDevicesUseCase,
    UpdateZoneDevicesUseCase,
)
from .service_use_cases import (
    ConnectServiceUseCase,
    DisconnectServiceUseCase,
    GetServiceStatusUseCase,
    ListServicesUseCase,
    ResetDemoUseCase,
)

__all__ = [
    "ActivateSceneUseCase",
    "ConnectServiceUseCase",
    "DisconnectServiceUseCase",
    "GetDashboardOverviewUseCase",
    "GetHomeUseCase",
    "GetRoomUseCase",
    "GetServiceStatusUseCase",
    "ListServicesUseCase",
    "ResetDemoUseCase",
    "UpdateDeviceUseCase",
    "UpdateRoomDevicesUseCase",
    "UpdateZoneDevicesUseCase",
]
