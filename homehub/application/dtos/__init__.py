"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .home_dto import (
    DeviceDTO,
    HomeDTO,
    HomeSummaryDTO,
    RoomDTO,
    RoomStatsDTO,
    SceneDTO,
    StateUpdateDTO,
    UpdateResultDTO,
)
from .service_dto import (
    ConnectRequestDTO,
    ConnectResultDTO,
    ServiceDTO,
    ServiceSnapshotDTO,
    ServicesResponseDTO,
)

__all__ = [
    "ConnectRequestDTO",
    "ConnectResultDTO",
    "DeviceDTO",
    "HomeDTO",
    "HomeSummaryDTO",
    "RoomDTO",
    "RoomStatsDTO",
    "SceneDTO",
    "ServiceDTO",
    "ServiceSnapshotDTO",
    "ServicesResponseDTO",
    "StateUpdateDTO",
    "UpdateResultDTO",
]
