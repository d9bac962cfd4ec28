"""
Home Router - Presentation Layer

This module defines the FastAPI router for the merged home: reading rooms,
zones and devices of every connected service, and sending commands to them
through flat ids.
"""

from typing import Any, Dict

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from homehub.application.dtos.home_dto import (
    HomeDTO,
    RoomDTO,
    StateUpdateDTO,
    UpdateResultDTO,
)
from homehub.application.use_cases.home_use_cases import (
    ActivateSceneUseCase,
    GetDashboardOverviewUseCase,
    GetHomeUseCase,
    GetRoomUseCase,
    UpdateDeviceUseCase,
    UpdateRoomDevicesUseCase,
    UpdateZoneDevicesUseCase,
)
from homehub.presentation.controllers.errors import to_http_exception
from homehub.presentation.dependencies import get_demo_mode
from homehub.shared import get_logger, request_context

logger = get_logger(__name__)

router = APIRouter(prefix="/home", tags=["Home"])


@router.get("", response_model=HomeDTO)
@inject
async def get_home(
    demo_mode: bool = Depends(get_demo_mode),
    get_home_use_case: GetHomeUseCase = Depends(Provide["get_home_use_case"]),
) -> HomeDTO:
    """
    Get the merged home of every connected service.

    Services that fail to answer are left out of the response instead of
    failing the request.
    """
    try:
        with request_context(demo_mode):
            home = await get_home_use_case.execute(demo_mode)
        logger.info(
            "home.retrieved", rooms=len(home.rooms), devices=len(home.devices)
        )
        return home
    except Exception as e:
        raise to_http_exception("home.retrieval_failed", e)


@router.get("/dashboard", response_model=Dict[str, Any])
@inject
async def get_dashboard(
    demo_mode: bool = Depends(get_demo_mode),
    get_dashboard_overview_use_case: GetDashboardOverviewUseCase = Depends(
        Provide["get_dashboard_overview_use_case"]
    ),
) -> Dict[str, Any]:
    """Lighting dashboard together with the status of every service."""
    try:
        with request_context(demo_mode):
            return await get_dashboard_overview_use_case.execute(demo_mode)
    except Exception as e:
        raise to_http_exception("home.dashboard_failed", e)


@router.get("/rooms/{room_id}", response_model=RoomDTO)
@inject
async def get_room(
    room_id: str,
    demo_mode: bool = Depends(get_demo_mode),
    get_room_use_case: GetRoomUseCase = Depends(Provide["get_room_use_case"]),
) -> RoomDTO:
    """Get a room by flat id (``hue:living-room``) or home room id."""
    try:
        with request_context(demo_mode):
            return await get_room_use_case.execute(room_id, demo_mode)
    except Exception as e:
        raise to_http_exception("home.room_retrieval_failed", e, room_id=room_id)


@router.put("/devices/{device_id}", response_model=UpdateResultDTO)
@inject
async def update_device(
    device_id: str,
    update: StateUpdateDTO,
    demo_mode: bool = Depends(get_demo_mode),
    update_device_use_case: UpdateDeviceUseCase = Depends(
        Provide["update_device_use_case"]
    ),
) -> UpdateResultDTO:
    """
    Change the state of one device.

    Args:
        device_id: Flat device id, e.g. ``hive:heating``
        update: State fields to apply
    """
    logger.info("home.device_update_requested", device_id=device_id)
    try:
        with request_context(demo_mode):
            return await update_device_use_case.execute(
                device_id, update.state, demo_mode
            )
    except Exception as e:
        raise to_http_exception("home.device_update_failed", e, device_id=device_id)


@router.post("/scenes/{scene_id}/activate", response_model=UpdateResultDTO)
@inject
async def activate_scene(
    scene_id: str,
    demo_mode: bool = Depends(get_demo_mode),
    activate_scene_use_case: ActivateSceneUseCase = Depends(
        Provide["activate_scene_use_case"]
    ),
) -> UpdateResultDTO:
    try:
        with request_context(demo_mode):
            return await activate_scene_use_case.execute(scene_id, demo_mode)
    except Exception as e:
        raise to_http_exception("home.scene_activation_failed", e, scene_id=scene_id)


@router.put("/rooms/{room_id}/devices", response_model=UpdateResultDTO)
@inject
async def update_room_devices(
    room_id: str,
    update: StateUpdateDTO,
    demo_mode: bool = Depends(get_demo_mode),
    update_room_devices_use_case: UpdateRoomDevicesUseCase = Depends(
        Provide["update_room_devices_use_case"]
    ),
) -> UpdateResultDTO:
    """
    Apply one state to every device of a room.

    A home room id fans out to every service room grouped under it.
    """
    try:
        with request_context(demo_mode):
            return await update_room_devices_use_case.execute(
                room_id, update.state, demo_mode
            )
    except Exception as e:
        raise to_http_exception("home.room_update_failed", e, room_id=room_id)


@router.put("/zones/{zone_id}/devices", response_model=UpdateResultDTO)
@inject
async def update_zone_devices(
    zone_id: str,
    update: StateUpdateDTO,
    demo_mode: bool = Depends(get_demo_mode),
    update_zone_devices_use_case: UpdateZoneDevicesUseCase = Depends(
        Provide["update_zone_devices_use_case"]
    ),
) -> UpdateResultDTO:
    try:
        with request_context(demo_mode):
            return await update_zone_devices_use_case.execute(
                zone_id, update.state, demo_mode
            )
    except Exception as e:
        raise to_http_exception("home.zone_update_failed", e, zone_id=zone_id)
