"""
Services Router - Presentation Layer

This module defines the FastAPI router for service plugin endpoints:
listing, connecting, disconnecting and polling backends.
"""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from homehub.application.dtos.service_dto import (
    ConnectRequestDTO,
    ConnectResultDTO,
    ServiceSnapshotDTO,
    ServicesResponseDTO,
)
from homehub.application.use_cases.service_use_cases import (
    ConnectServiceUseCase,
    DisconnectServiceUseCase,
    GetServiceStatusUseCase,
    ListServicesUseCase,
    ResetDemoUseCase,
)
from homehub.presentation.controllers.errors import to_http_exception
from homehub.presentation.dependencies import get_demo_mode
from homehub.shared import get_logger, request_context

logger = get_logger(__name__)

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=ServicesResponseDTO)
@inject
async def list_services(
    demo_mode: bool = Depends(get_demo_mode),
    list_services_use_case: ListServicesUseCase = Depends(
        Provide["list_services_use_case"]
    ),
) -> ServicesResponseDTO:
    """List every registered service with its connection state."""
    try:
        with request_context(demo_mode):
            return await list_services_use_case.execute(demo_mode)
    except Exception as e:
        raise to_http_exception("services.list_failed", e)


@router.get("/{service_id}/status", response_model=ServiceSnapshotDTO)
@inject
async def get_service_status(
    service_id: str,
    demo_mode: bool = Depends(get_demo_mode),
    get_service_status_use_case: GetServiceStatusUseCase = Depends(
        Provide["get_service_status_use_case"]
    ),
) -> ServiceSnapshotDTO:
    """
    Current snapshot of a service.

    ``changes`` holds what differs from the snapshot returned by the
    previous call, or null when nothing changed.
    """
    try:
        with request_context(demo_mode):
            return await get_service_status_use_case.execute(service_id, demo_mode)
    except Exception as e:
        raise to_http_exception("services.status_failed", e, service_id=service_id)


@router.post("/{service_id}/connect", response_model=ConnectResultDTO)
@inject
async def connect_service(
    service_id: str,
    request: ConnectRequestDTO,
    demo_mode: bool = Depends(get_demo_mode),
    connect_service_use_case: ConnectServiceUseCase = Depends(
        Provide["connect_service_use_case"]
    ),
) -> ConnectResultDTO:
    """
    Connect a service with the given credentials.

    A result that is not successful may ask for a follow-up step
    (``requires_pairing``, ``requires_2fa`` or an ``auth_url``).
    """
    try:
        with request_context(demo_mode):
            return await connect_service_use_case.execute(
                service_id, request.credentials, demo_mode
            )
    except Exception as e:
        raise to_http_exception("services.connect_failed", e, service_id=service_id)


@router.post("/{service_id}/disconnect", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def disconnect_service(
    service_id: str,
    demo_mode: bool = Depends(get_demo_mode),
    disconnect_service_use_case: DisconnectServiceUseCase = Depends(
        Provide["disconnect_service_use_case"]
    ),
) -> None:
    try:
        with request_context(demo_mode):
            await disconnect_service_use_case.execute(service_id, demo_mode)
    except Exception as e:
        raise to_http_exception("services.disconnect_failed", e, service_id=service_id)


@router.post("/{service_id}/reset-demo", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def reset_demo(
    service_id: str,
    reset_demo_use_case: ResetDemoUseCase = Depends(Provide["reset_demo_use_case"]),
) -> None:
    """Restore the demo data of a service to its initial state."""
    try:
        reset_demo_use_case.execute(service_id)
    except Exception as e:
        raise to_http_exception("services.demo_reset_failed", e, service_id=service_id)
