from __future__ import annotations

import pytest
from fastapi import HTTPException

from homehub.application.dtos.service_dto import (
    ConnectRequestDTO,
    ConnectResultDTO,
    ServiceDTO,
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
from homehub.domain.entities.errors import GatewayError, UnknownServiceError
from homehub.presentation.controllers.services_controller import (
    connect_service,
    disconnect_service,
    get_service_status,
    list_services,
    reset_demo,
)


class _StubList(ListServicesUseCase):
    def __init__(self):
        pass

    async def execute(self, demo_mode=None) -> ServicesResponseDTO:
        return ServicesResponseDTO(
            services=[
                ServiceDTO(
                    id="hue",
                    display_name="Philips Hue",
                    description="Lights",
                    auth_type="pairing",
                    connected=bool(demo_mode),
                )
            ]
        )


class _StubConnect(ConnectServiceUseCase):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    async def execute(self, service_id, credentials, demo_mode=None):
        self.calls.append((service_id, credentials, demo_mode))
        if self.error:
            raise self.error
        return ConnectResultDTO(success=False, requires_pairing=True)


class _StubDisconnect(DisconnectServiceUseCase):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    async def execute(self, service_id, demo_mode=None) -> None:
        self.calls.append(service_id)
        if self.error:
            raise self.error


class _StubReset(ResetDemoUseCase):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    def execute(self, service_id) -> None:
        self.calls.append(service_id)
        if self.error:
            raise self.error


class _StubStatus(GetServiceStatusUseCase):
    def __init__(self, error: Exception | None = None):
        self.error = error

    async def execute(self, service_id, demo_mode=None) -> ServiceSnapshotDTO:
        if self.error:
            raise self.error
        return ServiceSnapshotDTO(
            service_id=service_id, snapshot={"heating": {}}, changes=None
        )


@pytest.mark.asyncio
async def test_list_services() -> None:
    response = await list_services(demo_mode=True, list_services_use_case=_StubList())
    assert response.services[0].connected is True


@pytest.mark.asyncio
async def test_connect_service_passes_credentials() -> None:
    use_case = _StubConnect()

    response = await connect_service(
        "hue",
        ConnectRequestDTO(credentials={"bridge_ip": "10.0.0.2"}),
        demo_mode=False,
        connect_service_use_case=use_case,
    )

    assert response.requires_pairing is True
    assert use_case.calls == [("hue", {"bridge_ip": "10.0.0.2"}, False)]


@pytest.mark.asyncio
async def test_connect_unknown_service_is_404() -> None:
    with pytest.raises(HTTPException) as exc:
        await connect_service(
            "nest",
            ConnectRequestDTO(),
            demo_mode=False,
            connect_service_use_case=_StubConnect(UnknownServiceError("nest")),
        )

    assert exc.value.status_code == 404
    assert exc.value.detail == "Unknown service: nest"


@pytest.mark.asyncio
async def test_disconnect_service() -> None:
    use_case = _StubDisconnect()

    assert (
        await disconnect_service(
            "spotify", demo_mode=False, disconnect_service_use_case=use_case
        )
        is None
    )
    assert use_case.calls == ["spotify"]


@pytest.mark.asyncio
async def test_reset_demo_errors() -> None:
    with pytest.raises(HTTPException) as exc:
        await reset_demo("nest", reset_demo_use_case=_StubReset(UnknownServiceError("nest")))
    assert exc.value.status_code == 404

    use_case = _StubReset()
    await reset_demo("hue", reset_demo_use_case=use_case)
    assert use_case.calls == ["hue"]


@pytest.mark.asyncio
async def test_service_status() -> None:
    response = await get_service_status(
        "hive", demo_mode=False, get_service_status_use_case=_StubStatus()
    )
    assert response.snapshot == {"heating": {}}
    assert response.changes is None


@pytest.mark.asyncio
async def test_service_status_backend_failure_is_502() -> None:
    with pytest.raises(HTTPException) as exc:
        await get_service_status(
            "hive",
            demo_mode=False,
            get_service_status_use_case=_StubStatus(GatewayError("hive", "Not signed in")),
        )
    assert exc.value.status_code == 502
