from __future__ import annotations

import pytest

from homehub.domain.entities.errors import (
    GatewayError,
    ResourceNotFoundError,
    UnsupportedOperationError,
)
from homehub.infrastructure.gateways.demo_gateways import DemoHiveGateway
from homehub.infrastructure.plugins.hive_plugin import HiveDemoPlugin, HivePlugin
from homehub.infrastructure.repositories.credentials_store import CredentialsStore
from tests.conftest import RecordingDocumentRepository


class _RejectingGateway(DemoHiveGateway):
    async def get_status(self):
        raise GatewayError("hive", "Heating API returned HTTP 401", 401)


@pytest.mark.asyncio
async def test_demo_devices() -> None:
    devices = await HiveDemoPlugin().get_devices()

    assert [device.id for device in devices] == ["hive:heating", "hive:hotwater"]
    thermostat, hot_water = devices
    assert thermostat.state == {
        "currentTemperature": 19.5,
        "targetTemperature": 21.0,
        "isHeating": True,
        "mode": "schedule",
    }
    assert hot_water.state == {"isOn": False, "mode": "schedule"}


@pytest.mark.asyncio
async def test_update_heating_and_hot_water() -> None:
    plugin = HiveDemoPlugin()

    heating = await plugin.update_device("heating", {"targetTemperature": "22.5"})
    water = await plugin.update_device("hotwater", {"isOn": 1})

    assert heating.applied_state == {"targetTemperature": 22.5}
    assert water.applied_state == {"isOn": True}
    status = await plugin.get_status()
    assert status["heating"]["mode"] == "manual"
    assert status["hotWater"]["isOn"] is True


@pytest.mark.asyncio
async def test_invalid_updates() -> None:
    plugin = HiveDemoPlugin()

    with pytest.raises(UnsupportedOperationError):
        await plugin.update_device("heating", {"on": True})
    with pytest.raises(UnsupportedOperationError):
        await plugin.update_device("hotwater", {"targetTemperature": 20})
    with pytest.raises(ResourceNotFoundError):
        await plugin.update_device("boiler", {"isOn": True})


@pytest.mark.asyncio
async def test_demo_disconnect_and_reset() -> None:
    plugin = HiveDemoPlugin()
    await plugin.update_device("heating", {"targetTemperature": 25})

    await plugin.disconnect()
    assert plugin.is_connected() is False

    plugin.reset_demo()
    assert plugin.is_connected() is True
    assert (await plugin.get_status())["heating"]["targetTemperature"] == 21.0


def test_detect_changes() -> None:
    plugin = HiveDemoPlugin()
    previous = {"heating": {"targetTemperature": 20}, "hotWater": {"isOn": False}}
    current = {"heating": {"targetTemperature": 21}, "hotWater": {"isOn": False}}

    assert plugin.detect_changes(previous, current) == {
        "heating": {"targetTemperature": 21}
    }
    assert plugin.detect_changes(current, current) is None


@pytest.mark.asyncio
async def test_connect_without_token() -> None:
    plugin = HivePlugin(CredentialsStore(RecordingDocumentRepository()), DemoHiveGateway)

    result = await plugin.connect({"username": "me@example.com", "password": "pw"})

    assert result.success is False
    assert result.requires_2fa is True
    assert result.error == "access_token is required"


@pytest.mark.asyncio
async def test_connect_with_token_stores_it() -> None:
    calls = []

    def factory(**kwargs):
        calls.append(kwargs)
        return DemoHiveGateway()

    store = CredentialsStore(RecordingDocumentRepository())
    plugin = HivePlugin(store, factory)

    result = await plugin.connect({"accessToken": "tok"})

    assert result.success is True
    assert calls == [{"access_token": "tok"}]
    assert store.get("hive") == {"access_token": "tok"}
    assert (await plugin.get_connection_status()).connected is True
    assert len(await plugin.get_devices()) == 2


@pytest.mark.asyncio
async def test_rejected_token_is_not_stored() -> None:
    store = CredentialsStore(RecordingDocumentRepository())
    plugin = HivePlugin(store, lambda **kwargs: _RejectingGateway())

    result = await plugin.connect({"access_token": "expired"})

    assert result.success is False
    assert "HTTP 401" in result.error
    assert store.has("hive") is False


@pytest.mark.asyncio
async def test_not_signed_in() -> None:
    plugin = HivePlugin(
        CredentialsStore(RecordingDocumentRepository()), lambda **kwargs: DemoHiveGateway()
    )

    with pytest.raises(GatewayError, match="Not signed in"):
        await plugin.get_status()


@pytest.mark.asyncio
async def test_initialize_seeds_token() -> None:
    store = CredentialsStore(RecordingDocumentRepository())
    plugin = HivePlugin(
        store, lambda **kwargs: DemoHiveGateway(), default_access_token="env-token"
    )

    await plugin.initialize()

    assert plugin.has_credentials() is True
    await plugin.clear_credentials()
    assert store.get("hive") is None
