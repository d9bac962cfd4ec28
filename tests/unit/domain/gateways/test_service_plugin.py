from __future__ import annotations

import pytest

from homehub.domain.entities.service import AuthType, Capability
from homehub.domain.gateways.service_plugin import IServicePlugin, validate_plugin


class _MinimalPlugin(IServicePlugin):
    service_id = "minimal"
    display_name = "Minimal"
    auth_type = AuthType.NONE
    capabilities = frozenset({Capability.DEVICES})

    async def connect(self, credentials, demo_mode=False):
        return None

    async def disconnect(self):
        return None

    def is_connected(self, demo_mode=False):
        return True

    async def get_connection_status(self, demo_mode=False):
        return None

    async def get_status(self, demo_mode=False):
        return {}

    def has_credentials(self):
        return True

    async def clear_credentials(self):
        return None


@pytest.mark.asyncio
async def test_optional_methods_default_to_empty_answers() -> None:
    plugin = _MinimalPlugin()

    assert await plugin.get_rooms() == []
    assert await plugin.get_devices() == []
    assert await plugin.update_device("x", {"on": True}) is None
    assert await plugin.update_room_devices("x", {}) is None
    assert await plugin.update_zone_devices("x", {}) is None
    assert await plugin.activate_scene("x") is None
    assert plugin.detect_changes({}, {"a": 1}) is None
    assert plugin.get_demo_credentials() is None


def test_supports_and_metadata() -> None:
    plugin = _MinimalPlugin()

    assert plugin.supports(Capability.DEVICES)
    assert not plugin.supports(Capability.SCENES)
    assert plugin.get_metadata().to_dict() == {
        "id": "minimal",
        "display_name": "Minimal",
        "description": "Base service plugin",
        "auth_type": "none",
        "capabilities": ["devices"],
    }


def test_validate_plugin_lists_missing_methods() -> None:
    class _Partial:
        service_id = "partial"

        async def connect(self, credentials, demo_mode=False):
            return None

        def is_connected(self, demo_mode=False):
            return False

    assert validate_plugin(_MinimalPlugin()) == []
    assert validate_plugin(_Partial()) == [
        "disconnect",
        "get_connection_status",
        "get_status",
        "has_credentials",
        "clear_credentials",
    ]
