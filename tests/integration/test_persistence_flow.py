from __future__ import annotations

import pytest

from homehub.application.services.dashboard_service import DashboardService
from homehub.application.services.home_service import HomeService
from homehub.application.services.room_mapping_service import RoomMappingService
from homehub.application.services.service_registry import ServiceRegistry
from homehub.application.services.slug_mapping_service import SlugMappingService
from homehub.infrastructure.plugins.hue_plugin import HueDemoPlugin
from homehub.infrastructure.repositories.json_document_repository import (
    JsonDocumentRepository,
)


def _home_service(tmp_path):
    slugs = SlugMappingService(JsonDocumentRepository(tmp_path / "slugs.json"))
    rooms = RoomMappingService(JsonDocumentRepository(tmp_path / "rooms.json"))
    rooms.initialize()
    registry = ServiceRegistry()
    registry.register(HueDemoPlugin(DashboardService(slugs), slugs))
    return HomeService(registry, rooms), slugs, rooms


@pytest.mark.asyncio
async def test_identifiers_survive_restart(tmp_path):
    service, slugs, _ = _home_service(tmp_path)
    first = await service.get_home(False)

    restarted, restarted_slugs, _ = _home_service(tmp_path)
    second = await restarted.get_home(False)

    assert [room.id for room in first.rooms] == [room.id for room in second.rooms]
    assert restarted_slugs.get_uuid("hue:scene", "relax-2") == "scene-7"
    assert slugs.get_uuid("hue", "floor-lamp") == "light-1"


@pytest.mark.asyncio
async def test_merged_home_rooms_survive_restart(tmp_path):
    service, _, rooms = _home_service(tmp_path)
    await service.get_home(False)
    rooms.merge_rooms(["hue:kitchen", "hue:living-room"], "home-downstairs")

    restarted, _, _ = _home_service(tmp_path)
    home = await restarted.get_home(False)

    merged = [room.id for room in home.rooms if room.home_room_id == "home-downstairs"]
    assert merged == ["hue:kitchen", "hue:living-room"]

    result = await restarted.update_room_devices("home-downstairs", {"on": False}, False)
    assert result.success is True
    assert [outcome["room_id"] for outcome in result.details["results"]] == [
        "kitchen",
        "living-room",
    ]
