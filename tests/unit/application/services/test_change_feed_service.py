from __future__ import annotations

import pytest

from homehub.application.services.change_feed_service import ChangeFeedService, to_payload
from homehub.domain.entities.dashboard import DashboardSummary
from homehub.domain.entities.errors import UnknownServiceError
from tests.conftest import FakePlugin


@pytest.mark.asyncio
async def test_first_poll_has_no_changes(registry) -> None:
    registry.register(FakePlugin("hive"))
    feed = ChangeFeedService(registry)

    snapshot, changes = await feed.poll("hive", False)

    assert snapshot == {"value": 1}
    assert changes is None


@pytest.mark.asyncio
async def test_subsequent_polls_report_deltas(registry) -> None:
    plugin = FakePlugin("hive")
    registry.register(plugin)
    feed = ChangeFeedService(registry)

    await feed.poll("hive", False)
    assert (await feed.poll("hive", False))[1] is None

    plugin.status = {"value": 2}
    assert (await feed.poll("hive", False))[1] == {"value": 2}


@pytest.mark.asyncio
async def test_snapshots_are_kept_per_mode_and_forgotten(registry) -> None:
    real, demo = FakePlugin("hive"), FakePlugin("hive")
    registry.register(real)
    registry.register_demo(demo)
    feed = ChangeFeedService(registry)

    await feed.poll("hive", False)
    demo.status = {"value": 5}
    assert (await feed.poll("hive", True))[1] is None

    feed.forget("hive")
    real.status = {"value": 3}
    assert (await feed.poll("hive", False))[1] is None


@pytest.mark.asyncio
async def test_unknown_service(registry) -> None:
    with pytest.raises(UnknownServiceError):
        await ChangeFeedService(registry).poll("nest", False)


def test_to_payload() -> None:
    assert to_payload(DashboardSummary(total_lights=2))["total_lights"] == 2
    assert to_payload({"a": 1}) == {"a": 1}
