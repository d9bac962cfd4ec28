from __future__ import annotations

import asyncio

import pytest
import structlog

from homehub.shared.request_context import current_demo_mode, request_context


def test_default_is_real_mode() -> None:
    assert current_demo_mode() is False


def test_context_sets_and_restores_flag() -> None:
    with request_context(True):
        assert current_demo_mode() is True
        assert structlog.contextvars.get_contextvars()["demo_mode"] is True
        with request_context(False):
            assert current_demo_mode() is False
        assert current_demo_mode() is True

    assert current_demo_mode() is False
    assert "demo_mode" not in structlog.contextvars.get_contextvars()


def test_flag_is_restored_after_errors() -> None:
    with pytest.raises(RuntimeError):
        with request_context(True):
            raise RuntimeError("boom")

    assert current_demo_mode() is False


@pytest.mark.asyncio
async def test_concurrent_requests_do_not_leak() -> None:
    async def serve(demo_mode: bool) -> bool:
        with request_context(demo_mode):
            await asyncio.sleep(0.01)
            return current_demo_mode()

    assert await asyncio.gather(serve(True), serve(False), serve(True)) == [
        True,
        False,
        True,
    ]
