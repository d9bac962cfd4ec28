from __future__ import annotations

import httpx
import pytest

from homehub.domain.entities.errors import GatewayError
from homehub.infrastructure.gateways.spotify_gateway import (
    SpotifyGateway,
    parse_playback,
)


class _StubResponse:
    def __init__(self, status_code: int, json_data=None):
        self.status_code = status_code
        self._json = json_data
        self.content = b"" if json_data is None else b"{}"

    def json(self):
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("PUT", "https://api/me/player")
            response = httpx.Response(self.status_code, request=request, text="no")
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, response: _StubResponse):
        self._response = response
        self.requests = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def request(self, method, url, headers=None, json=None, params=None):
        self.requests.append(
            {"method": method, "url": url, "headers": headers, "json": json, "params": params}
        )
        return self._response


@pytest.fixture()
def gateway() -> SpotifyGateway:
    return SpotifyGateway("token", base_url="https://api")


@pytest.mark.asyncio
async def test_get_devices(monkeypatch, gateway) -> None:
    client = _StubAsyncClient(
        _StubResponse(
            200,
            {
                "devices": [
                    {
                        "id": "abc",
                        "name": "Office",
                        "type": "Computer",
                        "is_active": True,
                        "volume_percent": 55,
                    }
                ]
            },
        )
    )
    monkeypatch.setattr("httpx.AsyncClient", lambda **kwargs: client)

    devices = await gateway.get_devices()

    assert devices == [
        {
            "id": "abc",
            "name": "Office",
            "type": "Computer",
            "isActive": True,
            "volumePercent": 55,
        }
    ]
    assert client.requests[0]["headers"] == {"Authorization": "Bearer token"}


@pytest.mark.asyncio
async def test_nothing_playing_is_none(monkeypatch, gateway) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda **kwargs: _StubAsyncClient(_StubResponse(204))
    )

    assert await gateway.get_playback() is None


@pytest.mark.asyncio
async def test_volume_is_clamped_and_targets_device(monkeypatch, gateway) -> None:
    client = _StubAsyncClient(_StubResponse(204))
    monkeypatch.setattr("httpx.AsyncClient", lambda **kwargs: client)

    await gateway.set_volume(140, device_id="abc")
    await gateway.transfer_playback("abc", play=True)

    assert client.requests[0]["url"] == "https://api/me/player/volume"
    assert client.requests[0]["params"] == {"volume_percent": 100, "device_id": "abc"}
    assert client.requests[1]["json"] == {"device_ids": ["abc"], "play": True}


@pytest.mark.asyncio
async def test_http_error(monkeypatch, gateway) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient", lambda **kwargs: _StubAsyncClient(_StubResponse(404))
    )

    with pytest.raises(GatewayError) as exc:
        await gateway.pause()

    assert exc.value.status_code == 404


def test_parse_playback() -> None:
    playback = parse_playback(
        {
            "is_playing": True,
            "item": {"id": "t1", "name": "Song", "artists": [{"name": "A"}, {"name": "B"}]},
            "device": {"id": "abc", "name": "Office", "is_active": True},
        }
    )

    assert playback["isPlaying"] is True
    assert playback["track"] == {"id": "t1", "name": "Song", "artist": "A, B"}
    assert playback["device"]["id"] == "abc"
    assert parse_playback(None) is None
