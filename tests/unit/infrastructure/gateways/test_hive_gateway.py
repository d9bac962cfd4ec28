from __future__ import annotations

import httpx
import pytest

from homehub.domain.entities.errors import GatewayError
from homehub.infrastructure.gateways.hive_gateway import HiveGateway, parse_products

PRODUCTS = [
    {
        "id": "heat-1",
        "type": "heating",
        "props": {"temperature": 19.2, "working": True},
        "state": {"name": "Downstairs", "target": 21, "mode": "SCHEDULE"},
    },
    {
        "id": "water-1",
        "type": "hotwater",
        "props": {},
        "state": {"status": "ON", "mode": "MANUAL"},
    },
]


class _StubResponse:
    def __init__(self, status_code: int, json_data):
        self.status_code = status_code
        self._json = json_data

    def json(self):
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("GET", "https://hive/products")
            response = httpx.Response(self.status_code, request=request, text="denied")
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, responses):
        self._responses = list(responses)
        self.requests = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def request(self, method, url, headers=None, json=None):
        self.requests.append((method, url, headers, json))
        return self._responses.pop(0)


def test_parse_products() -> None:
    status = parse_products(PRODUCTS)

    assert status["heating"] == {
        "id": "heat-1",
        "name": "Downstairs",
        "currentTemperature": 19.2,
        "targetTemperature": 21,
        "isHeating": True,
        "mode": "schedule",
    }
    assert status["hotWater"]["isOn"] is True
    assert status["hotWater"]["name"] == "Hot Water"
    assert parse_products([]) == {"heating": None, "hotWater": None}


@pytest.mark.asyncio
async def test_get_status(monkeypatch) -> None:
    client = _StubAsyncClient([_StubResponse(200, PRODUCTS)])
    monkeypatch.setattr("httpx.AsyncClient", lambda **kwargs: client)

    status = await HiveGateway("token-1", base_url="https://hive/").get_status()

    assert status["heating"]["id"] == "heat-1"
    method, url, headers, _ = client.requests[0]
    assert (method, url) == ("GET", "https://hive/products")
    assert headers["Authorization"] == "token-1"


@pytest.mark.asyncio
async def test_set_target_temperature_posts_to_heating_node(monkeypatch) -> None:
    client = _StubAsyncClient([_StubResponse(200, PRODUCTS), _StubResponse(200, {})])
    monkeypatch.setattr("httpx.AsyncClient", lambda **kwargs: client)

    applied = await HiveGateway("token", base_url="https://hive").set_target_temperature(
        22.5
    )

    assert applied == {"targetTemperature": 22.5}
    assert client.requests[1][:2] == ("POST", "https://hive/nodes/heating/heat-1")
    assert client.requests[1][3] == {"target": 22.5}


@pytest.mark.asyncio
async def test_set_hot_water(monkeypatch) -> None:
    client = _StubAsyncClient([_StubResponse(200, PRODUCTS), _StubResponse(200, {})])
    monkeypatch.setattr("httpx.AsyncClient", lambda **kwargs: client)

    applied = await HiveGateway("token", base_url="https://hive").set_hot_water(False)

    assert applied == {"isOn": False}
    assert client.requests[1][1] == "https://hive/nodes/hotwater/water-1"
    assert client.requests[1][3] == {"status": "OFF"}


@pytest.mark.asyncio
async def test_missing_product_raises(monkeypatch) -> None:
    client = _StubAsyncClient([_StubResponse(200, [])])
    monkeypatch.setattr("httpx.AsyncClient", lambda **kwargs: client)

    with pytest.raises(GatewayError, match="No heating product"):
        await HiveGateway("token").set_target_temperature(20)


@pytest.mark.asyncio
async def test_http_error(monkeypatch) -> None:
    monkeypatch.setattr(
        "httpx.AsyncClient",
        lambda **kwargs: _StubAsyncClient([_StubResponse(401, {})]),
    )

    with pytest.raises(GatewayError) as exc:
        await HiveGateway("expired").get_status()

    assert exc.value.status_code == 401
