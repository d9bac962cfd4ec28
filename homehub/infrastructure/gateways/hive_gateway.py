"""Heating cloud gateway implementation - Infrastructure layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from homehub.domain.entities.errors import GatewayError
from homehub.domain.gateways.hive_gateway import IHiveGateway
from homehub.shared import get_logger

logger = get_logger(__name__)

SERVICE_NAME = "hive"


def parse_products(products: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Reduce the product list of the heating cloud to the status shape."""
    status: Dict[str, Any] = {"heating": None, "hotWater": None}
    for product in products:
        props = product.get("props") or {}
        state = product.get("state") or {}
        name = state.get("name") or props.get("name")

        if product.get("type") == "heating" and status["heating"] is None:
            status["heating"] = {
                "id": product.get("id"),
                "name": name or "Central Heating",
                "currentTemperature": props.get("temperature"),
                "targetTemperature": state.get("target"),
                "isHeating": bool(props.get("working", False)),
                "mode": (state.get("mode") or "off").lower(),
            }
        elif product.get("type") == "hotwater" and status["hotWater"] is None:
            status["hotWater"] = {
                "id": product.get("id"),
                "name": name or "Hot Water",
                "isOn": str(state.get("status", "OFF")).upper() == "ON",
                "mode": (state.get("mode") or "off").lower(),
            }
    return status


class HiveGateway(IHiveGateway):
    """HTTP client for the heating cloud API."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://beekeeper-uk.hivehome.com/1.0",
        timeout: float = 15.0,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_status(self) -> Dict[str, Any]:
        products = await self._request("GET", "products")
        status = parse_products(products or [])
        logger.info(
            "hive.status.fetched",
            heating=status["heating"] is not None,
            hot_water=status["hotWater"] is not None,
        )
        return status

    async def set_target_temperature(self, temperature: float) -> Dict[str, Any]:
        product_id = await self._product_id("heating")
        await self._request("POST", f"nodes/heating/{product_id}", {"target": temperature})
        logger.info("hive.heating.target_set", temperature=temperature)
        return {"targetTemperature": temperature}

    async def set_hot_water(self, is_on: bool) -> Dict[str, Any]:
        product_id = await self._product_id("hotWater")
        await self._request(
            "POST",
            f"nodes/hotwater/{product_id}",
            {"status": "ON" if is_on else "OFF"},
        )
        logger.info("hive.hot_water.set", is_on=is_on)
        return {"isOn": is_on}

    async def _product_id(self, section: str) -> str:
        status = await self.get_status()
        product = status.get(section)
        if not product or not product.get("id"):
            raise GatewayError(SERVICE_NAME, f"No {section} product on this account")
        return product["id"]

    async def _request(
        self, method: str, path: str, body: Optional[Dict[str, Any]] = None
    ) -> Any:
        url = f"{self.base_url}/{path}"
        headers = {
            "Authorization": self.access_token,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, headers=headers, json=body)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "hive.http_error",
                status_code=e.response.status_code,
                response_text=e.response.text,
                url=url,
            )
            raise GatewayError(
                SERVICE_NAME,
                f"Heating API returned HTTP {e.response.status_code}",
                e.response.status_code,
            ) from e

        except httpx.RequestError as e:
            logger.error("hive.request_error", error=str(e), url=url)
            raise GatewayError(
                SERVICE_NAME, f"Failed to communicate with heating API: {str(e)}"
            ) from e
