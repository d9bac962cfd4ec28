"""
Hive Gateway Interface - Domain Layer

Status shape::

    {
        "heating": {"id", "name", "currentTemperature", "targetTemperature",
                    "isHeating", "mode"},
        "hotWater": {"id", "name", "isOn", "mode"},
    }
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IHiveGateway(ABC):
    """Interface for the heating cloud."""

    @abstractmethod
    async def get_status(self) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def set_target_temperature(self, temperature: float) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def set_hot_water(self, is_on: bool) -> Dict[str, Any]:
        pass
