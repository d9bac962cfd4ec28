"""
Gateways Package - Domain Layer

This package contains the plugin contract and the interfaces of the vendor
backends behind the plugins. Specific implementations are provided by the
infrastructure layer.
"""

from .hive_gateway import IHiveGateway
from .hue_bridge_gateway import IHueBridgeGateway
from .service_plugin import MANDATORY_METHODS, IServicePlugin, validate_plugin
from .spotify_gateway import ISpotifyGateway

__all__ = [
    "IHiveGateway",
    "IHueBridgeGateway",
    "IServicePlugin",
    "ISpotifyGateway",
    "MANDATORY_METHODS",
    "validate_plugin",
]
