"""
Gateways Package - Infrastructure Layer

HTTP clients for the vendor backends and their in-memory demo twins.
"""

from .demo_gateways import DemoHiveGateway, DemoHueBridgeGateway, DemoSpotifyGateway
from .hive_gateway import HiveGateway
from .hue_bridge_gateway import HueBridgeGateway, to_bridge_state
from .spotify_gateway import SpotifyGateway

__all__ = [
    "DemoHiveGateway",
    "DemoHueBridgeGateway",
    "DemoSpotifyGateway",
    "HiveGateway",
    "HueBridgeGateway",
    "SpotifyGateway",
    "to_bridge_state",
]
