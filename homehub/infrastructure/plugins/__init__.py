"""
Plugins Package - Infrastructure Layer

Service plugins for the built-in backends, each in a real and a demo
flavour sharing one base class.
"""

from .hive_plugin import HiveDemoPlugin, HivePlugin, HivePluginBase
from .hue_plugin import HueDemoPlugin, HuePlugin, HuePluginBase
from .spotify_plugin import SpotifyDemoPlugin, SpotifyPlugin, SpotifyPluginBase

__all__ = [
    "HiveDemoPlugin",
    "HivePlugin",
    "HivePluginBase",
    "HueDemoPlugin",
    "HuePlugin",
    "HuePluginBase",
    "SpotifyDemoPlugin",
    "SpotifyPlugin",
    "SpotifyPluginBase",
]
