"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as vendor APIs,
document storage and the service plugins built on top of them.
"""

from homehub.infrastructure import gateways, plugins, repositories

__all__ = ["gateways", "plugins", "repositories"]
