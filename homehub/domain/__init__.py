"""
Domain Layer Package

This package contains the home model, the plugin contract and the pure
aggregation rules. It has no dependency on frameworks or vendor transports.
"""

# Re-export submodules
from homehub.domain import entities, gateways, repositories, services

__all__ = ["entities", "gateways", "repositories", "services"]
