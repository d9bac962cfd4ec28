"""
Application Layer Package

This package contains the application-specific rules: the plugin registry,
identifier translation, normalization, home aggregation and the use cases
that orchestrate them for the presentation layer.
"""

# Re-export submodules
from homehub.application import dtos, services, use_cases

__all__ = ["dtos", "services", "use_cases"]
