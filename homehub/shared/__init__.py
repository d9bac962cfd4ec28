"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, storage)
- Carrying the request-scoped demo mode flag
- Configuring structured logging

Following Clean Architecture principles:
- Shared module contains only *cross-cutting concerns*
- It must not depend on Infrastructure or Frameworks
"""

from .consts import EnumEnvironment, EnumLogLevel, EnumStorageBackend
from .logging import configure_logging, get_logger, update_logging_from_settings
from .request_context import current_demo_mode, request_context

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "EnumStorageBackend",
    "configure_logging",
    "current_demo_mode",
    "get_logger",
    "request_context",
    "update_logging_from_settings",
]
