"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error mapping, and binding the request demo
mode before calling the application layer use cases.
"""

from .home_controller import router as home_router
from .services_controller import router as services_router

__all__ = ["home_router", "services_router"]
