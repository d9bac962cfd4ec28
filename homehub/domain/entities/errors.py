"""
Domain Errors

Configuration errors are fatal at startup. Routing errors reach the caller
with the offending identifier. Gateway errors describe a backend that could
not be reached; aggregation swallows them, direct commands propagate them.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DomainError):
    """Raised when the process is wired incorrectly."""


class PluginRegistrationError(ConfigurationError):
    """Raised when a plugin cannot be registered."""

    def __init__(self, service_id: str, reason: str):
        super().__init__(
            f"Cannot register plugin '{service_id}': {reason}",
            {"service_id": service_id},
        )
        self.service_id = service_id


class RoutingError(DomainError):
    """Raised when a command cannot be routed to a backend."""

    def __init__(self, message: str, identifier: str):
        super().__init__(message, {"identifier": identifier})
        self.identifier = identifier


class InvalidIdentifierError(RoutingError):
    """Raised when a flat identifier cannot be decoded."""

    def __init__(self, identifier: str, kind: str = "device"):
        super().__init__(f"Invalid {kind} ID format: {identifier}", identifier)


class UnknownServiceError(RoutingError):
    """Raised when an identifier names a service that is not registered."""

    def __init__(self, service_id: str, identifier: Optional[str] = None):
        super().__init__(f"Unknown service: {service_id}", identifier or service_id)
        self.service_id = service_id


class UnsupportedOperationError(RoutingError):
    """Raised when a service does not offer the requested mutation."""

    def __init__(self, service_id: str, operation: str, identifier: str):
        super().__init__(
            f"Service {service_id} does not support {operation}", identifier
        )
        self.service_id = service_id
        self.operation = operation


class ResourceNotFoundError(RoutingError):
    """Raised when a room, zone or device id resolves to nothing."""

    def __init__(self, resource_type: str, identifier: str):
        super().__init__(f"{resource_type.capitalize()} not found: {identifier}", identifier)
        self.resource_type = resource_type


class GatewayError(DomainError):
    """Raised when a vendor backend fails or answers unexpectedly."""

    def __init__(
        self,
        service: str,
        message: str,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            f"{service}: {message}",
            {"service": service, "status_code": status_code},
        )
        self.service = service
        self.status_code = status_code


class EntityValidationError(DomainError):
    """Raised when an entity is built from incomplete data."""
