"""
Service Registry - Application Layer

Holds one real and at most one demo plugin per service id and resolves the
active one from an explicit mode flag or, when the flag is omitted, from the
request-scoped demo mode.
"""

from typing import Dict, List, Optional

from homehub.domain.entities.errors import PluginRegistrationError
from homehub.domain.entities.service import ServiceMetadata
from homehub.domain.gateways.service_plugin import IServicePlugin, validate_plugin
from homehub.shared.consts import RESERVED_SERVICE_IDS
from homehub.shared.logging import get_logger
from homehub.shared.request_context import current_demo_mode

logger = get_logger(__name__)


class ServiceRegistry:
    """Registry of service plugins."""

    def __init__(self) -> None:
        self._plugins: Dict[str, IServicePlugin] = {}
        self._demo_plugins: Dict[str, IServicePlugin] = {}

    def register(self, plugin: IServicePlugin) -> None:
        """
        Register a real plugin.

        Raises:
            PluginRegistrationError: If the id is missing or reserved, a real
                plugin is already registered under it, or mandatory methods
                are missing
        """
        service_id = self._validate(plugin, self._plugins, "plugin")
        self._plugins[service_id] = plugin
        logger.info(
            "registry.plugin_registered",
            service_id=service_id,
            display_name=getattr(plugin, "display_name", service_id),
        )

    def register_demo(self, plugin: IServicePlugin) -> None:
        """Register a demo plugin; same rules as ``register``."""
        service_id = self._validate(plugin, self._demo_plugins, "demo plugin")
        self._demo_plugins[service_id] = plugin
        logger.info("registry.demo_plugin_registered", service_id=service_id)

    def unregister(self, service_id: str) -> bool:
        """Remove a real plugin. Returns False if it was not registered."""
        if service_id not in self._plugins:
            return False
        del self._plugins[service_id]
        logger.info("registry.plugin_unregistered", service_id=service_id)
        return True

    def get(
        self, service_id: str, demo_mode: Optional[bool] = None
    ) -> Optional[IServicePlugin]:
        return self._select(demo_mode).get(service_id)

    def has(self, service_id: str) -> bool:
        return service_id in self._plugins

    def get_all(self, demo_mode: Optional[bool] = None) -> List[IServicePlugin]:
        return list(self._select(demo_mode).values())

    def get_ids(self) -> List[str]:
        return list(self._plugins)

    def get_all_metadata(
        self, demo_mode: Optional[bool] = None
    ) -> List[ServiceMetadata]:
        return [plugin.get_metadata() for plugin in self.get_all(demo_mode)]

    def _select(self, demo_mode: Optional[bool]) -> Dict[str, IServicePlugin]:
        use_demo = current_demo_mode() if demo_mode is None else demo_mode
        return self._demo_plugins if use_demo else self._plugins

    @staticmethod
    def _validate(
        plugin: IServicePlugin, registered: Dict[str, IServicePlugin], kind: str
    ) -> str:
        service_id = getattr(plugin, "service_id", None) or ""
        if service_id in RESERVED_SERVICE_IDS:
            raise PluginRegistrationError(
                service_id, f"{kind} must declare a service_id"
            )
        if service_id in registered:
            raise PluginRegistrationError(
                service_id, f"{kind} '{service_id}' is already registered"
            )

        missing = validate_plugin(plugin)
        if missing:
            raise PluginRegistrationError(
                service_id, f"missing required methods: {', '.join(missing)}"
            )
        return service_id
