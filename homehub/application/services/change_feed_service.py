"""
Change Feed Service - Application Layer

Keeps the last snapshot of every plugin (per mode) and asks the plugin for
the delta whenever a new snapshot is taken. A live-update channel pushes a
delta only when one is returned.
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

from homehub.application.services.service_registry import ServiceRegistry
from homehub.domain.entities.errors import UnknownServiceError
from homehub.shared.logging import get_logger
from homehub.shared.request_context import current_demo_mode

logger = get_logger(__name__)


def to_payload(snapshot: Any) -> Any:
    """Plain serializable form of a snapshot."""
    if hasattr(snapshot, "to_dict"):
        return snapshot.to_dict()
    return snapshot


class ChangeFeedService:
    """Snapshot store and delta computation for every plugin."""

    def __init__(self, registry: ServiceRegistry) -> None:
        self._registry = registry
        self._snapshots: Dict[Tuple[str, bool], Any] = {}
        self._lock = asyncio.Lock()

    async def poll(
        self, service_id: str, demo_mode: Optional[bool] = None
    ) -> Tuple[Any, Optional[Any]]:
        """
        Take a new snapshot of ``service_id``.

        Returns:
            Tuple of the serializable snapshot and the delta to the previous
            snapshot, or ``None`` when nothing changed or no previous exists

        Raises:
            UnknownServiceError: If no plugin is registered for ``service_id``
        """
        demo_mode = current_demo_mode() if demo_mode is None else demo_mode
        plugin = self._registry.get(service_id, demo_mode)
        if plugin is None:
            raise UnknownServiceError(service_id)

        current = await plugin.get_status(demo_mode)
        async with self._lock:
            previous = self._snapshots.get((service_id, demo_mode))
            self._snapshots[(service_id, demo_mode)] = current

        changes = plugin.detect_changes(previous, current)
        if changes is not None:
            logger.debug("changes.detected", service_id=service_id)
        return to_payload(current), changes

    def forget(self, service_id: str) -> None:
        for key in [key for key in self._snapshots if key[0] == service_id]:
            del self._snapshots[key]
