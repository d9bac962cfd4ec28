"""
Credentials Store - Infrastructure Layer

Per-service credential fields persisted as ``{service_id: {...}}`` through a
document repository. Write failures propagate so that a connect that could
not be stored is reported as failed.
"""

import threading
from typing import Any, Dict, Optional

from homehub.domain.repositories.document_repository import IDocumentRepository
from homehub.shared.logging import get_logger

logger = get_logger(__name__)


class CredentialsStore:
    def __init__(self, repository: IDocumentRepository) -> None:
        self._repository = repository
        self._credentials: Optional[Dict[str, Dict[str, Any]]] = None
        self._lock = threading.Lock()

    def get(self, service_id: str) -> Optional[Dict[str, Any]]:
        credentials = self._load().get(service_id)
        return dict(credentials) if credentials else None

    def has(self, service_id: str) -> bool:
        return bool(self._load().get(service_id))

    def set(self, service_id: str, credentials: Dict[str, Any]) -> None:
        with self._lock:
            stored = self._load()
            stored[service_id] = dict(credentials)
            self._repository.save(stored)
        logger.info("credentials.stored", service_id=service_id)

    def set_default(self, service_id: str, credentials: Dict[str, Any]) -> bool:
        """Store ``credentials`` unless the service already has some."""
        if self.has(service_id):
            return False
        self.set(service_id, credentials)
        return True

    def clear(self, service_id: str) -> None:
        with self._lock:
            stored = self._load()
            if stored.pop(service_id, None) is None:
                return
            self._repository.save(stored)
        logger.info("credentials.cleared", service_id=service_id)

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if self._credentials is None:
            try:
                self._credentials = dict(self._repository.load())
            except Exception as e:
                logger.error("credentials.load_failed", error=str(e))
                self._credentials = {}
        return self._credentials
