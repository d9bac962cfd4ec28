"""
Room Mapping Service - Application Layer

Groups backend rooms (``service:room``) under home room ids so that rooms
from several services can be addressed as one. The persisted document is
``{"mappings": {"service:room": home_room_id}, "room_names": {home_room_id:
name}}``.
"""

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from homehub.domain.entities.device import make_flat_id, split_flat_id
from homehub.domain.repositories.document_repository import IDocumentRepository
from homehub.shared.logging import get_logger

logger = get_logger(__name__)

HOME_ROOM_PREFIX = "home-"


@dataclass(frozen=True, slots=True)
class ServiceRoomRef:
    service_id: str
    room_id: str


class RoomMappingService:
    """Maps service rooms to home rooms and keeps home room names."""

    def __init__(self, repository: IDocumentRepository) -> None:
        self._repository = repository
        self._mappings: Dict[str, str] = {}
        self._room_names: Dict[str, str] = {}
        self._loaded = False
        self._lock = threading.RLock()

    def initialize(self) -> None:
        """Load the stored mappings; a broken store starts empty."""
        with self._lock:
            try:
                document = self._repository.load()
            except Exception as e:
                logger.error("rooms.mapping_load_failed", error=str(e))
                document = {}

            self._mappings = dict(document.get("mappings") or {})
            self._room_names = dict(document.get("room_names") or {})
            self._loaded = True
            logger.info("rooms.mappings_loaded", count=len(self._mappings))

    def reset(self) -> None:
        with self._lock:
            self._mappings = {}
            self._room_names = {}
            self._loaded = False

    def get_all_mappings(self) -> Dict[str, str]:
        self._ensure_loaded()
        return dict(self._mappings)

    def map_service_room(self, service_id: str, room_id: str, name: str) -> str:
        """Return the home room of a service room, creating it on first sight."""
        self._ensure_loaded()
        service_key = make_flat_id(service_id, room_id)
        with self._lock:
            home_room_id = self._mappings.get(service_key)
            if home_room_id:
                return home_room_id

            home_room_id = f"{HOME_ROOM_PREFIX}{room_id}"
            self._mappings[service_key] = home_room_id
            self._room_names.setdefault(home_room_id, name)
            self._persist()

        logger.info(
            "rooms.mapping_created",
            service_key=service_key,
            home_room_id=home_room_id,
            name=name,
        )
        return home_room_id

    def get_home_room_id(self, service_id: str, room_id: str) -> Optional[str]:
        self._ensure_loaded()
        return self._mappings.get(make_flat_id(service_id, room_id))

    def get_service_room_ids(self, home_room_id: str) -> List[ServiceRoomRef]:
        """All service rooms grouped under ``home_room_id``."""
        self._ensure_loaded()
        refs = []
        for service_key, mapped_id in self._mappings.items():
            if mapped_id != home_room_id:
                continue
            service_id, room_id = split_flat_id(service_key)
            if service_id:
                refs.append(ServiceRoomRef(service_id=service_id, room_id=room_id))
        return refs

    def merge_rooms(self, service_keys: Iterable[str], home_room_id: str) -> None:
        self._ensure_loaded()
        service_keys = list(service_keys)
        with self._lock:
            for service_key in service_keys:
                self._mappings[service_key] = home_room_id
            self._persist()
        logger.info(
            "rooms.merged", service_keys=service_keys, home_room_id=home_room_id
        )

    def delete_mapping(self, service_id: str, room_id: str) -> None:
        self._ensure_loaded()
        service_key = make_flat_id(service_id, room_id)
        with self._lock:
            self._mappings.pop(service_key, None)
            self._persist()
        logger.info("rooms.mapping_deleted", service_key=service_key)

    def get_room_name(self, service_id: str, room_id: str) -> Optional[str]:
        home_room_id = self.get_home_room_id(service_id, room_id)
        if home_room_id:
            return self._room_names.get(home_room_id)
        return None

    def get_room_name_by_id(self, home_room_id: str) -> Optional[str]:
        self._ensure_loaded()
        return self._room_names.get(home_room_id)

    def set_room_name(self, home_room_id: str, name: str) -> None:
        self._ensure_loaded()
        with self._lock:
            self._room_names[home_room_id] = name
            self._persist()
        logger.info("rooms.renamed", home_room_id=home_room_id, name=name)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.initialize()

    def _persist(self) -> None:
        try:
            self._repository.save(
                {
                    "mappings": dict(self._mappings),
                    "room_names": dict(self._room_names),
                }
            )
        except Exception as e:
            logger.error("rooms.mapping_persist_failed", error=str(e))
