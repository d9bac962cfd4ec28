from __future__ import annotations

import copy
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from homehub.application.services.room_mapping_service import (  # noqa: E402
    RoomMappingService,
)
from homehub.application.services.service_registry import ServiceRegistry  # noqa: E402
from homehub.application.services.slug_mapping_service import (  # noqa: E402
    SlugMappingService,
)
from homehub.domain.entities.device import Device, Room  # noqa: E402
from homehub.domain.entities.service import (  # noqa: E402
    Capability,
    ConnectionStatus,
    ConnectResult,
    UpdateResult,
)
from homehub.domain.gateways.service_plugin import IServicePlugin  # noqa: E402
from homehub.domain.repositories.document_repository import (  # noqa: E402
    IDocumentRepository,
)


class RecordingDocumentRepository(IDocumentRepository):
    """In-memory repository that counts writes and can be made to fail."""

    def __init__(
        self,
        document: Optional[Dict[str, Any]] = None,
        fail_load: bool = False,
        fail_save: bool = False,
    ):
        self.document = copy.deepcopy(document or {})
        self.fail_load = fail_load
        self.fail_save = fail_save
        self.saves = 0

    def load(self) -> Dict[str, Any]:
        if self.fail_load:
            raise OSError("storage unavailable")
        return copy.deepcopy(self.document)

    def save(self, document: Dict[str, Any]) -> None:
        self.saves += 1
        if self.fail_save:
            raise OSError("disk full")
        self.document = copy.deepcopy(document)


class FakeCollection:
    """Collection keyed by ``_id`` supporting the calls the stores make."""

    def __init__(self, acknowledge: bool = True) -> None:
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.acknowledge = acknowledge
        self.last_query: Optional[Dict[str, Any]] = None
        self.created_indexes: List[tuple] = []

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.last_query = query
        document = self.documents.get(query.get("_id"))
        return copy.deepcopy(document) if document is not None else None

    def replace_one(
        self, query: Dict[str, Any], document: Dict[str, Any], upsert: bool = False
    ) -> Any:
        key = query.get("_id")
        matched = key in self.documents
        if matched or upsert:
            self.documents[key] = copy.deepcopy(document)
        return SimpleNamespace(
            matched_count=int(matched), acknowledged=self.acknowledge
        )

    def create_index(self, keys: Any, name: Optional[str] = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys


class FakeMongoDatabase:
    """Stand-in for ``MongoDatabase`` backed by fake collections."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def find_one(self, collection_name: str, query: Dict[str, Any]):
        return self.get_collection(collection_name).find_one(query)

    def upsert_one(
        self, collection_name: str, query: Dict[str, Any], document: Dict[str, Any]
    ) -> Dict[str, Any]:
        self.get_collection(collection_name).replace_one(query, document, upsert=True)
        return document


class FakePlugin(IServicePlugin):
    """Configurable plugin recording every command it receives."""

    def __init__(
        self,
        service_id: str = "fake",
        capabilities: Iterable[Capability] = (),
        rooms: Optional[List[Room]] = None,
        devices: Optional[List[Device]] = None,
        error: Optional[Exception] = None,
        connected: bool = True,
        update_result: Optional[UpdateResult] = None,
    ):
        self.service_id = service_id
        self.display_name = service_id.capitalize()
        self.capabilities = frozenset(capabilities)
        self.rooms = list(rooms or [])
        self.devices = list(devices or [])
        self.error = error
        self.connected = connected
        self.update_result = update_result
        self.calls: List[tuple] = []
        self.status: Any = {"value": 1}

    async def connect(self, credentials, demo_mode=False):
        self.calls.append(("connect", credentials, demo_mode))
        self.connected = True
        return ConnectResult(success=True)

    async def disconnect(self):
        self.calls.append(("disconnect",))
        self.connected = False

    def is_connected(self, demo_mode=False):
        return self.connected

    async def get_connection_status(self, demo_mode=False):
        if self.error:
            raise self.error
        return ConnectionStatus(connected=self.connected)

    async def get_status(self, demo_mode=False):
        if self.error:
            raise self.error
        return self.status

    def has_credentials(self):
        return self.connected

    async def clear_credentials(self):
        self.connected = False

    async def get_rooms(self, demo_mode=False):
        if self.error:
            raise self.error
        return list(self.rooms)

    async def get_devices(self, demo_mode=False):
        if self.error:
            raise self.error
        return list(self.devices)

    async def update_device(self, device_id, state):
        return self._record("update_device", device_id, state)

    async def update_room_devices(self, room_id, state):
        return self._record("update_room_devices", room_id, state)

    async def update_zone_devices(self, zone_id, state):
        return self._record("update_zone_devices", zone_id, state)

    async def activate_scene(self, scene_id):
        return self._record("activate_scene", scene_id, {})

    def detect_changes(self, previous, current):
        if previous is None or current is None or previous == current:
            return None
        return {"value": current["value"]}

    def _record(self, operation, target_id, state):
        self.calls.append((operation, target_id, state))
        if self.error:
            raise self.error
        if self.update_result is not None:
            return self.update_result
        return UpdateResult(
            success=True,
            target_id=target_id,
            applied_state=dict(state),
            updated_lights=[{"id": f"{target_id}-light", **state}] if state else [],
        )


@pytest.fixture()
def slug_repository() -> RecordingDocumentRepository:
    return RecordingDocumentRepository()


@pytest.fixture()
def slug_service(slug_repository: RecordingDocumentRepository) -> SlugMappingService:
    return SlugMappingService(slug_repository)


@pytest.fixture()
def room_mapping_service() -> RoomMappingService:
    return RoomMappingService(RecordingDocumentRepository())


@pytest.fixture()
def registry() -> ServiceRegistry:
    return ServiceRegistry()
