"""MongoDB implementation of the document repository."""

from datetime import datetime, timezone
from typing import Any, Dict

from homehub.domain.repositories.document_repository import IDocumentRepository
from homehub.infrastructure.database.mongo_database import (
    DOCUMENTS_COLLECTION,
    MongoDatabase,
)


class MongoDocumentRepository(IDocumentRepository):
    """Stores one named document in the ``documents`` collection."""

    def __init__(self, mongo_database: MongoDatabase, name: str):
        self._database = mongo_database
        self._name = name

    def load(self) -> Dict[str, Any]:
        stored = self._database.find_one(DOCUMENTS_COLLECTION, {"_id": self._name})
        if not stored:
            return {}
        return dict(stored.get("document") or {})

    def save(self, document: Dict[str, Any]) -> None:
        self._database.upsert_one(
            DOCUMENTS_COLLECTION,
            {"_id": self._name},
            {
                "_id": self._name,
                "document": document,
                "updated_at": datetime.now(timezone.utc),
            },
        )
