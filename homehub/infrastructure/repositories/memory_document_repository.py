"""Process-local document repository, used by the demo universe."""

import copy
from typing import Any, Dict

from homehub.domain.repositories.document_repository import IDocumentRepository


class InMemoryDocumentRepository(IDocumentRepository):
    def __init__(self) -> None:
        self._document: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        return copy.deepcopy(self._document)

    def save(self, document: Dict[str, Any]) -> None:
        self._document = copy.deepcopy(document)
