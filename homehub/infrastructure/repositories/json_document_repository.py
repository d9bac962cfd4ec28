"""
JSON Document Repository - Infrastructure Layer

Stores a document as a pretty-printed JSON file. Writes go to a temporary
file in the same directory that then replaces the target, so a crash never
leaves a half-written document behind.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from homehub.domain.repositories.document_repository import IDocumentRepository
from homehub.shared.logging import get_logger

logger = get_logger(__name__)


class JsonDocumentRepository(IDocumentRepository):
    """File backed whole-document store."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    def load(self) -> Dict[str, Any]:
        if not self.file_path.exists():
            return {}

        contents = self.file_path.read_text(encoding="utf-8")
        if not contents.strip():
            return {}

        document = json.loads(contents)
        if not isinstance(document, dict):
            raise ValueError(f"{self.file_path} does not contain a JSON object")
        return document

    def save(self, document: Dict[str, Any]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.file_path.parent, prefix=f".{self.file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, sort_keys=True)
            os.replace(tmp_path, self.file_path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.debug("documents.saved", path=str(self.file_path))
