"""
Document Repository Interface - Domain Layer

Mapping and credential stores are small documents that are always read and
written whole.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IDocumentRepository(ABC):
    """Interface for a whole-document store."""

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        """
        Read the document.

        Returns:
            The stored document, or an empty dict when nothing is stored yet.

        Raises:
            Exception: If the storage cannot be read
        """
        pass

    @abstractmethod
    def save(self, document: Dict[str, Any]) -> None:
        """
        Replace the stored document.

        Raises:
            Exception: If the storage cannot be written
        """
        pass
