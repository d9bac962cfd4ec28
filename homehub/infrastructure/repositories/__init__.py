"""
Repositories Package - Infrastructure Layer

Implementations of the document repository (JSON file, MongoDB, memory)
and the credentials store built on top of it.
"""

from .credentials_store import CredentialsStore
from .json_document_repository import JsonDocumentRepository
from .memory_document_repository import InMemoryDocumentRepository
from .mongo_document_repository import MongoDocumentRepository

__all__ = [
    "CredentialsStore",
    "InMemoryDocumentRepository",
    "JsonDocumentRepository",
    "MongoDocumentRepository",
]
