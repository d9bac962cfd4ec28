"""
Repositories Package - Domain Layer

This package contains repository interfaces. Implementations live in the
infrastructure layer.
"""

from .document_repository import IDocumentRepository

__all__ = ["IDocumentRepository"]
