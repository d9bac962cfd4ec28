"""
Slug Mapping Service - Application Layer

Gives every vendor UUID a stable, human readable identifier (slug) that is
unique inside its namespace. Mappings are created on first sight, never
change afterwards and are persisted as ``{namespace: {vendor_id: slug}}``.
"""

import re
import threading
from typing import Dict, Optional

from homehub.domain.repositories.document_repository import IDocumentRepository
from homehub.shared.logging import get_logger

logger = get_logger(__name__)

MAX_SLUG_LENGTH = 50
DEFAULT_SLUG = "device"

_APOSTROPHES = re.compile(r"['‘’]")
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def generate_slug(name: Optional[str]) -> str:
    """Derive a URL-safe slug from a display name."""
    slug = (name or "").lower().strip()
    slug = _APOSTROPHES.sub("", slug)
    slug = _NON_ALPHANUMERIC.sub("-", slug)
    slug = slug.strip("-")[:MAX_SLUG_LENGTH]
    return slug or DEFAULT_SLUG


class SlugMappingService:
    """
    Bidirectional, namespace-scoped ``vendor_id <-> slug`` mapping.

    New slugs are created under a per-namespace lock so that two concurrent
    first observations of the same vendor id agree on one slug. Every new
    mapping is written through the repository before ``get_slug`` returns,
    one document write at a time; a failed write is logged and the
    in-memory mapping stays authoritative.
    """

    def __init__(self, repository: IDocumentRepository) -> None:
        self._repository = repository
        self._vendor_to_slug: Dict[str, Dict[str, str]] = {}
        self._slug_to_vendor: Dict[str, Dict[str, str]] = {}
        self._loaded = False
        self._load_lock = threading.Lock()
        self._namespace_locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()
        self._document_lock = threading.Lock()

    def get_slug(self, namespace: str, vendor_id: str, hint_name: Optional[str]) -> str:
        """
        Return the slug of ``vendor_id``, creating it from ``hint_name``.

        Args:
            namespace: Scope of the slug, usually the service id
            vendor_id: Backend identifier
            hint_name: Display name used only when no slug exists yet

        Returns:
            str: The stable slug
        """
        self._ensure_loaded()

        existing = self._vendor_to_slug.get(namespace, {}).get(vendor_id)
        if existing is not None:
            return existing

        with self._namespace_lock(namespace):
            existing = self._vendor_to_slug.get(namespace, {}).get(vendor_id)
            if existing is not None:
                return existing

            reverse = self._slug_to_vendor.get(namespace, {})
            base_slug = generate_slug(hint_name)
            slug = base_slug
            counter = 1
            while slug in reverse:
                counter += 1
                slug = f"{base_slug}-{counter}"

            # Mutation, snapshot and save form one step across namespaces
            with self._document_lock:
                self._vendor_to_slug.setdefault(namespace, {})[vendor_id] = slug
                self._slug_to_vendor.setdefault(namespace, {})[slug] = vendor_id
                self._flush()

            logger.debug(
                "slugs.created",
                namespace=namespace,
                vendor_id=vendor_id[:8],
                slug=slug,
            )
            return slug

    def get_uuid(self, namespace: str, slug: str) -> Optional[str]:
        self._ensure_loaded()
        return self._slug_to_vendor.get(namespace, {}).get(slug)

    def has_slug(self, namespace: str, slug: str) -> bool:
        self._ensure_loaded()
        return slug in self._slug_to_vendor.get(namespace, {})

    def clear(self) -> None:
        """Forget every in-memory mapping; the next access reloads storage."""
        with self._load_lock:
            self._vendor_to_slug.clear()
            self._slug_to_vendor.clear()
            self._loaded = False

    def reload(self) -> None:
        self.clear()
        self._ensure_loaded()

    def _namespace_lock(self, namespace: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._namespace_locks.get(namespace)
            if lock is None:
                lock = self._namespace_locks[namespace] = threading.Lock()
            return lock

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._load_lock:
            if self._loaded:
                return
            try:
                document = self._repository.load()
            except Exception as e:
                logger.warning("slugs.load_failed", error=str(e))
                document = {}

            for namespace, mappings in document.items():
                if not isinstance(mappings, dict):
                    continue
                forward = self._vendor_to_slug.setdefault(namespace, {})
                reverse = self._slug_to_vendor.setdefault(namespace, {})
                for vendor_id, slug in mappings.items():
                    forward[vendor_id] = slug
                    reverse[slug] = vendor_id

            if document:
                logger.info("slugs.loaded", namespaces=len(document))
            self._loaded = True

    def _flush(self) -> None:
        document = {
            namespace: dict(mappings)
            for namespace, mappings in self._vendor_to_slug.items()
        }
        try:
            self._repository.save(document)
        except Exception as e:
            logger.warning("slugs.save_failed", error=str(e))
