"""
MongoDB Database - Infrastructure Layer

This module provides a MongoDB database client for the document stores
(slug mappings, room mappings, credentials). Each store is one document in
the ``documents`` collection, keyed by its name.
"""

from typing import Any, Dict, Optional

import pymongo.errors
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from homehub.shared.logging import get_logger

logger = get_logger(__name__)

DOCUMENTS_COLLECTION = "documents"


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single document in a collection.

        Args:
            collection_name: Name of the collection
            query: Query to match documents

        Returns:
            The document if found, None otherwise
        """
        return self.db[collection_name].find_one(query)

    def upsert_one(
        self, collection_name: str, query: Dict[str, Any], document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Replace the matching document, inserting it if it does not exist.

        Raises:
            Exception: If the write is not acknowledged
        """
        result = self.db[collection_name].replace_one(query, document, upsert=True)
        if not result.acknowledged:
            raise Exception(f"Failed to write document in {collection_name}")
        return document

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """
        Create the indexes used by the document stores.
        This is an async method to be called during application startup.
        """
        try:
            self.db[DOCUMENTS_COLLECTION].create_index(
                "updated_at", name="updated_at_idx", background=True
            )
        except pymongo.errors.OperationFailure as e:
            logger.warning("mongo.index_creation_failed", error=str(e))
