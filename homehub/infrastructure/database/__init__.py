"""
Database package - Infrastructure Layer

This package contains the MongoDB client used by the Mongo-backed document
repositories.
"""

from homehub.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
