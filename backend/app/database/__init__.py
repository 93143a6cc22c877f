"""
Database module - MongoDB connection cache and collection definitions.
"""
from app.database.connections import (
    MongoConnectionCache,
    get_connection_cache,
    get_mongo_client,
    close_connections,
    get_database,
)
from app.database.databases import users_db

__all__ = [
    "MongoConnectionCache",
    "get_connection_cache",
    "get_mongo_client",
    "close_connections",
    "get_database",
    "users_db",
]
