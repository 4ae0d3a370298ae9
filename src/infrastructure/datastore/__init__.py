"""
Optional MongoDB connection.

Opened at startup for future features; nothing on the request path uses it.
"""

from .client import (
    DatastoreConfig,
    DatastoreConnection,
    DatastoreStatus,
    create_datastore_connection,
)

__all__ = [
    "DatastoreConfig",
    "DatastoreConnection",
    "DatastoreStatus",
    "create_datastore_connection",
]
