"""
MongoDB connection management.

The connection is optional scaffolding: no route reads or writes through
it. It is opened in the background at startup and closed at shutdown, and
a failure to connect is logged, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_NAME = "eastculture"


@dataclass(frozen=True)
class DatastoreConfig:
    """Configuration for the optional MongoDB connection."""
    uri: str
    enabled: bool = True
    server_selection_timeout_ms: int = 5000


class DatastoreStatus:
    """Connection states reported by the readiness check."""
    DISABLED = "disabled"
    PENDING = "pending"
    CONNECTED = "connected"
    FAILED = "failed"


class DatastoreConnection:
    """
    Lazily opened MongoDB client.

    Constructing this object does no I/O. connect() creates the motor
    client and pings the server; it is meant to run as a background task
    so that an unreachable database never delays request handling.
    """

    def __init__(self, config: DatastoreConfig) -> None:
        self._config = config
        self._client = None
        self.status = DatastoreStatus.PENDING if config.enabled else DatastoreStatus.DISABLED
        self.error: Optional[str] = None

    @property
    def client(self):
        return self._client

    @property
    def database(self):
        """Default database from the URI, falling back to eastculture."""
        if self._client is None:
            return None

        from pymongo.errors import ConfigurationError

        try:
            return self._client.get_default_database()
        except ConfigurationError:
            return self._client[DEFAULT_DATABASE_NAME]

    async def connect(self) -> bool:
        """
        Open the client and ping the server.

        Returns True when the ping succeeded. Every failure (bad URI,
        unreachable host, auth error) is logged and reported through
        status; nothing is raised.
        """
        if not self._config.enabled:
            logger.info("MongoDB connection disabled")
            return False

        try:
            from motor.motor_asyncio import AsyncIOMotorClient

            self._client = AsyncIOMotorClient(
                self._config.uri,
                serverSelectionTimeoutMS=self._config.server_selection_timeout_ms,
            )
            await self._client.admin.command("ping")

        except Exception as e:
            self.status = DatastoreStatus.FAILED
            self.error = str(e)
            logger.warning(
                "MongoDB not connected",
                extra={"error": str(e)}
            )
            return False

        self.status = DatastoreStatus.CONNECTED
        self.error = None
        logger.info("MongoDB connected")
        return True

    def close(self) -> None:
        if self._client is None:
            return

        self._client.close()
        self._client = None
        logger.debug("Closed MongoDB connection")


def create_datastore_connection(config: DatastoreConfig) -> DatastoreConnection:
    """Create the (not yet connected) datastore collaborator."""
    return DatastoreConnection(config)
