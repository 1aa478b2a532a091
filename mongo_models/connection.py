"""
Connection lifecycle for mongo-models.

A Connection owns one Motor client and one database handle. The owning
application opens it once and closes it once; model classes are bound to
it explicitly, so there is no process-wide connection state.

Usage:
    connection = Connection("mongodb://localhost:27017", "app")
    await connection.connect()
    User.bind(connection)
    ...
    connection.close()

    # Or as an async context manager
    async with Connection.from_config(ModelsConfig()) as connection:
        User.bind(connection)
"""

import logging
import time
from typing import Any

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import ConfigurationError as PyMongoConfigurationError
from pymongo.errors import PyMongoError

from .config import ModelsConfig
from .constants import DEFAULT_APP_NAME, DEFAULT_SERVER_SELECTION_TIMEOUT_MS
from .exceptions import InitializationError, NotConnectedError
from .observability import get_logger as get_contextual_logger
from .observability import log_operation

logger = logging.getLogger(__name__)
contextual_logger = get_contextual_logger(__name__)


class Connection:
    """
    Manages one MongoDB client and database handle.

    Extra keyword arguments are passed to ``AsyncIOMotorClient`` unchanged;
    pooling, retries and timeouts stay the driver's business.
    """

    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
        app_name: str = DEFAULT_APP_NAME,
        **client_options: Any,
    ) -> None:
        """
        Args:
            mongo_uri: MongoDB connection URI
            db_name: Database name
            server_selection_timeout_ms: Server selection timeout in milliseconds
            app_name: Application name reported to the server
            **client_options: Additional AsyncIOMotorClient options
        """
        self.mongo_uri = mongo_uri
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.app_name = app_name
        self.client_options = client_options

        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None

    @classmethod
    def from_config(cls, config: ModelsConfig, **client_options: Any) -> "Connection":
        """Build a connection from a validated ModelsConfig."""
        config.validate()
        return cls(
            config.mongo_uri,
            config.db_name,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
            app_name=config.app_name,
            **client_options,
        )

    async def connect(self) -> AsyncIOMotorDatabase:
        """
        Open the client and verify the server answers a ping.

        Returns:
            The database handle

        Raises:
            InitializationError: If the server cannot be reached or the
                client arguments are invalid
        """
        if self._db is not None:
            logger.warning("Connection already open. Skipping reconnect.")
            return self._db

        start_time = time.time()
        contextual_logger.info(
            "Opening MongoDB connection",
            extra={"db_name": self.db_name, "app_name": self.app_name},
        )

        client = None
        try:
            client = AsyncIOMotorClient(
                self.mongo_uri,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                appname=self.app_name,
                **self.client_options,
            )
            await client.admin.command("ping")
        except (PyMongoConfigurationError, TypeError, ValueError) as e:
            if client is not None:
                client.close()
            raise InitializationError(
                f"Invalid MongoDB client configuration: {e}",
                mongo_uri=self.mongo_uri,
                db_name=self.db_name,
                context={"error_type": type(e).__name__},
            ) from e
        except PyMongoError as e:
            # server unreachable or login refused
            if client is not None:
                client.close()
            duration_ms = (time.time() - start_time) * 1000
            log_operation(
                logger,
                "connection.connect",
                level=logging.ERROR,
                success=False,
                duration_ms=duration_ms,
                error_type=type(e).__name__,
            )
            raise InitializationError(
                f"Failed to connect to MongoDB: {e}",
                mongo_uri=self.mongo_uri,
                db_name=self.db_name,
                context={"error_type": type(e).__name__},
            ) from e

        self._client = client
        self._db = client[self.db_name]

        duration_ms = (time.time() - start_time) * 1000
        log_operation(
            logger,
            "connection.connect",
            level=logging.INFO,
            duration_ms=duration_ms,
            db_name=self.db_name,
        )
        return self._db

    def close(self) -> None:
        """
        Close the client. Safe to call more than once.
        """
        if self._client is None:
            return

        self._client.close()
        self._client = None
        self._db = None
        contextual_logger.info("MongoDB connection closed", extra={"db_name": self.db_name})

    async def __aenter__(self) -> "Connection":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    @property
    def client(self) -> AsyncIOMotorClient:
        """
        Get the MongoDB client.

        Raises:
            NotConnectedError: If the connection is not open
        """
        if self._client is None:
            raise NotConnectedError(
                "Connection is not open. Call connect() first.",
                context={"db_name": self.db_name},
            )
        return self._client

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """
        Get the MongoDB database.

        Raises:
            NotConnectedError: If the connection is not open
        """
        if self._db is None:
            raise NotConnectedError(
                "Connection is not open. Call connect() first.",
                context={"db_name": self.db_name},
            )
        return self._db

    def collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection handle by name."""
        return self.db[name]
