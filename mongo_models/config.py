"""
Configuration management for mongo-models.

Settings come from constructor arguments first and environment variables
second. A Connection can always be created with direct parameters instead.
"""

import os

from .constants import (
    DEFAULT_APP_NAME,
    DEFAULT_SERVER_SELECTION_TIMEOUT_MS,
    MIN_SERVER_SELECTION_TIMEOUT_MS,
)
from .exceptions import ConfigurationError


class ModelsConfig:
    """
    Connection configuration.

    Example:
        # Using environment variables
        config = ModelsConfig()
        config.validate()
        connection = Connection.from_config(config)

        # Or using direct parameters
        config = ModelsConfig(mongo_uri="mongodb://localhost:27017", db_name="app")
    """

    def __init__(
        self,
        mongo_uri: str | None = None,
        db_name: str | None = None,
        server_selection_timeout_ms: int | None = None,
        app_name: str | None = None,
    ):
        """
        Initialize configuration.

        Args:
            mongo_uri: MongoDB connection URI (defaults to MONGO_URI env var)
            db_name: Database name (defaults to DB_NAME env var)
            server_selection_timeout_ms: Server selection timeout in ms
                (defaults to MONGO_SERVER_SELECTION_TIMEOUT_MS or 5000)
            app_name: Application name sent to the server
                (defaults to MONGO_APP_NAME or "mongo-models")
        """
        self.mongo_uri = mongo_uri or os.getenv("MONGO_URI", "")
        self.db_name = db_name or os.getenv("DB_NAME", "")
        self.server_selection_timeout_ms = server_selection_timeout_ms or int(
            os.getenv(
                "MONGO_SERVER_SELECTION_TIMEOUT_MS",
                str(DEFAULT_SERVER_SELECTION_TIMEOUT_MS),
            )
        )
        self.app_name = app_name or os.getenv("MONGO_APP_NAME", DEFAULT_APP_NAME)

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If required configuration is missing or invalid
        """
        if not self.mongo_uri:
            raise ConfigurationError(
                "mongo_uri is required (set MONGO_URI environment variable or pass directly)",
                config_key="mongo_uri",
            )

        if not self.db_name:
            raise ConfigurationError(
                "db_name is required (set DB_NAME environment variable or pass directly)",
                config_key="db_name",
            )

        if self.server_selection_timeout_ms < MIN_SERVER_SELECTION_TIMEOUT_MS:
            raise ConfigurationError(
                f"server_selection_timeout_ms must be >= {MIN_SERVER_SELECTION_TIMEOUT_MS}, "
                f"got {self.server_selection_timeout_ms}",
                config_key="server_selection_timeout_ms",
                config_value=self.server_selection_timeout_ms,
            )
