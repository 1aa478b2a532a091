"""
Custom exceptions for mongo-models.

Driver errors (``pymongo.errors.*``) are never wrapped by model verbs;
these types cover the failures the layer itself detects.
"""

from typing import Any, Dict, Optional


class MongoModelsError(RuntimeError):
    """
    Base exception for mongo-models errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (collection,
                 operation, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class InitializationError(MongoModelsError):
    """
    Raised when a connection cannot be established.

    Attributes:
        message: Error message
        mongo_uri: MongoDB connection URI (if available)
        db_name: Database name (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        mongo_uri: Optional[str] = None,
        db_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if mongo_uri:
            context["mongo_uri"] = mongo_uri
        if db_name:
            context["db_name"] = db_name
        super().__init__(message, context=context)
        self.mongo_uri = mongo_uri
        self.db_name = db_name


class NotConnectedError(MongoModelsError):
    """Raised when a model verb runs without an open, bound connection."""


class InvalidIdError(MongoModelsError, ValueError):
    """
    Raised when a value cannot be cast to the model's identity type.

    Attributes:
        value: The rejected value
        collection: Collection the lookup targeted (if available)
    """

    def __init__(
        self,
        message: str,
        value: Any = None,
        collection: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        context["value"] = repr(value)
        if collection:
            context["collection"] = collection
        super().__init__(message, context=context)
        self.value = value
        self.collection = collection


class ConfigurationError(MongoModelsError):
    """
    Raised when configuration is invalid or missing.

    Attributes:
        message: Error message
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
        context: Additional context information
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value
