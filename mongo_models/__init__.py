"""
mongo-models - MongoDB models for asyncio

Per-collection model classes with CRUD verbs, advisory schema validation
and computed pagination, on top of Motor.
"""

from bson import ObjectId

from .adapters import fields_adapter, sort_adapter
from .config import ModelsConfig
from .connection import Connection
from .exceptions import (
    ConfigurationError,
    InitializationError,
    InvalidIdError,
    MongoModelsError,
    NotConnectedError,
)
from .model import MongoModel
from .options import AggregateOptions, FindOptions, MutationOptions, WriteOptions
from .pagination import ItemInfo, PagedResult, PageInfo, compute_paging, paged_find
from .results import (
    Documents,
    MutationResult,
    Raw,
    SingleDocument,
    WriteResult,
    classify,
    normalize,
)
from .validation import FieldError, Invalid, Valid, ValidationResult, validate

__version__ = "0.1.0"

__all__ = [
    # Core
    "MongoModel",
    "Connection",
    "ModelsConfig",
    "ObjectId",
    # Options
    "FindOptions",
    "MutationOptions",
    "WriteOptions",
    "AggregateOptions",
    # Pagination
    "PagedResult",
    "PageInfo",
    "ItemInfo",
    "compute_paging",
    "paged_find",
    "fields_adapter",
    "sort_adapter",
    # Results
    "Documents",
    "MutationResult",
    "WriteResult",
    "SingleDocument",
    "Raw",
    "classify",
    "normalize",
    # Validation
    "validate",
    "ValidationResult",
    "Valid",
    "Invalid",
    "FieldError",
    # Errors
    "MongoModelsError",
    "InitializationError",
    "NotConnectedError",
    "InvalidIdError",
    "ConfigurationError",
]
