"""
Pytest configuration and shared fixtures for mongo-models tests.

This module provides:
- Mock Motor client, database and collection fixtures
- Model classes bound to a mocked connection
- Test data factories
"""

from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel

from mongo_models import Connection, MongoModel

# ============================================================================
# MOCK MONGODB FIXTURES
# ============================================================================


def make_cursor(documents: List[Dict[str, Any]]) -> MagicMock:
    """Create a mock Motor cursor whose to_list() returns ``documents``."""
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=documents)
    return cursor


@pytest.fixture
def cursor_factory():
    """Provide make_cursor to tests that stub find() or aggregate() results."""
    return make_cursor


@pytest.fixture
def mock_mongo_collection() -> MagicMock:
    """Create a mock Motor collection."""
    collection = MagicMock(spec=AsyncIOMotorCollection)
    collection.name = "submodels"
    # find() and aggregate() are synchronous in Motor and return cursors
    collection.find = MagicMock(return_value=make_cursor([]))
    collection.aggregate = MagicMock(return_value=make_cursor([]))
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_replace = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.insert_many = AsyncMock(
        return_value=MagicMock(inserted_ids=[ObjectId(), ObjectId()])
    )
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.update_many = AsyncMock(return_value=MagicMock(modified_count=2))
    collection.replace_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=2))
    collection.count_documents = AsyncMock(return_value=0)
    collection.distinct = AsyncMock(return_value=[])
    collection.create_indexes = AsyncMock(return_value=["username_1"])
    return collection


@pytest.fixture
def mock_mongo_client(mock_mongo_collection: MagicMock) -> MagicMock:
    """Create a mock Motor client whose databases hand out the mock collection."""
    client = MagicMock()
    client.admin = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})

    database = MagicMock()
    database.__getitem__.return_value = mock_mongo_collection
    client.__getitem__.return_value = database
    return client


@pytest.fixture
def connection_config() -> Dict[str, Any]:
    """Provide default configuration for Connection."""
    return {
        "mongo_uri": "mongodb://localhost:27017",
        "db_name": "test_db",
    }


@pytest.fixture
def mock_connection(mock_mongo_collection: MagicMock) -> MagicMock:
    """Create an open connection stand-in returning the mock collection."""
    connection = MagicMock(spec=Connection)
    connection.collection.return_value = mock_mongo_collection
    return connection


# ============================================================================
# MODEL FIXTURES
# ============================================================================


class NameSchema(BaseModel):
    name: str


@pytest.fixture
def sub_model(mock_connection: MagicMock) -> type:
    """A fresh model class bound to the mock connection."""

    class SubModel(MongoModel):
        collection = "submodels"
        schema = NameSchema

    SubModel.bind(mock_connection)
    return SubModel


@pytest.fixture
def unbound_model() -> type:
    """A model class that was never bound."""

    class Unbound(MongoModel):
        collection = "unbound"

    return Unbound


# ============================================================================
# TEST DATA FACTORIES
# ============================================================================


@pytest.fixture
def sample_documents() -> List[Dict[str, Any]]:
    """Provide three stored documents."""
    return [
        {"_id": ObjectId(), "name": "Ren"},
        {"_id": ObjectId(), "name": "Stimpy"},
        {"_id": ObjectId(), "name": "Yak"},
    ]
