"""
Model base class.

A model type is a MongoModel subclass bound to one collection and one
schema. Its class-level verbs run against the bound Connection and
return model instances.

Example:
    class User(MongoModel):
        collection = "users"
        schema = UserSchema  # pydantic model or JSON Schema mapping

    async with Connection("mongodb://localhost:27017", "app") as connection:
        User.bind(connection)
        user = await User.insert_one({"name": "Ren"})
        same = await User.find_by_id(str(user._id))
        page = await User.paged_find({}, "name", "-_id", limit=10, page=1)
"""

import logging
import time
from typing import Any, ClassVar

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import IndexModel
from pymongo.results import DeleteResult, UpdateResult

from .adapters import fields_adapter
from .connection import Connection
from .constants import ID_FIELD
from .exceptions import ConfigurationError, InvalidIdError, NotConnectedError
from .observability import log_operation
from .options import AggregateOptions, FindOptions, MutationOptions, WriteOptions
from .pagination import PagedResult, paged_find
from .results import Documents, MutationResult, WriteResult, normalize
from .validation import ValidationResult, validate

logger = logging.getLogger(__name__)


class MongoModel:
    """
    Base class for model types.

    Instances are attribute bags: every key of the source document
    becomes an attribute. A field named like a method (``validate``, ``to_dict``)
    shadows that method on the instance; the class-level forms
    (``Model.validate_input(doc)``) are unaffected.

    Class attributes:
        collection: Collection name
        schema: pydantic model class or JSON Schema mapping
        id_factory: Callable casting a caller value to the identity type
    """

    collection: ClassVar[str | None] = None
    schema: ClassVar[Any] = None
    id_factory: ClassVar[Any] = ObjectId

    _connection: ClassVar[Connection | None] = None

    def __init__(self, attrs: dict[str, Any] | None = None, **kwargs: Any) -> None:
        self.__dict__.update(attrs or {})
        self.__dict__.update(kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__dict__!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.__dict__ == other.__dict__

    # mutable and compared by value
    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        """Return the instance's fields as a document."""
        return dict(self.__dict__)

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    @classmethod
    def bind(cls, connection: Connection) -> None:
        """
        Bind this model class, and subclasses without their own binding,
        to a connection.
        """
        cls._connection = connection

    @classmethod
    def get_collection(cls) -> AsyncIOMotorCollection:
        """
        Get the bound collection handle.

        Raises:
            ConfigurationError: If the model has no collection name
            NotConnectedError: If the model is unbound or the connection closed
        """
        if not cls.collection:
            raise ConfigurationError(
                f"{cls.__name__} has no collection name",
                config_key="collection",
            )
        if cls._connection is None:
            raise NotConnectedError(
                f"{cls.__name__} is not bound to a connection. Call bind() first.",
                context={"collection": cls.collection},
            )
        return cls._connection.collection(cls.collection)

    @classmethod
    def object_id(cls, value: Any) -> Any:
        """
        Cast a caller value to the model's identity type.

        Raises:
            InvalidIdError: If the value cannot be cast
        """
        if value is None:
            raise InvalidIdError("An id is required", value=value, collection=cls.collection)
        try:
            return cls.id_factory(value)
        except (InvalidId, TypeError, ValueError) as e:
            raise InvalidIdError(
                f"Cannot cast {value!r} to {getattr(cls.id_factory, '__name__', 'id')}",
                value=value,
                collection=cls.collection,
            ) from e

    @classmethod
    def _log(cls, verb: str, start_time: float, **context: Any) -> None:
        log_operation(
            logger,
            f"{cls.collection}.{verb}",
            duration_ms=(time.time() - start_time) * 1000,
            model=cls.__name__,
            **context,
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @classmethod
    def validate_input(cls, data: Any) -> ValidationResult:
        """Check a document against the model schema."""
        if cls.schema is None:
            raise ConfigurationError(f"{cls.__name__} has no schema", config_key="schema")
        return validate(cls.schema, data)

    def validate(self) -> ValidationResult:
        """Check this instance against the model schema."""
        return type(self).validate_input(dict(self.__dict__))

    # ------------------------------------------------------------------
    # Indexes and aggregates
    # ------------------------------------------------------------------

    @classmethod
    async def create_indexes(cls, indexes: list[IndexModel | dict[str, Any]]) -> list[str]:
        """
        Create indexes on the collection.

        Args:
            indexes: IndexModel instances or ``{"key": {...}, **options}`` specs

        Returns:
            Names of the created indexes
        """
        models = []
        for index in indexes:
            if isinstance(index, IndexModel):
                models.append(index)
            else:
                spec = dict(index)
                keys = spec.pop("key")
                models.append(IndexModel(list(keys.items()), **spec))

        start_time = time.time()
        names = await cls.get_collection().create_indexes(models)
        cls._log("create_indexes", start_time, count=len(models))
        return names

    @classmethod
    async def aggregate(
        cls, pipeline: list[dict[str, Any]], options: AggregateOptions | None = None
    ) -> list[dict[str, Any]]:
        """Run an aggregation pipeline and return the raw result documents."""
        options = options or AggregateOptions()
        start_time = time.time()
        cursor = cls.get_collection().aggregate(pipeline, **options.to_kwargs())
        results = await cursor.to_list(length=None)
        cls._log("aggregate", start_time, stages=len(pipeline))
        return results

    @classmethod
    async def count(cls, filter: dict[str, Any] | None = None) -> int:
        """Count documents matching a filter."""
        start_time = time.time()
        total = await cls.get_collection().count_documents(filter or {})
        cls._log("count", start_time)
        return total

    @classmethod
    async def distinct(cls, key: str, filter: dict[str, Any] | None = None) -> list[Any]:
        """Return the distinct values of a field."""
        start_time = time.time()
        values = await cls.get_collection().distinct(key, filter or {})
        cls._log("distinct", start_time, key=key)
        return values

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @classmethod
    async def find(
        cls,
        filter: dict[str, Any] | None = None,
        projection: Any = None,
        options: FindOptions | None = None,
    ) -> list["MongoModel"]:
        """
        Find documents matching a filter.

        Args:
            filter: MongoDB filter
            projection: Projection mapping or shorthand
            options: Window and ordering

        Returns:
            List of model instances
        """
        options = options or FindOptions()
        projection = fields_adapter(projection) or None
        start_time = time.time()
        cursor = cls.get_collection().find(filter or {}, projection, **options.to_kwargs())
        documents = await cursor.to_list(length=None)
        cls._log("find", start_time, returned=len(documents))
        return normalize(cls, Documents(documents))

    @classmethod
    async def find_one(
        cls, filter: dict[str, Any] | None = None, projection: Any = None
    ) -> "MongoModel | None":
        """Find one document, or None."""
        projection = fields_adapter(projection) or None
        start_time = time.time()
        document = await cls.get_collection().find_one(filter or {}, projection)
        cls._log("find_one", start_time, found=document is not None)
        return normalize(cls, MutationResult(document))

    @classmethod
    async def find_by_id(cls, id: Any, projection: Any = None) -> "MongoModel | None":
        """
        Find a document by identity.

        Raises:
            InvalidIdError: If ``id`` cannot be cast; the driver is not called
        """
        return await cls.find_one({ID_FIELD: cls.object_id(id)}, projection)

    async def reload(self) -> "MongoModel | None":
        """
        Fetch a fresh copy of this instance from the collection.

        Raises:
            InvalidIdError: If the instance has no identity
        """
        if ID_FIELD not in self.__dict__:
            raise InvalidIdError(
                f"{type(self).__name__} instance has no {ID_FIELD}",
                value=None,
                collection=type(self).collection,
            )
        return await type(self).find_one({ID_FIELD: self.__dict__[ID_FIELD]})

    # ------------------------------------------------------------------
    # Find-and-modify
    # ------------------------------------------------------------------

    @classmethod
    async def find_one_and_update(
        cls,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: MutationOptions | None = None,
    ) -> "MongoModel | None":
        """
        Update one document and return it.

        Returns the document after the update unless
        ``options.return_original`` is set; None when nothing matched.
        """
        options = options or MutationOptions()
        start_time = time.time()
        document = await cls.get_collection().find_one_and_update(
            filter, update, **options.to_kwargs()
        )
        cls._log("find_one_and_update", start_time, found=document is not None)
        return normalize(cls, MutationResult(document))

    @classmethod
    async def find_one_and_replace(
        cls,
        filter: dict[str, Any],
        replacement: dict[str, Any],
        options: MutationOptions | None = None,
    ) -> "MongoModel | None":
        """Replace one document and return it (after replacement by default)."""
        options = options or MutationOptions()
        start_time = time.time()
        document = await cls.get_collection().find_one_and_replace(
            filter, replacement, **options.to_kwargs()
        )
        cls._log("find_one_and_replace", start_time, found=document is not None)
        return normalize(cls, MutationResult(document))

    @classmethod
    async def find_one_and_delete(
        cls, filter: dict[str, Any], options: MutationOptions | None = None
    ) -> "MongoModel | None":
        """Delete one document and return it."""
        options = options or MutationOptions()
        start_time = time.time()
        document = await cls.get_collection().find_one_and_delete(
            filter, **options.to_kwargs(include_upsert=False)
        )
        cls._log("find_one_and_delete", start_time, found=document is not None)
        return normalize(cls, MutationResult(document))

    @classmethod
    async def find_by_id_and_update(
        cls, id: Any, update: dict[str, Any], options: MutationOptions | None = None
    ) -> "MongoModel | None":
        """
        Update a document by identity and return it.

        Raises:
            InvalidIdError: If ``id`` cannot be cast; the driver is not called
        """
        return await cls.find_one_and_update({ID_FIELD: cls.object_id(id)}, update, options)

    @classmethod
    async def find_by_id_and_delete(
        cls, id: Any, options: MutationOptions | None = None
    ) -> "MongoModel | None":
        """
        Delete a document by identity and return it.

        Raises:
            InvalidIdError: If ``id`` cannot be cast; the driver is not called
        """
        return await cls.find_one_and_delete({ID_FIELD: cls.object_id(id)}, options)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @classmethod
    async def insert_one(cls, document: dict[str, Any]) -> "MongoModel":
        """
        Insert a document.

        The driver adds a generated ``_id`` to ``document`` when it has none.

        Returns:
            The inserted document as a model instance
        """
        start_time = time.time()
        result = await cls.get_collection().insert_one(document)
        cls._log("insert_one", start_time)
        document.setdefault(ID_FIELD, result.inserted_id)
        return normalize(cls, WriteResult([document]))[0]

    @classmethod
    async def insert_many(
        cls, documents: list[dict[str, Any]], ordered: bool = True
    ) -> list["MongoModel"]:
        """
        Insert several documents.

        Returns:
            The inserted documents as model instances, in input order
        """
        start_time = time.time()
        result = await cls.get_collection().insert_many(documents, ordered=ordered)
        cls._log("insert_many", start_time, count=len(documents))
        for document, inserted_id in zip(documents, result.inserted_ids):
            document.setdefault(ID_FIELD, inserted_id)
        return normalize(cls, WriteResult(list(documents)))

    @classmethod
    async def update_one(
        cls,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: WriteOptions | None = None,
    ) -> UpdateResult:
        """Update one document. Returns the driver's UpdateResult."""
        options = options or WriteOptions()
        start_time = time.time()
        result = await cls.get_collection().update_one(filter, update, **options.to_kwargs())
        cls._log("update_one", start_time, modified=result.modified_count)
        return result

    @classmethod
    async def update_many(
        cls,
        filter: dict[str, Any],
        update: dict[str, Any],
        options: WriteOptions | None = None,
    ) -> UpdateResult:
        """Update every matching document. Returns the driver's UpdateResult."""
        options = options or WriteOptions()
        start_time = time.time()
        result = await cls.get_collection().update_many(filter, update, **options.to_kwargs())
        cls._log("update_many", start_time, modified=result.modified_count)
        return result

    @classmethod
    async def replace_one(
        cls,
        filter: dict[str, Any],
        replacement: dict[str, Any],
        options: WriteOptions | None = None,
    ) -> UpdateResult:
        """Replace one document. Returns the driver's UpdateResult."""
        options = options or WriteOptions()
        start_time = time.time()
        result = await cls.get_collection().replace_one(
            filter, replacement, **options.to_kwargs()
        )
        cls._log("replace_one", start_time, modified=result.modified_count)
        return result

    @classmethod
    async def delete_one(cls, filter: dict[str, Any]) -> DeleteResult:
        """Delete one document. Returns the driver's DeleteResult."""
        start_time = time.time()
        result = await cls.get_collection().delete_one(filter)
        cls._log("delete_one", start_time, deleted=result.deleted_count)
        return result

    @classmethod
    async def delete_many(cls, filter: dict[str, Any]) -> DeleteResult:
        """Delete every matching document. Returns the driver's DeleteResult."""
        start_time = time.time()
        result = await cls.get_collection().delete_many(filter)
        cls._log("delete_many", start_time, deleted=result.deleted_count)
        return result

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    @classmethod
    async def paged_find(
        cls,
        filter: dict[str, Any] | None,
        fields: Any,
        sort: Any,
        limit: int,
        page: int,
    ) -> PagedResult:
        """Fetch one page of documents with paging metadata. See ``paged_find``."""
        return await paged_find(cls, filter, fields, sort, limit, page)

