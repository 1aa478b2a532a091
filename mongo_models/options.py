"""
Option structs for model verbs.

Each verb takes an explicit parameter list plus one of these optional
structs instead of forwarding arbitrary driver arguments.
"""

from dataclasses import dataclass
from typing import Any

from pymongo import ReturnDocument

from .adapters import fields_adapter, sort_adapter


def _sort_spec(sort: Any) -> list[tuple[str, int]] | None:
    """Render a sort mapping (or shorthand) as the driver's key/direction list."""
    sort = sort_adapter(sort)
    if not sort:
        return None
    if isinstance(sort, dict):
        return list(sort.items())
    return list(sort)


@dataclass
class FindOptions:
    """Window and ordering for ``find``."""

    limit: int = 0
    skip: int = 0
    sort: Any = None

    def to_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.limit:
            kwargs["limit"] = self.limit
        if self.skip:
            kwargs["skip"] = self.skip
        sort = _sort_spec(self.sort)
        if sort:
            kwargs["sort"] = sort
        return kwargs


@dataclass
class MutationOptions:
    """
    Options for the find-and-modify verbs.

    ``return_original`` defaults to False, so update and replace verbs
    return the document as it is after the change. It is ignored by
    find-and-delete.
    """

    upsert: bool = False
    projection: Any = None
    sort: Any = None
    return_original: bool = False

    def to_kwargs(self, include_upsert: bool = True) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        projection = fields_adapter(self.projection)
        if projection:
            kwargs["projection"] = projection
        sort = _sort_spec(self.sort)
        if sort:
            kwargs["sort"] = sort
        if include_upsert:
            kwargs["upsert"] = self.upsert
            kwargs["return_document"] = (
                ReturnDocument.BEFORE if self.return_original else ReturnDocument.AFTER
            )
        return kwargs


@dataclass
class WriteOptions:
    """Options for update_one, update_many and replace_one."""

    upsert: bool = False

    def to_kwargs(self) -> dict[str, Any]:
        return {"upsert": self.upsert}


@dataclass
class AggregateOptions:
    """Options for aggregate."""

    allow_disk_use: bool | None = None
    batch_size: int | None = None

    def to_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.allow_disk_use is not None:
            kwargs["allowDiskUse"] = self.allow_disk_use
        if self.batch_size is not None:
            kwargs["batchSize"] = self.batch_size
        return kwargs
