"""
Result normalization.

Model verbs hand the normalizer a tagged driver result and get model
instances back. ``classify`` builds the tag for loosely typed values by
probing their shape, in a fixed order: list, mutation result, write
result, identity-bearing document, anything else.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .constants import ID_FIELD, MUTATION_VALUE_FIELD, WRITE_OPS_FIELD


@dataclass
class Documents:
    """A list of raw documents, e.g. from ``find``."""

    documents: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class MutationResult:
    """
    A find-and-modify response.

    ``has_value`` is False when the response carried no ``value`` field at
    all; ``raw`` then holds the original response for the remaining rules.
    """

    value: dict[str, Any] | None = None
    has_value: bool = True
    raw: Any = None


@dataclass
class WriteResult:
    """An insert response carrying the inserted documents."""

    inserted: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class SingleDocument:
    """One raw document carrying an ``_id``."""

    document: dict[str, Any]


@dataclass
class Raw:
    """Anything the normalizer should hand back untouched."""

    value: Any = None


DriverResult = Documents | MutationResult | WriteResult | SingleDocument | Raw


def classify(value: Any) -> DriverResult:
    """
    Tag a loosely typed driver value by its shape.

    A mapping with ``value`` but no ``_id`` is a mutation result before it
    can be an identity-bearing document.
    """
    if isinstance(value, list):
        return Documents(value)

    if isinstance(value, Mapping):
        if MUTATION_VALUE_FIELD in value and ID_FIELD not in value:
            return MutationResult(value[MUTATION_VALUE_FIELD])
        if WRITE_OPS_FIELD in value:
            return WriteResult(list(value[WRITE_OPS_FIELD]))
        if ID_FIELD in value:
            return SingleDocument(value)

    return Raw(value)


def normalize(model_cls: type, result: Any, error: BaseException | None = None) -> Any:
    """
    Wrap a driver result into instances of ``model_cls``.

    Args:
        model_cls: Class to construct from each document
        result: A tagged result, or an untagged value to classify first
        error: Error produced by the driver call, if any

    Returns:
        A list of instances, one instance, None for a missed
        find-and-modify, or the untouched value for anything else

    Raises:
        The given ``error`` unchanged, before looking at ``result``
    """
    if error is not None:
        raise error

    if not isinstance(result, (Documents, MutationResult, WriteResult, SingleDocument, Raw)):
        result = classify(result)

    if isinstance(result, Documents):
        return [model_cls(document) for document in result.documents]

    if isinstance(result, MutationResult):
        if not result.has_value:
            # no "value" field: the response is judged on its other fields
            return normalize(model_cls, _without_mutation_tag(result.raw))
        if not isinstance(result.value, Mapping):
            return None
        return model_cls(result.value)

    if isinstance(result, WriteResult):
        return [model_cls(document) for document in result.inserted]

    if isinstance(result, SingleDocument):
        return model_cls(result.document)

    return result.value


def _without_mutation_tag(raw: Any) -> DriverResult:
    if isinstance(raw, Mapping):
        if WRITE_OPS_FIELD in raw:
            return WriteResult(list(raw[WRITE_OPS_FIELD]))
        if ID_FIELD in raw:
            return SingleDocument(raw)
    return Raw(raw)
