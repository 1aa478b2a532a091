"""
Schema validation for model types.

A model's ``schema`` is either a pydantic model class or a JSON Schema
mapping. Validation is advisory: it is only run when asked for and
reports a mismatch as an ``Invalid`` value instead of raising.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""

    path: str
    message: str


@dataclass
class Valid:
    """Input matched the schema. ``value`` is the validated data."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass
class Invalid:
    """Input did not match the schema."""

    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return False

    @property
    def paths(self) -> list[str]:
        return [error.path for error in self.errors]


ValidationResult = Valid | Invalid


def _format_path(parts) -> str:
    return ".".join(str(part) for part in parts)


def _validate_pydantic(schema: type[BaseModel], data: Any) -> ValidationResult:
    try:
        value = schema.model_validate(data)
    except PydanticValidationError as e:
        return Invalid(
            [FieldError(_format_path(error["loc"]), error["msg"]) for error in e.errors()]
        )
    return Valid(value)


def _validate_json_schema(schema: Mapping[str, Any], data: Any) -> ValidationResult:
    try:
        Draft7Validator.check_schema(schema)
    except SchemaError as e:
        raise ConfigurationError(f"Invalid JSON schema: {e.message}") from e

    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda error: list(error.absolute_path))
    if errors:
        return Invalid(
            [FieldError(_format_path(error.absolute_path), error.message) for error in errors]
        )
    return Valid(data)


def validate(schema: Any, data: Any) -> ValidationResult:
    """
    Check ``data`` against ``schema``.

    Args:
        schema: A pydantic model class or a JSON Schema mapping
        data: The document to check

    Returns:
        Valid(value) or Invalid(errors)

    Raises:
        ConfigurationError: If no usable schema is given
    """
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return _validate_pydantic(schema, data)
    if isinstance(schema, Mapping):
        return _validate_json_schema(schema, data)
    raise ConfigurationError(
        "A schema must be a pydantic model class or a JSON Schema mapping",
        context={"schema_type": type(schema).__name__},
    )
