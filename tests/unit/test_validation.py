"""
Unit tests for schema validation.
"""

import pytest
from pydantic import BaseModel

from mongo_models.exceptions import ConfigurationError
from mongo_models.validation import FieldError, Invalid, Valid, validate


class Person(BaseModel):
    name: str
    age: int = 0


PERSON_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "integer", "minimum": 0},
    },
    "required": ["name"],
}


class TestPydanticSchema:
    """Test validation against pydantic models."""

    def test_valid(self):
        result = validate(Person, {"name": "Stimpy", "age": 3})

        assert isinstance(result, Valid)
        assert result.ok
        assert result.value == Person(name="Stimpy", age=3)

    def test_missing_field(self):
        result = validate(Person, {"age": 3})

        assert isinstance(result, Invalid)
        assert not result.ok
        assert result.paths == ["name"]

    def test_several_errors(self):
        result = validate(Person, {"name": 1, "age": "old"})

        assert sorted(result.paths) == ["age", "name"]
        assert all(isinstance(error, FieldError) for error in result.errors)


class TestJsonSchema:
    """Test validation against JSON Schema mappings."""

    def test_valid(self):
        document = {"name": "Ren", "age": 4}
        result = validate(PERSON_JSON_SCHEMA, document)

        assert isinstance(result, Valid)
        assert result.value is document

    def test_invalid_field(self):
        result = validate(PERSON_JSON_SCHEMA, {"name": "Ren", "age": -1})

        assert isinstance(result, Invalid)
        assert result.paths == ["age"]

    def test_missing_required_reports_root(self):
        result = validate(PERSON_JSON_SCHEMA, {"age": 1})

        assert result.paths == [""]
        assert "'name' is a required property" in result.errors[0].message

    def test_broken_schema(self):
        with pytest.raises(ConfigurationError, match="Invalid JSON schema"):
            validate({"type": "not-a-type"}, {})


class TestUnsupportedSchema:
    def test_unsupported_schema(self):
        with pytest.raises(ConfigurationError):
            validate("name: str", {})
