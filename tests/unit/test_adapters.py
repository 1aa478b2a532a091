"""
Unit tests for projection and sort shorthand.
"""

from mongo_models.adapters import fields_adapter, sort_adapter


class TestFieldsAdapter:
    """Test fields_adapter."""

    def test_shorthand(self):
        """Test include/exclude shorthand."""
        fields = fields_adapter("one -two three")

        assert fields == {"one": True, "two": False, "three": True}
        assert list(fields) == ["one", "two", "three"]

    def test_empty_string(self):
        """Test that an empty string gives an empty mapping."""
        assert fields_adapter("") == {}

    def test_extra_whitespace(self):
        """Test that repeated whitespace yields no empty fields."""
        assert fields_adapter("  name \t -secret\n") == {"name": True, "secret": False}

    def test_mapping_passthrough(self):
        """Test that structured input is returned unchanged."""
        fields = {"name": True}
        assert fields_adapter(fields) is fields

    def test_none_passthrough(self):
        assert fields_adapter(None) is None


class TestSortAdapter:
    """Test sort_adapter."""

    def test_shorthand(self):
        """Test ascending/descending shorthand."""
        assert sort_adapter("one -two three") == {"one": 1, "two": -1, "three": 1}

    def test_empty_string(self):
        """Test that an empty string gives an empty mapping."""
        assert sort_adapter("") == {}

    def test_mapping_passthrough(self):
        """Test that structured input is returned unchanged."""
        sort = {"_id": -1}
        assert sort_adapter(sort) is sort
