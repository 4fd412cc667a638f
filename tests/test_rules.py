"""Tests for definition-time option rules."""

import logging

import pytest

from shape_schema.exceptions import DefaultTypeMismatchError, InvalidConstraintError
from shape_schema.models.descriptors import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ArrayOf,
    MapOf,
    NamedShape,
    UnionOf,
)
from shape_schema.models.options import PropertyOptions
from shape_schema.rules import conforms, validate_property_options


class TestConstraints:
    """Test enum, pattern and format checks."""

    def test_enum_on_string(self):
        validate_property_options("kind", STRING, PropertyOptions(enum=("a", "b")))

    def test_enum_on_non_string(self):
        with pytest.raises(InvalidConstraintError, match="only for string type"):
            validate_property_options("count", INTEGER, PropertyOptions(enum=("1",)))

    def test_enum_on_array_of_strings(self):
        """Test enum applies to the declared type itself, not its elements."""
        with pytest.raises(InvalidConstraintError):
            validate_property_options("tags", ArrayOf(STRING), PropertyOptions(enum=("a",)))

    def test_enum_values_must_be_strings(self):
        with pytest.raises(InvalidConstraintError, match="invalid types in the enum"):
            validate_property_options("kind", STRING, PropertyOptions(enum=("a", 1)))

    @pytest.mark.parametrize("option", ["pattern", "format"])
    def test_string_only_options(self, option):
        validate_property_options("id", STRING, PropertyOptions(**{option: "x"}))
        with pytest.raises(InvalidConstraintError, match=option):
            validate_property_options("id", NUMBER, PropertyOptions(**{option: "x"}))


class TestScalarConformance:
    """Test default conformance for scalars."""

    @pytest.mark.parametrize(
        "value, descriptor, expected",
        [
            (1, INTEGER, True),
            (1, NUMBER, True),
            (1.5, NUMBER, True),
            (1.5, INTEGER, False),
            ("1", INTEGER, False),
            (True, BOOLEAN, True),
            (True, INTEGER, False),
            (False, NUMBER, False),
            ("text", STRING, True),
            (None, STRING, False),
        ],
    )
    def test_scalars(self, value, descriptor, expected):
        assert conforms(value, descriptor) is expected


class TestContainerConformance:
    """Test default conformance for arrays, maps and unions."""

    def test_array(self):
        assert conforms([], ArrayOf(STRING))
        assert conforms(("a", "b"), ArrayOf(STRING))
        assert not conforms(["a", 1], ArrayOf(STRING))
        assert not conforms("ab", ArrayOf(STRING))

    def test_map(self):
        assert conforms({"a": 1, "b": 2.5}, MapOf(NUMBER))
        assert not conforms({1: 1}, MapOf(NUMBER))
        assert not conforms({"a": "1"}, MapOf(NUMBER))
        assert not conforms([("a", 1)], MapOf(NUMBER))

    def test_union(self):
        descriptor = UnionOf((INTEGER, ArrayOf(STRING)))
        assert conforms(3, descriptor)
        assert conforms(["x"], descriptor)
        assert not conforms("x", descriptor)

    def test_named_shape_without_lookup(self):
        assert not conforms({}, NamedShape("Person"))


class TestNamedShapeConformance:
    """Test defaults checked against a referenced shape."""

    def test_object_shape(self, people_catalog):
        lookup = people_catalog.get
        assert conforms({"id": "x", "name": "Ada"}, NamedShape("Person"), lookup)
        assert conforms({"id": None, "name": "Ada", "age": 36}, NamedShape("Person"), lookup)

    def test_object_shape_missing_required_key(self, people_catalog):
        assert not conforms({"id": "x"}, NamedShape("Person"), people_catalog.get)

    def test_object_shape_unknown_key(self, people_catalog):
        assert not conforms({"id": "x", "name": "Ada", "nickname": "A"}, NamedShape("Person"), people_catalog.get)

    def test_object_shape_wrong_value(self, people_catalog):
        assert not conforms({"id": "x", "name": "Ada", "age": "36"}, NamedShape("Person"), people_catalog.get)

    def test_additional_properties(self, people_catalog):
        value = {"name": "MIT", "is_technical": True, "programs": [], "ids": ["x", 1], "other": None}
        assert conforms(value, NamedShape("University"), people_catalog.get)
        assert not conforms({**value, "ids": [1.5]}, NamedShape("University"), people_catalog.get)

    def test_defaulted_keys_may_be_omitted(self, people_catalog):
        value = {"name": "MIT", "programs": ["cs"]}
        assert conforms(value, NamedShape("University"), people_catalog.get)

    def test_type_shape(self, people_catalog):
        assert conforms("193202fc", NamedShape("ID"), people_catalog.get)
        assert not conforms(5, NamedShape("ID"), people_catalog.get)

    def test_shape_being_defined(self):
        """Test only a string-keyed mapping is required for a self reference."""
        lookup = lambda identifier: None  # noqa: E731
        assert conforms({"anything": 1}, NamedShape("Node"), lookup)
        assert not conforms([1], NamedShape("Node"), lookup)


class TestDefaultValidation:
    """Test default mismatches are reported."""

    def test_mismatch(self):
        with pytest.raises(DefaultTypeMismatchError, match="default value of age"):
            validate_property_options("age", INTEGER, PropertyOptions(default="ten"))

    def test_none_default_needs_a_nullable_type(self):
        with pytest.raises(DefaultTypeMismatchError):
            validate_property_options("age", INTEGER, PropertyOptions(default=None, nullable=True))

    def test_matching_default(self):
        validate_property_options("tags", ArrayOf(STRING), PropertyOptions(default=["a"]))

    def test_ambiguous_union_default_is_flagged(self, catalog, caplog):
        """Test a default matching a named shape and another member logs a warning."""
        catalog.define_type("Labels", ("map", "string"))
        descriptor = UnionOf((NamedShape("Labels"), MapOf(STRING)))
        with caplog.at_level(logging.WARNING, logger="shape_schema.rules"):
            validate_property_options("labels", descriptor, PropertyOptions(default={"a": "b"}), catalog.get)
        assert "matches several members" in caplog.text

    def test_unambiguous_union_default_is_quiet(self, caplog):
        with caplog.at_level(logging.WARNING, logger="shape_schema.rules"):
            validate_property_options("value", UnionOf((INTEGER, STRING)), PropertyOptions(default="a"))
        assert caplog.text == ""
