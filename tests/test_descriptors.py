"""Tests for type descriptors and options."""

import pytest

from shape_schema.models.descriptors import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ArrayOf,
    MapOf,
    NamedShape,
    Scalar,
    ScalarKind,
    UnionOf,
    describe,
    is_string,
    to_descriptor,
)
from shape_schema.models.options import (
    UNSET,
    ObjectOptions,
    PropertyOptions,
    PropertySpec,
    Representation,
    is_set,
)


class TestToDescriptor:
    """Test shorthand coercion into descriptors."""

    def test_descriptor_passes_through(self):
        """Test descriptors are returned unchanged."""
        descriptor = ArrayOf(STRING)
        assert to_descriptor(descriptor) is descriptor

    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("string", STRING),
            ("str", STRING),
            ("integer", INTEGER),
            ("int", INTEGER),
            ("number", NUMBER),
            ("float", NUMBER),
            ("boolean", BOOLEAN),
            ("Bool", BOOLEAN),
        ],
    )
    def test_scalar_aliases(self, alias, expected):
        """Test scalar names and their aliases."""
        assert to_descriptor(alias) == expected

    def test_containers(self):
        """Test array and map tuples, nested."""
        assert to_descriptor(("array", "string")) == ArrayOf(STRING)
        assert to_descriptor(("map", ("array", "integer"))) == MapOf(ArrayOf(INTEGER))

    def test_list_is_union(self):
        """Test a list reads as a union in declaration order."""
        assert to_descriptor(["number", "string"]) == UnionOf((NUMBER, STRING))

    def test_defined_shape_becomes_reference(self, people_catalog):
        """Test a ShapeDefinition reads as a named-shape reference."""
        assert to_descriptor(people_catalog.get("Person")) == NamedShape("Person")

    @pytest.mark.parametrize("value", ["decimal", ("set", "string"), [], 42, None])
    def test_rejects_unknown(self, value):
        """Test values that are not shorthands."""
        with pytest.raises(TypeError):
            to_descriptor(value)


class TestDescribe:
    """Test human-readable descriptor names."""

    def test_describe(self):
        descriptor = UnionOf((ArrayOf(STRING), MapOf(INTEGER), NamedShape("ID")))
        assert describe(descriptor) == "array of string | map of integer | ID"

    def test_is_string(self):
        assert is_string(Scalar(ScalarKind.STRING))
        assert not is_string(ArrayOf(STRING))


class TestPropertyOptions:
    """Test property option defaults and helpers."""

    def test_unset_is_falsy_singleton(self):
        """Test the UNSET marker."""
        assert not UNSET
        assert repr(UNSET) == "UNSET"
        assert not is_set(UNSET)
        assert is_set(None)

    def test_defaults(self):
        """Test a bare options object."""
        options = PropertyOptions()
        assert options.required is None
        assert options.is_required
        assert not options.nullable
        assert not options.has_default
        assert not options.is_inline

    def test_none_default_is_set(self):
        """Test None counts as a declared default."""
        assert PropertyOptions(default=None).has_default

    def test_enum_becomes_tuple(self):
        assert PropertyOptions(enum=["a", "b"]).enum == ("a", "b")

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(TypeError, match="Unknown property options"):
            PropertyOptions.from_mapping({"nullable": True, "struct": False})

    def test_clear_for_nested(self):
        """Test container-level options are dropped for element types."""
        options = PropertyOptions(
            nullable=True, default=[], description="d", enum=("a",), pattern="p", example=["x"]
        )
        nested = options.clear_for_nested()
        assert not nested.nullable
        assert not nested.has_default
        assert nested.description is None
        assert nested.enum is None
        assert nested.pattern == "p"
        assert nested.example == ["x"]

    def test_with_object_defaults(self):
        """Test object defaults only fill options left unset."""
        filled = PropertyOptions().with_object_defaults(required=False, inline=True)
        assert filled.required is False
        assert filled.inline is True

        kept = PropertyOptions(required=True, inline=False).with_object_defaults(required=False, inline=True)
        assert kept.required is True
        assert kept.inline is False


class TestObjectOptions:
    """Test object option parsing."""

    def test_defaults(self):
        options = ObjectOptions()
        assert options.required
        assert options.is_fixed_record
        assert options.extends is None

    def test_representation_from_string(self):
        options = ObjectOptions.from_mapping({"representation": "open-map"})
        assert options.representation == Representation.OPEN_MAP
        assert not options.is_fixed_record

    def test_invalid_representation(self):
        with pytest.raises(ValueError):
            ObjectOptions.from_mapping({"representation": "struct"})

    def test_rejects_unknown_keys(self):
        with pytest.raises(TypeError, match="Unknown object options"):
            ObjectOptions.from_mapping({"struct?": True})


class TestPropertySpec:
    """Test property declaration coercion."""

    def test_two_tuple(self):
        spec = PropertySpec.coerce(("name", "string"))
        assert spec == PropertySpec("name", STRING, PropertyOptions())

    def test_three_tuple(self):
        spec = PropertySpec.coerce(("tags", ("array", "string"), {"nullable": True}))
        assert spec.descriptor == ArrayOf(STRING)
        assert spec.options.nullable

    def test_spec_descriptor_is_coerced(self):
        assert PropertySpec.coerce(PropertySpec("age", "int")).descriptor == INTEGER

    def test_rejects_other_values(self):
        with pytest.raises(TypeError):
            PropertySpec.coerce("name")
