"""Tests for rendered type stubs."""

import importlib
import logging
import typing

import pytest
from jinja2 import UndefinedError

from shape_schema import NamedShape
from shape_schema.file_io import TemplateRenderer, build_stub_shapes, render_type_stubs, write_type_stubs


@pytest.fixture
def people_stubs(people_catalog):
    return render_type_stubs(people_catalog)


class TestStubShapes:
    """Test the per-shape stub models."""

    def test_kinds(self, people_catalog):
        shapes = {shape.name: shape for shape in build_stub_shapes(people_catalog)}
        assert shapes["ID"].kind == "alias"
        assert shapes["Person"].kind == "typed_dict"
        assert shapes["Student"].kind == "typed_dict"

    def test_fixed_record_defaults(self, catalog):
        catalog.define_object(
            "Pet",
            [
                ("name", "string"),
                ("nickname", "string", {"nullable": True}),
                ("tags", ("array", "string"), {"default": ["good"]}),
                ("legs", "integer", {"default": 4}),
            ],
        )
        (pet,) = build_stub_shapes(catalog)
        assert pet.kind == "dataclass"
        defaults = {stub_field.name: stub_field.default for stub_field in pet.fields}
        assert defaults == {
            "name": None,
            "nickname": "None",
            "tags": "field(default_factory=lambda: ['good'])",
            "legs": "4",
        }

    def test_non_identifier_names(self, catalog, caplog):
        catalog.define_object("Header", [("content-type", "string"), ("class", "string")])
        with caplog.at_level(logging.WARNING):
            (header,) = build_stub_shapes(catalog)
        assert header.kind == "typed_dict"
        assert header.functional
        assert "not Python identifiers" in caplog.text


class TestRenderStubs:
    """Test the rendered module."""

    def test_compiles(self, people_stubs, node_catalog):
        compile(people_stubs, "people_stubs.py", "exec")
        compile(render_type_stubs(node_catalog), "node_stubs.py", "exec")

    def test_alias(self, people_stubs):
        assert 'ID: TypeAlias = "str | None"' in people_stubs

    def test_typed_dict(self, people_stubs):
        assert "class Person(TypedDict):" in people_stubs
        assert "    id: ID\n" in people_stubs
        assert "    additional_id: NotRequired[ID | None]\n" in people_stubs
        assert "    age: NotRequired[int]\n" in people_stubs

    def test_extra_keys_and_description(self, people_stubs):
        assert '    """A university"""' in people_stubs
        assert "    # additional keys: dict[str, list[ID | int] | None]" in people_stubs

    def test_inlined_and_inherited_fields(self, people_stubs):
        student = people_stubs.split("class Student(TypedDict):", 1)[1]
        assert "    name: str\n" in student
        assert "    university: University\n" in student
        assert "    grades: NotRequired[list[float | str] | None]\n" in student

    def test_dataclass(self, node_catalog):
        stubs = render_type_stubs(node_catalog)
        assert "@dataclass(kw_only=True)\nclass Node:\n" in stubs
        assert "    value: int\n" in stubs
        assert "    next: Node | None = None\n" in stubs

    def test_empty_record(self, catalog):
        catalog.define_object("Empty", [])
        stubs = render_type_stubs(catalog)
        assert "class Empty:\n    pass\n" in stubs
        compile(stubs, "empty_stubs.py", "exec")

    def test_functional_form(self, catalog):
        catalog.define_object("Header", [("content-type", "string")], representation="open-map")
        stubs = render_type_stubs(catalog)
        assert 'Header = TypedDict(\n    "Header",' in stubs
        assert '        "content-type": str,' in stubs
        compile(stubs, "header_stubs.py", "exec")

    def test_inlined_shape_annotations_resolve(self, catalog, tmp_path, monkeypatch):
        """Test inlined and referenced uses of a retitled shape name the same class."""
        catalog.define_object("Addr", [("street", "string")], title="Address")
        catalog.define_object(
            "House",
            [("home", NamedShape("Addr"), {"inline": True}), ("other", NamedShape("Addr"))],
        )
        write_type_stubs(str(tmp_path / "house_stubs.py"), catalog)
        monkeypatch.syspath_prepend(str(tmp_path))
        module = importlib.import_module("house_stubs")

        hints = typing.get_type_hints(module.House)
        assert hints["home"] is module.Addr
        assert hints["other"] is module.Addr

    def test_type_shape_over_inlined_object(self, people_catalog):
        people_catalog.define_type("Owner", NamedShape("Person"), inline=True)
        assert 'Owner: TypeAlias = "Person"' in render_type_stubs(people_catalog)

    def test_write(self, people_catalog, tmp_path):
        path = tmp_path / "generated" / "people.py"
        write_type_stubs(str(path), people_catalog)
        assert path.read_text() == render_type_stubs(people_catalog)


class TestTemplateRenderer:
    """Test the Jinja2 renderer."""

    def test_custom_template_dir(self, tmp_path):
        (tmp_path / "names.txt.jinja2").write_text("{% for name in names %}{{ name | tojson }}\n{% endfor %}")
        renderer = TemplateRenderer(str(tmp_path))
        assert renderer.render_template("names.txt.jinja2", names=["a", "b-c"]) == '"a"\n"b-c"\n'

    def test_missing_variable(self, tmp_path):
        (tmp_path / "strict.jinja2").write_text("{{ missing }}")
        with pytest.raises(UndefinedError):
            TemplateRenderer(str(tmp_path)).render_template("strict.jinja2")
