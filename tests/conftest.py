"""Shared catalog fixtures."""

import pytest

from shape_schema import NamedShape, ShapeCatalog

UUID_PATTERN = r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"
UUID_EXAMPLE = "193202fc-ab55-4824-8ec8-5bef1201d9eb"


@pytest.fixture
def catalog():
    """Empty catalog."""
    return ShapeCatalog()


@pytest.fixture
def people_catalog():
    """Catalog with ID, Person, University and Student shapes."""
    catalog = ShapeCatalog()
    identifier = catalog.define_type(
        "ID",
        "string",
        nullable=True,
        format="uuid",
        pattern=UUID_PATTERN,
        example=UUID_EXAMPLE,
    )
    catalog.define_object(
        "Person",
        [
            ("id", identifier, {"required": True}),
            ("additional_id", identifier, {"required": False, "nullable": True}),
            ("name", "string", {"required": True}),
            ("age", "integer"),
            ("height", "number"),
        ],
        required=False,
        representation="open-map",
    )
    catalog.define_object(
        "University",
        [
            ("name", "string"),
            ("is_technical", "boolean", {"default": False}),
            ("programs", ("array", "string"), {"description": "A list of programs"}),
        ],
        additional_properties=(("array", [identifier, "integer"]), {"nullable": True}),
        description="A university",
        representation="open-map",
    )
    catalog.define_object(
        "Student",
        [
            ("degree_type", "string", {"enum": ["bachelor's", "master's"]}),
            ("university", NamedShape("University"), {"inline": True}),
            ("grades", ("array", ["number", "string"]), {"required": False, "nullable": True}),
        ],
        extends="Person",
        representation="open-map",
    )
    return catalog


@pytest.fixture
def employee_catalog():
    """Catalog where Employee extends a fixed-record Person."""
    catalog = ShapeCatalog()
    catalog.define_object("Person", [("name", "string")])
    catalog.define_object("Employee", [("level", "string")], extends="Person")
    return catalog


@pytest.fixture
def node_catalog():
    """Catalog with a self-referential linked list node."""
    catalog = ShapeCatalog()
    catalog.define_object(
        "Node",
        [
            ("value", "integer"),
            ("next", NamedShape("Node"), {"nullable": True}),
        ],
    )
    return catalog
