"""Data model of the shape schema engine.

Descriptors describe what a property may hold, options configure how it is
assembled, and schema nodes are the assembled result.
"""

from .descriptors import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ArrayOf,
    MapOf,
    NamedShape,
    Scalar,
    ScalarKind,
    TypeDescriptor,
    UnionOf,
    to_descriptor,
)
from .options import UNSET, ObjectOptions, PropertyOptions, PropertySpec, Representation, is_set
from .schema_node import ABSENT, REFERENCE_PREFIX, SchemaKind, SchemaLike, SchemaNode, SchemaReference, is_absent

__all__ = [
    "BOOLEAN",
    "INTEGER",
    "NUMBER",
    "STRING",
    "ArrayOf",
    "MapOf",
    "NamedShape",
    "Scalar",
    "ScalarKind",
    "TypeDescriptor",
    "UnionOf",
    "to_descriptor",
    "UNSET",
    "ObjectOptions",
    "PropertyOptions",
    "PropertySpec",
    "Representation",
    "is_set",
    "ABSENT",
    "REFERENCE_PREFIX",
    "SchemaKind",
    "SchemaLike",
    "SchemaNode",
    "SchemaReference",
    "is_absent",
]
