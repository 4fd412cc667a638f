# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Type descriptors: the closed set of shapes a property can take.

Descriptors are pure data. The assembler, the rule set and the type signature
generator all dispatch over exactly these five variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple, Union


class ScalarKind(str, Enum):
    """Primitive value kinds."""

    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Scalar:
    kind: ScalarKind


@dataclass(frozen=True)
class ArrayOf:
    item: "TypeDescriptor"


@dataclass(frozen=True)
class MapOf:
    value: "TypeDescriptor"


@dataclass(frozen=True)
class UnionOf:
    members: Tuple["TypeDescriptor", ...]


@dataclass(frozen=True)
class NamedShape:
    # Declared name of the referenced shape in its catalog
    identifier: str


TypeDescriptor = Union[Scalar, ArrayOf, MapOf, UnionOf, NamedShape]

DESCRIPTOR_TYPES = (Scalar, ArrayOf, MapOf, UnionOf, NamedShape)

INTEGER = Scalar(ScalarKind.INTEGER)
NUMBER = Scalar(ScalarKind.NUMBER)
STRING = Scalar(ScalarKind.STRING)
BOOLEAN = Scalar(ScalarKind.BOOLEAN)

_SCALAR_ALIASES = {
    "integer": ScalarKind.INTEGER,
    "int": ScalarKind.INTEGER,
    "number": ScalarKind.NUMBER,
    "float": ScalarKind.NUMBER,
    "string": ScalarKind.STRING,
    "str": ScalarKind.STRING,
    "boolean": ScalarKind.BOOLEAN,
    "bool": ScalarKind.BOOLEAN,
}


def is_string(descriptor: TypeDescriptor) -> bool:
    return isinstance(descriptor, Scalar) and descriptor.kind == ScalarKind.STRING


def to_descriptor(value: Any) -> TypeDescriptor:
    """Coerce a shorthand type into a descriptor.

    Accepted shorthands:
      * a descriptor instance (returned unchanged)
      * a scalar name: ``"string"``, ``"integer"``, ``"number"``, ``"boolean"``
        (plus the ``str``/``int``/``float``/``bool`` aliases)
      * ``("array", item)`` and ``("map", value)`` tuples
      * a list of shorthands, read as a union
      * a defined shape (anything carrying ``name`` and ``schema``), read as a
        named-shape reference

    Raises:
        TypeError: If the value is not a recognised shorthand.
    """
    if isinstance(value, DESCRIPTOR_TYPES):
        return value

    if isinstance(value, str):
        kind = _SCALAR_ALIASES.get(value.strip().lower())
        if kind is None:
            raise TypeError(f"Unknown scalar type '{value}'. Valid types: {sorted(_SCALAR_ALIASES)}")
        return Scalar(kind)

    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str):
        container, inner = value
        if container == "array":
            return ArrayOf(to_descriptor(inner))
        if container == "map":
            return MapOf(to_descriptor(inner))
        raise TypeError(f"Unknown container type '{container}'. Expected 'array' or 'map'")

    if isinstance(value, list):
        if not value:
            raise TypeError("A union needs at least one member type")
        return UnionOf(tuple(to_descriptor(member) for member in value))

    if hasattr(value, "name") and hasattr(value, "schema"):
        return NamedShape(value.name)

    raise TypeError(f"Cannot interpret {value!r} as a type descriptor")


def describe(descriptor: TypeDescriptor) -> str:
    """Short human-readable form used in error messages."""
    if isinstance(descriptor, Scalar):
        return descriptor.kind.value
    if isinstance(descriptor, ArrayOf):
        return f"array of {describe(descriptor.item)}"
    if isinstance(descriptor, MapOf):
        return f"map of {describe(descriptor.value)}"
    if isinstance(descriptor, UnionOf):
        return " | ".join(describe(member) for member in descriptor.members)
    if isinstance(descriptor, NamedShape):
        return descriptor.identifier
    return repr(descriptor)
