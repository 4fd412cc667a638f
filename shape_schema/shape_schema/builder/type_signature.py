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

"""Structural type signatures derived from normalized schema nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import UnresolvedDependencyError
from ..models.descriptors import ScalarKind
from ..models.options import ObjectOptions, Representation
from ..models.schema_node import SchemaKind, SchemaLike, SchemaNode, SchemaReference
from ..registry import ReferenceRegistry
from .normalizer import normalize


@dataclass(frozen=True)
class PrimitiveType:
    kind: ScalarKind


@dataclass(frozen=True)
class NoneType:
    pass


@dataclass(frozen=True)
class SequenceType:
    item: "TypeExpression"


@dataclass(frozen=True)
class MappingType:
    # keys are strings and may or may not be present
    value: "TypeExpression"


@dataclass(frozen=True)
class UnionType:
    members: Tuple["TypeExpression", ...]


@dataclass(frozen=True)
class NamedType:
    name: str


@dataclass(frozen=True)
class FieldType:
    name: str
    type: "TypeExpression"
    required: bool = True


@dataclass(frozen=True)
class RecordType:
    name: Optional[str]
    fields: Tuple[FieldType, ...]
    representation: Representation = Representation.FIXED_RECORD
    extra: Optional["TypeExpression"] = None

    def field(self, name: str) -> Optional[FieldType]:
        for field_type in self.fields:
            if field_type.name == name:
                return field_type
        return None


TypeExpression = Union[PrimitiveType, NoneType, SequenceType, MappingType, UnionType, NamedType, RecordType]

_SCALAR_SCHEMA_KINDS = {
    SchemaKind.INTEGER: ScalarKind.INTEGER,
    SchemaKind.NUMBER: ScalarKind.NUMBER,
    SchemaKind.STRING: ScalarKind.STRING,
    SchemaKind.BOOLEAN: ScalarKind.BOOLEAN,
}


def generate(node: SchemaLike, registry: ReferenceRegistry) -> TypeExpression:
    """Convert a normalized schema node into a type expression."""
    if isinstance(node, SchemaReference):
        unit = registry.resolve(node.ref)
        if unit is None:
            raise UnresolvedDependencyError(f"Reference '{node.ref}' is not recorded in {registry!r}")
        return NamedType(unit)

    if node.kind == SchemaKind.NULL:
        return NoneType()

    if node.kind in _SCALAR_SCHEMA_KINDS:
        return PrimitiveType(_SCALAR_SCHEMA_KINDS[node.kind])

    if node.kind == SchemaKind.ARRAY:
        return SequenceType(generate(node.items, registry))

    if node.kind == SchemaKind.UNION:
        members = tuple(generate(member, registry) for member in node.one_of or ())
        if len(members) == 1:
            return members[0]
        return UnionType(members)

    if node.kind == SchemaKind.OBJECT:
        if node.is_map:
            return MappingType(generate(normalize(node.additional_properties), registry))
        # an inlined object shape, named by its declared name
        representation = node.representation or Representation.FIXED_RECORD
        return _record(node, registry, registry.inlined_name(node.title), representation)

    raise TypeError(f"Internal error: unknown schema node kind {node.kind!r}")


def generate_object(
    node: SchemaNode,
    registry: ReferenceRegistry,
    options: Optional[ObjectOptions] = None,
    *,
    name: Optional[str] = None,
    parent: Any = None,
) -> TypeExpression:
    """Type expression of a top-level object definition.

    Args:
        node: The object's (un-normalized) schema node
        registry: The definition's reference registry
        options: Object options; the node's own representation takes precedence
        name: Name of the record type, defaults to the schema title
        parent: The ShapeDefinition this object extends; field types it already
            generated are reused for every property the child did not change

    Returns:
        A RecordType, or a union of it with NoneType when the object is nullable.
    """
    options = options or ObjectOptions()
    representation = node.representation or options.representation

    reused: Dict[str, TypeExpression] = {}
    if parent is not None:
        parent_record = record_of(parent.type_signature)
        parent_properties = parent.schema.properties or {}
        for property_name, property_node in (node.properties or {}).items():
            inherited = parent_record.field(property_name) if parent_record is not None else None
            if inherited is not None and parent_properties.get(property_name) == property_node:
                reused[property_name] = inherited.type

    record = _record(node, registry, name or node.title, representation, reused)
    if node.nullable:
        return UnionType((record, NoneType()))
    return record


def _record(
    node: SchemaNode,
    registry: ReferenceRegistry,
    name: Optional[str],
    representation: Representation,
    reused: Optional[Dict[str, TypeExpression]] = None,
) -> RecordType:
    reused = reused or {}
    required = set(node.required or ())
    fields: List[FieldType] = []
    for property_name, property_node in (node.properties or {}).items():
        if property_name in reused:
            field_expression = reused[property_name]
        else:
            field_expression = generate(normalize(property_node), registry)
        fields.append(FieldType(property_name, field_expression, property_name in required))

    extra = None
    if node.additional_properties is not None:
        extra = generate(normalize(node.additional_properties), registry)
    return RecordType(name, tuple(fields), representation, extra)


def record_of(expression: Optional[TypeExpression]) -> Optional[RecordType]:
    """The record inside an object signature, unwrapping a nullable union."""
    if isinstance(expression, RecordType):
        return expression
    if isinstance(expression, UnionType):
        for member in expression.members:
            if isinstance(member, RecordType):
                return member
    return None


_PRIMITIVE_ANNOTATIONS = {
    ScalarKind.INTEGER: "int",
    ScalarKind.NUMBER: "float",
    ScalarKind.STRING: "str",
    ScalarKind.BOOLEAN: "bool",
}


def render_annotation(expression: TypeExpression) -> str:
    """Render a type expression as a Python annotation string."""
    if isinstance(expression, PrimitiveType):
        return _PRIMITIVE_ANNOTATIONS[expression.kind]
    if isinstance(expression, NoneType):
        return "None"
    if isinstance(expression, SequenceType):
        return f"list[{render_annotation(expression.item)}]"
    if isinstance(expression, MappingType):
        return f"dict[str, {render_annotation(expression.value)}]"
    if isinstance(expression, UnionType):
        return " | ".join(render_annotation(member) for member in expression.members)
    if isinstance(expression, NamedType):
        return expression.name
    if isinstance(expression, RecordType):
        return expression.name or "dict[str, Any]"
    raise TypeError(f"Internal error: unknown type expression {expression!r}")
