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

"""Schema assembly: descriptors and options in, schema nodes out.

Assembly keeps the declared structure. Nested unions stay nested here;
flattening belongs to the normalizer and only feeds type signatures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from ..exceptions import DuplicatePropertyError, StructCompatibilityError, UnresolvedDependencyError
from ..models.descriptors import ArrayOf, MapOf, NamedShape, Scalar, TypeDescriptor, UnionOf
from ..models.options import ObjectOptions, PropertyOptions, PropertySpec
from ..models.schema_node import SchemaKind, SchemaLike, SchemaNode, SchemaReference, unique
from ..registry import ReferenceRegistry
from ..resolvers.inheritance_resolver import InheritanceResolver
from ..rules import validate_property_options

logger = logging.getLogger(__name__)

AdditionalProperties = Tuple[TypeDescriptor, PropertyOptions]


@dataclass
class AssemblyContext:
    """State threaded through one top-level definition's assembly pass."""

    name: str
    title: str
    registry: ReferenceRegistry
    # Anything with ``__contains__`` and ``get(name)``; usually a ShapeCatalog
    catalog: Any = None

    def lookup(self, identifier: str) -> Any:
        """Return the defined shape for an identifier, or None for the shape being defined.

        Raises:
            UnresolvedDependencyError: If no such shape has been defined yet.
        """
        if identifier == self.name:
            return None
        if self.catalog is None or identifier not in self.catalog:
            available = sorted(self.catalog) if self.catalog is not None else []
            raise UnresolvedDependencyError(
                f"Shape '{identifier}' referenced from '{self.name}' is not defined. Available shapes: {available}"
            )
        return self.catalog.get(identifier)


def assemble(name: str, descriptor: TypeDescriptor, options: PropertyOptions, context: AssemblyContext) -> SchemaLike:
    """Translate one descriptor and its options into a schema node."""
    validate_property_options(name, descriptor, options, context.lookup)

    if isinstance(descriptor, Scalar):
        return SchemaNode(
            kind=SchemaKind.from_scalar(descriptor.kind),
            nullable=options.nullable,
            default=options.default,
            enum=options.enum,
            pattern=options.pattern,
            format=options.format,
            description=options.description,
            example=options.example,
        )

    if isinstance(descriptor, ArrayOf):
        items = assemble(name, descriptor.item, options.clear_for_nested(), context)
        return SchemaNode(
            kind=SchemaKind.ARRAY,
            items=items,
            nullable=options.nullable,
            description=options.description,
            default=options.default,
        )

    if isinstance(descriptor, MapOf):
        values = assemble(name, descriptor.value, options.clear_for_nested(), context)
        return SchemaNode(
            kind=SchemaKind.OBJECT,
            properties={},
            additional_properties=values,
            nullable=options.nullable,
            description=options.description,
            default=options.default,
        )

    if isinstance(descriptor, UnionOf):
        nested_options = options.clear_for_nested()
        members = unique(assemble(name, member, nested_options, context) for member in descriptor.members)
        return SchemaNode(
            kind=SchemaKind.UNION,
            one_of=members,
            nullable=options.nullable,
            description=options.description,
            default=options.default,
        )

    if isinstance(descriptor, NamedShape):
        return _assemble_named_shape(name, descriptor, options, context)

    raise TypeError(f"Internal error: unknown type descriptor {descriptor!r} for '{name}'")


def _assemble_named_shape(
    name: str, descriptor: NamedShape, options: PropertyOptions, context: AssemblyContext
) -> SchemaLike:
    target = context.lookup(descriptor.identifier)

    if options.is_inline:
        if target is None:
            raise UnresolvedDependencyError(f"{name} cannot inline '{descriptor.identifier}' into its own definition")
        node: SchemaLike = target.schema
        context.registry.record_inline(target.title, target.name)
        # references inside the inlined schema must stay resolvable from here
        context.registry.merge(target.registry)
    else:
        if target is None:
            title, unit = context.title, context.name
        else:
            title, unit = target.title, target.name
        node = SchemaReference.to_title(title)
        context.registry.record(node.ref, unit)

    # A bare reference cannot carry a default or nullability itself
    if options.has_default:
        return SchemaNode(kind=SchemaKind.UNION, one_of=(node,), default=options.default, nullable=options.nullable)
    if options.nullable:
        return SchemaNode(kind=SchemaKind.UNION, one_of=(node,), nullable=True)
    return node


def propagate_object_defaults(properties: Sequence[PropertySpec], options: ObjectOptions) -> List[PropertySpec]:
    """Apply the object's ``required``/``inline`` defaults to properties that don't override them."""
    return [
        PropertySpec(
            spec.name,
            spec.descriptor,
            spec.options.with_object_defaults(required=options.required, inline=options.inline),
        )
        for spec in properties
    ]


def check_unique_names(title: str, properties: Sequence[PropertySpec]) -> None:
    seen = set()
    for spec in properties:
        if spec.name in seen:
            raise DuplicatePropertyError(f"the property {spec.name!r} is already set in '{title}'")
        seen.add(spec.name)


def validate_object_options(
    title: str,
    properties: Sequence[PropertySpec],
    additional_properties: Optional[AdditionalProperties],
    options: ObjectOptions,
) -> None:
    """Reject fixed-record objects whose fields could be left without a value."""
    if not options.is_fixed_record:
        return

    if additional_properties is not None:
        raise StructCompatibilityError(f"'{title}': a fixed record cannot be defined with additional_properties")

    for spec in properties:
        property_options = spec.options
        if not property_options.is_required and not property_options.nullable and not property_options.has_default:
            raise StructCompatibilityError(
                f"'{title}': a fixed record cannot have property '{spec.name}' which is not required, "
                "not nullable and has no default value"
            )


def assemble_object(
    name: str,
    properties: Sequence[PropertySpec],
    additional_properties: Optional[AdditionalProperties],
    options: ObjectOptions,
    context: AssemblyContext,
    parent: Any = None,
) -> SchemaNode:
    """Assemble an object shape.

    Args:
        name: Declared name of the object shape
        properties: Property declarations in declaration order
        additional_properties: Optional (descriptor, options) for extra keys
        options: Object level options
        context: Assembly context of the current definition
        parent: Finalized ShapeDefinition this object extends, if any

    Returns:
        The object's schema node, with inherited properties merged in.
    """
    check_unique_names(context.title, properties)
    effective = propagate_object_defaults(properties, options)

    resolver = InheritanceResolver()
    inherited: Sequence[PropertySpec] = parent.property_specs if parent is not None else ()
    validate_object_options(
        context.title,
        resolver.merge_property_specs(inherited, effective),
        additional_properties,
        options,
    )

    property_nodes = {spec.name: assemble(spec.name, spec.descriptor, spec.options, context) for spec in effective}
    required = tuple(spec.name for spec in effective if spec.options.is_required)

    extra: Optional[SchemaLike] = None
    if additional_properties is not None:
        extra_descriptor, extra_options = additional_properties
        extra = assemble("additional_properties", extra_descriptor, extra_options, context)

    node = SchemaNode(
        kind=SchemaKind.OBJECT,
        title=context.title,
        nullable=options.nullable,
        required=required,
        properties=property_nodes,
        additional_properties=extra,
        description=options.description,
        example=options.example,
        representation=options.representation,
    )

    if parent is not None:
        logger.debug(f"Extending '{name}' from '{parent.name}'")
        node = resolver.extend(node, parent.schema)
        context.registry.merge(parent.registry)
    return node
