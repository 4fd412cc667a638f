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

"""Shape definitions and the catalog they are defined in.

A ``ShapeCatalog`` is the arena of shapes already defined, indexed by their
declared names. Each ``define_object``/``define_type`` call is one top-level
definition: it builds a fresh reference registry, assembles the validation
schema, then normalizes it and derives the type signature.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .builder.assembler import AdditionalProperties, AssemblyContext, assemble, assemble_object, propagate_object_defaults
from .builder.normalizer import normalize
from .builder.type_signature import TypeExpression, generate, generate_object, render_annotation
from .exceptions import DuplicateShapeError, ShapeDefinitionError, UnresolvedDependencyError
from .models.descriptors import NamedShape, TypeDescriptor, to_descriptor
from .models.options import ObjectOptions, PropertyOptions, PropertySpec, Representation
from .models.schema_node import SchemaKind, SchemaNode, SchemaReference
from .registry import ReferenceRegistry
from .resolvers.inheritance_resolver import InheritanceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ShapeDefinition:
    """Both artifacts of one definition, plus the declarations they came from."""

    name: str
    title: str
    schema: SchemaNode
    registry: ReferenceRegistry
    type_signature: TypeExpression
    options: Any
    # Type shapes only
    descriptor: Optional[TypeDescriptor] = None
    # Object shapes only: effective declarations, inherited ones included
    property_specs: Tuple[PropertySpec, ...] = ()
    additional_properties: Optional[AdditionalProperties] = None
    parent: Optional["ShapeDefinition"] = None

    @property
    def is_object(self) -> bool:
        return self.descriptor is None

    @property
    def representation(self) -> Optional[Representation]:
        return self.schema.representation

    @property
    def required(self) -> Tuple[str, ...]:
        return tuple(self.schema.required or ())

    def defaults(self) -> Dict[str, Any]:
        """Property name to declared default, ``None`` where no default is declared."""
        return {
            spec.name: spec.options.default if spec.options.has_default else None
            for spec in self.property_specs
        }

    def enforced_keys(self) -> Tuple[str, ...]:
        """Properties that need a value at construction time: not nullable and no default."""
        return tuple(
            spec.name
            for spec in self.property_specs
            if not spec.options.nullable and not spec.options.has_default
        )

    def annotation(self) -> str:
        return render_annotation(self.type_signature)

    def to_dict(self) -> Dict[str, Any]:
        return self.schema.to_dict()

    def __repr__(self) -> str:
        kind = "object" if self.is_object else "type"
        return f"ShapeDefinition({kind} {self.name!r}, title={self.title!r})"


class ShapeCatalog:
    """Collection of defined shapes with lookup by declared name."""

    def __init__(self):
        self._shapes: Dict[str, ShapeDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._shapes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._shapes))

    def __len__(self) -> int:
        return len(self._shapes)

    def get(self, name: str) -> ShapeDefinition:
        """Get a shape by name.

        Raises:
            UnresolvedDependencyError: If the shape has not been defined yet.
        """
        shape = self._shapes.get(name)
        if shape is None:
            available = list(self._shapes.keys())
            raise UnresolvedDependencyError(f"Shape '{name}' not found. Available shapes: {available}")
        return shape

    def definitions(self) -> List[ShapeDefinition]:
        """All definitions, in definition order."""
        return list(self._shapes.values())

    def define_object(
        self,
        name: str,
        properties: Iterable[Any] = (),
        *,
        title: Optional[str] = None,
        additional_properties: Any = None,
        **object_options: Any,
    ) -> ShapeDefinition:
        """Define an object shape.

        Args:
            name: Declared name, used by NamedShape references and ``extends``
            properties: PropertySpec values or ``(name, type[, options])`` tuples
            title: Schema title, defaults to ``name``
            additional_properties: A type, or a ``(type, options)`` pair
            **object_options: ObjectOptions fields (required, inline, nullable,
                representation, description, example, extends)

        Returns:
            The registered ShapeDefinition.
        """
        self._check_new_name(name)
        title = title or name
        options = ObjectOptions.from_mapping(object_options)
        specs = [PropertySpec.coerce(spec) for spec in properties]
        extra = _coerce_additional_properties(additional_properties)
        parent = self._resolve_parent(name, options.extends)

        registry = ReferenceRegistry(owner=name)
        context = AssemblyContext(name=name, title=title, registry=registry, catalog=self)
        try:
            schema = assemble_object(name, specs, extra, options, context, parent=parent)
        except ShapeDefinitionError as e:
            logger.debug(f"Failed to define object shape '{name}': {e}")
            raise
        registry.seal()

        effective = propagate_object_defaults(specs, options)
        if parent is not None:
            effective = InheritanceResolver().merge_property_specs(parent.property_specs, effective)

        signature = generate_object(schema, registry, options, name=name, parent=parent)
        definition = ShapeDefinition(
            name=name,
            title=title,
            schema=schema,
            registry=registry,
            type_signature=signature,
            options=options,
            property_specs=tuple(effective),
            additional_properties=extra,
            parent=parent,
        )
        return self._register(definition)

    def define_type(
        self,
        name: str,
        descriptor: Any,
        *,
        title: Optional[str] = None,
        **property_options: Any,
    ) -> ShapeDefinition:
        """Define a non-object shape (an enumerated string, a union, an alias...)."""
        self._check_new_name(name)
        title = title or name
        descriptor = to_descriptor(descriptor)
        options = PropertyOptions.from_mapping(property_options)

        registry = ReferenceRegistry(owner=name)
        context = AssemblyContext(name=name, title=title, registry=registry, catalog=self)
        try:
            node = assemble(name, descriptor, options, context)
        except ShapeDefinitionError as e:
            logger.debug(f"Failed to define type shape '{name}': {e}")
            raise
        registry.seal()

        if isinstance(node, SchemaReference) or (isinstance(descriptor, NamedShape) and not node.is_union):
            # a reference cannot carry a title, and an inlined schema keeps its own
            node = SchemaNode(kind=SchemaKind.UNION, one_of=(node,))
        schema = replace(node, title=title)

        definition = ShapeDefinition(
            name=name,
            title=title,
            schema=schema,
            registry=registry,
            type_signature=generate(normalize(schema), registry),
            options=options,
            descriptor=descriptor,
        )
        return self._register(definition)

    def _check_new_name(self, name: str) -> None:
        if not name or not isinstance(name, str):
            raise ShapeDefinitionError(f"Shape name must be a non-empty string, got: {name!r}")
        if name in self._shapes:
            raise DuplicateShapeError(f"Shape '{name}' is already defined in this catalog")

    def _resolve_parent(self, name: str, extends: Any) -> Optional[ShapeDefinition]:
        if extends is None:
            return None
        if isinstance(extends, str):
            if extends == name:
                raise UnresolvedDependencyError(f"Shape '{name}' cannot extend itself")
            parent = self.get(extends)
        elif isinstance(extends, ShapeDefinition):
            parent = extends
        else:
            raise UnresolvedDependencyError(f"Shape '{name}' extends {extends!r}, which is not a defined shape")

        if not parent.is_object:
            raise UnresolvedDependencyError(
                f"Shape '{name}' extends '{parent.name}', which is not an object shape"
            )
        return parent

    def _register(self, definition: ShapeDefinition) -> ShapeDefinition:
        self._shapes[definition.name] = definition
        logger.debug(
            f"Defined shape '{definition.name}' (title={definition.title!r}, "
            f"references={sorted(definition.registry)})"
        )
        return definition


def _coerce_additional_properties(value: Any) -> Optional[AdditionalProperties]:
    if value is None:
        return None
    if (
        isinstance(value, tuple)
        and len(value) == 2
        and (value[1] is None or isinstance(value[1], (dict, PropertyOptions)))
    ):
        return to_descriptor(value[0]), PropertyOptions.from_mapping(value[1])
    return to_descriptor(value), PropertyOptions()
