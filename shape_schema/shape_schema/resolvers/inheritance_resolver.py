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

import logging
from dataclasses import replace
from typing import Callable, List, Sequence, Tuple, TypeVar

from ..exceptions import UnresolvedDependencyError
from ..models.options import PropertySpec
from ..models.schema_node import SchemaKind, SchemaLike, SchemaNode

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InheritanceResolver:
    """Merges a finalized parent object schema into a child object schema.

    Only properties and required-ness travel across the extension boundary;
    the parent's nullability, representation and additional properties do not.
    """

    def _merge_list(self, base_list: Sequence[T], override_list: Sequence[T], key: Callable[[T], str]) -> List[T]:
        """
        Merge override_list into base_list.
        Items of override_list whose key matches an item of base_list replace it in place;
        the others are appended in order.
        """
        merged_list = list(base_list or [])
        if not override_list:
            return merged_list

        base_map = {key(item): i for i, item in enumerate(merged_list)}
        for item in override_list:
            item_key = key(item)
            if item_key in base_map:
                logger.debug(f"Property '{item_key}' overrides the inherited declaration")
                merged_list[base_map[item_key]] = item
            else:
                merged_list.append(item)
        return merged_list

    def extend(self, child: SchemaNode, parent: SchemaNode) -> SchemaNode:
        """Return the child schema with the parent's properties and required names merged in.

        Child properties win on name collisions. Required names keep parent order:
        an inherited name stays unless the child redeclares it as optional, and
        the child's own required names follow.
        """
        if not isinstance(parent, SchemaNode) or parent.kind != SchemaKind.OBJECT:
            raise UnresolvedDependencyError(
                f"'{child.title}' can only extend an assembled object schema, got {parent!r}"
            )

        child_properties = child.properties or {}
        merged_items: List[Tuple[str, SchemaLike]] = self._merge_list(
            list((parent.properties or {}).items()),
            list(child_properties.items()),
            key=lambda item: item[0],
        )

        child_required = tuple(child.required or ())
        inherited_required = [
            name for name in (parent.required or ()) if name not in child_properties or name in child_required
        ]
        required = tuple(inherited_required) + tuple(name for name in child_required if name not in inherited_required)

        return replace(child, properties=dict(merged_items), required=required)

    def merge_property_specs(
        self, parent_specs: Sequence[PropertySpec], child_specs: Sequence[PropertySpec]
    ) -> Tuple[PropertySpec, ...]:
        """Merge the declarations behind the schemas, with the same child-wins rule."""
        return tuple(self._merge_list(parent_specs, child_specs, key=lambda spec: spec.name))
