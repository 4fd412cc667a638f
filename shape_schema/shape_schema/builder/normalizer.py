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

"""Nullability and union normalization for type signature generation.

``normalize`` rewrites nullability into an explicit ``ABSENT`` union member and
fully flattens nested unions. It returns new nodes and never touches the
schema used as the validation artifact.
"""

from dataclasses import replace
from typing import List

from ..models.schema_node import ABSENT, SchemaKind, SchemaLike, SchemaNode, is_absent, unique


def normalize(node: SchemaLike) -> SchemaLike:
    if not isinstance(node, SchemaNode) or is_absent(node):
        # references are resolved later, through the registry
        return node

    if node.kind == SchemaKind.UNION:
        return _normalize_union(node)

    if node.kind == SchemaKind.ARRAY:
        array = replace(node, items=normalize(node.items), nullable=False)
        return _with_absent(array) if node.nullable else array

    # scalars, objects and maps; object contents are opaque here
    if node.nullable:
        return _with_absent(replace(node, nullable=False))
    return node


def _normalize_union(node: SchemaNode) -> SchemaNode:
    flattened: List[SchemaLike] = []
    for member in node.one_of or ():
        normalized = normalize(member)
        if isinstance(normalized, SchemaNode) and normalized.kind == SchemaKind.UNION:
            # already flat, since normalize works bottom-up
            flattened.extend(normalized.one_of or ())
        else:
            flattened.append(normalized)

    saw_absent = any(is_absent(member) for member in flattened)
    members = list(unique(member for member in flattened if not is_absent(member)))
    if node.nullable or saw_absent:
        members.append(ABSENT)

    return replace(node, one_of=tuple(members), nullable=False)


def _with_absent(node: SchemaLike) -> SchemaNode:
    return SchemaNode(kind=SchemaKind.UNION, one_of=(node, ABSENT))


def is_flat(node: SchemaLike) -> bool:
    """True when no union member is itself a union and ABSENT appears at most once."""
    if not isinstance(node, SchemaNode) or node.kind != SchemaKind.UNION:
        return True
    members = node.one_of or ()
    if any(isinstance(member, SchemaNode) and member.kind == SchemaKind.UNION for member in members):
        return False
    return sum(1 for member in members if is_absent(member)) <= 1
