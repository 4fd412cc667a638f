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

"""Assembled schema nodes, the validation artifact of a definition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from .descriptors import ScalarKind
from .options import UNSET, Representation, is_set


REFERENCE_PREFIX = "#/definitions/"


class SchemaKind(str, Enum):
    OBJECT = "object"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ARRAY = "array"
    UNION = "union"
    # Only produced by normalization: the "no value" union member
    NULL = "null"

    @classmethod
    def from_scalar(cls, kind: ScalarKind) -> "SchemaKind":
        return cls(kind.value)

    @property
    def is_scalar(self) -> bool:
        return self in _SCALAR_KINDS


_SCALAR_KINDS = frozenset({SchemaKind.INTEGER, SchemaKind.NUMBER, SchemaKind.STRING, SchemaKind.BOOLEAN})


@dataclass(frozen=True)
class SchemaReference:
    """Pointer-by-name to another shape's schema."""

    ref: str

    @classmethod
    def to_title(cls, title: str) -> "SchemaReference":
        return cls(REFERENCE_PREFIX + title)

    @property
    def title(self) -> str:
        return self.ref.rsplit("/", 1)[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {"$ref": self.ref}


@dataclass(frozen=True)
class SchemaNode:
    kind: SchemaKind
    title: Optional[str] = None
    nullable: bool = False
    required: Optional[Tuple[str, ...]] = None
    properties: Optional[Dict[str, "SchemaLike"]] = None
    items: Optional["SchemaLike"] = None
    additional_properties: Optional["SchemaLike"] = None
    one_of: Optional[Tuple["SchemaLike", ...]] = None
    default: Any = UNSET
    enum: Optional[Tuple[str, ...]] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    description: Optional[str] = None
    example: Any = UNSET
    representation: Optional[Representation] = None

    @property
    def is_object(self) -> bool:
        return self.kind == SchemaKind.OBJECT

    @property
    def is_map(self) -> bool:
        """An object node with no fixed properties and typed additional properties."""
        return (
            self.kind == SchemaKind.OBJECT
            and not self.properties
            and self.additional_properties is not None
            and self.representation is None
        )

    @property
    def is_union(self) -> bool:
        return self.kind == SchemaKind.UNION

    @property
    def is_absent(self) -> bool:
        return self.kind == SchemaKind.NULL

    @property
    def has_default(self) -> bool:
        return is_set(self.default)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into a JSON-schema style mapping."""
        if self.kind == SchemaKind.NULL:
            return {"type": "null"}

        data: Dict[str, Any] = {}
        if self.title is not None:
            data["title"] = self.title
        if self.kind == SchemaKind.UNION:
            data["oneOf"] = [member.to_dict() for member in self.one_of or ()]
        else:
            data["type"] = self.kind.value
        data["nullable"] = self.nullable

        if self.kind == SchemaKind.OBJECT:
            data["properties"] = {name: node.to_dict() for name, node in (self.properties or {}).items()}
            if self.required:
                data["required"] = list(self.required)
            if self.additional_properties is not None:
                data["additionalProperties"] = self.additional_properties.to_dict()
            if self.representation is not None:
                data["x-representation"] = self.representation.value
        if self.items is not None:
            data["items"] = self.items.to_dict()

        if self.has_default:
            data["default"] = self.default
        if self.enum is not None:
            data["enum"] = list(self.enum)
        if self.pattern is not None:
            data["pattern"] = self.pattern
        if self.format is not None:
            data["format"] = self.format
        if self.description is not None:
            data["description"] = self.description
        if is_set(self.example):
            data["example"] = self.example
        return data


SchemaLike = Union[SchemaNode, SchemaReference]

ABSENT = SchemaNode(kind=SchemaKind.NULL)


def is_absent(node: Any) -> bool:
    return isinstance(node, SchemaNode) and node.kind == SchemaKind.NULL


def unique(nodes) -> Tuple[SchemaLike, ...]:
    """Order-preserving dedup by structural equality."""
    result = []
    for node in nodes:
        if node not in result:
            result.append(node)
    return tuple(result)
