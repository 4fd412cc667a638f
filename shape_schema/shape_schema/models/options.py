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

"""Property and object level options."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .descriptors import to_descriptor


class _Unset:
    """Marker for an option that was not given (distinct from ``None``)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    return value is not UNSET


class Representation(str, Enum):
    """Runtime representation chosen for an object shape."""

    FIXED_RECORD = "fixed-record"
    OPEN_MAP = "open-map"


@dataclass(frozen=True)
class PropertyOptions:
    # None means "inherit from the enclosing object"
    required: Optional[bool] = None
    nullable: bool = False
    default: Any = UNSET
    description: Optional[str] = None
    example: Any = UNSET
    enum: Optional[Tuple[Any, ...]] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    inline: Optional[bool] = None

    def __post_init__(self):
        if self.enum is not None and not isinstance(self.enum, tuple):
            object.__setattr__(self, "enum", tuple(self.enum))

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "PropertyOptions":
        """Build options from a plain mapping, rejecting unknown keys."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise TypeError(f"Unknown property options {unknown}. Valid options: {sorted(known)}")
        return cls(**dict(options))

    @property
    def has_default(self) -> bool:
        return is_set(self.default)

    @property
    def is_required(self) -> bool:
        return True if self.required is None else self.required

    @property
    def is_inline(self) -> bool:
        return bool(self.inline)

    def clear_for_nested(self) -> "PropertyOptions":
        """Drop the options that describe the container rather than its element type."""
        return replace(self, nullable=False, default=UNSET, description=None, enum=None)

    def with_object_defaults(self, *, required: bool, inline: bool) -> "PropertyOptions":
        """Fill ``required``/``inline`` from the enclosing object where not overridden."""
        return replace(
            self,
            required=required if self.required is None else self.required,
            inline=inline if self.inline is None else self.inline,
        )


@dataclass(frozen=True)
class ObjectOptions:
    required: bool = True
    inline: bool = False
    nullable: bool = False
    representation: Representation = Representation.FIXED_RECORD
    description: Optional[str] = None
    example: Any = UNSET
    # A ShapeDefinition, or the declared name of one in the same catalog
    extends: Any = None

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "ObjectOptions":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise TypeError(f"Unknown object options {unknown}. Valid options: {sorted(known)}")
        values: Dict[str, Any] = dict(options)
        if "representation" in values:
            values["representation"] = Representation(values["representation"])
        return cls(**values)

    @property
    def is_fixed_record(self) -> bool:
        return self.representation == Representation.FIXED_RECORD


@dataclass(frozen=True)
class PropertySpec:
    """One declared property: its name, descriptor and options."""

    name: str
    descriptor: Any
    options: PropertyOptions = PropertyOptions()

    @classmethod
    def coerce(cls, value: Any) -> "PropertySpec":
        """Accept a PropertySpec or a ``(name, type)`` / ``(name, type, options)`` tuple."""
        if isinstance(value, cls):
            return replace(value, descriptor=to_descriptor(value.descriptor))
        if isinstance(value, tuple) and len(value) in (2, 3):
            name, descriptor = value[0], value[1]
            options = value[2] if len(value) == 3 else None
            return cls(name, to_descriptor(descriptor), PropertyOptions.from_mapping(options))
        raise TypeError(f"Cannot interpret {value!r} as a property declaration")
