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

"""Definition-time validation rules for property options.

These checks look only at a (descriptor, options) pair. They never inspect
data instances; a default value is the only value they type-check.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from .exceptions import DefaultTypeMismatchError, InvalidConstraintError
from .models.descriptors import (
    ArrayOf,
    MapOf,
    NamedShape,
    Scalar,
    ScalarKind,
    TypeDescriptor,
    UnionOf,
    describe,
    is_string,
)
from .models.options import PropertyOptions

logger = logging.getLogger(__name__)


# Returns the defined shape for an identifier, or None for the shape being defined.
ShapeLookup = Callable[[str], Any]


def validate_property_options(
    name: str,
    descriptor: TypeDescriptor,
    options: PropertyOptions,
    lookup: Optional[ShapeLookup] = None,
) -> None:
    """Run every rule against one property.

    Raises:
        InvalidConstraintError: enum, pattern or format used on a non-string type,
            or enum values that are not strings.
        DefaultTypeMismatchError: the default does not conform to the descriptor.
    """
    validate_constraints(name, descriptor, options)
    validate_default(name, descriptor, options, lookup)


def validate_constraints(name: str, descriptor: TypeDescriptor, options: PropertyOptions) -> None:
    if options.enum is not None:
        if not is_string(descriptor):
            raise InvalidConstraintError(
                f"{name} has an enum option, but it can be provided only for string type "
                f"(got {describe(descriptor)})"
            )
        if any(not isinstance(item, str) for item in options.enum):
            raise InvalidConstraintError(
                f"{name} has values of invalid types in the enum option. They should be strings"
            )

    for option_name in ("pattern", "format"):
        if getattr(options, option_name) is not None and not is_string(descriptor):
            raise InvalidConstraintError(
                f"{name} has a {option_name} option, but it can be provided only for string type "
                f"(got {describe(descriptor)})"
            )


def validate_default(
    name: str,
    descriptor: TypeDescriptor,
    options: PropertyOptions,
    lookup: Optional[ShapeLookup] = None,
) -> None:
    if not options.has_default:
        return
    if not conforms(options.default, descriptor, lookup):
        raise DefaultTypeMismatchError(
            f"default value of {name} does not match its type: {options.default!r} is not {describe(descriptor)}"
        )


def conforms(value: Any, descriptor: TypeDescriptor, lookup: Optional[ShapeLookup] = None) -> bool:
    """Check that a value has the type described by a descriptor."""
    if isinstance(descriptor, Scalar):
        return _conforms_to_scalar(value, descriptor.kind)

    if isinstance(descriptor, ArrayOf):
        if not isinstance(value, (list, tuple)):
            return False
        return all(conforms(item, descriptor.item, lookup) for item in value)

    if isinstance(descriptor, MapOf):
        if not isinstance(value, dict):
            return False
        return all(isinstance(key, str) and conforms(item, descriptor.value, lookup) for key, item in value.items())

    if isinstance(descriptor, UnionOf):
        matching = [member for member in descriptor.members if conforms(value, member, lookup)]
        if len(matching) > 1 and any(isinstance(member, NamedShape) for member in matching):
            logger.warning(
                f"Default {value!r} matches several members of {describe(descriptor)}: "
                f"{[describe(member) for member in matching]}"
            )
        return bool(matching)

    if isinstance(descriptor, NamedShape):
        if lookup is None:
            return False
        return _conforms_to_shape(value, lookup(descriptor.identifier), lookup)

    return False


def _conforms_to_scalar(value: Any, kind: ScalarKind) -> bool:
    # bool is a subclass of int, so it has to be tested first
    if isinstance(value, bool):
        return kind == ScalarKind.BOOLEAN
    if isinstance(value, int):
        return kind in (ScalarKind.INTEGER, ScalarKind.NUMBER)
    if isinstance(value, float):
        return kind == ScalarKind.NUMBER
    if isinstance(value, str):
        return kind == ScalarKind.STRING
    return False


def _conforms_to_shape(value: Any, shape: Any, lookup: ShapeLookup) -> bool:
    # The shape currently being defined: only its mapping form can be checked.
    if shape is None:
        return isinstance(value, dict) and all(isinstance(key, str) for key in value)

    if value is None and shape.options.nullable:
        return True
    if not shape.is_object:
        return conforms(value, shape.descriptor, lookup)

    if not isinstance(value, dict) or not all(isinstance(key, str) for key in value):
        return False

    specs = {spec.name: spec for spec in shape.property_specs}
    for key, item in value.items():
        spec = specs.get(key)
        if spec is None:
            extra = shape.additional_properties
            if extra is None:
                return False
            extra_descriptor, extra_options = extra
            if item is None and extra_options.nullable:
                continue
            if not conforms(item, extra_descriptor, lookup):
                return False
            continue
        if item is None and spec.options.nullable:
            continue
        if not conforms(item, spec.descriptor, lookup):
            return False

    for spec in shape.property_specs:
        if spec.name in value:
            continue
        if spec.options.is_required and not spec.options.nullable and not spec.options.has_default:
            return False
    return True
