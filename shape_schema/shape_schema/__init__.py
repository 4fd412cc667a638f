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

"""Schema definition and structural type derivation for declarative data shapes.

Define shapes in a :class:`ShapeCatalog`; each definition yields a validation
schema (:class:`SchemaNode`) and a type signature derived from it.
"""

# Format version written into exported definitions documents.
DEFINITIONS_FORMAT_VERSION = "0.3.0"

from .definition import ShapeCatalog, ShapeDefinition
from .exceptions import (
    DefaultTypeMismatchError,
    DocumentError,
    DuplicatePropertyError,
    DuplicateShapeError,
    FormatVersionError,
    InvalidConstraintError,
    InvalidDocumentError,
    ShapeDefinitionError,
    ShapeSchemaError,
    StructCompatibilityError,
    UnresolvedDependencyError,
)
from .models import (
    BOOLEAN,
    INTEGER,
    NUMBER,
    STRING,
    ArrayOf,
    MapOf,
    NamedShape,
    ObjectOptions,
    PropertyOptions,
    PropertySpec,
    Representation,
    Scalar,
    ScalarKind,
    SchemaKind,
    SchemaNode,
    SchemaReference,
    UnionOf,
)
from .registry import ReferenceRegistry

__all__ = [
    "DEFINITIONS_FORMAT_VERSION",
    "ShapeCatalog",
    "ShapeDefinition",
    "ReferenceRegistry",
    "DefaultTypeMismatchError",
    "DocumentError",
    "DuplicatePropertyError",
    "DuplicateShapeError",
    "FormatVersionError",
    "InvalidConstraintError",
    "InvalidDocumentError",
    "ShapeDefinitionError",
    "ShapeSchemaError",
    "StructCompatibilityError",
    "UnresolvedDependencyError",
    "BOOLEAN",
    "INTEGER",
    "NUMBER",
    "STRING",
    "ArrayOf",
    "MapOf",
    "NamedShape",
    "ObjectOptions",
    "PropertyOptions",
    "PropertySpec",
    "Representation",
    "Scalar",
    "ScalarKind",
    "SchemaKind",
    "SchemaNode",
    "SchemaReference",
    "UnionOf",
]
