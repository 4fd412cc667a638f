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

"""Custom exceptions for the shape schema engine."""


class ShapeSchemaError(Exception):
    """Base exception for shape-schema related errors."""
    pass


class ShapeDefinitionError(ShapeSchemaError):
    """Exception raised when a shape cannot be defined."""
    pass


class DuplicatePropertyError(ShapeDefinitionError):
    """Exception raised when a property is declared twice within one object shape."""
    pass


class DuplicateShapeError(ShapeDefinitionError):
    """Exception raised when a shape name is defined twice in one catalog."""
    pass


class InvalidConstraintError(ShapeDefinitionError):
    """Exception raised for enum, pattern or format options on an unsupported type."""
    pass


class DefaultTypeMismatchError(ShapeDefinitionError):
    """Exception raised when a default value does not match its property type."""
    pass


class StructCompatibilityError(ShapeDefinitionError):
    """Exception raised when a fixed-record shape declares fields it cannot hold."""
    pass


class UnresolvedDependencyError(ShapeDefinitionError):
    """Exception raised when an extended or referenced shape has not been defined."""
    pass


class DocumentError(ShapeSchemaError):
    """Exception raised for definitions document errors."""
    pass


class FormatVersionError(DocumentError):
    """Exception raised when a definitions document's format version is incompatible."""
    pass


class InvalidDocumentError(DocumentError):
    """Exception raised when an exported definition is not a valid JSON Schema."""
    pass
