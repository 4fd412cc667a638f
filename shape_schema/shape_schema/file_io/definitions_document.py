"""Definitions document: every shape of a catalog in one JSON or YAML file.

References are written as ``#/definitions/<title>``, so the document's
``definitions`` mapping is also where they resolve.
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from .. import DEFINITIONS_FORMAT_VERSION
from ..exceptions import DocumentError, FormatVersionError, InvalidDocumentError
from ..models.schema_node import REFERENCE_PREFIX
from ..utils.format_version import check_format_version

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def build_definitions_document(catalog) -> Dict[str, Any]:
    """Build a format-versioned definitions document from a ShapeCatalog."""

    definitions = {}
    for definition in catalog.definitions():
        if definition.title in definitions:
            raise InvalidDocumentError(
                f"Two shapes share the title '{definition.title}'; references to it would be ambiguous"
            )
        definitions[definition.title] = definition.to_dict()

    return {
        "format_version": DEFINITIONS_FORMAT_VERSION,
        "metadata": {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "shape_count": len(definitions),
        },
        "definitions": definitions,
    }


def check_definitions_document(document: Dict[str, Any]) -> None:
    """Check every definition is a valid JSON Schema and every reference resolves.

    Raises:
        InvalidDocumentError: On the first offending definition.
    """

    definitions = document.get("definitions")
    if not isinstance(definitions, dict):
        raise InvalidDocumentError("Definitions document has no 'definitions' mapping")

    for title, schema in definitions.items():
        try:
            Draft7Validator.check_schema(schema)
        except SchemaError as e:
            raise InvalidDocumentError(f"Definition '{title}' is not a valid JSON Schema: {e.message}") from e

        for ref in _iter_references(schema):
            if not ref.startswith(REFERENCE_PREFIX) or ref[len(REFERENCE_PREFIX):] not in definitions:
                raise InvalidDocumentError(f"Definition '{title}' references unknown schema '{ref}'")


def save_definitions_document(output_path: str, document: Dict[str, Any], output_format: Optional[str] = None) -> None:
    """Save a definitions document as JSON, or YAML when the suffix (or output_format) says so."""

    output_format = output_format or ("yaml" if str(output_path).endswith(YAML_SUFFIXES) else "json")
    directory = os.path.dirname(str(output_path))
    if directory:
        os.makedirs(directory, exist_ok=True)
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            if output_format == "yaml":
                # tuples and other JSON-compatible values become plain lists first
                yaml.safe_dump(json.loads(json.dumps(document)), f, sort_keys=False, allow_unicode=True)
            else:
                json.dump(document, f, indent=2, ensure_ascii=True)
        logger.info(f"Saved definitions document: {output_path}")
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Failed to save definitions document: {output_path}: {e}")
        raise


def load_definitions_document(input_path: str) -> Dict[str, Any]:
    """Load a definitions document and check its format version.

    Raises:
        DocumentError: If the file cannot be parsed.
        FormatVersionError: If the document's major format version is not supported.
    """

    path = Path(input_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix in YAML_SUFFIXES:
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load definitions document: {input_path}: {e}")
        raise DocumentError(f"Cannot parse definitions document {input_path}: {e}") from e

    if not isinstance(document, dict):
        raise DocumentError(f"Definitions document {input_path} must be a mapping")

    result = check_format_version(document.get("format_version"))
    if not result.compatible:
        raise FormatVersionError(f"{input_path}: {result.message}")
    if result.minor_newer:
        logger.warning(f"{input_path}: {result.message}")
    return document


def _iter_references(schema: Any) -> Iterator[str]:
    if not isinstance(schema, dict):
        return
    ref = schema.get("$ref")
    if isinstance(ref, str):
        yield ref
    for key in ("items", "additionalProperties"):
        if key in schema:
            yield from _iter_references(schema[key])
    for member in schema.get("oneOf") or ():
        yield from _iter_references(member)
    for child in (schema.get("properties") or {}).values():
        yield from _iter_references(child)
