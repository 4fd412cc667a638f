#!/usr/bin/env python3
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

"""CLI entry point for exporting the shapes defined in a Python module."""

import argparse
import importlib
import logging
from typing import List, Optional

from ..definition import ShapeCatalog
from ..exceptions import ShapeSchemaError
from ..file_io import (
    build_definitions_document,
    check_definitions_document,
    save_definitions_document,
    write_type_stubs,
)
from ..utils.logging_utils import configure_split_stream_logging

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_ATTRIBUTE = "catalog"


def find_catalog(module_name: str, attribute: Optional[str] = None) -> ShapeCatalog:
    """Import a module and return the ShapeCatalog it defines.

    Args:
        module_name: Dotted module path, e.g. ``my_project.shapes``
        attribute: Name of the catalog attribute. When omitted, ``catalog`` is
            used if present, otherwise the only ShapeCatalog in the module.

    Raises:
        ShapeSchemaError: If no single catalog can be found.
    """
    module = importlib.import_module(module_name)

    name = attribute or DEFAULT_CATALOG_ATTRIBUTE
    candidate = getattr(module, name, None)
    if isinstance(candidate, ShapeCatalog):
        return candidate
    if attribute is not None:
        raise ShapeSchemaError(f"'{module_name}.{attribute}' is not a ShapeCatalog")

    catalogs = [value for value in vars(module).values() if isinstance(value, ShapeCatalog)]
    if len(catalogs) != 1:
        raise ShapeSchemaError(
            f"Expected exactly one ShapeCatalog in '{module_name}', found {len(catalogs)}; use --catalog"
        )
    return catalogs[0]


def export_catalog(
    catalog: ShapeCatalog,
    output_path: Optional[str] = None,
    stubs_path: Optional[str] = None,
    output_format: Optional[str] = None,
) -> dict:
    """Build and check the definitions document, then write the requested files."""
    document = build_definitions_document(catalog)
    check_definitions_document(document)
    logger.info(f"Checked {len(document['definitions'])} definitions")

    if output_path:
        save_definitions_document(output_path, document, output_format)
    if stubs_path:
        write_type_stubs(stubs_path, catalog)
    return document


def main(argv: List[str] | None = None) -> int:
    """Main entry point for the export CLI."""
    parser = argparse.ArgumentParser(
        description="Export the shapes defined in a Python module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--module",
        required=True,
        help="Dotted path of the module that defines the catalog",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Name of the catalog attribute (default: 'catalog', or the only catalog in the module)",
    )
    parser.add_argument("--output", default=None, help="Path of the definitions document to write")
    parser.add_argument("--stubs", default=None, help="Path of the Python type stub module to write")
    parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default=None,
        help="Document format (default: by output suffix, json otherwise)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")

    args = parser.parse_args(argv)
    configure_split_stream_logging(args.verbose)

    try:
        catalog = find_catalog(args.module, args.catalog)
        export_catalog(catalog, args.output, args.stubs, args.format)
    except (ImportError, ShapeSchemaError, OSError) as e:
        logger.error(f"Export failed: {e}")
        return 1

    if not args.output and not args.stubs:
        logger.warning("Neither --output nor --stubs given; only checked the definitions")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
