"""File I/O related utilities.

This package groups the modules that write catalogs out to files: the
definitions document (JSON or YAML) and the rendered type stub module.
"""

from .template_renderer import TemplateRenderer
from .definitions_document import (
    build_definitions_document,
    check_definitions_document,
    save_definitions_document,
    load_definitions_document,
)
from .type_stubs import build_stub_shapes, render_type_stubs, write_type_stubs

__all__ = [
    "TemplateRenderer",
    "build_definitions_document",
    "check_definitions_document",
    "save_definitions_document",
    "load_definitions_document",
    "build_stub_shapes",
    "render_type_stubs",
    "write_type_stubs",
]
