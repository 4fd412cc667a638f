"""Render the type signatures of a catalog as an importable Python stub module.

Fixed-record shapes become keyword-only dataclasses, open-map shapes become
``TypedDict`` classes and type shapes become type aliases.
"""

from __future__ import annotations

import keyword
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..builder.type_signature import record_of, render_annotation
from ..models.options import Representation
from .template_renderer import TemplateRenderer

logger = logging.getLogger(__name__)

STUB_TEMPLATE = "type_stubs.py.jinja2"


@dataclass
class StubField:
    name: str
    annotation: str
    required: bool = True
    # Python source of the default value, if any
    default: Optional[str] = None


@dataclass
class StubShape:
    name: str
    kind: str  # "dataclass", "typed_dict" or "alias"
    annotation: str = ""
    description: Optional[str] = None
    fields: List[StubField] = field(default_factory=list)
    extra: Optional[str] = None
    functional: bool = False


def _is_attribute_name(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _default_source(value) -> str:
    if isinstance(value, (list, dict, tuple)):
        return f"field(default_factory=lambda: {value!r})"
    return repr(value)


def build_stub_shapes(catalog) -> List[StubShape]:
    shapes: List[StubShape] = []
    for definition in catalog.definitions():
        if not definition.is_object:
            shapes.append(StubShape(definition.name, "alias", annotation=definition.annotation()))
            continue

        record = record_of(definition.type_signature)
        specs = {spec.name: spec for spec in definition.property_specs}
        fields: List[StubField] = []
        for field_type in record.fields:
            options = specs[field_type.name].options
            default = None
            if options.has_default:
                default = _default_source(options.default)
            elif options.nullable:
                default = "None"
            fields.append(StubField(field_type.name, render_annotation(field_type.type), field_type.required, default))

        kind = "dataclass" if record.representation == Representation.FIXED_RECORD else "typed_dict"
        functional = not all(_is_attribute_name(stub_field.name) for stub_field in fields)
        if functional and kind == "dataclass":
            logger.warning(
                f"Shape '{definition.name}' has property names that are not Python identifiers; "
                "rendering it as a TypedDict"
            )
            kind = "typed_dict"

        shapes.append(
            StubShape(
                definition.name,
                kind,
                description=definition.schema.description,
                fields=fields,
                extra=render_annotation(record.extra) if record.extra is not None else None,
                functional=functional,
            )
        )
    return shapes


def render_type_stubs(catalog, renderer: Optional[TemplateRenderer] = None) -> str:
    renderer = renderer or TemplateRenderer()
    return renderer.render_template(STUB_TEMPLATE, shapes=build_stub_shapes(catalog))


def write_type_stubs(output_path: str, catalog, renderer: Optional[TemplateRenderer] = None) -> None:
    renderer = renderer or TemplateRenderer()
    renderer.render_template_to_file(STUB_TEMPLATE, output_path, shapes=build_stub_shapes(catalog))
    logger.info(f"Saved type stubs: {output_path}")
