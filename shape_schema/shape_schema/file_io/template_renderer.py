"""Jinja2 rendering of the code templates shipped with the package."""

from __future__ import annotations

import json
import os
from typing import Any

from jinja2 import Environment, FileSystemLoader, PackageLoader, StrictUndefined


def tojson_filter(value: Any) -> str:
    """Jinja2 filter: a JSON literal, which is also a valid Python literal for strings."""

    return json.dumps(value, default=str)


class TemplateRenderer:
    """Renders package templates, or templates from ``template_dir`` when given."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            loader = PackageLoader("shape_schema", "template")
        else:
            loader = FileSystemLoader(template_dir)

        self.env = Environment(
            loader=loader,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
            undefined=StrictUndefined,
        )
        self.env.filters["tojson"] = tojson_filter

    def render_template(self, template_name: str, **context: Any) -> str:
        return self.env.get_template(template_name).render(**context)

    def render_template_to_file(self, template_name: str, output_path: str, **context: Any) -> None:
        content = self.render_template(template_name, **context)
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
