"""Output generators for documentation."""

from __future__ import annotations

import json
from typing import Any, Callable

from jinja2 import Environment, StrictUndefined, TemplateError

from .config import DocgenConfig, MarkdownConfig
from .errors import TemplateRenderError, UnsupportedOutputFormatError
from .links import render_type_link
from .models import DocumentedStructure

Generator = Callable[[list[DocumentedStructure], DocgenConfig], str]

BANNER = "<!-- AUTO-GENERATED. DO NOT EDIT. Regenerate from the Go API types. -->"

# Context: banner, title, headers, structures (name, doc, fields, table)
DEFAULT_MARKDOWN_TEMPLATE = """\
{{ banner }}

# {{ title }}

{% if structures %}
{% for s in structures %}
- [{{ s.name }}](#{{ s.name }})
{% endfor %}

{% endif %}
{% for s in structures %}
<a name='{{ s.name }}'></a>

## {{ s.name }}

{% if s.doc %}
{{ s.doc }}

{% endif %}
{% if s.fields %}
{{ s.table }}

{% endif %}
{% endfor %}
"""


def _table_cell(text: str) -> str:
    """Escape text for a single Markdown table cell."""
    return text.replace("|", "\\|").replace("\n", "<br>")


def generate_json(structures: list[DocumentedStructure], config: DocgenConfig | None = None) -> str:
    """Generate the JSON reference: one entry per structure with its items."""
    docs = [
        {
            "name": s.name,
            "description": s.doc,
            "items": [
                {
                    "field": f.name,
                    "description": f.doc,
                    "schema": f.type.name,
                    "required": f.mandatory,
                }
                for f in s.fields
            ],
        }
        for s in structures
    ]
    return json.dumps(docs, indent="\t", ensure_ascii=False)


def _format_table(header: list[str], rows: list[list[str]]) -> str:
    """Render a Markdown table with every column padded to its widest cell."""
    widths = [len(h) for h in header]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def line(cells: list[str]) -> str:
        return " | ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    lines = [line(header), " | ".join("-" * w for w in widths)]
    lines.extend(line(row) for row in rows)
    return "\n".join(lines)


def _template_context(structures: list[DocumentedStructure], config: DocgenConfig) -> dict[str, Any]:
    md = config.markdown
    known_internal = {s.name for s in structures}
    headers = {
        "name": md.name_header,
        "description": md.description_header,
        "type": md.type_header,
        "required": md.required_header,
    }

    sections = []
    for s in structures:
        fields = [
            {
                "name": f.name,
                "doc": f.doc,
                "type": f.type.name,
                "link": render_type_link(f.type, known_internal, config.external_links),
                "required": f.mandatory,
            }
            for f in s.fields
        ]
        rows = [
            [
                f"`{f['name']}`",
                _table_cell(f["doc"]),
                _table_cell(f["link"]),
                str(f["required"]).lower(),
            ]
            for f in fields
        ]
        sections.append(
            {
                "name": s.name,
                "doc": s.doc,
                "fields": fields,
                "table": _format_table(list(headers.values()), rows),
            }
        )

    return {"banner": BANNER, "title": md.title, "headers": headers, "structures": sections}


def _environment() -> Environment:
    env = Environment(
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["cell"] = _table_cell
    return env


def generate_markdown(
    structures: list[DocumentedStructure], config: DocgenConfig | None = None
) -> str:
    """Generate the Markdown reference by rendering the configured template.

    Templates get `banner`, `title`, `headers` and `structures`; each
    structure has `name`, `doc`, `fields` (name, doc, type, link, required)
    and a pre-rendered `table`. The `cell` filter escapes table cell text.
    """
    config = config or DocgenConfig()
    md: MarkdownConfig = config.markdown
    source = md.template if md.template is not None else DEFAULT_MARKDOWN_TEMPLATE

    try:
        template = _environment().from_string(source)
        rendered = template.render(**_template_context(structures, config))
    except TemplateError as e:
        raise TemplateRenderError(f"cannot render Markdown template: {e}") from e

    return rendered.rstrip("\n") + "\n"


GENERATORS: dict[str, Generator] = {
    "json": generate_json,
    "md": generate_markdown,
    "markdown": generate_markdown,
}


def get_generator(output_format: str) -> Generator:
    """Look up the generator for an output format."""
    try:
        return GENERATORS[output_format.lower()]
    except KeyError:
        raise UnsupportedOutputFormatError(
            output_format, tuple(sorted(GENERATORS))
        ) from None
