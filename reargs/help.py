# Reargs Argument Matcher — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help rendering for Reargs.

Help is produced from a Jinja2 template fed with the caller context, the options,
the normalized rules (`params`) and the display groups (`groups`). Each group is
iterable over its parameters' display records and carries `padding` and
`prepadding` for alignment.

The `pad_end` filter aligns a (possibly two line) human readable form:

    {{ param.human_readable|pad_end(params.padding, params.prepadding, ".") }}
"""
from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Environment

DEFAULT_HELP_CONTEXT: dict[str, Any] = {
    "name": "Your app",
    "version": "0.0.0",
    "description": "This description needs to be customized !",
    "author": "John Doe",
}

DEFAULT_HELP_TEMPLATE = """
{{ name }} v{{ version }} - {{ description }} - by {{ author }}

Usage:
  {{ name }}{% for group in groups %} [{{ group }}]{% endfor %}

{% for group, params in groups.items() %}
{{ group|title }}s:
{% for param in params %}
{% if not param.hidden -%}
{{ param.human_readable|pad_end(params.padding, params.prepadding, opts.param_description_spacer) }} {{ param.help }}
{%- endif %}
{%- endfor %}
{% endfor -%}
"""


def pad_end(text: str, padding: int = 0, prepadding: int = 0, char: str = ".") -> str:
    """
    Pad `text` with `char` up to column `padding`, then indent it by `prepadding`.

    When `text` spans two lines, the second line is the one padded; the indent
    only applies to the first line.
    """
    lines = text.split("\n")
    last_line_length = len(lines[1]) if len(lines) > 1 else len(lines[0])
    missing = padding + 1 - last_line_length
    if missing > 0 and char:
        text += (char * missing)[:missing]
    return " " * prepadding + text


def build_environment() -> Environment:
    environment = Environment(autoescape=False, keep_trailing_newline=True)
    environment.filters["pad_end"] = pad_end
    return environment


_environment = build_environment()


def render_help(context: Mapping[str, Any], template_source: str | None = None) -> str:
    """Render `template_source`, or the default template, with `context`."""
    template = _environment.from_string(template_source or DEFAULT_HELP_TEMPLATE)
    return template.render(**context)
