"""Rich/JSON/template output helpers.

The CLI renders ServiceResult for humans (Rich tables and fields),
machines (--json), or user-supplied Jinja2 templates (--format).  The
formatter layer adapts ServiceResult to the requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, StrictUndefined, TemplateError

from psuctl.domain.errors import PsuError
from psuctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from psuctl.services.result import ServiceResult

# Ops whose payload is a collection under ``data["items"]``.
LIST_OPS: frozenset[str] = frozenset({"list_endpoints", "list_stacks"})


class TemplateFormatError(PsuError):
    code = "INVALID_FORMAT"
    default_message = "Invalid --format template"


@dataclass(frozen=True)
class OutputSettings:
    """Output mode flags resolved from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; takes precedence over *json_output*.
        json_output: Shorthand for ``OutputSettings(json_output=True)``.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def _template_items(result: ServiceResult) -> list[dict[str, Any]]:
    if result.op in LIST_OPS:
        return list(result.data.get("items", []))
    return [result.data]


def format_template(result: ServiceResult, template: str) -> str:
    """Render *template* once per result item, one line each.

    Each item's fields are top-level template variables and the whole item
    is also bound to ``item``.  Undefined variables are errors.

    Raises:
        TemplateFormatError: The template does not parse or fails to render.
    """
    env = Environment(undefined=StrictUndefined, autoescape=False)
    try:
        compiled = env.from_string(template)
        lines = [compiled.render({**item, "item": item}) for item in _template_items(result)]
    except TemplateError as exc:
        raise TemplateFormatError(f"Invalid --format template: {exc}", template=template) from exc
    return "\n".join(lines)
