"""Command group: list and inspect stacks on an endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from psuctl.commands._base import PsuGroup, format_epilog, format_option
from psuctl.domain.models import Stack
from psuctl.services.stack import StackService

if TYPE_CHECKING:
    from psuctl.commands._context import AppContext

_STACK_EXAMPLES = """\
  psuctl stack list
  psuctl stack list --endpoint production
  psuctl stack inspect web --endpoint production
  psuctl stack inspect web --format "{{ entry_point }}\""""

_endpoint_option = click.option(
    "-e",
    "--endpoint",
    "endpoint_name",
    default=None,
    help="Endpoint name (default: configured default or the only endpoint).",
)


@click.group(cls=PsuGroup, examples=_STACK_EXAMPLES)
@click.pass_obj
def stack(app: AppContext) -> None:
    """List and inspect stacks."""


@stack.command(
    name="list",
    epilog=format_epilog(Stack),
    examples="""\
  psuctl stack list
  psuctl -q stack list --endpoint production
  psuctl stack list --format "{{ id }} {{ name }}"
  psuctl --json stack list""",
)
@_endpoint_option
@format_option
@click.pass_obj
def list_cmd(app: AppContext, endpoint_name: str | None, fmt: str | None) -> None:
    """List stacks deployed on an endpoint."""
    svc = StackService(app.client)
    app.emit(svc.list_stacks(app.default_endpoint(endpoint_name)), fmt=fmt)


@stack.command(
    epilog=format_epilog(Stack),
    examples="""\
  psuctl stack inspect web
  psuctl stack inspect web --endpoint production
  psuctl stack inspect web --format "{% for var in env or [] %}{{ var.name }} {% endfor %}\"""",
)
@click.argument("name")
@_endpoint_option
@format_option
@click.pass_obj
def inspect(app: AppContext, name: str, endpoint_name: str | None, fmt: str | None) -> None:
    """Inspect the stack called NAME."""
    svc = StackService(app.client)
    app.emit(svc.inspect(name, app.default_endpoint(endpoint_name)), fmt=fmt)
