"""Command group: list and inspect Portainer endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from psuctl.commands._base import PsuGroup, format_epilog, format_option
from psuctl.domain.models import Endpoint
from psuctl.services.endpoint import EndpointService

if TYPE_CHECKING:
    from psuctl.commands._context import AppContext

_ENDPOINT_EXAMPLES = """\
  psuctl endpoint list
  psuctl endpoint list --format "{{ id }} {{ name }}"
  psuctl endpoint inspect production
  psuctl --json endpoint inspect"""


@click.group(cls=PsuGroup, examples=_ENDPOINT_EXAMPLES)
@click.pass_obj
def endpoint(app: AppContext) -> None:
    """List and inspect endpoints."""


@endpoint.command(
    name="list",
    epilog=format_epilog(Endpoint),
    examples="""\
  psuctl endpoint list
  psuctl -q endpoint list
  psuctl endpoint list --format "{{ name }}: {{ url }}"
  psuctl --json endpoint list""",
)
@format_option
@click.pass_obj
def list_cmd(app: AppContext, fmt: str | None) -> None:
    """List all endpoints."""
    app.emit(EndpointService(app.client).list_endpoints(), fmt=fmt)


@endpoint.command(
    epilog=format_epilog(Endpoint),
    examples="""\
  psuctl endpoint inspect
  psuctl endpoint inspect production
  psuctl endpoint inspect production --format "{{ url }}\"""",
)
@click.argument("name", required=False)
@format_option
@click.pass_obj
def inspect(app: AppContext, name: str | None, fmt: str | None) -> None:
    """Inspect an endpoint by NAME.

    Without NAME, uses the configured default endpoint, or the only
    endpoint when exactly one exists.
    """
    app.emit(EndpointService(app.client).inspect(app.default_endpoint(name)), fmt=fmt)
