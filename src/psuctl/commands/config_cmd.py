"""Standalone command: get and set configuration options."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from psuctl.commands._base import PsuCommand
from psuctl.config.discovery import find_config
from psuctl.config.store import ConfigStore, config_keys
from psuctl.services.config import ConfigService

if TYPE_CHECKING:
    from psuctl.commands._context import AppContext


@click.command(
    name="config",
    cls=PsuCommand,
    epilog="\b\nKeys:\n" + "\n".join(f"  {key}" for key in config_keys()),
    examples="""\
  psuctl config portainer.url https://portainer.example.com
  psuctl config portainer.user admin
  psuctl config portainer.url
  psuctl config defaults.endpoint production""",
)
@click.argument("key")
@click.argument("value", required=False)
@click.pass_obj
def config_cmd(app: AppContext, key: str, value: str | None) -> None:
    """Get KEY, or set KEY to VALUE, in the config file."""
    path = app.settings.config_path or find_config()
    svc = ConfigService(ConfigStore(path))
    app.emit(svc.get(key) if value is None else svc.set(key, value))
