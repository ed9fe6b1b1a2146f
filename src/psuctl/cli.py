"""Root CLI group for psuctl with global flags and command registration."""

from __future__ import annotations

import click

from psuctl import __version__
from psuctl.commands import register_commands
from psuctl.commands._context import AppContext
from psuctl.config.settings import PsuSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="psuctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (names only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--url", default=None, help="Portainer URL.")
@click.option("-u", "--user", default=None, help="Portainer user.")
@click.option("-p", "--password", default=None, help="Portainer password.")
@click.option("-A", "--auth-token", default=None, help="Portainer JWT, skips authentication.")
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    url: str | None,
    user: str | None,
    password: str | None,
    auth_token: str | None,
    insecure: bool,
) -> None:
    """psuctl — Portainer stack utilities."""
    ctx.ensure_object(dict)
    settings = PsuSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        portainer={
            "url": url,
            "user": user,
            "password": password,
            "auth_token": auth_token,
            "insecure": insecure or None,
        },
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
