"""Subcommand modules for psuctl.

Provides register_commands() which uses deferred imports to keep
``psuctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from psuctl.commands.endpoint import endpoint
    from psuctl.commands.stack import stack

    cli.add_command(endpoint)
    cli.add_command(stack)

    # --- Standalone commands ---
    from psuctl.commands.config_cmd import config_cmd

    cli.add_command(config_cmd)
