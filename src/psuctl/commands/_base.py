"""Custom Click base classes with --examples support, plus --format helpers.

Provides PsuCommand and PsuGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from psuctl.domain.typedesc import get_format_help

_F = TypeVar("_F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class PsuCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class PsuGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = PsuCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = PsuCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def format_epilog(sample: Any) -> str:
    """Help epilog documenting the ``--format`` template variables of *sample*.

    Each paragraph is prefixed with Click's ``\\b`` marker so the schema
    keeps its indentation instead of being rewrapped.
    """
    text = get_format_help(sample).strip("\n")
    return "\n\n".join(f"\b\n{para}" for para in text.split("\n\n"))


def format_option(func: _F) -> _F:
    """Add the ``--format TEMPLATE`` option to a command."""
    return click.option(
        "--format",
        "fmt",
        default=None,
        metavar="TEMPLATE",
        help="Render each result with a Jinja2 template (see below).",
    )(func)
