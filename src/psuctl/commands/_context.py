"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Portainer client initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from psuctl.output.formatters import (
    OutputSettings,
    TemplateFormatError,
    format_result,
    format_template,
)
from psuctl.services.result import ServiceResult

if TYPE_CHECKING:
    from psuctl.config.settings import PsuSettings
    from psuctl.infrastructure.client import PortainerClient


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The API client is
    lazily created on first use so ``--help``, ``--version`` and
    ``config`` never need a reachable Portainer.
    """

    def __init__(self, settings: PsuSettings) -> None:
        self.settings = settings
        self._client: PortainerClient | None = None

        # Configure structured logging
        from psuctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from psuctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def client(self) -> PortainerClient:
        """The Portainer client (created lazily on first access)."""
        if self._client is None:
            if not self.settings.portainer.url:
                raise click.UsageError(
                    "Portainer URL is not configured. "
                    "Pass --url or run 'psuctl config portainer.url URL'."
                )
            from psuctl.infrastructure.client import PortainerClient

            self._client = PortainerClient.from_config(self.settings.portainer)
        return self._client

    def default_endpoint(self, name: str | None) -> str | None:
        """Return *name*, or the configured ``defaults.endpoint`` when omitted."""
        return name or self.settings.defaults.endpoint or None

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def emit(self, result: ServiceResult, *, fmt: str | None = None) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
          With *fmt*, each item is rendered through the template instead.
        * Failure: writes to stderr, exits with code 1.
        """
        if result.ok and fmt is not None:
            try:
                click.echo(format_template(result, fmt))
                return
            except TemplateFormatError as exc:
                result = ServiceResult.failure(result.op, exc.code, exc.message, **exc.detail)

        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
