"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from psuctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["endpoint", "--examples"], ["psuctl endpoint list", "psuctl endpoint inspect"]),
    (["endpoint", "list", "--examples"], ["--format"]),
    (["endpoint", "inspect", "--examples"], ["psuctl endpoint inspect production"]),
    (["stack", "--examples"], ["psuctl stack list", "--endpoint production"]),
    (["stack", "list", "--examples"], ["psuctl stack list"]),
    (["stack", "inspect", "--examples"], ["psuctl stack inspect web"]),
    (["config", "--examples"], ["psuctl config portainer.url"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.usefixtures("config_file")
@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


@pytest.mark.usefixtures("config_file")
class TestExamplesInHelp:
    @pytest.mark.parametrize(
        "args",
        [
            ["endpoint", "--help"],
            ["endpoint", "list", "--help"],
            ["stack", "inspect", "--help"],
            ["config", "--help"],
        ],
    )
    def test_examples_in_help(self, cli_runner: CliRunner, args: list[str]) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "--examples" in result.output


class TestExamplesEagerExit:
    """--examples exits before argument validation."""

    def test_skips_required_args(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["stack", "inspect", "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output

    def test_no_portainer_needed(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["endpoint", "list", "--examples"])
        assert result.exit_code == 0
