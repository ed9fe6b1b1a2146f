"""Rich Console factory and theme for psuctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PSU_THEME = Theme(
    {
        "psu.ok": "bold green",
        "psu.error": "bold red",
        "psu.warning": "bold yellow",
        "psu.op": "bold cyan",
        "psu.key": "dim",
        "psu.id": "bold blue",
        "psu.name": "bold",
        "psu.url": "dim",
        "psu.status.up": "green",
        "psu.status.down": "red",
    }
)

# Portainer API enum values.
ENDPOINT_TYPES: dict[int, str] = {
    1: "docker",
    2: "agent",
    3: "azure",
    4: "edge-agent",
    5: "kubernetes",
    6: "kubernetes-agent",
    7: "kubernetes-edge-agent",
}
ENDPOINT_STATUSES: dict[int, str] = {1: "up", 2: "down"}
STACK_TYPES: dict[int, str] = {1: "swarm", 2: "compose", 3: "kubernetes"}
STACK_STATUSES: dict[int, str] = {1: "active", 2: "inactive"}

_STATUS_STYLES: dict[str, str] = {
    "up": "psu.status.up",
    "active": "psu.status.up",
    "down": "psu.status.down",
    "inactive": "psu.status.down",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PSU_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def label_for(labels: dict[int, str], value: object) -> str:
    """Map a Portainer enum value to its label, falling back to the raw value."""
    if isinstance(value, int):
        return labels.get(value, str(value))
    return str(value)


def style_for_status(status: str) -> str:
    return _STATUS_STYLES.get(status, "")
