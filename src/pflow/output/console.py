"""Rich Console factory and theme for pflow output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PFLOW_THEME = Theme(
    {
        "pflow.ok": "bold green",
        "pflow.error": "bold red",
        "pflow.warning": "bold yellow",
        "pflow.op": "bold cyan",
        "pflow.key": "dim",
        "pflow.label": "bold",
        "pflow.role": "magenta",
        "pflow.consume": "red",
        "pflow.produce": "green",
        "pflow.state": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PFLOW_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def format_vector(vector: list[int]) -> str:
    """Render a state vector compactly, e.g. ``[1, 0, 2]``."""
    return "[" + ", ".join(str(v) for v in vector) + "]"


def format_delta(delta: list[int], labels: list[str]) -> str:
    """Render the non-zero cells of a delta as ``-1 P0, +1 P1`` with styles."""
    parts: list[str] = []
    for value, label in zip(delta, labels, strict=False):
        if value < 0:
            parts.append(f"[pflow.consume]{value}[/pflow.consume] {label}")
        elif value > 0:
            parts.append(f"[pflow.produce]+{value}[/pflow.produce] {label}")
    return ", ".join(parts) or "-"
