"""Rich Console factory and theme for archctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ARCH_THEME = Theme(
    {
        "arch.ok": "bold green",
        "arch.error": "bold red",
        "arch.warning": "bold yellow",
        "arch.op": "bold cyan",
        "arch.key": "dim",
        "arch.id": "bold blue",
        "arch.name": "bold",
        "arch.label": "magenta",
        "arch.status.satisfied": "green",
        "arch.status.violated": "bold red",
        "arch.status.not_evaluable": "dim",
        "arch.status.validated": "green",
        "arch.status.conflict": "bold red",
        "arch.status.uncertain": "yellow",
        "arch.added": "green",
        "arch.removed": "red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "SATISFIED": "arch.status.satisfied",
    "VIOLATED": "arch.status.violated",
    "NOT_EVALUABLE": "arch.status.not_evaluable",
    "VALIDATED": "arch.status.validated",
    "CONFLICT": "arch.status.conflict",
    "UNCERTAIN": "arch.status.uncertain",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=ARCH_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Theme style for a rule or evaluation status, or empty string."""
    return _STATUS_STYLES.get(status, "")
