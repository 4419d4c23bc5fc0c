"""Rich Console factory and theme for blogforge output.

Creates Console instances that render to a StringIO buffer, preserving
the ``render_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BF_THEME = Theme(
    {
        "bf.ok": "bold green",
        "bf.error": "bold red",
        "bf.warning": "bold yellow",
        "bf.op": "bold cyan",
        "bf.key": "dim",
        "bf.slug": "bold blue",
        "bf.path": "dim",
        "bf.title": "bold",
        "bf.draft": "yellow",
        "bf.published": "green",
        "bf.score": "magenta",
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
        theme=BF_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def score_style(score: float) -> str:
    """Style for a 0..1 score: green, yellow or red."""
    if score >= 0.8:
        return "bf.ok"
    if score >= 0.6:
        return "bf.warning"
    return "bf.error"
