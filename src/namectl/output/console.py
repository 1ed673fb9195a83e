"""Rich Console factory and theme for namectl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

NAMECTL_THEME = Theme(
    {
        "nc.ok": "bold green",
        "nc.error": "bold red",
        "nc.warning": "bold yellow",
        "nc.op": "bold cyan",
        "nc.key": "dim",
        "nc.name": "bold blue",
        "nc.path": "dim",
        "nc.value": "magenta",
        "nc.reason": "yellow",
        "nc.flag.root": "green",
        "nc.flag.embargoed": "red",
        "nc.flag.custom_value": "cyan",
    }
)

_FLAG_STYLES: dict[str, str] = {
    "root": "nc.flag.root",
    "embargoed": "nc.flag.embargoed",
    "custom_value": "nc.flag.custom_value",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=NAMECTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_flag(flag: str) -> str:
    """Return the Rich style name for a database record flag."""
    return _FLAG_STYLES.get(flag, "")
