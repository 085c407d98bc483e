from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

COLOR_MODES = ("auto", "always", "never")

REPORT_THEME = Theme(
    {
        "heading": "bold blue",
        "info": "blue",
        "progress": "bold yellow",
        "success": "green",
        "warning": "bold yellow",
        "error": "red",
        "value": "green",
    }
)


def build_console(color: str = "auto", *, stderr: bool = False) -> Console:
    """Create a themed console.

    ``auto`` leaves terminal detection (tty, ``NO_COLOR``, ``TERM=dumb``) to
    rich; ``always`` forces escape codes and ``never`` strips all styling.
    """
    if color not in COLOR_MODES:
        raise ValueError(f"Unsupported color mode: {color}")
    return Console(
        theme=REPORT_THEME,
        stderr=stderr,
        force_terminal=True if color == "always" else None,
        no_color=True if color == "never" else None,
        highlight=False,
        soft_wrap=True,
    )
