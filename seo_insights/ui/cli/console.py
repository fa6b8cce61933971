"""
Console utilities for CLI.
"""

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.theme import Theme

# Style names referenced by handlers.py and app.py
THEME = Theme(
    {
        "accent": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "box_title": "bold cyan",
    }
)

_TRUTHY = ("1", "true", "yes", "on")


def color_enabled(use_color: Optional[bool] = None) -> bool:
    """
    Decide whether to emit color.

    An explicit ``use_color`` wins. Otherwise SEO_CLI_FORCE_COLOR forces color
    on, NO_COLOR turns it off, and a TTY on stdout turns it on.
    """
    if use_color is not None:
        return use_color
    if (os.getenv("SEO_CLI_FORCE_COLOR") or "").lower() in _TRUTHY:
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    return bool(getattr(sys.stdout, "isatty", lambda: False)())


def make_console(use_color: Optional[bool] = None, record: bool = False, width: Optional[int] = None) -> Console:
    """Create the themed Rich console used by every handler."""
    color = color_enabled(use_color)
    return Console(
        theme=THEME,
        no_color=not color,
        color_system="auto" if color else None,
        record=record,
        width=width,
        markup=True,
        highlight=False,
    )


def configure_logging(level: str = "WARNING") -> None:
    """Send package log records to stderr at the configured level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


__all__ = ["THEME", "color_enabled", "make_console", "configure_logging"]
