"""Terminal formatting for lookup results and error messages.

Colors come from Pygments' console palette and are only applied when the
target stream is a TTY and color was not disabled.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

from pygments.console import colorize

PATH_COLOR = "green"
ERROR_COLOR = "red"
ERROR_TAG = "Err"


def stream_supports_color(stream: TextIO, no_color: bool = False) -> bool:
    """Return whether ANSI colors should be written to ``stream``."""
    if no_color:
        return False
    try:
        return os.isatty(stream.fileno())
    except (AttributeError, OSError, ValueError):
        return False


def _paint(color: str, text: str, enabled: bool) -> str:
    return colorize(color, text) if enabled else text


def format_description(path: Path | str, description: str, color: bool = False) -> str:
    """Return ``"<path>: <description>"``."""
    return f"{_paint(PATH_COLOR, str(path), color)}: {description}"


def format_error(message: str, color: bool = False) -> str:
    """Return ``"Err: <message>"``."""
    return f"{_paint(ERROR_COLOR, ERROR_TAG, color)}: {message}"


def format_not_found(path: Path | str, color: bool = False) -> str:
    """Message printed when no description applies to ``path``."""
    return format_error(f"no available description for {path}", color)
