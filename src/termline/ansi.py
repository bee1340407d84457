"""ANSI escape-sequence renderer for :mod:`termline.render` commands."""

from __future__ import annotations

import logging
import sys
from typing import Sequence, TextIO

from termline.render import (
    EraseCurrentLine,
    EraseToEndOfDisplay,
    HideCursor,
    MoveCursorBack,
    MoveCursorForward,
    MoveCursorUp,
    RenderCommand,
    RepositionCursor,
    ShowCursor,
    WriteText,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_ERASE_LINE = "\x1b[2K"
_ERASE_DISPLAY_END = "\x1b[0J"
_CURSOR_COLUMN_FMT = "\x1b[{}G"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_FORWARD_FMT = "\x1b[{}C"
_CURSOR_BACK_FMT = "\x1b[{}D"
_RESET = "\x1b[0m"

STYLES: dict[str, str] = {
    "error": "\x1b[91m",
}


def encode(command: RenderCommand) -> str:
    """Escape sequence (or text) for a single command."""
    match command:
        case RepositionCursor(column=column):
            return _CURSOR_COLUMN_FMT.format(column + 1)
        case EraseCurrentLine():
            return _ERASE_LINE
        case WriteText(text=text, style=style):
            if style is None:
                return text
            prefix = STYLES.get(style)
            if prefix is None:
                return text
            return prefix + text + _RESET
        case EraseToEndOfDisplay():
            return _ERASE_DISPLAY_END
        case HideCursor():
            return _HIDE_CURSOR
        case ShowCursor():
            return _SHOW_CURSOR
        case MoveCursorUp(count=count):
            return _CURSOR_UP_FMT.format(count) if count > 0 else ""
        case MoveCursorForward(count=count):
            return _CURSOR_FORWARD_FMT.format(count) if count > 0 else ""
        case MoveCursorBack(count=count):
            return _CURSOR_BACK_FMT.format(count) if count > 0 else ""
        case _:
            raise TypeError(f"unknown render command: {command!r}")


class AnsiRenderer:
    """Writes commands as ANSI sequences to a text stream.

    ``write_log`` names a file that receives a copy of everything written,
    useful when debugging redraws.
    """

    def __init__(self, stream: TextIO | None = None, *, write_log: str = "") -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._write_log_path = write_log

    def render(self, commands: Sequence[RenderCommand]) -> None:
        self.write("".join(encode(command) for command in commands))

    def write(self, data: str) -> None:
        if not data:
            return
        self._stream.write(data)
        self._stream.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.warning("could not append to write log %s", self._write_log_path)
