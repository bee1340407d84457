"""Abstract redraw commands and the functions that build them.

The editor never writes escape sequences itself. Every redraw is a tuple
of the command dataclasses below, handed to a :class:`Renderer` which maps
them onto real terminal output (see :mod:`termline.ansi`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from termline.utils import visible_width

EOL = "\r\n"

SELECTED_MARKER = "[*] "
UNSELECTED_MARKER = "[ ] "

# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RepositionCursor:
    """Move to a 0-based column on the current row."""

    column: int


@dataclass(frozen=True, slots=True)
class EraseCurrentLine:
    pass


@dataclass(frozen=True, slots=True)
class WriteText:
    text: str
    style: str | None = None


@dataclass(frozen=True, slots=True)
class EraseToEndOfDisplay:
    pass


@dataclass(frozen=True, slots=True)
class HideCursor:
    pass


@dataclass(frozen=True, slots=True)
class ShowCursor:
    pass


@dataclass(frozen=True, slots=True)
class MoveCursorUp:
    count: int = 1


@dataclass(frozen=True, slots=True)
class MoveCursorForward:
    count: int = 1


@dataclass(frozen=True, slots=True)
class MoveCursorBack:
    count: int = 1


RenderCommand = Union[
    RepositionCursor,
    EraseCurrentLine,
    WriteText,
    EraseToEndOfDisplay,
    HideCursor,
    ShowCursor,
    MoveCursorUp,
    MoveCursorForward,
    MoveCursorBack,
]


class Renderer(Protocol):
    """Output sink the editor draws into."""

    def render(self, commands: Sequence[RenderCommand]) -> None: ...

    def write(self, data: str) -> None: ...


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def prompt_line(prompt: str, line: str, cursor: int) -> tuple[RenderCommand, ...]:
    """Redraw the whole prompt row and park the cursor inside *line*."""
    return (
        RepositionCursor(0),
        EraseCurrentLine(),
        WriteText(prompt + line),
        RepositionCursor(visible_width(prompt) + cursor),
    )


def backspace(prompt: str, line: str, cursor: int) -> tuple[RenderCommand, ...]:
    # Steps back two columns before the full redraw.
    return (MoveCursorBack(2), *prompt_line(prompt, line, cursor))


def cursor_left() -> tuple[RenderCommand, ...]:
    return (MoveCursorBack(1),)


def cursor_right() -> tuple[RenderCommand, ...]:
    return (MoveCursorForward(1),)


def line_break() -> tuple[RenderCommand, ...]:
    return (WriteText(EOL),)


def format_options(options: Sequence[str], index: int) -> str:
    return EOL.join(
        (SELECTED_MARKER if i == index else UNSELECTED_MARKER) + option
        for i, option in enumerate(options)
    )


def initial_options(options: Sequence[str], index: int) -> tuple[RenderCommand, ...]:
    """First draw of an option list below the prompt; hides the cursor."""
    return (
        WriteText(EOL + format_options(options, index) + EOL),
        HideCursor(),
    )


def cycled_options(options: Sequence[str], index: int) -> tuple[RenderCommand, ...]:
    """Rewrite an option list already on screen after the choice moved."""
    return (
        MoveCursorUp(len(options)),
        EraseToEndOfDisplay(),
        WriteText(format_options(options, index) + EOL),
    )


def selection_cancelled(message: str) -> tuple[RenderCommand, ...]:
    if not message:
        return ()
    return (WriteText(EOL + message + EOL, style="error"),)


def show_cursor() -> tuple[RenderCommand, ...]:
    return (ShowCursor(),)
