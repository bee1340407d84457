"""Key event vocabulary shared by the decoder and the line editor.

A :class:`KeyEvent` is the structured form of one keystroke: a ``name``
(a single printable character or one of the named keys in :class:`Key`)
plus ``ctrl`` and ``shift`` modifier flags. :func:`classify` folds every
event into a :class:`KeyKind` so the editor can dispatch exhaustively.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key names
# ---------------------------------------------------------------------------


class Key:
    """Named key constants."""

    up = "up"
    down = "down"
    left = "left"
    right = "right"
    backspace = "backspace"
    return_ = "return"
    linefeed = "linefeed"
    escape = "escape"
    space = "space"
    tab = "tab"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageup"
    page_down = "pagedown"
    clear = "clear"
    undefined = "undefined"

    # Function keys
    f1 = "f1"
    f2 = "f2"
    f3 = "f3"
    f4 = "f4"
    f5 = "f5"
    f6 = "f6"
    f7 = "f7"
    f8 = "f8"
    f9 = "f9"
    f10 = "f10"
    f11 = "f11"
    f12 = "f12"


FUNCTION_KEYS: frozenset[str] = frozenset(f"f{i}" for i in range(1, 13))

# Keys that never do anything, whatever the mode.
IGNORED_KEYS: frozenset[str] = FUNCTION_KEYS | {
    Key.clear,
    Key.end,
    Key.home,
    Key.page_up,
    Key.page_down,
    Key.insert,
    Key.delete,
    Key.tab,
    Key.undefined,
}

# Outside selection mode escape is one of the ignored keys.
IGNORED_WHILE_EDITING: frozenset[str] = IGNORED_KEYS | {Key.escape}

_FKEY_RE = re.compile(r"^f(\d+)$")


# ---------------------------------------------------------------------------
# Key event
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """One decoded keystroke."""

    name: str
    ctrl: bool = False
    shift: bool = False

    @property
    def key_id(self) -> str:
        """``ctrl+shift+a`` style identifier, handy for logging."""
        prefix = ""
        if self.ctrl:
            prefix += "ctrl+"
        if self.shift:
            prefix += "shift+"
        return prefix + self.name


class Direction(enum.Enum):
    """Vertical direction for history browsing and selection cycling."""

    UP = -1
    DOWN = 1


class KeyKind(enum.Enum):
    """Dispatch categories for :class:`KeyEvent`."""

    UP = "up"
    DOWN = "down"
    CLOSE = "close"
    BACKSPACE = "backspace"
    SUBMIT = "submit"
    LEFT = "left"
    RIGHT = "right"
    ESCAPE = "escape"
    IGNORED = "ignored"
    SPACE = "space"
    CHARACTER = "character"


_NAMED_KINDS: dict[str, KeyKind] = {
    Key.up: KeyKind.UP,
    Key.down: KeyKind.DOWN,
    Key.backspace: KeyKind.BACKSPACE,
    Key.return_: KeyKind.SUBMIT,
    Key.linefeed: KeyKind.SUBMIT,
    Key.left: KeyKind.LEFT,
    Key.right: KeyKind.RIGHT,
    Key.escape: KeyKind.ESCAPE,
    Key.space: KeyKind.SPACE,
}


def is_function_key(name: str) -> bool:
    match = _FKEY_RE.match(name)
    return bool(match) and 1 <= int(match.group(1)) <= 12


def classify(event: KeyEvent) -> KeyKind:
    """Return the dispatch category of *event*.

    ``ctrl+c`` and ``ctrl+d`` are :attr:`KeyKind.CLOSE`; any other
    single-character name is :attr:`KeyKind.CHARACTER`. Names that are
    neither known keys nor single characters land in the ignored bucket.
    """
    name = event.name
    if name in ("c", "d") and event.ctrl:
        return KeyKind.CLOSE
    kind = _NAMED_KINDS.get(name)
    if kind is not None:
        return kind
    if name in IGNORED_KEYS or is_function_key(name):
        return KeyKind.IGNORED
    if len(name) == 1 and name.isprintable():
        return KeyKind.CHARACTER
    return KeyKind.IGNORED


def is_ignored(event: KeyEvent, *, selecting: bool) -> bool:
    """Whether *event* is a pure no-op in the given mode."""
    table = IGNORED_KEYS if selecting else IGNORED_WHILE_EDITING
    return event.name in table or classify(event) is KeyKind.IGNORED


__all__ = [
    "Direction",
    "FUNCTION_KEYS",
    "IGNORED_KEYS",
    "IGNORED_WHILE_EDITING",
    "Key",
    "KeyEvent",
    "KeyKind",
    "classify",
    "is_function_key",
    "is_ignored",
]
