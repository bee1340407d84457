"""Raw terminal input to :class:`~termline.keys.KeyEvent` decoding.

Input can arrive in arbitrary chunks, so escape sequences are buffered
until complete. A partial sequence left at the end of a chunk is flushed
after a short timeout when an event loop is running, or immediately when
not (a lone ``ESC`` is the escape key).
"""

from __future__ import annotations

import asyncio
import codecs
import re
from typing import Callable

from termline.keys import Key, KeyEvent

ESC = "\x1b"

# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": Key.up,
    "\x1b[B": Key.down,
    "\x1b[C": Key.right,
    "\x1b[D": Key.left,
    "\x1b[H": Key.home,
    "\x1b[F": Key.end,
    "\x1b[E": Key.clear,
    "\x1bOA": Key.up,
    "\x1bOB": Key.down,
    "\x1bOC": Key.right,
    "\x1bOD": Key.left,
    "\x1bOH": Key.home,
    "\x1bOF": Key.end,
    "\x1bOE": Key.clear,
    "\x1b[1~": Key.home,
    "\x1b[2~": Key.insert,
    "\x1b[3~": Key.delete,
    "\x1b[4~": Key.end,
    "\x1b[5~": Key.page_up,
    "\x1b[6~": Key.page_down,
    "\x1b[7~": Key.home,
    "\x1b[8~": Key.end,
    "\x1bOP": Key.f1,
    "\x1bOQ": Key.f2,
    "\x1bOR": Key.f3,
    "\x1bOS": Key.f4,
    "\x1b[11~": Key.f1,
    "\x1b[12~": Key.f2,
    "\x1b[13~": Key.f3,
    "\x1b[14~": Key.f4,
    "\x1b[15~": Key.f5,
    "\x1b[17~": Key.f6,
    "\x1b[18~": Key.f7,
    "\x1b[19~": Key.f8,
    "\x1b[20~": Key.f9,
    "\x1b[21~": Key.f10,
    "\x1b[23~": Key.f11,
    "\x1b[24~": Key.f12,
    "\x1b[[A": Key.f1,
    "\x1b[[B": Key.f2,
    "\x1b[[C": Key.f3,
    "\x1b[[D": Key.f4,
    "\x1b[[E": Key.f5,
}

_CSI_LETTER_KEYS: dict[str, str] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "E": Key.clear,
    "F": Key.end,
    "H": Key.home,
    "P": Key.f1,
    "Q": Key.f2,
    "R": Key.f3,
    "S": Key.f4,
}

_TILDE_KEYS: dict[int, str] = {
    1: Key.home,
    2: Key.insert,
    3: Key.delete,
    4: Key.end,
    5: Key.page_up,
    6: Key.page_down,
    15: Key.f5,
    17: Key.f6,
    18: Key.f7,
    19: Key.f8,
    20: Key.f9,
    21: Key.f10,
    23: Key.f11,
    24: Key.f12,
}

# xterm modifier parameter: 1 + (shift=1 | alt=2 | ctrl=4)
_MOD_SHIFT = 1
_MOD_CTRL = 4

_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([A-HPQRS])$")
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")

_TERMINATORS = ("\r", "\n")


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> bool:
    """Whether *data*, which starts with ESC, is a whole sequence."""
    if len(data) == 1:
        return False
    after_esc = data[1:]
    if after_esc.startswith("["):
        payload = after_esc[1:]
        if not payload:
            return False
        # ESC [ [ A style (linux console function keys)
        if payload.startswith("["):
            return len(payload) >= 2
        return 0x40 <= ord(payload[-1]) <= 0x7E
    if after_esc.startswith("O"):
        return len(after_esc) >= 2
    # Meta: ESC followed by one character other than ESC
    return not after_esc.startswith(ESC)


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete key sequences.

    Returns ``(sequences, remainder)`` where ``remainder`` is an unfinished
    escape sequence to prepend to the next chunk.
    """
    sequences: list[str] = []
    pos = 0
    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue
        if buffer[pos + 1 : pos + 2] == ESC:
            # ESC ESC is two escape presses
            sequences.append(ESC)
            pos += 1
            continue
        end = pos + 1
        while end <= len(buffer):
            if _is_complete_sequence(buffer[pos:end]):
                break
            end += 1
        if end > len(buffer):
            return sequences, buffer[pos:]
        sequences.append(buffer[pos:end])
        pos = end
    return sequences, ""


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _modified(name: str, modifier: int) -> KeyEvent:
    bits = modifier - 1
    return KeyEvent(name, ctrl=bool(bits & _MOD_CTRL), shift=bool(bits & _MOD_SHIFT))


def _decode_char(ch: str) -> KeyEvent:
    if ch == "\r":
        return KeyEvent(Key.return_)
    if ch == "\n":
        return KeyEvent(Key.linefeed)
    if ch == "\t":
        return KeyEvent(Key.tab)
    if ch == " ":
        return KeyEvent(Key.space)
    if ch in ("\x7f", "\x08"):
        return KeyEvent(Key.backspace)
    if ch == ESC:
        return KeyEvent(Key.escape)
    if ch == "\x00":
        return KeyEvent(Key.space, ctrl=True)
    code = ord(ch)
    if 1 <= code <= 26:
        return KeyEvent(chr(code + ord("a") - 1), ctrl=True)
    if ch.isprintable():
        lower = ch.lower()
        # Some capitals (U+0130) lower-case to more than one character.
        if ch.isalpha() and ch.isupper() and len(lower) == 1:
            return KeyEvent(lower, shift=True)
        return KeyEvent(ch)
    return KeyEvent(Key.undefined)


def decode_sequence(sequence: str) -> KeyEvent:
    """Decode one complete sequence produced by :func:`split_sequences`."""
    name = LEGACY_KEY_SEQUENCES.get(sequence)
    if name is not None:
        return KeyEvent(name)

    if len(sequence) == 1:
        return _decode_char(sequence)

    if sequence == "\x1b[Z":
        return KeyEvent(Key.tab, shift=True)

    match = _MODIFIED_LETTER_RE.match(sequence)
    if match:
        return _modified(_CSI_LETTER_KEYS[match.group(2)], int(match.group(1)))

    match = _MODIFIED_TILDE_RE.match(sequence)
    if match:
        name = _TILDE_KEYS.get(int(match.group(1)))
        if name is not None:
            return _modified(name, int(match.group(2)))
        return KeyEvent(Key.undefined)

    # Meta prefix: ESC + key. There is no alt flag, the key itself is reported.
    if len(sequence) == 2 and sequence[0] == ESC:
        return _decode_char(sequence[1])

    return KeyEvent(Key.undefined)


class KeyDecoder:
    """Turns raw input chunks into key events for subscribers.

    A ``\\r\\n`` or ``\\n\\r`` pair, even when split across chunks, is
    reported as a single key: the second terminator is swallowed.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._pending: str = ""
        self._timeout = timeout
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._last_terminator: str | None = None
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._handlers: list[Callable[[KeyEvent], None]] = []

    def subscribe(self, handler: Callable[[KeyEvent], None]) -> Callable[[], None]:
        """Receive decoded key events. Returns an unsubscribe function."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    @property
    def pending(self) -> str:
        return self._pending

    def write(self, data: str | bytes) -> None:
        """Feed a chunk of raw input."""
        if isinstance(data, bytes):
            data = self._utf8.decode(data)
        if not data:
            # Nothing decoded yet; a pending flush stays scheduled.
            return

        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

        sequences, self._pending = split_sequences(self._pending + data)
        for sequence in sequences:
            self._dispatch(sequence)

        if self._pending:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                # No event loop - flush immediately
                self.flush()
            else:
                self._timeout_handle = loop.call_later(self._timeout, self.flush)

    def flush(self) -> None:
        """Decode whatever partial sequence is still buffered."""
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None
        pending, self._pending = self._pending, ""
        if not pending:
            return
        if pending == ESC:
            self._dispatch(pending)
        else:
            self._emit(KeyEvent(Key.undefined))

    def clear(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None
        self._pending = ""
        self._last_terminator = None

    def _dispatch(self, sequence: str) -> None:
        if sequence in _TERMINATORS:
            if self._last_terminator is not None and sequence != self._last_terminator:
                self._last_terminator = None
                return
            self._last_terminator = sequence
        else:
            self._last_terminator = None
        self._emit(decode_sequence(sequence))

    def _emit(self, event: KeyEvent) -> None:
        for handler in list(self._handlers):
            handler(event)
