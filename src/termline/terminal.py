"""Raw-mode process terminal feeding a :class:`KeyDecoder`.

``ProcessTerminal`` puts stdin into raw mode, reads it on the running
asyncio loop and hands every chunk to its decoder. It doubles as the key
source for a :class:`~termline.editor.LineEditor`.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import termios
import tty
from typing import Callable

from termline.key_decoder import KeyDecoder
from termline.keys import KeyEvent

logger = logging.getLogger(__name__)


class ProcessTerminal:
    """Key source backed by ``sys.stdin``."""

    def __init__(self, decoder: KeyDecoder | None = None, *, fd: int | None = None) -> None:
        self.decoder = decoder or KeyDecoder()
        self._fd = fd
        self._original_termios: list | None = None
        self._reader_active = False
        self._loop: asyncio.AbstractEventLoop | None = None
        self.on_eof: Callable[[], None] | None = None

    @property
    def fd(self) -> int:
        return self._fd if self._fd is not None else sys.stdin.fileno()

    @property
    def started(self) -> bool:
        return self._reader_active

    def subscribe(self, handler: Callable[[KeyEvent], None]) -> Callable[[], None]:
        return self.decoder.subscribe(handler)

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode and begin reading stdin on the running loop."""
        if self._reader_active:
            return
        fd = self.fd
        if os.isatty(fd):
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        self._loop = asyncio.get_running_loop()
        self._loop.add_reader(fd, self._on_stdin_readable)
        self._reader_active = True
        logger.debug("terminal started on fd %d", fd)

    def stop(self) -> None:
        """Stop reading and restore the terminal attributes."""
        fd = self.fd
        if self._reader_active and self._loop is not None:
            self._loop.remove_reader(fd)
        self._reader_active = False
        self._loop = None
        self.decoder.clear()

        if self._original_termios is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
            self._original_termios = None
        logger.debug("terminal stopped")

    # -- private ------------------------------------------------------------

    def _on_stdin_readable(self) -> None:
        """Callback invoked by the event loop when stdin has data."""
        try:
            raw = os.read(self.fd, 4096)
        except OSError:
            logger.debug("stdin read failed", exc_info=True)
            return

        if not raw:
            # EOF: stop polling a closed descriptor.
            self.decoder.flush()
            if self._loop is not None:
                self._loop.remove_reader(self.fd)
            self._reader_active = False
            if self.on_eof is not None:
                self.on_eof()
            return

        self.decoder.write(raw)
