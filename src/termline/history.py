"""In-memory history of committed lines with up/down browsing."""

from __future__ import annotations

import logging

from termline.keys import Direction

logger = logging.getLogger(__name__)


class History:
    """Committed lines, most recent first.

    ``cursor`` is the browsing position: ``-1`` means the user is not
    browsing, otherwise it indexes the entry currently loaded into the line.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self.cursor: int = -1

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def browsing(self) -> bool:
        return self.cursor != -1

    def commit(self, text: str) -> bool:
        """Prepend *text* unless it repeats the most recent entry.

        Only the front entry is compared; older duplicates are kept.
        Returns whether an entry was added.
        """
        if self._entries and self._entries[0] == text:
            return False
        self._entries.insert(0, text)
        return True

    def get(self, index: int) -> str | None:
        """Entry at *index* (0 = most recent), or ``None`` when out of range.

        Negative indices count from the oldest end, as with ``index + length``.
        """
        if index < 0:
            return self.get_from_end(-index - 1)
        if index >= len(self._entries):
            return None
        return self._entries[index]

    def get_from_end(self, offset: int) -> str | None:
        """Entry *offset* steps from the oldest one, or ``None``."""
        if offset < 0 or offset >= len(self._entries):
            return None
        return self._entries[len(self._entries) - 1 - offset]

    def reset_navigation(self) -> None:
        self.cursor = -1

    def navigate(self, direction: Direction, current_line: str) -> str | None:
        """Move the browsing cursor and return the text to load.

        Returns ``None`` when the move is refused. Browsing up may only
        start from an empty line; browsing down past the newest entry
        returns ``""``.
        """
        if direction is Direction.UP:
            if self.cursor == -1 and current_line:
                logger.debug("history browse refused: line is not empty")
                return None
            if not self._entries or self.cursor + 1 >= len(self._entries):
                return None
            self.cursor += 1
            return self._entries[self.cursor]

        if self.cursor == -1:
            return None
        self.cursor -= 1
        if self.cursor == -1:
            return ""
        return self._entries[self.cursor]
