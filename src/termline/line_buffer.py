"""Single-line text buffer with a cursor offset."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LineBuffer:
    """Editable line; ``0 <= cursor <= len(text)`` always holds.

    Each character is one cursor step, no grapheme clustering.
    """

    text: str = ""
    cursor: int = 0

    def __len__(self) -> int:
        return len(self.text)

    @property
    def empty(self) -> bool:
        return not self.text

    def insert(self, chars: str) -> None:
        self.text = self.text[: self.cursor] + chars + self.text[self.cursor :]
        self.cursor += len(chars)

    def delete_before(self) -> bool:
        """Remove the character left of the cursor. Returns whether anything changed."""
        if self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def move_left(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_right(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.cursor += 1
        return True

    def set(self, text: str) -> None:
        """Replace the contents, cursor at the end."""
        self.text = text
        self.cursor = len(text)

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0
