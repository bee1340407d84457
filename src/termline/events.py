"""Events emitted by :class:`termline.editor.LineEditor`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Union


@dataclass
class LineEvent:
    """A line was submitted.

    ``committed`` is ``False`` for the bare-newline case, where an empty
    line is broadcast without touching history or the line stream.
    """

    text: str
    committed: bool = True
    type: Literal["line"] = "line"


@dataclass
class HistoryEvent:
    entries: list[str] = field(default_factory=list)
    type: Literal["history"] = "history"


@dataclass
class SelectionEvent:
    """Outcome of a selection prompt; ``choice`` is ``None`` when cancelled."""

    choice: str | None
    type: Literal["selection"] = "selection"

    @property
    def cancelled(self) -> bool:
        return self.choice is None


@dataclass
class CloseEvent:
    type: Literal["close"] = "close"


EditorEvent = Union[LineEvent, HistoryEvent, SelectionEvent, CloseEvent]

EventType = Literal["line", "history", "selection", "close"]

EventListener = Callable[[EditorEvent], None]
