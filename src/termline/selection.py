"""Single-choice selection over a fixed option list."""

from __future__ import annotations

from typing import Sequence

from termline import render
from termline.keys import Direction


class SelectionSession:
    """Option list plus the index of the highlighted choice.

    Cycling wraps in both directions. An empty option list is allowed:
    cycling does nothing and :meth:`current` returns ``None``.
    """

    def __init__(self, options: Sequence[str], choice_index: int = 0) -> None:
        self._options = list(options)
        self._choice_index = 0
        if self._options:
            self._choice_index = max(0, min(choice_index, len(self._options) - 1))

    @property
    def options(self) -> list[str]:
        return list(self._options)

    @property
    def choice_index(self) -> int:
        return self._choice_index

    @property
    def empty(self) -> bool:
        return not self._options

    def current(self) -> str | None:
        if not self._options:
            return None
        return self._options[self._choice_index]

    def cycle(self, direction: Direction) -> tuple[render.RenderCommand, ...]:
        """Move the choice one step and return the redraw for the list."""
        n = len(self._options)
        if n == 0:
            return ()
        self._choice_index = (self._choice_index + direction.value + n) % n
        return render.cycled_options(self._options, self._choice_index)

    def render_initial(self) -> tuple[render.RenderCommand, ...]:
        return render.initial_options(self._options, self._choice_index)
