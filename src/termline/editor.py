"""Interactive line editor driven by decoded key events.

:class:`LineEditor` owns the line buffer, the history and, while a choice
prompt is open, a :class:`~termline.selection.SelectionSession`. Each key
event is routed according to the current :class:`Mode`; the outcome is a
set of :mod:`termline.events` plus redraw commands for the renderer.

Committed lines travel on two channels: ``editor.lines`` is a
backpressured :class:`~termline.line_stream.LineStream` for pull consumers,
and every subscriber also receives a synchronous :class:`LineEvent`.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Protocol, Sequence

from termline import render
from termline.config import EditorConfig
from termline.events import (
    CloseEvent,
    EditorEvent,
    EventListener,
    EventType,
    HistoryEvent,
    LineEvent,
    SelectionEvent,
)
from termline.history import History
from termline.keys import Direction, KeyEvent, KeyKind, classify, is_ignored
from termline.line_buffer import LineBuffer
from termline.line_stream import LineStream
from termline.render import Renderer
from termline.selection import SelectionSession

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    EDITING = "editing"
    SELECTING = "selecting"


class KeySource(Protocol):
    """Upstream producer of decoded key events."""

    def subscribe(self, handler: Callable[[KeyEvent], None]) -> Callable[[], None]: ...


class LineEditor:
    """One interactive prompt session.

    Parameters
    ----------
    input:
        Key source; subscribed until :meth:`close`.
    output:
        Renderer for redraws. Without one, every write is a silent no-op.
    prompt:
        Prompt text, overriding ``config.prompt``.
    options:
        Option list for selection mode.
    config:
        Remaining settings; defaults to :class:`EditorConfig`.
    """

    def __init__(
        self,
        input: KeySource,
        *,
        output: Renderer | None = None,
        prompt: str | None = None,
        options: Sequence[str] | None = None,
        config: EditorConfig | None = None,
    ) -> None:
        if input is None:
            raise TypeError("LineEditor requires an input key source")
        self._config = config or EditorConfig()
        self._prompt = prompt if prompt is not None else self._config.prompt
        self._buffer = LineBuffer()
        self._history = History()
        self._mode = Mode.EDITING
        self._options: list[str] = list(options or [])
        self._selection: SelectionSession | None = None
        self._listeners: list[EventListener] = []
        self._closed = False

        self.lines = LineStream(high_water_mark=self._config.high_water_mark)
        self.input = input
        self.output = output
        self._unsubscribe_input: Callable[[], None] | None = input.subscribe(
            self.handle_key
        )

    # -- state --------------------------------------------------------------

    @property
    def prompt_text(self) -> str:
        return self._prompt

    @property
    def line(self) -> str:
        return self._buffer.text

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def selecting(self) -> bool:
        return self._mode is Mode.SELECTING

    @property
    def selection(self) -> SelectionSession | None:
        return self._selection

    @property
    def options(self) -> list[str]:
        return list(self._options)

    @property
    def history(self) -> History:
        return self._history

    @property
    def closed(self) -> bool:
        return self._closed

    # -- subscriptions ------------------------------------------------------

    def subscribe(self, fn: EventListener) -> Callable[[], None]:
        """Receive every editor event. Returns an unsubscribe function."""
        self._listeners.append(fn)

        def unsubscribe() -> None:
            if fn in self._listeners:
                self._listeners.remove(fn)

        return unsubscribe

    def on(
        self, event_type: EventType, handler: Callable[[EditorEvent], None]
    ) -> Callable[[], None]:
        """Receive only events whose ``type`` is *event_type*."""

        def listener(event: EditorEvent) -> None:
            if event.type == event_type:
                handler(event)

        return self.subscribe(listener)

    def _emit(self, event: EditorEvent) -> None:
        for listener in list(self._listeners):
            # Nothing follows the close event, even mid-broadcast.
            if self._closed and not isinstance(event, CloseEvent):
                return
            listener(event)

    # -- public operations --------------------------------------------------

    def prompt(self) -> None:
        """Redraw the prompt row."""
        self._render(
            render.prompt_line(self._prompt, self._buffer.text, self._buffer.cursor)
        )

    def prompt_options(self) -> None:
        """Draw the option list below the prompt and hide the cursor."""
        session = self._selection or SelectionSession(self._options)
        self._render(session.render_initial())

    def set_selection_mode(self, enabled: bool) -> None:
        if enabled:
            if self._selection is None:
                self._selection = SelectionSession(self._options)
            self._mode = Mode.SELECTING
        else:
            self._selection = None
            self._mode = Mode.EDITING

    def set_options(self, options: Sequence[str]) -> None:
        self._options = list(options)
        if self._selection is not None:
            self._selection = SelectionSession(
                self._options, self._selection.choice_index
            )

    def close(self) -> None:
        """End the session: detach from the input, end the line stream, emit close."""
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe_input is not None:
            self._unsubscribe_input()
            self._unsubscribe_input = None
        self.lines.end()
        logger.debug("editor closed")
        self._emit(CloseEvent())

    def write(self, data: str) -> None:
        if self.output is not None:
            self.output.write(data)

    def clear_line(self) -> None:
        """Move to a fresh row and reset the buffer."""
        self._render(render.line_break())
        self._buffer.clear()

    # -- key routing --------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> None:
        if self._closed:
            logger.debug("key %s dropped: editor closed", event.key_id)
            return

        kind = classify(event)
        if kind is KeyKind.UP:
            self._on_vertical(Direction.UP)
            return
        if kind is KeyKind.DOWN:
            self._on_vertical(Direction.DOWN)
            return

        if not self.selecting:
            self._history.reset_navigation()

        if kind is KeyKind.CLOSE:
            self.close()
            return
        if kind is KeyKind.ESCAPE and self.selecting:
            self._cancel_selection()
            return
        if is_ignored(event, selecting=self.selecting):
            logger.debug("key %s ignored", event.key_id)
            return

        match kind:
            case KeyKind.BACKSPACE:
                if not self.selecting:
                    self._on_backspace()
                return
            case KeyKind.SUBMIT:
                self._on_submit()
                return
            case KeyKind.LEFT:
                if not self.selecting and self._buffer.move_left():
                    self._render(render.cursor_left())
                return
            case KeyKind.RIGHT:
                if not self.selecting and self._buffer.move_right():
                    self._render(render.cursor_right())
                return
            case KeyKind.SPACE:
                if self.selecting:
                    return
                chars = " "
            case KeyKind.CHARACTER:
                if self.selecting:
                    # Stray keys still move the choice.
                    self._on_vertical(Direction.UP)
                    return
                chars = event.name.upper() if event.shift else event.name
            case _:
                return

        self._insert(chars)

    def _insert(self, chars: str) -> None:
        self._buffer.insert(chars)
        self.prompt()

    def _on_backspace(self) -> None:
        if not self._buffer.delete_before():
            return
        self._render(
            render.backspace(self._prompt, self._buffer.text, self._buffer.cursor)
        )

    def _on_vertical(self, direction: Direction) -> None:
        if self._selection is not None and self.selecting:
            self._render(self._selection.cycle(direction))
            return

        text = self._history.navigate(direction, self._buffer.text)
        if text is None:
            return
        self._buffer.set(text)
        self.prompt()

    def _on_submit(self) -> None:
        if not self.selecting and self._buffer.empty:
            self._emit(LineEvent("", committed=False))
            return

        if self.selecting:
            self._commit_selection()
            return

        line = self._buffer.text
        if not line.strip():
            logger.debug("whitespace-only line not committed")
            return

        if not self._history.commit(line):
            logger.debug("history unchanged: repeated line")
        if not self.lines.push(line):
            logger.debug(
                "line stream at high-water mark (%d buffered)", self.lines.length
            )
        self._emit(LineEvent(line))
        # A listener may have closed the session; close is its last event.
        if self._closed:
            return
        self._emit(HistoryEvent(self._history.entries))
        if self._closed:
            return
        self.clear_line()

    def _commit_selection(self) -> None:
        choice = self._selection.current() if self._selection is not None else None
        if choice is None:
            logger.debug("selection submitted with no options; treating as cancel")
            self._cancel_selection()
            return
        self.clear_line()
        self.set_selection_mode(False)
        self._render(render.show_cursor())
        logger.debug("selection made: %s", choice)
        self._emit(SelectionEvent(choice))

    def _cancel_selection(self) -> None:
        self._render(render.selection_cancelled(self._config.cancel_message))
        self.clear_line()
        self.set_selection_mode(False)
        self._render(render.show_cursor())
        logger.debug("selection cancelled")
        self._emit(SelectionEvent(None))

    def _render(self, commands: Sequence[render.RenderCommand]) -> None:
        if self.output is None or not commands:
            return
        self.output.render(commands)


def create_interface(
    input: KeySource,
    *,
    output: Renderer | None = None,
    prompt: str | None = None,
    options: Sequence[str] | None = None,
    config: EditorConfig | None = None,
) -> LineEditor:
    return LineEditor(input, output=output, prompt=prompt, options=options, config=config)
