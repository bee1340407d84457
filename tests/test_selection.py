"""Tests for termline.selection.SelectionSession."""

from __future__ import annotations

from termline.keys import Direction
from termline.render import EraseToEndOfDisplay, HideCursor, MoveCursorUp, WriteText
from termline.selection import SelectionSession


class TestSelectionSession:
    def test_starts_on_first_option(self) -> None:
        session = SelectionSession(["A", "B"])
        assert session.choice_index == 0
        assert session.current() == "A"

    def test_initial_index_clamped(self) -> None:
        assert SelectionSession(["A", "B"], 7).choice_index == 1
        assert SelectionSession(["A", "B"], -3).choice_index == 0

    def test_options_copied(self) -> None:
        options = ["A", "B"]
        session = SelectionSession(options)
        options.append("C")
        session.options.append("D")
        assert session.options == ["A", "B"]

    def test_cycle_down_wraps(self) -> None:
        session = SelectionSession(["A", "B", "C"])
        seen = []
        for _ in range(4):
            session.cycle(Direction.DOWN)
            seen.append(session.current())
        assert seen == ["B", "C", "A", "B"]

    def test_cycle_up_wraps(self) -> None:
        session = SelectionSession(["A", "B", "C"])
        session.cycle(Direction.UP)
        assert session.current() == "C"

    def test_single_option(self) -> None:
        session = SelectionSession(["only"])
        session.cycle(Direction.UP)
        session.cycle(Direction.DOWN)
        assert session.current() == "only"

    def test_cycle_returns_redraw(self) -> None:
        session = SelectionSession(["A", "B"])
        assert session.cycle(Direction.DOWN) == (
            MoveCursorUp(2),
            EraseToEndOfDisplay(),
            WriteText("[ ] A\r\n[*] B\r\n"),
        )

    def test_render_initial(self) -> None:
        session = SelectionSession(["A", "B"], 1)
        assert session.render_initial() == (
            WriteText("\r\n[ ] A\r\n[*] B\r\n"),
            HideCursor(),
        )


class TestEmptySelection:
    def test_no_current_choice(self) -> None:
        session = SelectionSession([])
        assert session.empty
        assert session.current() is None

    def test_cycle_is_noop(self) -> None:
        session = SelectionSession([], 3)
        assert session.cycle(Direction.DOWN) == ()
        assert session.choice_index == 0
