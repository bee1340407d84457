"""Tests for termline.keys classification."""

from __future__ import annotations

import pytest

from termline.keys import (
    FUNCTION_KEYS,
    IGNORED_KEYS,
    Key,
    KeyEvent,
    KeyKind,
    classify,
    is_function_key,
    is_ignored,
)


class TestClassify:
    @pytest.mark.parametrize(
        "name,kind",
        [
            (Key.up, KeyKind.UP),
            (Key.down, KeyKind.DOWN),
            (Key.left, KeyKind.LEFT),
            (Key.right, KeyKind.RIGHT),
            (Key.backspace, KeyKind.BACKSPACE),
            (Key.return_, KeyKind.SUBMIT),
            (Key.linefeed, KeyKind.SUBMIT),
            (Key.escape, KeyKind.ESCAPE),
            (Key.space, KeyKind.SPACE),
        ],
    )
    def test_named_keys(self, name: str, kind: KeyKind) -> None:
        assert classify(KeyEvent(name)) is kind

    def test_ctrl_c_and_ctrl_d_close(self) -> None:
        assert classify(KeyEvent("c", ctrl=True)) is KeyKind.CLOSE
        assert classify(KeyEvent("d", ctrl=True)) is KeyKind.CLOSE

    def test_plain_c_is_a_character(self) -> None:
        assert classify(KeyEvent("c")) is KeyKind.CHARACTER
        assert classify(KeyEvent("c", shift=True)) is KeyKind.CHARACTER

    def test_other_ctrl_letters_are_characters(self) -> None:
        assert classify(KeyEvent("a", ctrl=True)) is KeyKind.CHARACTER

    @pytest.mark.parametrize("name", sorted(IGNORED_KEYS))
    def test_ignored_names(self, name: str) -> None:
        assert classify(KeyEvent(name)) is KeyKind.IGNORED

    def test_unknown_multi_character_name(self) -> None:
        assert classify(KeyEvent("hyperspace")) is KeyKind.IGNORED

    def test_non_printable_character(self) -> None:
        assert classify(KeyEvent("\x07")) is KeyKind.IGNORED


class TestFunctionKeys:
    def test_f1_to_f12(self) -> None:
        assert all(is_function_key(name) for name in FUNCTION_KEYS)
        assert len(FUNCTION_KEYS) == 12

    def test_out_of_range(self) -> None:
        assert is_function_key("f13") is False
        assert is_function_key("f0") is False
        assert is_function_key("f") is False


class TestIsIgnored:
    def test_escape_ignored_only_while_editing(self) -> None:
        escape = KeyEvent(Key.escape)
        assert is_ignored(escape, selecting=False) is True
        assert is_ignored(escape, selecting=True) is False

    @pytest.mark.parametrize("selecting", [False, True])
    def test_navigation_keys_always_ignored(self, selecting: bool) -> None:
        for name in (Key.home, Key.end, Key.delete, Key.tab, Key.f5):
            assert is_ignored(KeyEvent(name), selecting=selecting) is True

    @pytest.mark.parametrize("selecting", [False, True])
    def test_active_keys_not_ignored(self, selecting: bool) -> None:
        for name in (Key.up, Key.return_, Key.backspace, "x"):
            assert is_ignored(KeyEvent(name), selecting=selecting) is False
