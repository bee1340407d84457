"""Tests for termline.key_decoder."""

from __future__ import annotations

import asyncio

import pytest

from termline.key_decoder import (
    ESC,
    KeyDecoder,
    _is_complete_sequence,
    decode_sequence,
    split_sequences,
)
from termline.keys import Key, KeyEvent


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Collector:
    """Collects decoded key events."""

    def __init__(self) -> None:
        self.events: list[KeyEvent] = []

    def __call__(self, event: KeyEvent) -> None:
        self.events.append(event)

    @property
    def names(self) -> list[str]:
        return [event.name for event in self.events]


def make_decoder(timeout: float = 0.01) -> tuple[KeyDecoder, Collector]:
    decoder = KeyDecoder(timeout=timeout)
    col = Collector()
    decoder.subscribe(col)
    return decoder, col


# ---------------------------------------------------------------------------
# Sequence completeness
# ---------------------------------------------------------------------------


class TestIsCompleteSequence:
    def test_lone_escape_incomplete(self) -> None:
        assert _is_complete_sequence(ESC) is False

    def test_csi_without_final_byte(self) -> None:
        assert _is_complete_sequence("\x1b[") is False
        assert _is_complete_sequence("\x1b[1;5") is False

    def test_csi_complete(self) -> None:
        assert _is_complete_sequence("\x1b[A") is True
        assert _is_complete_sequence("\x1b[3~") is True
        assert _is_complete_sequence("\x1b[1;5C") is True

    def test_ss3(self) -> None:
        assert _is_complete_sequence("\x1bO") is False
        assert _is_complete_sequence("\x1bOP") is True

    def test_linux_console_function_key(self) -> None:
        assert _is_complete_sequence("\x1b[[") is False
        assert _is_complete_sequence("\x1b[[A") is True

    def test_meta_character(self) -> None:
        assert _is_complete_sequence("\x1bx") is True

    def test_double_escape_is_not_meta(self) -> None:
        assert _is_complete_sequence("\x1b\x1b") is False


# ---------------------------------------------------------------------------
# Splitting
# ---------------------------------------------------------------------------


class TestSplitSequences:
    def test_plain_characters(self) -> None:
        assert split_sequences("abc") == (["a", "b", "c"], "")

    def test_mixed(self) -> None:
        assert split_sequences("a\x1b[Ab") == (["a", "\x1b[A", "b"], "")

    def test_trailing_partial(self) -> None:
        assert split_sequences("x\x1b[1;") == (["x"], "\x1b[1;")

    def test_back_to_back_sequences(self) -> None:
        assert split_sequences("\x1b[A\x1b[B") == (["\x1b[A", "\x1b[B"], "")

    def test_double_escape_splits(self) -> None:
        assert split_sequences("\x1b\x1b") == (["\x1b"], "\x1b")
        assert split_sequences("\x1b\x1b[A") == (["\x1b", "\x1b[A"], "")

    def test_empty(self) -> None:
        assert split_sequences("") == ([], "")


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestDecodeSequence:
    @pytest.mark.parametrize(
        "seq,name",
        [
            ("\x1b[A", Key.up),
            ("\x1b[B", Key.down),
            ("\x1b[C", Key.right),
            ("\x1b[D", Key.left),
            ("\x1bOA", Key.up),
            ("\x1b[H", Key.home),
            ("\x1b[F", Key.end),
            ("\x1b[3~", Key.delete),
            ("\x1b[5~", Key.page_up),
            ("\x1bOP", Key.f1),
            ("\x1b[24~", Key.f12),
            ("\x1b[[C", Key.f3),
        ],
    )
    def test_legacy_sequences(self, seq: str, name: str) -> None:
        assert decode_sequence(seq) == KeyEvent(name)

    @pytest.mark.parametrize(
        "ch,name",
        [
            ("\r", Key.return_),
            ("\n", Key.linefeed),
            ("\t", Key.tab),
            (" ", Key.space),
            ("\x7f", Key.backspace),
            ("\x08", Key.backspace),
            (ESC, Key.escape),
        ],
    )
    def test_control_characters(self, ch: str, name: str) -> None:
        assert decode_sequence(ch) == KeyEvent(name)

    def test_ctrl_letters(self) -> None:
        assert decode_sequence("\x03") == KeyEvent("c", ctrl=True)
        assert decode_sequence("\x04") == KeyEvent("d", ctrl=True)
        assert decode_sequence("\x01") == KeyEvent("a", ctrl=True)

    def test_ctrl_space(self) -> None:
        assert decode_sequence("\x00") == KeyEvent(Key.space, ctrl=True)

    def test_printable(self) -> None:
        assert decode_sequence("a") == KeyEvent("a")
        assert decode_sequence("7") == KeyEvent("7")
        assert decode_sequence("é") == KeyEvent("é")

    def test_uppercase_is_shifted_lowercase(self) -> None:
        assert decode_sequence("A") == KeyEvent("a", shift=True)

    def test_capital_with_multi_char_lowercase(self) -> None:
        assert decode_sequence("\u0130") == KeyEvent("\u0130")

    def test_shift_tab(self) -> None:
        assert decode_sequence("\x1b[Z") == KeyEvent(Key.tab, shift=True)

    def test_modified_arrows(self) -> None:
        assert decode_sequence("\x1b[1;5A") == KeyEvent(Key.up, ctrl=True)
        assert decode_sequence("\x1b[1;2D") == KeyEvent(Key.left, shift=True)
        assert decode_sequence("\x1b[1;6C") == KeyEvent(Key.right, ctrl=True, shift=True)

    def test_modified_tilde(self) -> None:
        assert decode_sequence("\x1b[3;5~") == KeyEvent(Key.delete, ctrl=True)

    def test_unknown_tilde(self) -> None:
        assert decode_sequence("\x1b[99;5~") == KeyEvent(Key.undefined)

    def test_meta_reports_inner_key(self) -> None:
        assert decode_sequence("\x1bx") == KeyEvent("x")

    def test_unknown_sequence(self) -> None:
        assert decode_sequence("\x1b[200x") == KeyEvent(Key.undefined)

    def test_key_id(self) -> None:
        assert KeyEvent("a", ctrl=True, shift=True).key_id == "ctrl+shift+a"
        assert KeyEvent("up").key_id == "up"


# ---------------------------------------------------------------------------
# KeyDecoder
# ---------------------------------------------------------------------------


class TestKeyDecoder:
    def test_emits_each_key(self) -> None:
        decoder, col = make_decoder()
        decoder.write("hi\x1b[A")
        assert col.names == ["h", "i", Key.up]

    def test_bytes_input(self) -> None:
        decoder, col = make_decoder()
        decoder.write(b"ok\x7f")
        assert col.names == ["o", "k", Key.backspace]

    def test_utf8_split_across_chunks(self) -> None:
        decoder, col = make_decoder()
        encoded = "é".encode()
        decoder.write(encoded[:1])
        assert col.events == []
        decoder.write(encoded[1:])
        assert col.names == ["é"]

    def test_split_sequence_across_chunks(self) -> None:
        decoder, col = make_decoder()
        # No running loop here, so the partial is flushed right away.
        decoder.write("\x1b")
        assert col.names == [Key.escape]

    def test_crlf_reports_one_key(self) -> None:
        decoder, col = make_decoder()
        decoder.write("a\r\nb")
        assert col.names == ["a", Key.return_, "b"]

    def test_lfcr_reports_one_key(self) -> None:
        decoder, col = make_decoder()
        decoder.write("\n\r")
        assert col.names == [Key.linefeed]

    def test_crlf_split_across_chunks(self) -> None:
        decoder, col = make_decoder()
        decoder.write("\r")
        decoder.write("\n")
        assert col.names == [Key.return_]

    def test_double_escape_is_two_presses(self) -> None:
        decoder, col = make_decoder()
        decoder.write("\x1b\x1b")
        assert col.names == [Key.escape, Key.escape]

    def test_repeated_terminators_are_kept(self) -> None:
        decoder, col = make_decoder()
        decoder.write("\r\r")
        assert col.names == [Key.return_, Key.return_]

    def test_crlf_crlf(self) -> None:
        decoder, col = make_decoder()
        decoder.write("\r\n\r\n")
        assert col.names == [Key.return_, Key.return_]

    def test_unsubscribe(self) -> None:
        decoder = KeyDecoder()
        col = Collector()
        unsubscribe = decoder.subscribe(col)
        decoder.write("a")
        unsubscribe()
        decoder.write("b")
        assert col.names == ["a"]

    def test_clear_drops_pending_terminator(self) -> None:
        decoder, col = make_decoder()
        decoder.write("\r")
        decoder.clear()
        decoder.write("\n")
        assert col.names == [Key.return_, Key.linefeed]

    def test_empty_write_is_noop(self) -> None:
        decoder, col = make_decoder()
        decoder.write("")
        decoder.write(b"")
        assert col.events == []


class TestKeyDecoderTimeout:
    @pytest.mark.asyncio
    async def test_partial_escape_buffered(self) -> None:
        decoder, col = make_decoder()
        decoder.write("\x1b")
        assert decoder.pending == "\x1b"
        assert col.events == []
        decoder.clear()

    @pytest.mark.asyncio
    async def test_lone_escape_flushed_on_timeout(self) -> None:
        decoder, col = make_decoder(timeout=0.01)
        decoder.write("\x1b")
        await asyncio.sleep(0.05)
        assert col.names == [Key.escape]
        assert decoder.pending == ""

    @pytest.mark.asyncio
    async def test_split_csi_across_chunks(self) -> None:
        decoder, col = make_decoder(timeout=0.05)
        decoder.write("\x1b[")
        decoder.write("B")
        assert col.names == [Key.down]
        await asyncio.sleep(0.08)
        assert col.names == [Key.down]

    @pytest.mark.asyncio
    async def test_incomplete_sequence_becomes_undefined(self) -> None:
        decoder, col = make_decoder(timeout=0.01)
        decoder.write("\x1b[1;")
        await asyncio.sleep(0.05)
        assert col.names == [Key.undefined]

    @pytest.mark.asyncio
    async def test_partial_utf8_keeps_escape_timer(self) -> None:
        decoder, col = make_decoder(timeout=0.01)
        decoder.write(b"\x1b")
        decoder.write(b"\xc3")
        await asyncio.sleep(0.05)
        assert col.names == [Key.escape]
        assert decoder.pending == ""

    @pytest.mark.asyncio
    async def test_second_escape_in_later_chunk(self) -> None:
        decoder, col = make_decoder(timeout=0.01)
        decoder.write("\x1b")
        decoder.write("\x1b")
        await asyncio.sleep(0.05)
        assert col.names == [Key.escape, Key.escape]

    @pytest.mark.asyncio
    async def test_flush_now(self) -> None:
        decoder, col = make_decoder(timeout=10)
        decoder.write("\x1b")
        decoder.flush()
        assert col.names == [Key.escape]
