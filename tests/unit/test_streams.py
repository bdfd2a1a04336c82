"""Unit tests for line readers and output sinks."""

from __future__ import annotations

import io
from collections.abc import Iterator

import click
import pytest

from promptline.errors import PromptInterrupted, ReadFailure
from promptline.schema.options import ReadOptions
from promptline.streams.reader import (
    ScriptedReader,
    StreamLineReader,
    TerminalLineReader,
    strip_line_end,
)
from promptline.streams.sink import BufferSink, StreamSink

PLAIN = ReadOptions()
MASKED = ReadOptions(mask=True, mask_val="*")


class _InterruptingStream(io.StringIO):
    def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
        raise KeyboardInterrupt


class _BrokenStream(io.StringIO):
    def readline(self, size: int | None = -1) -> str:  # type: ignore[override]
        raise OSError("device gone")


class _FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def _keys(monkeypatch: pytest.MonkeyPatch, keys: str) -> None:
    """Feed ``keys`` one by one through click.getchar."""
    it: Iterator[str] = iter(keys)
    monkeypatch.setattr(click, "getchar", lambda echo=False: next(it))


# ── StreamLineReader ─────────────────────────────────────────────────


class TestStreamLineReader:

    def test_reads_lines_in_order(self) -> None:
        reader = StreamLineReader(io.StringIO("one\ntwo\r\n\nlast"))
        assert reader.read_line(PLAIN) == "one"
        assert reader.read_line(PLAIN) == "two"
        assert reader.read_line(PLAIN) == ""
        assert reader.read_line(PLAIN) == "last"

    def test_end_of_input(self) -> None:
        reader = StreamLineReader(io.StringIO(""))
        with pytest.raises(ReadFailure, match="end of input"):
            reader.read_line(PLAIN)

    def test_keyboard_interrupt_converted(self) -> None:
        reader = StreamLineReader(_InterruptingStream())
        with pytest.raises(PromptInterrupted) as info:
            reader.read_line(PLAIN)
        assert isinstance(info.value.__cause__, KeyboardInterrupt)

    def test_os_error_converted(self) -> None:
        reader = StreamLineReader(_BrokenStream())
        with pytest.raises(ReadFailure, match="device gone"):
            reader.read_line(PLAIN)

    def test_mask_ignored(self) -> None:
        reader = StreamLineReader(io.StringIO("secret\n"))
        assert reader.read_line(MASKED) == "secret"

    @pytest.mark.parametrize(
        "raw,expected",
        [("a\n", "a"), ("a\r\n", "a"), ("a", "a"), ("a\n\n", "a\n"), ("\r", "\r")],
    )
    def test_strip_line_end(self, raw: str, expected: str) -> None:
        assert strip_line_end(raw) == expected


# ── TerminalLineReader ───────────────────────────────────────────────


class TestTerminalLineReader:
    """Masked reads go through click.getchar when attached to a TTY."""

    def test_plain_read(self) -> None:
        reader = TerminalLineReader(stream=_FakeTTY("hello\n"), echo=io.StringIO())
        assert reader.read_line(PLAIN) == "hello"

    def test_masked_read_echoes_mask(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _keys(monkeypatch, "ab\x7fc\r")
        echo = io.StringIO()
        reader = TerminalLineReader(stream=_FakeTTY(), echo=echo)
        assert reader.read_line(MASKED) == "ac"
        assert echo.getvalue() == "**\b \b*"

    def test_masked_read_without_echo(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _keys(monkeypatch, "pw\n")
        echo = io.StringIO()
        reader = TerminalLineReader(stream=_FakeTTY(), echo=echo)
        assert reader.read_line(ReadOptions(mask=True)) == "pw"
        assert echo.getvalue() == ""

    def test_masked_read_skips_escape_sequences(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        it = iter(["a", "\x1b[D", "b", "\r"])
        monkeypatch.setattr(click, "getchar", lambda echo=False: next(it))
        reader = TerminalLineReader(stream=_FakeTTY(), echo=io.StringIO())
        assert reader.read_line(MASKED) == "ab"

    def test_backspace_on_empty_answer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _keys(monkeypatch, "\x7f\x7fx\r")
        echo = io.StringIO()
        reader = TerminalLineReader(stream=_FakeTTY(), echo=echo)
        assert reader.read_line(MASKED) == "x"
        assert echo.getvalue() == "*"

    def test_masked_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def interrupt(echo: bool = False) -> str:
            raise KeyboardInterrupt

        monkeypatch.setattr(click, "getchar", interrupt)
        reader = TerminalLineReader(stream=_FakeTTY(), echo=io.StringIO())
        with pytest.raises(PromptInterrupted):
            reader.read_line(MASKED)

    def test_masked_eof(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def eof(echo: bool = False) -> str:
            raise EOFError

        monkeypatch.setattr(click, "getchar", eof)
        reader = TerminalLineReader(stream=_FakeTTY(), echo=io.StringIO())
        with pytest.raises(ReadFailure):
            reader.read_line(MASKED)

    def test_mask_falls_back_when_not_a_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(echo: bool = False) -> str:
            raise AssertionError("getchar must not be used")

        monkeypatch.setattr(click, "getchar", fail)
        reader = TerminalLineReader(stream=io.StringIO("piped\n"), echo=io.StringIO())
        assert reader.read_line(MASKED) == "piped"


# ── ScriptedReader ───────────────────────────────────────────────────


class TestScriptedReader:

    def test_yields_then_exhausts(self) -> None:
        reader = ScriptedReader(["a", "b"])
        assert reader.read_line(PLAIN) == "a"
        assert reader.read_line(PLAIN) == "b"
        with pytest.raises(ReadFailure):
            reader.read_line(PLAIN)
        assert reader.call_count == 2
        assert len(reader.seen_options) == 3

    def test_raises_scripted_exception(self) -> None:
        reader = ScriptedReader([PromptInterrupted(), "after"])
        with pytest.raises(PromptInterrupted):
            reader.read_line(PLAIN)
        assert reader.read_line(PLAIN) == "after"


# ── Sinks ────────────────────────────────────────────────────────────


class TestSinks:

    def test_buffer_sink_keeps_order(self) -> None:
        sink = BufferSink()
        sink.write("a")
        sink.write("")
        sink.write("b\n")
        assert sink.writes == ["a", "", "b\n"]
        assert sink.getvalue() == "ab\n"

    def test_stream_sink_flushes_each_write(self) -> None:
        class _CountingStream(io.StringIO):
            flushes = 0

            def flush(self) -> None:
                self.flushes += 1
                super().flush()

        stream = _CountingStream()
        sink = StreamSink(stream)
        sink.write("one")
        sink.write("two")
        assert stream.getvalue() == "onetwo"
        assert stream.flushes == 2
