"""Shared test fixtures for promptline tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from promptline.engine.ui import UI
from promptline.streams.reader import ScriptedReader
from promptline.streams.sink import BufferSink


@pytest.fixture
def sink() -> BufferSink:
    return BufferSink()


@pytest.fixture
def make_ui(sink: BufferSink) -> Callable[..., tuple[UI, ScriptedReader]]:
    """Factory: make_ui("a", "b") → (UI answering "a" then "b", its reader)."""

    def _make(*lines: str | BaseException) -> tuple[UI, ScriptedReader]:
        reader = ScriptedReader(lines)
        return UI(writer=sink, reader=reader), reader

    return _make


@pytest.fixture
def reject_digits() -> Callable[[str], None]:
    """Validator rejecting any answer that contains a digit."""

    def _validate(line: str) -> None:
        if any(ch.isdigit() for ch in line):
            raise ValueError("digits are not allowed")

    return _validate


@pytest.fixture
def options_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write YAML text to a temporary options file and return its path."""

    def _write(text: str, name: str = "options.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
