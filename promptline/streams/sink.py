"""Output sinks: the ordered write side of the prompt engine."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO


class OutputSink(ABC):
    """Abstract base for output sinks. Writes must keep their order."""

    @abstractmethod
    def write(self, text: str) -> None:
        ...


class StreamSink(OutputSink):
    """Writes to a text stream, flushing after every write."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()


class BufferSink(OutputSink):
    """Collects writes in memory (for tests and captured prompts)."""

    def __init__(self) -> None:
        self.writes: list[str] = []

    def write(self, text: str) -> None:
        self.writes.append(text)

    def getvalue(self) -> str:
        return "".join(self.writes)
