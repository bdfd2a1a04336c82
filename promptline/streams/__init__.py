"""Input and output collaborators for the prompt engine."""

from promptline.streams.reader import (
    LineReader,
    ScriptedReader,
    StreamLineReader,
    TerminalLineReader,
)
from promptline.streams.sink import BufferSink, OutputSink, StreamSink

__all__ = [
    "BufferSink",
    "LineReader",
    "OutputSink",
    "ScriptedReader",
    "StreamLineReader",
    "StreamSink",
    "TerminalLineReader",
]
