"""Line readers: the blocking input side of the prompt engine.

Every reader returns one line with its terminator stripped and converts a
keyboard interrupt arriving mid-read into PromptInterrupted, so the engine
can unwind instead of the process dying. Each read call handles the
interrupt on its own; nothing stays armed between reads.

Also provides ScriptedReader for deterministic testing without a terminal.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TextIO

import click

from promptline.errors import PromptInterrupted, ReadFailure
from promptline.schema.options import ReadOptions

logger = logging.getLogger(__name__)

_BACKSPACES = ("\x7f", "\b")
_LINE_ENDS = ("\r", "\n")


class LineReader(ABC):
    """Abstract base for line readers."""

    @abstractmethod
    def read_line(self, opts: ReadOptions) -> str:
        """Block until one line of input is available.

        Args:
            opts: Read options; ``mask`` asks for secret input.

        Returns:
            The line without its trailing newline.

        Raises:
            PromptInterrupted: the user interrupted the read.
            ReadFailure: the transport failed or input is exhausted.
        """
        ...


def strip_line_end(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


class StreamLineReader(LineReader):
    """Reads lines from any text stream. Masking is not supported."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def read_line(self, opts: ReadOptions) -> str:
        try:
            line = self._stream.readline()
        except KeyboardInterrupt as exc:
            raise PromptInterrupted() from exc
        except (OSError, ValueError) as exc:
            raise ReadFailure(f"cannot read input: {exc}") from exc

        if line == "":
            raise ReadFailure("unexpected end of input")
        return strip_line_end(line)


class TerminalLineReader(StreamLineReader):
    """Reads from a terminal, optionally echoing a mask for secret input.

    Masked reads go character by character through ``click.getchar`` and
    are only possible when the stream is a TTY; otherwise the reader falls
    back to a plain line read.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        echo: TextIO | None = None,
    ) -> None:
        super().__init__(stream if stream is not None else sys.stdin)
        self._echo = echo if echo is not None else sys.stdout

    def read_line(self, opts: ReadOptions) -> str:
        if opts.mask and self._is_tty():
            return self._read_masked(opts.mask_val)
        if opts.mask:
            logger.debug("Input is not a terminal; reading masked answer as plain line")
        return super().read_line(opts)

    def _is_tty(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())

    def _read_masked(self, mask_val: str) -> str:
        chars: list[str] = []
        while True:
            try:
                ch = click.getchar(echo=False)
            except KeyboardInterrupt as exc:
                raise PromptInterrupted() from exc
            except EOFError as exc:
                raise ReadFailure("unexpected end of input") from exc

            if ch in _LINE_ENDS:
                break
            if ch in _BACKSPACES:
                if chars:
                    chars.pop()
                    self._write_echo("\b \b" * len(mask_val))
                continue
            # Escape sequences (arrow keys etc.) are not part of the answer.
            if ch.startswith("\x1b"):
                continue
            chars.append(ch)
            self._write_echo(mask_val)
        return "".join(chars)

    def _write_echo(self, text: str) -> None:
        if text:
            self._echo.write(text)
            self._echo.flush()


class ScriptedReader(LineReader):
    """Deterministic reader for testing. No terminal needed.

    Yields the given lines in order. An exception instance in the script
    is raised instead of being returned (e.g. PromptInterrupted()).
    Running out of lines raises ReadFailure.
    """

    def __init__(self, lines: Iterable[str | BaseException]) -> None:
        self._lines = list(lines)
        self.call_count = 0
        self.seen_options: list[ReadOptions] = []

    def read_line(self, opts: ReadOptions) -> str:
        self.seen_options.append(opts)
        if self.call_count >= len(self._lines):
            raise ReadFailure("unexpected end of input")
        item = self._lines[self.call_count]
        self.call_count += 1
        if isinstance(item, BaseException):
            raise item
        return item
