"""UI: the interactive ask/select loop.

Flow per call:
1. Write the query (with prefix) to the output sink.
2. For each attempt, write the instruction and block on the line reader.
   - A read failure (including an interrupt) ends the call at once.
3. Judge the line with the decision table from ``engine.policy``:
   - SUCCEEDED: return the value.
   - FAILED: raise the error.
   - RETRYING: write the diagnostic and start the next attempt.
4. Whatever happened, write a trailing newline before leaving.

Loop mode has no retry cap: only valid input or a read failure ends it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TextIO

from promptline.engine.policy import Outcome, PromptState, evaluate_answer, evaluate_choice
from promptline.errors import ReadFailure
from promptline.schema.defaults import DEFAULT_ORDER, SELECT_ORDER
from promptline.schema.options import PromptOptions
from promptline.streams.reader import LineReader, StreamLineReader, TerminalLineReader
from promptline.streams.sink import OutputSink, StreamSink

logger = logging.getLogger(__name__)


class UI:
    """Asks questions over a line reader and an output sink.

    Collaborators default to the process's stdin/stdout when omitted.
    Plain text streams are accepted and wrapped.
    """

    def __init__(
        self,
        writer: OutputSink | TextIO | None = None,
        reader: LineReader | TextIO | None = None,
    ) -> None:
        if writer is None:
            self._writer: OutputSink = StreamSink()
        elif isinstance(writer, OutputSink):
            self._writer = writer
        else:
            self._writer = StreamSink(writer)

        if reader is None:
            self._reader: LineReader = TerminalLineReader()
        elif isinstance(reader, LineReader):
            self._reader = reader
        else:
            self._reader = StreamLineReader(reader)

    @property
    def writer(self) -> OutputSink:
        return self._writer

    @property
    def reader(self) -> LineReader:
        return self._reader

    def ask(self, query: str, options: PromptOptions | None = None) -> str:
        """Ask for a free-form answer and return it.

        Raises:
            ReadFailure: the reader failed (PromptInterrupted on Ctrl+C).
            EmptyInputError: empty answer, no default, required, not looping.
            ValidationFailure: validate_func rejected the answer, not looping.
        """
        opts = options or PromptOptions()
        self._writer.write(f"{opts.prefix}{query}")
        return self._run(
            opts,
            render=lambda attempt: render_instruction(opts, attempt),
            judge=lambda line: evaluate_answer(line, opts),
        )

    def select(
        self,
        query: str,
        choices: list[str],
        options: PromptOptions | None = None,
    ) -> str:
        """Show a numbered list and return the chosen item.

        Raises ValueError before writing anything when ``choices`` is empty
        or ``options.default`` is not one of them. Otherwise raises the same
        errors as ``ask`` plus NotNumberError and OutOfRangeError.
        """
        opts = options or PromptOptions()
        if not choices:
            raise ValueError("list must not be empty")

        default_index: int | None = None
        if opts.default:
            for index, item in enumerate(choices):
                if item == opts.default:
                    default_index = index
            if default_index is None:
                raise ValueError(
                    "default is specified but item does not exist in list"
                )

        self._writer.write(render_choices(query, choices))

        instruction = SELECT_ORDER
        if default_index is not None and not opts.hide_default:
            instruction += f" (Default is {default_index + 1})"
        instruction += ": "

        return self._run(
            opts,
            render=lambda _attempt: instruction,
            judge=lambda line: evaluate_choice(line, choices, default_index, opts),
        )

    def _run(
        self,
        opts: PromptOptions,
        render: Callable[[int], str],
        judge: Callable[[str], Outcome],
    ) -> str:
        attempt = 0
        try:
            while True:
                attempt += 1
                logger.debug("Attempt %d", attempt)
                self._writer.write(render(attempt))

                try:
                    line = self._reader.read_line(opts.read_options())
                except ReadFailure as exc:
                    logger.info("Attempt %d: read failed (%s)", attempt, exc)
                    raise

                outcome = judge(line)
                if not outcome.terminal:
                    logger.debug("Attempt %d: retrying", attempt)
                    self._writer.write(outcome.diagnostic)
                    continue

                if outcome.state == PromptState.FAILED:
                    logger.info("Attempt %d: failed (%s)", attempt, outcome.error)
                    raise outcome.error  # type: ignore[misc]

                if opts.mask:
                    logger.debug("Attempt %d: succeeded", attempt)
                else:
                    logger.debug("Attempt %d: succeeded with %r", attempt, outcome.value)
                return outcome.value
        finally:
            # Leave the cursor on a fresh line for the next output.
            self._writer.write("\n")


def render_instruction(opts: PromptOptions, attempt: int) -> str:
    """Build the instruction written before reading attempt ``attempt``."""
    parts: list[str] = []
    if not opts.hide_order:
        parts.append(f"\n{opts.prefix}{DEFAULT_ORDER}")
    if attempt > 1:
        parts.append(f"\n{opts.prefix}{opts.retry_order()}")
    if opts.default and not opts.hide_default:
        parts.append(f" (Default is {opts.displayed_default()})")
    parts.append(": ")
    return "".join(parts)


def render_choices(query: str, choices: list[str]) -> str:
    lines = [f"{query}\n\n"]
    lines.extend(f"{number}. {item}\n" for number, item in enumerate(choices, 1))
    lines.append("\n")
    return "".join(lines)
