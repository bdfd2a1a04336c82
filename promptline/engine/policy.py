"""Decision tables applied to every line the engine reads.

Each attempt writes an instruction, reads a line and judges it. Judging
ends in one of three states:

    SUCCEEDED  the call returns the value
    FAILED     the call raises the error
    RETRYING   the diagnostic is written and the next attempt starts

A read failure is never judged; the engine raises it straight away. The
table functions are pure: they return an Outcome and the engine performs
the writes.

Precedence for ask:
  1. empty line + default      -> SUCCEEDED(default)
  2. empty line + required     -> FAILED(EmptyInputError) | RETRYING if loop
  3. validator rejects         -> FAILED(ValidationFailure) | RETRYING if loop
  4. anything else             -> SUCCEEDED(line)

Select inserts "not a number" and "out of range" rows between 2 and 3.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from promptline.errors import (
    EmptyInputError,
    NotNumberError,
    OutOfRangeError,
    PromptError,
    ValidationFailure,
)
from promptline.schema.defaults import (
    DEFAULT_ERR_SUFFIX,
    EMPTY_MESSAGE,
    SELECT_EMPTY_MESSAGE,
    VALIDATE_LABEL,
)
from promptline.schema.options import PromptOptions


_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class PromptState(StrEnum):
    """How judging a line ended."""

    RETRYING = "retrying"  # Diagnostic written, next attempt follows.
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    """Result of judging one line."""

    state: PromptState
    value: str = ""
    error: PromptError | None = None
    diagnostic: str = ""  # Written to the sink before retrying.

    @property
    def terminal(self) -> bool:
        return self.state in (PromptState.SUCCEEDED, PromptState.FAILED)


def _succeed(value: str) -> Outcome:
    return Outcome(state=PromptState.SUCCEEDED, value=value)


def _reject(options: PromptOptions, error: PromptError, diagnostic: str) -> Outcome:
    """Fail outright, or retry with a diagnostic when looping."""
    if not options.loop:
        return Outcome(state=PromptState.FAILED, error=error)
    return Outcome(state=PromptState.RETRYING, diagnostic=diagnostic)


def _check_validator(line: str, options: PromptOptions) -> ValidationFailure | None:
    error = options.run_validator(line)
    if error is None:
        return None
    failure = ValidationFailure(error)
    failure.__cause__ = error
    return failure


def evaluate_answer(line: str, options: PromptOptions) -> Outcome:
    """Judge a line read by ``UI.ask``."""
    suffix = options.effective_err_suffix()

    if line == "" and options.default:
        return _succeed(options.default)

    if line == "" and options.required:
        return _reject(options, EmptyInputError(), f"{EMPTY_MESSAGE}{suffix}")

    failure = _check_validator(line, options)
    if failure is not None:
        label = "" if options.hide_validate_func_err else VALIDATE_LABEL
        return _reject(
            options, failure, f"{options.prefix}{label}{failure}{suffix}"
        )

    return _succeed(line)


def evaluate_choice(
    line: str,
    choices: list[str],
    default_index: int | None,
    options: PromptOptions,
) -> Outcome:
    """Judge a line read by ``UI.select``.

    Select diagnostics always end with the built-in suffix.
    """
    if line == "" and default_index is not None:
        return _succeed(choices[default_index])

    if line == "" and options.required:
        return _reject(
            options, EmptyInputError(), f"{SELECT_EMPTY_MESSAGE}{DEFAULT_ERR_SUFFIX}"
        )

    if _INTEGER_RE.fullmatch(line) is None:
        return _reject(
            options,
            NotNumberError(),
            f'"{line}" is not a valid input. Answer by a number.{DEFAULT_ERR_SUFFIX}',
        )

    number = int(line)

    if number < 1 or number > len(choices):
        return _reject(
            options,
            OutOfRangeError(),
            f'"{line}" is not a valid choice. '
            f"Choose a number from 1 to {len(choices)}.{DEFAULT_ERR_SUFFIX}",
        )

    failure = _check_validator(line, options)
    if failure is not None:
        return _reject(
            options, failure, f"{VALIDATE_LABEL}{failure}{DEFAULT_ERR_SUFFIX}"
        )

    return _succeed(choices[number - 1])
