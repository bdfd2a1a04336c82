"""Exception hierarchy raised by the prompt engine and its readers."""

from __future__ import annotations


class PromptError(Exception):
    """Base class for every terminal prompt failure."""


class ReadFailure(PromptError):
    """The line reader could not produce a line. Never retried."""


class PromptInterrupted(ReadFailure):
    """The user interrupted the read (e.g. Ctrl+C)."""

    def __init__(self, message: str = "interrupted") -> None:
        super().__init__(message)


class EmptyInputError(PromptError):
    """Input was empty, no default was set and an answer is required."""

    def __init__(
        self, message: str = "default value is not provided but input is empty"
    ) -> None:
        super().__init__(message)


class ValidationFailure(PromptError):
    """The validate function rejected the input.

    ``str()`` of this error is the validator's own message; the original
    exception is kept on ``.error`` and chained as ``__cause__``.
    """

    def __init__(self, error: Exception) -> None:
        super().__init__(str(error))
        self.error = error


class NotNumberError(PromptError):
    """A select answer was not an integer."""

    def __init__(self, message: str = "input must be number") -> None:
        super().__init__(message)


class OutOfRangeError(PromptError):
    """A select answer was outside the numbered choices."""

    def __init__(self, message: str = "input is out of range") -> None:
        super().__init__(message)
