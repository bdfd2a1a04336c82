"""promptline: interactive line prompts with defaults, validation and retry loops."""

from promptline.engine.ui import UI
from promptline.errors import (
    EmptyInputError,
    NotNumberError,
    OutOfRangeError,
    PromptError,
    PromptInterrupted,
    ReadFailure,
    ValidationFailure,
)
from promptline.schema.options import PromptOptions

__all__ = [
    "EmptyInputError",
    "NotNumberError",
    "OutOfRangeError",
    "PromptError",
    "PromptInterrupted",
    "PromptOptions",
    "ReadFailure",
    "UI",
    "ValidationFailure",
]
