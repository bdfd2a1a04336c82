"""Pydantic v2 models for per-call prompt options."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from promptline.schema.defaults import DEFAULT_ERR_SUFFIX, DEFAULT_ORDER, MASK_CHAR

# A validator rejects a line by raising an exception or returning one.
Validator = Callable[[str], Exception | None]


@dataclass(frozen=True)
class ReadOptions:
    """Options forwarded to the line reader."""

    mask: bool = False
    mask_val: str = ""


class PromptOptions(BaseModel):
    """Configuration for a single ask/select call.

    Instances are frozen; derive variants with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    prefix: str = Field(default="", description="Prepended to every emitted line.")
    default: str = Field(
        default="",
        description="Returned when the user submits an empty line. Empty = no default.",
    )
    required: bool = False
    loop: bool = Field(
        default=False,
        description="Reprompt on empty/invalid input instead of failing.",
    )
    hide_order: bool = False
    hide_default: bool = False
    mask_default: bool = False
    loop_order: str = Field(
        default="",
        description="Instruction shown from the second attempt on.",
    )
    err_suffix: str = Field(
        default="",
        description="Appended after retry diagnostics. Empty = two newlines.",
    )
    hide_validate_func_err: bool = False
    mask: bool = Field(default=False, description="Read the answer as secret input.")
    mask_val: str = Field(
        default="",
        description="Echoed once per typed character while masking.",
    )
    validate_func: Validator | None = Field(default=None, exclude=True)

    def read_options(self) -> ReadOptions:
        return ReadOptions(mask=self.mask, mask_val=self.mask_val)

    def effective_err_suffix(self) -> str:
        if self.err_suffix and self.err_suffix != DEFAULT_ERR_SUFFIX:
            return self.err_suffix
        return DEFAULT_ERR_SUFFIX

    def retry_order(self) -> str:
        """Instruction text used on attempts after the first."""
        if self.loop_order and self.loop_order != DEFAULT_ORDER:
            return self.loop_order
        return DEFAULT_ORDER

    def displayed_default(self) -> str:
        if self.mask_default:
            return mask_string(self.default)
        return self.default

    def run_validator(self, line: str) -> Exception | None:
        """Return the validator's rejection, or None when ``line`` is accepted.

        A missing validator accepts everything.
        """
        if self.validate_func is None:
            return None
        try:
            result = self.validate_func(line)
        except Exception as exc:
            return exc
        if isinstance(result, Exception):
            return result
        return None


def mask_string(value: str) -> str:
    """Replace every character of ``value`` with the mask character."""
    return MASK_CHAR * len(value)
