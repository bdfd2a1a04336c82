"""Load and validate YAML option files into PromptOptions models."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from promptline.schema.defaults import OPTION_FILE_SUFFIXES
from promptline.schema.options import PromptOptions, Validator


class ConfigError(Exception):
    """Raised when an options file cannot be loaded or validated."""


def pattern_validator(pattern: str) -> Validator:
    """Build a validator accepting only lines that fully match ``pattern``.

    Raises re.error for an invalid expression.
    """
    compiled = re.compile(pattern)

    def _validate(line: str) -> None:
        if compiled.fullmatch(line) is None:
            raise ValueError(f"input does not match pattern '{pattern}'")

    return _validate


def options_from_mapping(data: dict[str, Any], source: str = "options") -> PromptOptions:
    """Validate a plain mapping (as parsed from YAML) into PromptOptions.

    An optional ``pattern`` key is compiled into ``validate_func``.
    """
    data = dict(data)
    pattern = data.pop("pattern", None)
    if pattern is not None:
        if not isinstance(pattern, str):
            raise ConfigError(f"{source}: pattern must be a string")
        try:
            data["validate_func"] = pattern_validator(pattern)
        except re.error as exc:
            raise ConfigError(f"{source}: invalid pattern {pattern!r}: {exc}") from exc

    try:
        return PromptOptions.model_validate(data)
    except ValidationError as exc:
        # Re-format Pydantic errors into a readable string.
        lines = [f"Validation errors in {source}:"]
        for err in exc.errors():
            loc = " → ".join(str(l) for l in err["loc"])
            lines.append(f"  {loc}: {err['msg']}")
        raise ConfigError("\n".join(lines)) from exc


def load_options(path: str | Path) -> PromptOptions:
    """Read a YAML options file and return validated PromptOptions.

    Raises ConfigError with a human-readable message on failure.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Options file not found: {path}")
    if path.suffix not in OPTION_FILE_SUFFIXES:
        raise ConfigError(f"Expected .yaml or .yml file, got: {path.suffix}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping at top level, got {type(data).__name__}")

    return options_from_mapping(data, source=path.name)
