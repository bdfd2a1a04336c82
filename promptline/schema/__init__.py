"""Option models, defaults and YAML loading for promptline."""

from promptline.schema.loader import ConfigError, load_options
from promptline.schema.options import PromptOptions, ReadOptions

__all__ = ["ConfigError", "PromptOptions", "ReadOptions", "load_options"]
