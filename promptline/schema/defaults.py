"""Constants and default texts shared by the prompt engine."""

# Standard instruction shown before reading an answer.
DEFAULT_ORDER = "Enter a value"
SELECT_ORDER = "Enter a number"

# Appended after a retry diagnostic unless options override it.
DEFAULT_ERR_SUFFIX = "\n\n"

VALIDATE_LABEL = "Failed to validate input string: "
EMPTY_MESSAGE = "Input must not be empty."
SELECT_EMPTY_MESSAGE = "Input must not be empty. Answer by a number."

# Character used when displaying a masked default.
MASK_CHAR = "*"

OPTION_FILE_SUFFIXES = (".yaml", ".yml")
