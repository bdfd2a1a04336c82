"""Click-based CLI entry point for promptline.

Prompts are written to stderr so the answer on stdout can be captured,
e.g. ``name=$(promptline ask "Your name?" --required --loop)``.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from collections.abc import Callable
from typing import Any

import click
from click.core import ParameterSource
from dotenv import load_dotenv

from promptline.engine.ui import UI
from promptline.errors import PromptError, PromptInterrupted
from promptline.schema.loader import ConfigError, load_options, pattern_validator
from promptline.schema.options import PromptOptions
from promptline.streams.reader import TerminalLineReader
from promptline.streams.sink import StreamSink

# Load .env file so PROMPTLINE_* defaults are available without manual export.
load_dotenv()

# Conventional exit status for a process stopped by SIGINT.
EXIT_INTERRUPTED = 130

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group(context_settings={"auto_envvar_prefix": "PROMPTLINE"})
@click.version_option(package_name="promptline")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    help="Logging verbosity (logs go to stderr).",
)
def cli(log_level: str) -> None:
    """promptline: ask questions on the terminal with defaults, validation and retries."""
    logging.basicConfig(
        level=log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _terminal_ui() -> UI:
    return UI(
        writer=StreamSink(sys.stderr),
        reader=TerminalLineReader(stream=sys.stdin, echo=sys.stderr),
    )


def _build_options(
    ctx: click.Context,
    options_file: str | None,
    pattern: str | None,
    flags: dict[str, Any],
) -> PromptOptions:
    """Merge an options file with command line flags.

    Flags only override the file when given explicitly (command line or
    environment), so a file's ``loop: true`` survives a bare invocation.
    """
    base = PromptOptions()
    if options_file is not None:
        try:
            base = load_options(options_file)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc

    update: dict[str, Any] = {}
    for name, value in flags.items():
        source = ctx.get_parameter_source(name)
        if options_file is None or source in (
            ParameterSource.COMMANDLINE,
            ParameterSource.ENVIRONMENT,
        ):
            update[name] = value

    if pattern is not None:
        try:
            update["validate_func"] = pattern_validator(pattern)
        except re.error as exc:
            raise click.BadParameter(str(exc), param_hint="--pattern") from exc

    return base.model_copy(update=update)


def _emit(query: str, value: str, json_output: bool) -> None:
    if json_output:
        click.echo(json.dumps({"query": query, "value": value}, indent=2))
    else:
        click.echo(value)


def _run_prompt(ctx: click.Context, prompt: Callable[[], str]) -> str:
    """Call a UI method, translating prompt errors into CLI exits."""
    try:
        return prompt()
    except PromptInterrupted:
        click.echo("Interrupted.", err=True)
        ctx.exit(EXIT_INTERRUPTED)
    except PromptError as exc:
        raise click.ClickException(str(exc)) from exc
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


@cli.command()
@click.argument("query")
@click.option("--prefix", default="", help="Text prepended to every emitted line.")
@click.option("--default", "default", default="", help="Answer used when input is empty.")
@click.option("--required", is_flag=True, default=False, help="Reject empty input.")
@click.option("--loop", is_flag=True, default=False, help="Re-ask until the input is valid.")
@click.option("--hide-order", is_flag=True, default=False, help="Hide the 'Enter a value' line.")
@click.option("--hide-default", is_flag=True, default=False, help="Do not show the default.")
@click.option("--mask-default", is_flag=True, default=False, help="Show the default as '*'.")
@click.option("--loop-order", default="", help="Instruction shown on retries.")
@click.option("--err-suffix", default="", help="Text appended after retry diagnostics.")
@click.option(
    "--hide-validate-err", "hide_validate_func_err", is_flag=True, default=False,
    help="Omit the 'Failed to validate input string:' label.",
)
@click.option("--mask", is_flag=True, default=False, help="Read the answer as a secret.")
@click.option("--mask-val", default="", help="Echo this per typed character when masking.")
@click.option("--pattern", default=None, help="Regular expression the answer must fully match.")
@click.option(
    "--options", "options_file", default=None, type=click.Path(exists=True),
    help="YAML file with prompt options.",
)
@click.option(
    "--json-output", is_flag=True, default=False,
    help="Output as JSON instead of the bare answer.",
)
@click.pass_context
def ask(
    ctx: click.Context,
    query: str,
    pattern: str | None,
    options_file: str | None,
    json_output: bool,
    **flags: Any,
) -> None:
    """Ask QUERY and print the answer."""
    opts = _build_options(ctx, options_file, pattern, flags)
    ui = _terminal_ui()
    value = _run_prompt(ctx, lambda: ui.ask(query, opts))
    _emit(query, value, json_output)


@cli.command()
@click.argument("query")
@click.argument("choices", nargs=-1, required=True)
@click.option("--default", "default", default="", help="Choice used when input is empty.")
@click.option("--required", is_flag=True, default=False, help="Reject empty input.")
@click.option("--loop", is_flag=True, default=False, help="Re-ask until the input is valid.")
@click.option("--hide-default", is_flag=True, default=False, help="Do not show the default.")
@click.option(
    "--json-output", is_flag=True, default=False,
    help="Output as JSON instead of the bare answer.",
)
@click.pass_context
def select(
    ctx: click.Context,
    query: str,
    choices: tuple[str, ...],
    json_output: bool,
    **flags: Any,
) -> None:
    """Show CHOICES as a numbered list and print the chosen one."""
    opts = PromptOptions(**flags)
    ui = _terminal_ui()
    value = _run_prompt(ctx, lambda: ui.select(query, list(choices), opts))
    _emit(query, value, json_output)


@cli.command(name="check-options")
@click.argument("options_path", type=click.Path(exists=True))
def check_options(options_path: str) -> None:
    """Validate a YAML prompt options file."""
    try:
        opts = load_options(options_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    summary = opts.model_dump(mode="json")
    summary["validator"] = opts.validate_func is not None
    click.echo(f"Options valid: {options_path}")
    click.echo(json.dumps(summary, indent=2))
