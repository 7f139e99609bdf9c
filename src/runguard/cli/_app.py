"""The command-line interface for runguard."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from runguard.config import LogFormat, LogLevel, safe_load_config
from runguard.utils import create_logger

from ._commands import register_commands
from ._commands._context import CLIContext

HELP = "Run a command under a retry or timeout policy."

END_OF_OPTIONS = "--"

# Options that consume the following token as their value
_GLOBAL_VALUE_OPTIONS = frozenset(
    {"--config", "--log-level", "--log-format", "--log-file"}
)
_TIMEOUT_VALUE_OPTIONS = frozenset({"--grace", "-g", "--signal", "-s"})


def _skip_options(
    tokens: Sequence[str], start: int, value_options: frozenset[str]
) -> int:
    index = start
    while index < len(tokens):
        token = tokens[index]
        if token == END_OF_OPTIONS or token == "-" or not token.startswith("-"):
            break
        index += 2 if token in value_options else 1
    return index


def isolate_command(tokens: Sequence[str]) -> list[str]:
    """Insert ``--`` in front of the supervised command.

    Everything after ``retry <count>`` or ``timeout [options] <duration>``
    belongs to the child, so ``runguard timeout 5s sort -s`` runs ``sort -s``
    instead of reading ``-s`` as the signal option. Tokens that already
    carry a ``--`` there, or that name no command, are returned unchanged.
    """
    result = list(tokens)
    index = _skip_options(result, 0, _GLOBAL_VALUE_OPTIONS)
    if index >= len(result):
        return result

    match result[index]:
        case "retry":
            operand = index + 1
        case "timeout":
            operand = _skip_options(result, index + 1, _TIMEOUT_VALUE_OPTIONS)
        case _:
            return result

    first = operand + 1
    if operand >= len(result) or result[operand] == END_OF_OPTIONS:
        return result
    if first < len(result) and result[first] != END_OF_OPTIONS:
        result.insert(first, END_OF_OPTIONS)
    return result



def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the runguard application with its global options.

    Global options must come before the subcommand name. Pass argv
    through isolate_command() first so the supervised command keeps its
    own options.

    Args:
        console: Console for help and normal output.
        error_console: Console for parse errors.
        exit_on_error: Whether parse errors exit the process.

    Returns:
        The configured cyclopts App. Invoke
        ``app.meta(isolate_command(tokens))`` to run it.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="runguard",
        help=HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        log_level: Annotated[
            LogLevel | None, Parameter(name="--log-level", help="Log level threshold")
        ] = None,
        log_format: Annotated[
            LogFormat | None, Parameter(name="--log-format", help="Log output format")
        ] = None,
        log_file: Annotated[
            str | None,
            Parameter(name="--log-file", help="Append logs to this file, not stderr"),
        ] = None,
    ) -> None:
        """Launch runguard with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
            log_level: Log level threshold.
            log_format: Log output format.
            log_file: Path to a log file.
        """
        logging_overrides: dict[str, object] = {}
        if log_level is not None:
            logging_overrides["level"] = log_level.value
        if log_format is not None:
            logging_overrides["format"] = log_format.value
        if log_file is not None:
            logging_overrides["file"] = log_file
        cli_overrides = {"logging": logging_overrides} if logging_overrides else None

        loaded_config, config_error = safe_load_config(
            config_path=config,
            cli_overrides=cli_overrides,
        )

        logger = create_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
        )

        if config_error is not None:
            logger.warning("config_ignored", error=config_error)

        CLIContext.set_current(CLIContext(config=loaded_config, logger=logger))

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `runguard` CLI."""
    app.meta(isolate_command(sys.argv[1:]))


def retry_main() -> None:
    """Entrypoint for the standalone `retry` command."""
    app.meta(isolate_command(["retry", *sys.argv[1:]]))


def timeout_main() -> None:
    """Entrypoint for the standalone `timeout` command."""
    app.meta(isolate_command(["timeout", *sys.argv[1:]]))


if __name__ == "__main__":
    main()
