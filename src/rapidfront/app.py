"""The ``rapidfront`` command line.

Commands: ``generate`` writes modules, ``tags`` and ``inspect`` show what a
document contains, ``init`` writes ``rapidfront.json``. The root callback
reads the global flags and sets up output and logging before any of them
runs. :func:`main` is the console-script entry point.

See Also:
    :mod:`rapidfront.config`: Option resolution used by the commands.
    :mod:`rapidfront.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from rapidfront import __version__
from rapidfront.commands.generate import generate_command
from rapidfront.commands.init import init_command
from rapidfront.commands.inspect import inspect_command, tags_command
from rapidfront.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="rapidfront",
    help="Generate frontend API modules from OpenAPI/Swagger specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("tags")(tags_command)
app.command("inspect")(inspect_command)
app.command("init")(init_command)


def _version_callback(value: bool) -> None:
    """Handle --version before any command runs."""
    if value:
        typer.echo(f"rapidfront {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the rapidfront version.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print tables and file trees as JSON."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Print tables and file trees as tab-separated text."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Never use colour or styling."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print results, warnings and errors."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Also print debug messages and log records."
    ),
) -> None:
    """Root callback executed before every command.

    Initialises the global :class:`~rapidfront.output.OutputManager` and
    the ``rapidfront`` logger from the CLI flags.
    """
    from rapidfront.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _setup_logging(verbose=verbose, no_color=no_color)


def _setup_logging(verbose: bool, no_color: bool) -> None:
    """Route ``rapidfront`` log records to stderr through Rich.

    Warnings are always shown; ``--verbose`` lowers the level to DEBUG.
    Existing handlers are replaced so repeated invocations do not stack.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        level=level,
        show_time=verbose,
        show_path=False,
        markup=False,
    )

    logger = logging.getLogger("rapidfront")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)


def _setup_signal_handlers() -> None:
    """Exit with status 130 on Ctrl-C instead of printing a traceback."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from rapidfront.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """Run the ``rapidfront`` console script.

    A :class:`~rapidfront.exceptions.RapidFrontError` that escapes a command
    is printed as an error and exits with its ``exit_code``. Anything else
    is unexpected: its traceback goes to a crash log and the exit status is
    :data:`~rapidfront.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from rapidfront.exceptions import RapidFrontError
        from rapidfront.output import error

        if isinstance(exc, RapidFrontError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
