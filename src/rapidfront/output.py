"""Terminal output for the rapidfront CLI.

Two streams, two purposes:

* **stdout** carries results only: the tag table, the module/endpoint table
  of ``inspect``, and the tree of generated files. ``--json`` turns each of
  them into a machine-readable document, ``--plain`` into tab-separated
  lines.
* **stderr** carries everything addressed to the person at the terminal:
  progress, the success line, warnings, errors, and the suggested next step
  (usually an ``npm install`` line).

Rich styling is used only when stdout is a terminal and colour has not been
turned off with ``--no-color``, ``NO_COLOR`` or ``TERM=dumb``.

Commands do not hold an :class:`OutputManager`; they call the module-level
functions (:func:`info`, :func:`warning`, :func:`print_tree`, ...), which
forward to the instance installed by :func:`~rapidfront.app.main_callback`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.tree import Tree


class OutputFormat(str, Enum):
    """How results on stdout are rendered. ``AUTO`` picks ``RICH`` or ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (plain prefix, rich markup template, suppressed by --quiet)
_DIAGNOSTICS: dict[str, tuple[str, str, bool]] = {
    "info": ("", "{}", True),
    "success": ("", "[green]{}[/green]", True),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {}", False),
    "error": ("Error: ", "[bold red]Error:[/bold red] {}", False),
    "suggest": ("→ ", "[dim]→ {}[/dim]", True),
    "debug": ("[debug] ", "[dim]\\[debug] {}[/dim]", False),
}


class OutputManager:
    """Route results to stdout and diagnostics to stderr.

    Args:
        format: Result format. ``AUTO`` becomes ``RICH`` on an interactive
            terminal with colour enabled, ``PLAIN`` otherwise.
        no_color: Turn off colour and markup on both streams.
        quiet: Drop info, success and suggestion messages. Warnings and
            errors are always shown.
        verbose: Show debug messages.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # --- stdout -------------------------------------------------------- #

    def print_data(self, text: str) -> None:
        """Write *text* and a newline to stdout, unstyled."""
        print(text, file=sys.stdout, flush=True)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows under *headers*.

        JSON mode prints a list of objects keyed by header, plain mode one
        tab-separated line per row (headers first). *title* is shown in rich
        mode only.
        """
        if self._format == OutputFormat.JSON:
            self._print_json([dict(zip(headers, row)) for row in rows])
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
        else:
            table = Table(title=title, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*row)
            self._stdout.print(table)

    def print_tree(self, root: str, paths: list[str]) -> None:
        """Print generated file paths (relative, ``/``-separated) under *root*.

        JSON mode prints ``{"root": ..., "files": [...]}`` and plain mode one
        path per line, in the given order.
        """
        if self._format == OutputFormat.JSON:
            self._print_json({"root": root, "files": paths})
        elif self._format == OutputFormat.PLAIN:
            for path in paths:
                self.print_data(path)
        else:
            self._stdout.print(_build_tree(root, paths))

    def _print_json(self, value: object) -> None:
        self.print_data(json.dumps(value, indent=2, ensure_ascii=False))

    # --- stderr -------------------------------------------------------- #

    def info(self, message: str) -> None:
        self._diagnostic("info", message)

    def success(self, message: str) -> None:
        self._diagnostic("success", message)

    def warning(self, message: str) -> None:
        self._diagnostic("warning", message)

    def error(self, message: str) -> None:
        self._diagnostic("error", message)

    def suggest(self, message: str) -> None:
        """Print a next step, prefixed with an arrow."""
        self._diagnostic("suggest", message)

    def debug(self, message: str) -> None:
        """Print *message* only under ``--verbose``."""
        if self._verbose:
            self._diagnostic("debug", message)

    def _diagnostic(self, level: str, message: str) -> None:
        prefix, markup, quietable = _DIAGNOSTICS[level]
        if quietable and self._quiet:
            return
        if self._no_color or self._format != OutputFormat.RICH:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(message))


def _build_tree(root: str, paths: list[str]) -> Tree:
    tree = Tree(f"[bold]{root}[/bold]")
    folders: dict[str, Tree] = {}
    for path in paths:
        *parents, name = path.split("/")
        node = tree
        for depth in range(len(parents)):
            key = "/".join(parents[: depth + 1])
            if key not in folders:
                folders[key] = node.add(f"[cyan]{parents[depth]}/[/cyan]")
            node = folders[key]
        node.add(name)
    return tree


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- global instance ---------------------------------------------------- #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """The installed :class:`OutputManager`; a default one is created on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests call this between CLI runs)."""
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def print_tree(root: str, paths: list[str]) -> None:
    get_output().print_tree(root, paths)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
