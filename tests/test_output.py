"""Tests for rapidfront.output.

Covers format resolution, colour switches, which stream each call writes
to, quiet/verbose filtering, the three renderings of tables and file trees,
and the module-level forwarding functions.
"""

from __future__ import annotations

import json

import pytest

from rapidfront import output as output_module
from rapidfront.output import (
    OutputFormat,
    OutputManager,
    _build_tree,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def piped(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend stdout is a pipe."""
    monkeypatch.setattr("rapidfront.output._is_tty", lambda: False)


@pytest.fixture()
def terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pretend stdout is an interactive terminal with colour allowed."""
    monkeypatch.setattr("rapidfront.output._is_tty", lambda: True)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")


def _plain(**kwargs) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, **kwargs)


# ---------------------------------------------------------------------------
# Format and colour
# ---------------------------------------------------------------------------


class TestFormatResolution:
    """AUTO picks a concrete format from the environment."""

    def test_pipe_gives_plain(self, piped: None) -> None:
        assert OutputManager().format == OutputFormat.PLAIN

    def test_terminal_gives_rich(self, terminal: None) -> None:
        assert OutputManager().format == OutputFormat.RICH

    def test_no_color_on_terminal_gives_plain(self, terminal: None) -> None:
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    @pytest.mark.parametrize("fmt", [OutputFormat.JSON, OutputFormat.PLAIN, OutputFormat.RICH])
    def test_explicit_format_kept(self, piped: None, fmt: OutputFormat) -> None:
        assert OutputManager(format=fmt).format == fmt


class TestColourSwitches:
    """NO_COLOR and TERM=dumb disable colour."""

    def test_empty_no_color_counts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color()

    def test_dumb_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color()

    def test_colour_allowed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        assert not _should_disable_color()


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------


class TestStreams:
    """Results go to stdout, messages to stderr."""

    def test_data_on_stdout(self, capfd: pytest.CaptureFixture[str]) -> None:
        _plain().print_data("Users\tUsers")
        captured = capfd.readouterr()
        assert captured.out == "Users\tUsers\n"
        assert captured.err == ""

    @pytest.mark.parametrize("method", ["info", "success", "warning", "error", "suggest"])
    def test_messages_on_stderr(self, capfd: pytest.CaptureFixture[str], method: str) -> None:
        getattr(_plain(), method)("loading document")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "loading document" in captured.err

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("info", "Loaded\n"),
            ("warning", "Warning: Loaded\n"),
            ("error", "Error: Loaded\n"),
            ("suggest", "→ Loaded\n"),
        ],
    )
    def test_plain_prefixes(
        self, capfd: pytest.CaptureFixture[str], method: str, expected: str
    ) -> None:
        getattr(_plain(), method)("Loaded")
        assert capfd.readouterr().err == expected

    def test_plain_format_ignores_markup_even_with_colour(
        self, capfd: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        _plain().success("Generated 3 module(s)")
        assert capfd.readouterr().err == "Generated 3 module(s)\n"


class TestQuietAndVerbose:
    """--quiet drops chatter, --verbose adds debug lines."""

    @pytest.mark.parametrize("method", ["info", "success", "suggest"])
    def test_quiet_drops(self, capfd: pytest.CaptureFixture[str], method: str) -> None:
        getattr(_plain(quiet=True), method)("hidden")
        assert capfd.readouterr().err == ""

    @pytest.mark.parametrize("method", ["warning", "error"])
    def test_quiet_keeps_problems(self, capfd: pytest.CaptureFixture[str], method: str) -> None:
        getattr(_plain(quiet=True), method)("shown")
        assert "shown" in capfd.readouterr().err

    def test_debug_needs_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        _plain().debug("options")
        assert capfd.readouterr().err == ""
        _plain(verbose=True).debug("options")
        assert capfd.readouterr().err == "[debug] options\n"


# ---------------------------------------------------------------------------
# Tables and trees
# ---------------------------------------------------------------------------


class TestPrintTable:
    """Tables in all three formats."""

    HEADERS = ["Tag", "Module"]
    ROWS = [["Order History", "OrderHistory"], ["Users", "Users"]]

    def test_plain(self, capfd: pytest.CaptureFixture[str]) -> None:
        _plain().print_table(self.HEADERS, self.ROWS)
        assert capfd.readouterr().out == (
            "Tag\tModule\nOrder History\tOrderHistory\nUsers\tUsers\n"
        )

    def test_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.JSON).print_table(self.HEADERS, self.ROWS)
        assert json.loads(capfd.readouterr().out) == [
            {"Tag": "Order History", "Module": "OrderHistory"},
            {"Tag": "Users", "Module": "Users"},
        ]

    def test_rich(self, capfd: pytest.CaptureFixture[str], terminal: None) -> None:
        OutputManager(format=OutputFormat.RICH).print_table(self.HEADERS, self.ROWS, title="Tags")
        out = capfd.readouterr().out
        assert "OrderHistory" in out
        assert "Tags" in out


class TestPrintTree:
    """Generated file trees in all three formats."""

    PATHS = ["users/useUsersStore.ts", "order-history/useOrderHistoryStore.ts", "index.ts"]

    def test_plain_keeps_order(self, capfd: pytest.CaptureFixture[str]) -> None:
        _plain().print_tree("./src/api", self.PATHS)
        assert capfd.readouterr().out.splitlines() == self.PATHS

    def test_json(self, capfd: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.JSON).print_tree("./src/api", self.PATHS)
        assert json.loads(capfd.readouterr().out) == {"root": "./src/api", "files": self.PATHS}

    def test_rich(self, capfd: pytest.CaptureFixture[str], terminal: None) -> None:
        OutputManager(format=OutputFormat.RICH).print_tree("./src/api", self.PATHS)
        out = capfd.readouterr().out
        assert "order-history/" in out
        assert "useOrderHistoryStore.ts" in out

    def test_folders_shared_between_files(self) -> None:
        tree = _build_tree("out", ["a/b/one.ts", "a/b/two.ts", "a/three.ts", "index.ts"])
        (folder_a, index) = tree.children
        assert index.label == "index.ts"
        (folder_b, three) = folder_a.children
        assert three.label == "three.ts"
        assert [leaf.label for leaf in folder_b.children] == ["one.ts", "two.ts"]


# ---------------------------------------------------------------------------
# Global instance
# ---------------------------------------------------------------------------


class TestGlobalInstance:
    """Module-level functions forward to the installed manager."""

    def test_default_created_lazily(self) -> None:
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_installed_manager_used(self, capfd: pytest.CaptureFixture[str]) -> None:
        manager = _plain(no_color=True)
        set_output(manager)
        assert get_output() is manager

        output_module.print_data("index.ts")
        output_module.warning("empty selection")
        captured = capfd.readouterr()
        assert captured.out == "index.ts\n"
        assert captured.err == "Warning: empty selection\n"
