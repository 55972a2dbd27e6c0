"""Shared test fixtures for rapidfront.

Provides reusable fixtures for loading API document fixtures, building the
parsed records the generator consumes, isolating configuration, managing
output state, and running CLI commands. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from rapidfront.models import ModuleRecord
from rapidfront.output import OutputFormat, OutputManager, reset_output, set_output
from rapidfront.parser.catalog import SchemaCatalog


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures (plain dicts loaded from JSON files)
# ---------------------------------------------------------------------------


@pytest.fixture
def users_api_raw() -> dict[str, Any]:
    """Load the tagged OpenAPI 3.0 users/orders document."""
    with open(FIXTURES_DIR / "users_api.json") as f:
        return json.load(f)


@pytest.fixture
def products_raw() -> dict[str, Any]:
    """Load the untagged OpenAPI 3.1 products document."""
    with open(FIXTURES_DIR / "products_untagged.json") as f:
        return json.load(f)


@pytest.fixture
def swagger2_raw() -> dict[str, Any]:
    """Load the Swagger 2.0 petstore document."""
    with open(FIXTURES_DIR / "petstore_swagger2.json") as f:
        return json.load(f)


@pytest.fixture
def unusual_raw() -> dict[str, Any]:
    """Load the document whose names collide with JavaScript syntax.

    It has a ``DELETE /``, a ``{body}`` placeholder next to a request body,
    a ``{class}`` placeholder, multi-line summaries, and schema names that
    are not identifiers (``app.User``, ``user-dto``).
    """
    with open(FIXTURES_DIR / "unusual_names.json") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Prepared document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def users_api(users_api_raw: dict[str, Any]) -> dict[str, Any]:
    """The users document, validated and dereferenced."""
    from rapidfront.pipeline import prepare_document

    return prepare_document(users_api_raw)


@pytest.fixture
def users_catalog(users_api: dict[str, Any]) -> SchemaCatalog:
    """Schema catalog of the users document."""
    from rapidfront.parser.catalog import index_schemas

    return index_schemas(users_api)


@pytest.fixture
def users_modules(users_api: dict[str, Any], users_catalog: SchemaCatalog) -> list[ModuleRecord]:
    """Every module of the users document, in first-seen tag order."""
    from rapidfront.generator.grouper import group_modules
    from rapidfront.parser.extractor import extract_endpoints

    return group_modules(extract_endpoints(users_api), users_catalog)


@pytest.fixture
def users_module(users_modules: list[ModuleRecord]) -> ModuleRecord:
    """The ``Users`` module of the users document."""
    return next(m for m in users_modules if m.tag == "Users")


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_DATA_HOME to a subdirectory of tmp_path so that crash logs
    never touch the real user directories. Clears all RAPIDFRONT_*
    environment variables and changes the working directory to tmp_path,
    so no ``rapidfront.json`` from the real project is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "RAPIDFRONT_LIBRARY",
        "RAPIDFRONT_LANGUAGE",
        "RAPIDFRONT_OUTPUT",
        "RAPIDFRONT_TEMPLATES",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Set up a quiet output manager for tests that don't care about output.

    Installs a PLAIN-format, quiet OutputManager as the global output
    and resets it after the test completes.
    """
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
