"""Configuration management with atomic writes and precedence resolution.

rapidfront keeps no global state on disk: the only persistent configuration
is a project-local ``rapidfront.json`` in the current directory, deserialised
into a :class:`~rapidfront.models.ProjectConfig`.

* :func:`load_project_config` / :func:`save_project_config` read and write it
  (writes are atomic, temp file then rename).
* :func:`resolve_options` merges CLI flags, environment variables, the
  project config and defaults into one
  :class:`~rapidfront.models.GenerationOptions`.
* :func:`get_data_dir` locates the XDG data directory used for crash logs.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from rapidfront.exceptions import ConfigError, UnknownLibraryError
from rapidfront.models import (
    GenerationOptions,
    JavaScriptStrategy,
    Language,
    Library,
    ProjectConfig,
    SelectionMode,
)

_APP_NAME = "rapidfront"
PROJECT_CONFIG_FILENAME = "rapidfront.json"

ENV_LIBRARY = "RAPIDFRONT_LIBRARY"
ENV_LANGUAGE = "RAPIDFRONT_LANGUAGE"
ENV_OUTPUT = "RAPIDFRONT_OUTPUT"
ENV_TEMPLATES = "RAPIDFRONT_TEMPLATES"


# --- XDG path resolution ---


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/rapidfront/`` (default
    ``~/.local/share/rapidfront/``). Elsewhere: ``~/.rapidfront/logs/``.
    """
    system = platform.system()
    if system == "Linux" or system.endswith("BSD"):
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the error re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project-local config ---


def project_config_path(directory: Optional[Path] = None) -> Path:
    """Path of ``rapidfront.json`` in *directory* (default: the current directory)."""
    return (directory or Path.cwd()) / PROJECT_CONFIG_FILENAME


def load_project_config(directory: Optional[Path] = None) -> Optional[ProjectConfig]:
    """Load ``rapidfront.json`` from *directory*.

    Returns:
        The validated config, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or invalid values.
    """
    path = project_config_path(directory)
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ProjectConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def save_project_config(config: ProjectConfig, directory: Optional[Path] = None) -> Path:
    """Persist *config* atomically to ``rapidfront.json``. Returns the path written."""
    path = project_config_path(directory)
    data = config.model_dump(mode="json", exclude_none=True)
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


# --- Precedence resolution ---


def resolve_options(
    cli_library: Optional[str] = None,
    cli_language: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_tags: Optional[list[str]] = None,
    cli_js_strategy: Optional[str] = None,
    cli_template_dir: Optional[str] = None,
    project: Optional[ProjectConfig] = None,
) -> GenerationOptions:
    """Resolve generation options with the full precedence chain.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``RAPIDFRONT_LIBRARY``,
           ``RAPIDFRONT_LANGUAGE``, ``RAPIDFRONT_OUTPUT``,
           ``RAPIDFRONT_TEMPLATES``)
        3. Project config (``./rapidfront.json``)
        4. Defaults

    Selected tags (from ``--tag`` or the project config) switch the
    selection mode to ``selective``.

    Args:
        project: Project config to use; loaded from the current directory
            when omitted.

    Raises:
        UnknownLibraryError: If the library is not supported.
        ConfigError: If the language or JavaScript strategy is unknown, or
            the project config is invalid.
    """
    if project is None:
        project = load_project_config() or ProjectConfig()

    library = _first(cli_library, os.environ.get(ENV_LIBRARY), project.library)
    language = _first(cli_language, os.environ.get(ENV_LANGUAGE), project.language)
    output_directory = _first(cli_output, os.environ.get(ENV_OUTPUT), project.output_directory)
    template_dir = _first(cli_template_dir, os.environ.get(ENV_TEMPLATES), project.template_dir)
    js_strategy = _first(cli_js_strategy, project.js_strategy)
    selected_tags = cli_tags if cli_tags else project.selected_tags

    values: dict[str, object] = {}
    if library is not None:
        try:
            values["library"] = Library(library)
        except ValueError:
            raise UnknownLibraryError(library) from None
    if language is not None:
        values["language"] = _coerce(Language, language, "language")
    if js_strategy is not None:
        values["js_strategy"] = _coerce(JavaScriptStrategy, js_strategy, "JavaScript strategy")
    if output_directory is not None:
        values["output_directory"] = output_directory
    if template_dir is not None:
        values["template_dir"] = template_dir
    if selected_tags:
        values["selection_mode"] = SelectionMode.SELECTIVE
        values["selected_tags"] = list(selected_tags)

    return GenerationOptions(**values)


def _first(*candidates):
    """Return the first candidate that is neither ``None`` nor empty."""
    for candidate in candidates:
        if candidate is not None and candidate != "":
            return candidate
    return None


def _coerce(enum_type, value, label: str):
    try:
        return enum_type(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_type)
        raise ConfigError(f"Unknown {label} '{value}'. Choose one of: {choices}") from None
