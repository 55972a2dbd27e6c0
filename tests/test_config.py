"""Tests for rapidfront.config.

Covers:
- Project config load/save round trip and validation errors
- Atomic writes leave no temp files behind
- Option precedence: CLI > environment > project config > defaults
- Selection mode switching and unknown value errors
- XDG data directory resolution
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rapidfront.config import (
    ENV_LANGUAGE,
    ENV_LIBRARY,
    ENV_OUTPUT,
    ENV_TEMPLATES,
    PROJECT_CONFIG_FILENAME,
    _atomic_write,
    get_data_dir,
    load_project_config,
    project_config_path,
    resolve_options,
    save_project_config,
)
from rapidfront.exceptions import ConfigError, UnknownLibraryError
from rapidfront.models import (
    JavaScriptStrategy,
    Language,
    Library,
    ProjectConfig,
    SelectionMode,
)


# ---------------------------------------------------------------------------
# Project config persistence
# ---------------------------------------------------------------------------


class TestProjectConfig:
    """Test reading and writing rapidfront.json."""

    def test_missing_file_returns_none(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_save_and_load(self, isolated_config: Path) -> None:
        config = ProjectConfig(
            spec="./openapi.yaml",
            library=Library.REDUX_TOOLKIT,
            language=Language.JAVASCRIPT,
            selected_tags=["Users"],
        )
        path = save_project_config(config)
        assert path == isolated_config / PROJECT_CONFIG_FILENAME
        assert load_project_config() == config

    def test_saved_file_omits_unset_fields(self, isolated_config: Path) -> None:
        save_project_config(ProjectConfig(library=Library.ZUSTAND))
        data = json.loads((isolated_config / PROJECT_CONFIG_FILENAME).read_text())
        assert data == {"library": "zustand"}

    def test_explicit_directory(self, tmp_path: Path) -> None:
        save_project_config(ProjectConfig(spec="x.json"), tmp_path)
        assert project_config_path(tmp_path).is_file()
        assert load_project_config(tmp_path).spec == "x.json"

    def test_invalid_json_raises(self, isolated_config: Path) -> None:
        (isolated_config / PROJECT_CONFIG_FILENAME).write_text("{broken")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_unknown_key_raises(self, isolated_config: Path) -> None:
        (isolated_config / PROJECT_CONFIG_FILENAME).write_text('{"framework": "vue"}')
        with pytest.raises(ConfigError):
            load_project_config()

    def test_invalid_library_raises(self, isolated_config: Path) -> None:
        (isolated_config / PROJECT_CONFIG_FILENAME).write_text('{"library": "vue-query"}')
        with pytest.raises(ConfigError):
            load_project_config()


class TestAtomicWrite:
    """Test temp-file-then-rename writes."""

    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "file.json"
        _atomic_write(target, "data")
        assert target.read_text() == "data"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        _atomic_write(target, "one")
        _atomic_write(target, "two")
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]
        assert target.read_text() == "two"


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveOptions:
    """Test CLI > env > project > default precedence."""

    def test_defaults(self, isolated_config: Path) -> None:
        options = resolve_options()
        assert options.library == Library.ZUSTAND
        assert options.language == Language.TYPESCRIPT
        assert options.output_directory == "./src/api"
        assert options.selection_mode == SelectionMode.ALL
        assert options.tag_filter is None
        assert options.js_strategy == JavaScriptStrategy.NATIVE
        assert options.template_dir is None

    def test_project_config_loaded_from_cwd(self, isolated_config: Path) -> None:
        save_project_config(ProjectConfig(library=Library.AXIOS_HOOKS))
        assert resolve_options().library == Library.AXIOS_HOOKS

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_LIBRARY, "fetch-api")
        monkeypatch.setenv(ENV_OUTPUT, "./env-out")
        project = ProjectConfig(library=Library.AXIOS_HOOKS, output_directory="./project-out")
        options = resolve_options(project=project)
        assert options.library == Library.FETCH_API
        assert options.output_directory == "./env-out"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_LANGUAGE, "javascript")
        monkeypatch.setenv(ENV_TEMPLATES, "./env-templates")
        options = resolve_options(cli_language="typescript", cli_template_dir="./cli-templates")
        assert options.language == Language.TYPESCRIPT
        assert options.template_dir == "./cli-templates"

    def test_empty_env_value_ignored(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_LIBRARY, "")
        project = ProjectConfig(library=Library.REDUX_TOOLKIT)
        assert resolve_options(project=project).library == Library.REDUX_TOOLKIT

    def test_tags_switch_to_selective(self, isolated_config: Path) -> None:
        options = resolve_options(cli_tags=["Users", "Orders"])
        assert options.selection_mode == SelectionMode.SELECTIVE
        assert options.tag_filter == {"Users", "Orders"}

    def test_project_tags_used_without_cli_tags(self, isolated_config: Path) -> None:
        options = resolve_options(project=ProjectConfig(selected_tags=["Pets"]))
        assert options.selected_tags == ["Pets"]
        assert options.selection_mode == SelectionMode.SELECTIVE

    def test_cli_tags_replace_project_tags(self, isolated_config: Path) -> None:
        options = resolve_options(cli_tags=["Users"], project=ProjectConfig(selected_tags=["Pets"]))
        assert options.selected_tags == ["Users"]

    def test_js_strategy_from_project(self, isolated_config: Path) -> None:
        project = ProjectConfig(js_strategy=JavaScriptStrategy.DOWNGRADE)
        assert resolve_options(project=project).js_strategy == JavaScriptStrategy.DOWNGRADE
        assert (
            resolve_options(cli_js_strategy="native", project=project).js_strategy
            == JavaScriptStrategy.NATIVE
        )

    def test_unknown_library_raises(self, isolated_config: Path) -> None:
        with pytest.raises(UnknownLibraryError) as exc_info:
            resolve_options(cli_library="vue-query")
        assert exc_info.value.exit_code == 8

    def test_unknown_language_raises(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="Unknown language 'coffeescript'"):
            resolve_options(cli_language="coffeescript")

    def test_unknown_strategy_lists_choices(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError, match="native, downgrade"):
            resolve_options(cli_js_strategy="transpile")


# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------


class TestDataDir:
    """Test XDG data directory resolution."""

    def test_xdg_data_home(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rapidfront.config.platform.system", lambda: "Linux")
        path = get_data_dir()
        assert path == isolated_config / "data" / "rapidfront"
        assert path.is_dir()
