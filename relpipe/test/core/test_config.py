"""Tests for relpipe.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relpipe.core.config import (
    DEFAULT_DESCRIPTOR,
    DEFAULT_EXEC_TIMEOUT_SECONDS,
    ENV_DESCRIPTOR,
    ENV_ROOT,
    ToolConfig,
    load_config,
    load_config_or_default,
    resolve_root,
)
from relpipe.core.result import Err, Ok


class TestToolConfig:
    def test_defaults(self) -> None:
        config = ToolConfig()
        assert config.descriptor == "release.toml"
        assert config.preset is None
        assert config.releaserc == ".releaserc.json"
        assert config.hook_command == "relpipe"
        assert config.exec_timeout == DEFAULT_EXEC_TIMEOUT_SECONDS

    def test_frozen(self) -> None:
        config = ToolConfig()
        with pytest.raises(AttributeError):
            config.descriptor = "other.toml"  # type: ignore[misc]

    def test_from_dict(self) -> None:
        config = ToolConfig.from_dict(
            {
                "descriptor": "ci/release.json",
                "preset": "script-marker",
                "hook_command": "uv run relpipe",
                "exec_timeout": 30,
            }
        )
        assert config.descriptor == "ci/release.json"
        assert config.preset == "script-marker"
        assert config.hook_command == "uv run relpipe"
        assert config.exec_timeout == 30.0

    def test_from_dict_ignores_wrong_types(self) -> None:
        config = ToolConfig.from_dict({"descriptor": 3, "exec_timeout": True})
        assert config.descriptor == DEFAULT_DESCRIPTOR
        assert config.exec_timeout == DEFAULT_EXEC_TIMEOUT_SECONDS

    def test_with_env_overrides_descriptor(self) -> None:
        config = ToolConfig().with_env({ENV_DESCRIPTOR: "other.toml"})
        assert config.descriptor == "other.toml"

    def test_with_env_ignores_blank(self) -> None:
        config = ToolConfig().with_env({ENV_DESCRIPTOR: "  "})
        assert config.descriptor == DEFAULT_DESCRIPTOR


class TestLoadConfig:
    def test_reads_tool_table(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text(
            '[project]\nname = "demo"\n\n[tool.relpipe]\ndescriptor = "rel.toml"\n',
            encoding="utf-8",
        )
        result = load_config(path)
        assert isinstance(result, Ok)
        assert result.value.descriptor == "rel.toml"

    def test_missing_table_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "demo"\n', encoding="utf-8")
        result = load_config(path)
        assert result == Ok(ToolConfig())

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.relpipe\n", encoding="utf-8")
        result = load_config(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_tool_relpipe_not_a_table(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool]\nrelpipe = "yes"\n', encoding="utf-8")
        result = load_config(path)
        assert isinstance(result, Err)
        assert "must be a table" in result.error.message

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "pyproject.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message


class TestLoadConfigOrDefault:
    def test_no_pyproject(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(ENV_DESCRIPTOR, raising=False)
        assert load_config_or_default(tmp_path) == Ok(ToolConfig())

    def test_env_applies_on_top(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            '[tool.relpipe]\ndescriptor = "a.toml"\n', encoding="utf-8"
        )
        monkeypatch.setenv(ENV_DESCRIPTOR, "b.toml")
        result = load_config_or_default(tmp_path)
        assert isinstance(result, Ok)
        assert result.value.descriptor == "b.toml"


class TestResolveRoot:
    def test_explicit_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_ROOT, "/nonexistent")
        assert resolve_root(tmp_path) == tmp_path.resolve()

    def test_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_ROOT, str(tmp_path))
        assert resolve_root() == tmp_path.resolve()

    def test_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(ENV_ROOT, raising=False)
        monkeypatch.chdir(tmp_path)
        assert resolve_root() == tmp_path.resolve()
