"""Tool configuration loaded from ``[tool.relpipe]`` in ``pyproject.toml``.

Precedence (highest first): CLI options, environment variables
(``RELPIPE_DESCRIPTOR``, ``RELPIPE_ROOT``), ``pyproject.toml``, defaults.
This module covers the last three; the CLI applies its own overrides.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "ConfigError",
    "ToolConfig",
    "DEFAULT_DESCRIPTOR",
    "DEFAULT_RELEASERC",
    "DEFAULT_HOOK_COMMAND",
    "DEFAULT_EXEC_TIMEOUT_SECONDS",
    "ENV_DESCRIPTOR",
    "ENV_ROOT",
    "load_config",
    "load_config_or_default",
    "resolve_root",
]

DEFAULT_DESCRIPTOR = "release.toml"
DEFAULT_RELEASERC = ".releaserc.json"
DEFAULT_HOOK_COMMAND = "relpipe"
DEFAULT_EXEC_TIMEOUT_SECONDS = 120.0

ENV_DESCRIPTOR = "RELPIPE_DESCRIPTOR"
ENV_ROOT = "RELPIPE_ROOT"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when pyproject.toml cannot be loaded or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Settings for one project using relpipe.

    Attributes:
        descriptor: Descriptor file, relative to the project root.
        preset: Built-in descriptor variant used when the file is absent.
        releaserc: Target of ``relpipe export``.
        hook_command: Command the exported orchestrator config calls back into.
        exec_timeout: Timeout for ``prepareCmd`` subprocesses, in seconds.
    """

    descriptor: str = DEFAULT_DESCRIPTOR
    preset: str | None = None
    releaserc: str = DEFAULT_RELEASERC
    hook_command: str = DEFAULT_HOOK_COMMAND
    exec_timeout: float = DEFAULT_EXEC_TIMEOUT_SECONDS

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ToolConfig:
        """Create from the ``[tool.relpipe]`` table."""
        return cls(
            descriptor=get_str(data, "descriptor") or DEFAULT_DESCRIPTOR,
            preset=get_str(data, "preset"),
            releaserc=get_str(data, "releaserc") or DEFAULT_RELEASERC,
            hook_command=get_str(data, "hook_command") or DEFAULT_HOOK_COMMAND,
            exec_timeout=get_float(data, "exec_timeout") or DEFAULT_EXEC_TIMEOUT_SECONDS,
        )

    def with_env(self, env: Mapping[str, str]) -> ToolConfig:
        """Apply environment overrides."""
        descriptor = env.get(ENV_DESCRIPTOR, "").strip()
        if descriptor:
            return replace(self, descriptor=descriptor)
        return self


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Project file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading project file: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("pyproject root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[ToolConfig, ConfigError]:
    """Load ``[tool.relpipe]`` from a pyproject.toml file.

    A file without the table yields the defaults.

    Args:
        path: Path to pyproject.toml.

    Returns:
        Ok(ToolConfig) on success, Err(ConfigError) on failure.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    tool = get_table(result.value, "tool") or {}
    if "relpipe" in tool and get_table(tool, "relpipe") is None:
        return Err(
            ConfigError(
                "[tool.relpipe] must be a table",
                path=path,
                hint='declare it as [tool.relpipe] with keys such as descriptor = "release.toml"',
            )
        )
    table = get_table(tool, "relpipe") or {}
    return Ok(ToolConfig.from_dict(table))


def load_config_or_default(root: Path) -> Result[ToolConfig, ConfigError]:
    """Load config for a project root; a missing pyproject.toml means defaults.

    Environment overrides from ``os.environ`` are applied on top.
    """
    path = root / "pyproject.toml"
    if not path.exists():
        return Ok(ToolConfig().with_env(os.environ))
    result = load_config(path)
    if isinstance(result, Err):
        return result
    return Ok(result.value.with_env(os.environ))


def resolve_root(explicit: Path | None = None) -> Path:
    """Resolve the project root: explicit option, then RELPIPE_ROOT, then cwd."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    env = os.environ.get(ENV_ROOT, "").strip()
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()
