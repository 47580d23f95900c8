"""Registered step implementations.

Hooks are looked up by hook name, named steps by identifier. Anything not
registered is delegated to the external orchestrator.

Usage:
    registry = default_registry()
    handler = registry.get("write-version-file")
    if handler is not None:
        result = handler({"path": "VERSION"}, context)
"""

from __future__ import annotations

from collections.abc import Mapping

from relpipe.core.config import DEFAULT_EXEC_TIMEOUT_SECONDS
from relpipe.descriptor import catalog

from .base import StepHandler, StepResult
from .exec_cmd import make_exec_handler
from .version_file import write_version_file
from .version_marker import patch_version_marker

__all__ = [
    "StepHandler",
    "StepRegistry",
    "StepResult",
    "default_registry",
    "patch_version_marker",
    "write_version_file",
]


class StepRegistry:
    """Name-to-implementation map used by the pipeline runner."""

    def __init__(self, handlers: Mapping[str, StepHandler] | None = None) -> None:
        self._handlers: dict[str, StepHandler] = dict(handlers or {})

    def register(self, name: str, handler: StepHandler) -> None:
        """Register ``handler`` under ``name``, replacing any previous one."""
        self._handlers[name] = handler

    def get(self, name: str) -> StepHandler | None:
        return self._handlers.get(name)

    def names(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    def __contains__(self, name: object) -> bool:
        return name in self._handlers


def default_registry(*, exec_timeout: float = DEFAULT_EXEC_TIMEOUT_SECONDS) -> StepRegistry:
    """Registry with every built-in hook and step."""
    return StepRegistry(
        {
            catalog.WRITE_VERSION_FILE: write_version_file,
            catalog.VERSION_MARKER: patch_version_marker,
            catalog.EXEC: make_exec_handler(exec_timeout),
        }
    )
