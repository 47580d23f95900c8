from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True, slots=True)
class DescriptorError:
    """A descriptor could not be loaded or decoded."""

    kind: Literal[
        "not_found",
        "read_failed",
        "invalid_syntax",
        "invalid_structure",
        "unsupported_format",
        "unknown_preset",
    ]
    message: str
    hint: str | None = None
    path: Path | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


@dataclass(frozen=True, slots=True)
class DescriptorIssue:
    """A structural problem found by validation.

    ``index`` is the position of the offending step in ``plugins`` (None for
    branch-level issues).
    """

    kind: Literal[
        "no_branches",
        "duplicate_branch",
        "no_stable_branch",
        "unknown_phase",
        "unknown_hook",
        "phase_order",
        "hook_before_version",
        "hook_invalid_phase",
        "missing_option",
    ]
    message: str
    index: int | None = None
    hint: str | None = None

    def pretty(self) -> str:
        where = f"plugins[{self.index}]: " if self.index is not None else ""
        if self.hint:
            return f"{where}{self.message} (hint: {self.hint})"
        return f"{where}{self.message}"
