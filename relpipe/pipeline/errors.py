from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class TemplateError:
    kind: Literal["unknown_placeholder", "unresolved"]
    message: str
    placeholder: str


@dataclass(frozen=True, slots=True)
class StepError:
    """Failure reported by a single step implementation."""

    kind: Literal[
        "version_unresolved",
        "invalid_version",
        "missing_option",
        "invalid_option",
        "template_failed",
        "pattern_not_found",
        "pattern_ambiguous",
        "missing_asset",
        "io_failed",
        "command_failed",
    ]
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


@dataclass(frozen=True, slots=True)
class StepFailure:
    """A pipeline run aborted at ``index``; later steps did not run."""

    index: int
    step: str
    error: StepError

    @property
    def message(self) -> str:
        return f"step {self.index + 1} ({self.step}) failed: {self.error.message}"

    @property
    def hint(self) -> str | None:
        return self.error.hint
