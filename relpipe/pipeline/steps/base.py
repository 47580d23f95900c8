from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from relpipe.core.result import Err, Ok, Result
from relpipe.pipeline.context import NextRelease, ReleaseContext
from relpipe.pipeline.errors import StepError

__all__ = ["StepHandler", "StepResult", "require_next_release", "require_str_option"]


@dataclass(frozen=True, slots=True)
class StepResult:
    """What a step did.

    Attributes:
        summary: One-line description for the run report.
        changed: Files written by the step (empty on dry runs and no-ops).
        planned: Files a dry run would have written.
    """

    summary: str
    changed: tuple[Path, ...] = ()
    planned: tuple[Path, ...] = ()


# A registered step implementation: pure apart from its declared file effects.
type StepHandler = Callable[[Mapping[str, object], ReleaseContext], Result[StepResult, StepError]]


def require_next_release(context: ReleaseContext, *, what: str) -> Result[NextRelease, StepError]:
    if context.next_release is None:
        return Err(
            StepError(
                kind="version_unresolved",
                message=f"{what} needs nextRelease.version, which is not resolved",
                hint="place this step after commit analysis",
            )
        )
    return Ok(context.next_release)


def require_str_option(
    options: Mapping[str, object],
    key: str,
    *,
    default: str | None = None,
) -> Result[str, StepError]:
    value = options.get(key, default)
    if value is None:
        return Err(StepError(kind="missing_option", message=f"missing option '{key}'"))
    if not isinstance(value, str) or not value:
        return Err(
            StepError(kind="invalid_option", message=f"option '{key}' must be a non-empty string")
        )
    return Ok(value)
