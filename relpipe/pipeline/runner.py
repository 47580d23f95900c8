"""Sequential, fail-fast execution of a release descriptor.

Each step runs to completion before the next one starts. Registered steps
run in-process; the rest are delegated to the orchestrator, after relpipe
has checked the preconditions it can see (publish assets exist, the commit
message renders). The first failure aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from relpipe.core.result import Err, Ok, Result
from relpipe.descriptor import catalog
from relpipe.descriptor.model import (
    Callback,
    Named,
    NamedWithOptions,
    Phase,
    PipelineStep,
    ReleaseDescriptor,
    step_label,
)
from relpipe.output.console import ConsoleProtocol, Style
from relpipe.pipeline.assets import verify_assets
from relpipe.pipeline.context import ReleaseContext
from relpipe.pipeline.errors import StepError, StepFailure
from relpipe.pipeline.steps import StepRegistry
from relpipe.pipeline.template import render_commit_message

__all__ = ["PipelineReport", "StepOutcome", "run_pipeline"]


@dataclass(frozen=True, slots=True)
class StepOutcome:
    index: int
    step: str
    phase: Phase | None
    status: Literal["ran", "delegated"]
    summary: str
    changed: tuple[Path, ...] = ()


@dataclass(frozen=True, slots=True)
class PipelineReport:
    outcomes: tuple[StepOutcome, ...]
    commit_message: str | None = None

    @property
    def changed(self) -> tuple[Path, ...]:
        return tuple(p for o in self.outcomes for p in o.changed)

    @property
    def delegated(self) -> tuple[str, ...]:
        return tuple(o.step for o in self.outcomes if o.status == "delegated")


def _handler_key(step: PipelineStep) -> str:
    match step:
        case Named(id=step_id) | NamedWithOptions(id=step_id):
            return step_id
        case Callback(hook=hook):
            return hook


def _options(step: PipelineStep) -> dict[str, object]:
    match step:
        case Named():
            return {}
        case NamedWithOptions(options=options) | Callback(options=options):
            return dict(options)


def run_pipeline(
    descriptor: ReleaseDescriptor,
    context: ReleaseContext,
    registry: StepRegistry,
    console: ConsoleProtocol,
) -> Result[PipelineReport, StepFailure]:
    """Run every step of ``descriptor`` in declared order.

    Args:
        descriptor: The pipeline to run; should already pass validation.
        context: Immutable per-run context shared by all steps.
        registry: Implementations for in-process steps.
        console: Progress output.

    Returns:
        Ok(PipelineReport) when every step ran or was delegated,
        Err(StepFailure) for the first step that failed.
    """
    total = len(descriptor.plugins)
    outcomes: list[StepOutcome] = []
    planned: set[Path] = set()
    commit_message: str | None = None

    for index, step in enumerate(descriptor.plugins):
        label = step_label(step)
        phase = catalog.phase_of(step)
        console.print(f"step {index + 1}/{total}: {label} [{phase or 'unknown phase'}]", Style.BOLD)

        def fail(error: StepError) -> Err[StepFailure]:
            return Err(StepFailure(index=index, step=label, error=error))

        if isinstance(step, NamedWithOptions) and step.assets and phase == Phase.PUBLISH:
            checked = verify_assets(step.assets, context, planned=planned)
            if isinstance(checked, Err):
                return fail(checked.error)

        if isinstance(step, (Named, NamedWithOptions)) and step.id == catalog.GIT:
            rendered = render_commit_message(descriptor, context)
            if isinstance(rendered, Err):
                return fail(
                    StepError(
                        kind="template_failed",
                        message=f"commit message: {rendered.error.message}",
                    )
                )
            commit_message = rendered.value

        handler = registry.get(_handler_key(step))
        if handler is None:
            console.print("  delegated to orchestrator", Style.DIM)
            outcomes.append(
                StepOutcome(
                    index=index,
                    step=label,
                    phase=phase,
                    status="delegated",
                    summary="delegated to orchestrator",
                )
            )
            continue

        result = handler(_options(step), context)
        if isinstance(result, Err):
            return fail(result.error)

        done = result.value
        planned.update(done.planned)
        planned.update(done.changed)
        console.print(f"  {done.summary}")
        outcomes.append(
            StepOutcome(
                index=index,
                step=label,
                phase=phase,
                status="ran",
                summary=done.summary,
                changed=done.changed,
            )
        )

    return Ok(PipelineReport(outcomes=tuple(outcomes), commit_message=commit_message))
