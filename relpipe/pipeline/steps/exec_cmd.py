"""Run the ``*Cmd`` options of an ``@semantic-release/exec`` step.

Only the commands of lifecycles up to ``prepare`` run in-process; publish
and success commands belong to the orchestrator and are reported as such.
Commands are split with shell rules but run without a shell.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping

from relpipe.core.config import DEFAULT_EXEC_TIMEOUT_SECONDS
from relpipe.core.result import Err, Ok, Result
from relpipe.pipeline.context import ReleaseContext
from relpipe.pipeline.errors import StepError
from relpipe.pipeline.steps.base import StepHandler, StepResult
from relpipe.pipeline.template import render_template
from relpipe.platform.process import run

__all__ = ["LOCAL_COMMANDS", "DEFERRED_COMMANDS", "make_exec_handler"]

LOCAL_COMMANDS: tuple[str, ...] = ("verifyReleaseCmd", "generateNotesCmd", "prepareCmd")
DEFERRED_COMMANDS: tuple[str, ...] = ("publishCmd", "successCmd", "failCmd")


def _run_command(
    key: str,
    template: object,
    context: ReleaseContext,
    timeout: float,
) -> Result[str, StepError]:
    if not isinstance(template, str) or not template.strip():
        return Err(StepError(kind="invalid_option", message=f"option '{key}' must be a command string"))

    rendered = render_template(template, context)
    if isinstance(rendered, Err):
        return Err(StepError(kind="template_failed", message=f"{key}: {rendered.error.message}"))

    try:
        argv = shlex.split(rendered.value)
    except ValueError as e:
        return Err(StepError(kind="invalid_option", message=f"{key}: cannot parse command: {e}"))

    if context.dry_run:
        return Ok(f"would run {key}: {shlex.join(argv)}")

    result = run(argv, cwd=context.cwd, timeout=timeout)
    if isinstance(result, Err):
        err = result.error
        return Err(StepError(kind="command_failed", message=f"{key}: {err}", hint=err.reason))
    return Ok(f"ran {key}: {shlex.join(argv)}")


def make_exec_handler(timeout: float = DEFAULT_EXEC_TIMEOUT_SECONDS) -> StepHandler:
    def handle_exec(
        options: Mapping[str, object],
        context: ReleaseContext,
    ) -> Result[StepResult, StepError]:
        done: list[str] = []
        for key in LOCAL_COMMANDS:
            if key not in options:
                continue
            ran = _run_command(key, options[key], context, timeout)
            if isinstance(ran, Err):
                return ran
            done.append(ran.value)

        deferred = [k for k in DEFERRED_COMMANDS if k in options]
        if deferred:
            done.append(f"left to orchestrator: {', '.join(deferred)}")
        if not done:
            done.append("no commands to run")
        return Ok(StepResult(summary="; ".join(done)))

    return handle_exec
