"""Rewrite a version marker line inside a tracked file.

The marker is located with a regular expression that must match exactly one
line. The matched line is replaced by the rendered ``replacement`` template.
Because the pattern describes the marker rather than a particular version,
re-running with the same version finds the already-updated line and leaves
the file untouched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from relpipe.core.result import Err, Ok, Result
from relpipe.pipeline.context import ReleaseContext
from relpipe.pipeline.errors import StepError
from relpipe.pipeline.steps.base import StepResult, require_next_release, require_str_option
from relpipe.pipeline.template import render_template
from relpipe.platform.files import atomic_write_text, read_text_exact

__all__ = ["patch_version_marker"]


def _split_ending(line: str) -> tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body) :]


def patch_version_marker(
    options: Mapping[str, object],
    context: ReleaseContext,
) -> Result[StepResult, StepError]:
    nxt = require_next_release(context, what="version-marker")
    if isinstance(nxt, Err):
        return nxt

    file_opt = require_str_option(options, "file")
    if isinstance(file_opt, Err):
        return file_opt
    pattern_opt = require_str_option(options, "pattern")
    if isinstance(pattern_opt, Err):
        return pattern_opt
    replacement_opt = require_str_option(options, "replacement")
    if isinstance(replacement_opt, Err):
        return replacement_opt

    rel = file_opt.value
    try:
        marker = re.compile(pattern_opt.value)
    except re.error as e:
        return Err(
            StepError(
                kind="invalid_option",
                message=f"invalid marker pattern {pattern_opt.value!r}: {e}",
            )
        )

    rendered = render_template(replacement_opt.value, context)
    if isinstance(rendered, Err):
        return Err(StepError(kind="template_failed", message=rendered.error.message))
    new_body = rendered.value
    if not marker.search(new_body):
        return Err(
            StepError(
                kind="invalid_option",
                message=f"replacement {new_body!r} does not match {pattern_opt.value!r}",
                hint="the pattern must also match the updated line or a second run fails",
            )
        )

    path = context.resolve(rel)
    try:
        text = read_text_exact(path)
    except OSError as e:
        return Err(StepError(kind="io_failed", message=f"failed to read {rel}: {e}", hint=str(path)))

    lines = text.splitlines(keepends=True)
    hits = [i for i, line in enumerate(lines) if marker.search(_split_ending(line)[0])]

    if not hits:
        return Err(
            StepError(
                kind="pattern_not_found",
                message=f"no line in {rel} matches {pattern_opt.value!r}",
                hint="the marker must be present exactly once",
            )
        )
    if len(hits) > 1:
        where = ", ".join(str(i + 1) for i in hits)
        return Err(
            StepError(
                kind="pattern_ambiguous",
                message=f"{len(hits)} lines in {rel} match {pattern_opt.value!r} (lines {where})",
                hint="tighten the pattern so it matches a single line",
            )
        )

    index = hits[0]
    old_body, ending = _split_ending(lines[index])
    if old_body == new_body:
        return Ok(StepResult(summary=f"{rel}:{index + 1} already at {nxt.value.version}"))

    if context.dry_run:
        return Ok(
            StepResult(summary=f"would set {rel}:{index + 1} to {new_body!r}", planned=(path,))
        )

    lines[index] = new_body + ending
    try:
        atomic_write_text(path, "".join(lines))
    except OSError as e:
        return Err(StepError(kind="io_failed", message=f"failed to write {rel}: {e}", hint=str(path)))

    return Ok(StepResult(summary=f"set {rel}:{index + 1} to {new_body!r}", changed=(path,)))
