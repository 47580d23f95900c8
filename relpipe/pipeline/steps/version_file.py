from __future__ import annotations

from collections.abc import Mapping

from relpipe.core.result import Err, Ok, Result
from relpipe.pipeline.context import ReleaseContext
from relpipe.pipeline.errors import StepError
from relpipe.pipeline.steps.base import StepResult, require_next_release, require_str_option
from relpipe.platform.files import atomic_write_text, read_text_exact

__all__ = ["DEFAULT_VERSION_FILE", "write_version_file"]

DEFAULT_VERSION_FILE = "VERSION"


def write_version_file(
    options: Mapping[str, object],
    context: ReleaseContext,
) -> Result[StepResult, StepError]:
    """Write ``nextRelease.version`` to ``options["path"]``.

    The file holds the version string and nothing else (no trailing
    newline), so downstream tooling can read it verbatim.
    """
    nxt = require_next_release(context, what="write-version-file")
    if isinstance(nxt, Err):
        return nxt
    rel = require_str_option(options, "path", default=DEFAULT_VERSION_FILE)
    if isinstance(rel, Err):
        return rel

    version = nxt.value.version
    path = context.resolve(rel.value)

    if context.dry_run:
        return Ok(StepResult(summary=f"would write {version} to {rel.value}", planned=(path,)))

    try:
        if path.is_file() and read_text_exact(path) == version:
            return Ok(StepResult(summary=f"{rel.value} already at {version}"))
        atomic_write_text(path, version)
    except OSError as e:
        return Err(
            StepError(
                kind="io_failed",
                message=f"failed to write {rel.value}: {e}",
                hint=str(path),
            )
        )

    return Ok(StepResult(summary=f"wrote {version} to {rel.value}", changed=(path,)))
