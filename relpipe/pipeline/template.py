"""``${...}`` placeholder rendering for commit messages and commands.

Placeholders use the orchestrator's names so descriptor strings can be
copied verbatim:

    ${nextRelease.version}  ${nextRelease.notes}  ${nextRelease.gitTag}
    ${nextRelease.channel}  ${branch.name}        ${lastRelease.version}

An unknown placeholder, or a ``nextRelease`` field when no release has been
resolved, is an error rather than an empty substitution.
"""

from __future__ import annotations

import re

from relpipe.core.result import Err, Ok, Result
from relpipe.descriptor import catalog
from relpipe.descriptor.model import NamedWithOptions, ReleaseDescriptor
from relpipe.descriptor.presets import COMMIT_MESSAGE
from relpipe.pipeline.context import ReleaseContext
from relpipe.pipeline.errors import TemplateError

__all__ = ["PLACEHOLDERS", "commit_message_template", "render_commit_message", "render_template"]

_PLACEHOLDER_RE = re.compile(r"\$\{\s*([A-Za-z_][A-Za-z0-9_.]*)\s*\}")

PLACEHOLDERS: tuple[str, ...] = (
    "nextRelease.version",
    "nextRelease.notes",
    "nextRelease.gitTag",
    "nextRelease.channel",
    "branch.name",
    "lastRelease.version",
)


def _lookup(name: str, context: ReleaseContext) -> str | None:
    """Value for a known placeholder; None when nextRelease is unresolved."""
    if name == "branch.name":
        return context.branch.name
    if name == "lastRelease.version":
        return context.last_release_version or ""

    nxt = context.next_release
    if nxt is None:
        return None
    match name:
        case "nextRelease.version":
            return nxt.version
        case "nextRelease.notes":
            return nxt.notes
        case "nextRelease.gitTag":
            return nxt.tag
        case "nextRelease.channel":
            return nxt.channel or ""
    raise AssertionError(f"unhandled placeholder: {name}")


def render_template(template: str, context: ReleaseContext) -> Result[str, TemplateError]:
    out: list[str] = []
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(template):
        name = m.group(1)
        if name not in PLACEHOLDERS:
            return Err(
                TemplateError(
                    kind="unknown_placeholder",
                    message=f"unknown placeholder ${{{name}}}",
                    placeholder=name,
                )
            )
        value = _lookup(name, context)
        if value is None:
            return Err(
                TemplateError(
                    kind="unresolved",
                    message=f"${{{name}}} is not resolved yet",
                    placeholder=name,
                )
            )
        out.append(template[pos : m.start()])
        out.append(value)
        pos = m.end()
    out.append(template[pos:])
    return Ok("".join(out))


def commit_message_template(descriptor: ReleaseDescriptor) -> str:
    """The git step's ``message`` option, or the conventional default."""
    step = descriptor.find_step(catalog.GIT)
    if isinstance(step, NamedWithOptions):
        message = step.options.get("message")
        if isinstance(message, str) and message:
            return message
    return COMMIT_MESSAGE


def render_commit_message(
    descriptor: ReleaseDescriptor,
    context: ReleaseContext,
) -> Result[str, TemplateError]:
    return render_template(commit_message_template(descriptor), context)
