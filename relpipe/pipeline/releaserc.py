"""Export a descriptor as semantic-release configuration.

semantic-release reads ``.releaserc.json``, which cannot hold code. Steps
relpipe implements in-process (hooks, the version marker) are therefore
exported as ``@semantic-release/exec`` entries that call back into
``relpipe hook <index>`` under the step's lifecycle, at the step's position
in the plugin list, so the orchestrator keeps the declared order.
"""

from __future__ import annotations

import json
import shlex

from relpipe.core.structured import StrDict
from relpipe.descriptor import catalog
from relpipe.descriptor.codec import encode_asset
from relpipe.descriptor.model import (
    BranchRule,
    Callback,
    Named,
    NamedWithOptions,
    PipelineStep,
    Prerelease,
    ReleaseDescriptor,
    Stable,
)

__all__ = ["dump_releaserc_json", "hook_command_line", "releaserc_dict"]


def hook_command_line(
    index: int,
    *,
    command: str,
    selector: tuple[str, ...] = (),
) -> str:
    """The exec command that runs plugin ``index`` through ``relpipe hook``."""
    parts = shlex.split(command)
    parts += selector
    line = shlex.join([*parts, "hook", str(index)])
    # Left unquoted: the orchestrator substitutes these before the shell runs
    return line + " --version ${nextRelease.version} --branch ${branch.name}"


def _branch(rule: BranchRule) -> object:
    match rule.channel:
        case Stable():
            return rule.name
        case Prerelease(label=label):
            return {"name": rule.name, "prerelease": label}


def _plugin(
    index: int,
    step: PipelineStep,
    *,
    command: str,
    selector: tuple[str, ...],
) -> object:
    match step:
        case Callback(lifecycle=lifecycle):
            cmd = hook_command_line(index, command=command, selector=selector)
            return [catalog.EXEC, {f"{lifecycle}Cmd": cmd}]
        case Named(id=step_id) | NamedWithOptions(id=step_id) if step_id == catalog.VERSION_MARKER:
            cmd = hook_command_line(index, command=command, selector=selector)
            return [catalog.EXEC, {"prepareCmd": cmd}]
        case Named(id=step_id):
            return step_id
        case NamedWithOptions(id=step_id, options=options, assets=assets):
            opts: StrDict = {}
            if assets:
                opts["assets"] = [encode_asset(a) for a in assets]
            opts.update(options)
            return [step_id, opts]


def releaserc_dict(
    descriptor: ReleaseDescriptor,
    *,
    command: str = "relpipe",
    selector: tuple[str, ...] = (),
) -> StrDict:
    return {
        "branches": [_branch(b) for b in descriptor.branches],
        "plugins": [
            _plugin(i, s, command=command, selector=selector)
            for i, s in enumerate(descriptor.plugins)
        ],
    }


def dump_releaserc_json(
    descriptor: ReleaseDescriptor,
    *,
    command: str = "relpipe",
    selector: tuple[str, ...] = (),
) -> str:
    data = releaserc_dict(descriptor, command=command, selector=selector)
    return json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n"
