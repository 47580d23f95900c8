"""Load-time checks for a release descriptor.

The orchestrator runs steps strictly in declared order, so a mis-ordered
descriptor is a configuration bug that only surfaces mid-release. These
checks surface it before anything runs:

- branch names are unique, and at least one branch releases to stable;
- every step resolves to a phase, and phases never go backwards;
- hooks that read ``nextRelease.version`` come after every commit-analysis
  and notes-generation step, in a phase and lifecycle where the version is
  already known;
- steps have the options they cannot run without.
"""

from __future__ import annotations

from relpipe.core.result import Err, Ok, Result
from relpipe.descriptor import catalog
from relpipe.descriptor.errors import DescriptorIssue
from relpipe.descriptor.model import (
    Callback,
    Named,
    NamedWithOptions,
    Phase,
    ReleaseDescriptor,
    step_label,
)

__all__ = ["check_descriptor", "validate_descriptor"]


def _branch_issues(descriptor: ReleaseDescriptor) -> list[DescriptorIssue]:
    issues: list[DescriptorIssue] = []
    if not descriptor.branches:
        issues.append(
            DescriptorIssue(
                kind="no_branches",
                message="no release branches declared",
                hint="declare at least one [[branches]] entry",
            )
        )
        return issues

    seen: set[str] = set()
    for rule in descriptor.branches:
        if rule.name in seen:
            issues.append(
                DescriptorIssue(
                    kind="duplicate_branch",
                    message=f"branch '{rule.name}' is declared more than once",
                )
            )
        seen.add(rule.name)

    if all(rule.prerelease for rule in descriptor.branches):
        issues.append(
            DescriptorIssue(
                kind="no_stable_branch",
                message="every branch is a pre-release branch",
                hint="declare one branch without 'prerelease'",
            )
        )
    return issues


def _option_issues(index: int, step: Named | NamedWithOptions) -> list[DescriptorIssue]:
    required = catalog.STEP_REQUIRED_OPTIONS.get(step.id)
    if not required:
        return []

    options = step.options if isinstance(step, NamedWithOptions) else {}
    issues: list[DescriptorIssue] = []
    for alternatives in required:
        if any(key in options for key in alternatives):
            continue
        keys = " or ".join(f"'{k}'" for k in alternatives)
        issues.append(
            DescriptorIssue(
                kind="missing_option",
                message=f"{step.id} requires option {keys}",
                index=index,
            )
        )
    return issues


def _hook_issues(
    index: int,
    step: Callback,
    *,
    last_resolver_index: int | None,
) -> list[DescriptorIssue]:
    spec = catalog.HOOKS.get(step.hook)
    if spec is None:
        known = ", ".join(sorted(catalog.HOOKS))
        return [
            DescriptorIssue(
                kind="unknown_hook",
                message=f"hook '{step.hook}' is not registered",
                index=index,
                hint=f"known hooks: {known}",
            )
        ]

    if not spec.requires_version:
        return []

    issues: list[DescriptorIssue] = []
    if last_resolver_index is None:
        issues.append(
            DescriptorIssue(
                kind="hook_before_version",
                message=f"hook '{step.hook}' reads nextRelease.version but no step resolves it",
                index=index,
                hint=f"add {catalog.COMMIT_ANALYZER} before this hook",
            )
        )
    elif index < last_resolver_index:
        issues.append(
            DescriptorIssue(
                kind="hook_before_version",
                message=(
                    f"hook '{step.hook}' runs before plugins[{last_resolver_index}] "
                    "and would observe an unresolved nextRelease.version"
                ),
                index=index,
                hint="move the hook after commit analysis and notes generation",
            )
        )

    phase = catalog.phase_of(step)
    if phase is not None and phase < Phase.CHANGELOG:
        issues.append(
            DescriptorIssue(
                kind="hook_invalid_phase",
                message=f"hook '{step.hook}' cannot run in phase '{phase}'",
                index=index,
                hint="version-dependent hooks run in changelog or a later phase",
            )
        )
    if step.lifecycle not in catalog.VERSION_LIFECYCLES:
        issues.append(
            DescriptorIssue(
                kind="hook_invalid_phase",
                message=(
                    f"hook '{step.hook}' is declared under '{step.lifecycle}', "
                    "where nextRelease is not yet computed"
                ),
                index=index,
                hint="use the 'prepare' or 'verifyRelease' lifecycle",
            )
        )
    return issues


def _last_resolver_index(descriptor: ReleaseDescriptor) -> int | None:
    last: int | None = None
    for i, step in enumerate(descriptor.plugins):
        if isinstance(step, Callback):
            continue
        if catalog.phase_of(step) in (Phase.ANALYZE, Phase.NOTES):
            last = i
    return last


def validate_descriptor(descriptor: ReleaseDescriptor) -> tuple[DescriptorIssue, ...]:
    """Return every issue found; an empty tuple means the descriptor is sound."""
    issues = _branch_issues(descriptor)
    last_resolver = _last_resolver_index(descriptor)

    highest: Phase | None = None
    highest_label = ""
    for index, step in enumerate(descriptor.plugins):
        if isinstance(step, Callback):
            issues.extend(_hook_issues(index, step, last_resolver_index=last_resolver))
        else:
            issues.extend(_option_issues(index, step))

        phase = catalog.phase_of(step)
        if phase is None:
            if not isinstance(step, Callback):
                issues.append(
                    DescriptorIssue(
                        kind="unknown_phase",
                        message=f"step '{step.id}' has no known phase",
                        index=index,
                        hint="set 'phase' explicitly for third-party steps",
                    )
                )
            continue

        if highest is not None and phase < highest:
            issues.append(
                DescriptorIssue(
                    kind="phase_order",
                    message=(
                        f"'{step_label(step)}' ({phase}) is declared after "
                        f"'{highest_label}' ({highest})"
                    ),
                    index=index,
                    hint="steps must follow analyze, notes, changelog, "
                    "prepare-artifacts, commit, publish",
                )
            )
            continue
        highest = phase
        highest_label = step_label(step)

    return tuple(issues)


def check_descriptor(
    descriptor: ReleaseDescriptor,
) -> Result[ReleaseDescriptor, tuple[DescriptorIssue, ...]]:
    """Ok(descriptor) when validation finds nothing, else Err(issues)."""
    issues = validate_descriptor(descriptor)
    if issues:
        return Err(issues)
    return Ok(descriptor)
