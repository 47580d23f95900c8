"""Known step identifiers and hooks.

The catalogue is what makes ordering checkable: every known identifier has
a fixed phase, and every hook declares whether it reads
``nextRelease.version``.
"""

from __future__ import annotations

from dataclasses import dataclass

from relpipe.descriptor.model import Callback, Lifecycle, Named, NamedWithOptions, Phase, PipelineStep

__all__ = [
    "COMMIT_ANALYZER",
    "NOTES_GENERATOR",
    "CHANGELOG",
    "EXEC",
    "VERSION_MARKER",
    "GIT",
    "GITHUB",
    "NPM",
    "WRITE_VERSION_FILE",
    "HookSpec",
    "HOOKS",
    "STEP_PHASES",
    "STEP_REQUIRED_OPTIONS",
    "VERSION_LIFECYCLES",
    "phase_of",
]

COMMIT_ANALYZER = "@semantic-release/commit-analyzer"
NOTES_GENERATOR = "@semantic-release/release-notes-generator"
CHANGELOG = "@semantic-release/changelog"
EXEC = "@semantic-release/exec"
VERSION_MARKER = "version-marker"
GIT = "@semantic-release/git"
GITHUB = "@semantic-release/github"
NPM = "@semantic-release/npm"

WRITE_VERSION_FILE = "write-version-file"

STEP_PHASES: dict[str, Phase] = {
    COMMIT_ANALYZER: Phase.ANALYZE,
    NOTES_GENERATOR: Phase.NOTES,
    CHANGELOG: Phase.CHANGELOG,
    EXEC: Phase.PREPARE_ARTIFACTS,
    VERSION_MARKER: Phase.PREPARE_ARTIFACTS,
    GIT: Phase.COMMIT,
    GITHUB: Phase.PUBLISH,
    NPM: Phase.PUBLISH,
}

# Option keys a step cannot run without. A tuple of alternatives means
# "at least one of".
STEP_REQUIRED_OPTIONS: dict[str, tuple[tuple[str, ...], ...]] = {
    VERSION_MARKER: (("file",), ("pattern",), ("replacement",)),
    EXEC: (
        (
            "verifyReleaseCmd",
            "generateNotesCmd",
            "prepareCmd",
            "publishCmd",
            "successCmd",
        ),
    ),
}

# Lifecycles at which the orchestrator has already computed nextRelease.
VERSION_LIFECYCLES: frozenset[Lifecycle] = frozenset(
    {"verifyRelease", "generateNotes", "prepare", "publish", "success"}
)


@dataclass(frozen=True, slots=True)
class HookSpec:
    name: str
    phase: Phase
    requires_version: bool
    summary: str


HOOKS: dict[str, HookSpec] = {
    WRITE_VERSION_FILE: HookSpec(
        name=WRITE_VERSION_FILE,
        phase=Phase.PREPARE_ARTIFACTS,
        requires_version=True,
        summary="write nextRelease.version to a plain-text file",
    ),
}


def phase_of(step: PipelineStep) -> Phase | None:
    """Resolve a step's phase: explicit override first, then the catalogue."""
    match step:
        case Named(id=step_id, phase=phase) | NamedWithOptions(id=step_id, phase=phase):
            return phase if phase is not None else STEP_PHASES.get(step_id)
        case Callback(hook=hook, phase=phase):
            if phase is not None:
                return phase
            spec = HOOKS.get(hook)
            return spec.phase if spec is not None else None
