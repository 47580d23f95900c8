"""Release pipeline descriptor model.

A descriptor is immutable input: it is loaded once per invocation, never
mutated, and re-evaluated on every release run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Literal

__all__ = [
    "AssetDescriptor",
    "BranchRule",
    "Callback",
    "Lifecycle",
    "LIFECYCLES",
    "Named",
    "NamedWithOptions",
    "Phase",
    "PipelineStep",
    "Prerelease",
    "ReleaseChannel",
    "ReleaseDescriptor",
    "Stable",
    "step_label",
]


class Phase(IntEnum):
    """Pipeline phases, in execution order.

    A step's phase never precedes the phase of any step declared before it.
    """

    ANALYZE = 1
    NOTES = 2
    CHANGELOG = 3
    PREPARE_ARTIFACTS = 4
    COMMIT = 5
    PUBLISH = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")

    def __format__(self, format_spec: str) -> str:
        # IntEnum formats as the integer otherwise
        return format(str(self), format_spec)

    @classmethod
    def parse(cls, value: str) -> Phase | None:
        key = value.strip().upper().replace("-", "_")
        return cls.__members__.get(key)


# Orchestrator lifecycle names a callback may be declared under.
Lifecycle = Literal[
    "verifyConditions",
    "analyzeCommits",
    "verifyRelease",
    "generateNotes",
    "prepare",
    "publish",
    "success",
    "fail",
]

LIFECYCLES: tuple[Lifecycle, ...] = (
    "verifyConditions",
    "analyzeCommits",
    "verifyRelease",
    "generateNotes",
    "prepare",
    "publish",
    "success",
    "fail",
)


@dataclass(frozen=True, slots=True)
class Stable:
    """Releases from this branch get plain MAJOR.MINOR.PATCH versions."""

    def __str__(self) -> str:
        return "stable"


@dataclass(frozen=True, slots=True)
class Prerelease:
    """Releases from this branch get a ``-label.N`` suffix."""

    label: str

    def __str__(self) -> str:
        return f"prerelease ({self.label})"


type ReleaseChannel = Stable | Prerelease


@dataclass(frozen=True, slots=True)
class BranchRule:
    name: str
    channel: ReleaseChannel = field(default_factory=Stable)

    @property
    def prerelease(self) -> bool:
        return isinstance(self.channel, Prerelease)

    @property
    def prerelease_label(self) -> str | None:
        if isinstance(self.channel, Prerelease):
            return self.channel.label
        return None


@dataclass(frozen=True, slots=True)
class AssetDescriptor:
    """A file attached to a commit or published release.

    ``label`` is None for assets declared as a bare path.
    """

    path: str
    label: str | None = None

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else self.path


def _frozen_options(options: Mapping[str, object]) -> Mapping[str, object]:
    # Copy first so the caller's dict cannot change the step behind its back
    return MappingProxyType(dict(options))


@dataclass(frozen=True, slots=True)
class Named:
    """A bare step identifier, executed with its default options."""

    id: str
    phase: Phase | None = None  # explicit override; known ids resolve their own


@dataclass(frozen=True, slots=True)
class NamedWithOptions:
    """A step identifier with an options mapping.

    ``assets`` is lifted out of the raw options so it is typed and ordered.
    ``options`` is stored as a read-only copy of whatever mapping is passed.
    """

    id: str
    options: Mapping[str, object] = field(default_factory=dict)
    assets: tuple[AssetDescriptor, ...] = ()
    phase: Phase | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _frozen_options(self.options))


@dataclass(frozen=True, slots=True)
class Callback:
    """A registered hook run at a given point in the pipeline.

    Attributes:
        hook: Name of the registered implementation (e.g. ``write-version-file``).
        lifecycle: Orchestrator lifecycle the hook is exported under.
        options: Hook options (read-only).
        phase: Explicit phase override; defaults to the hook's catalogue phase.
    """

    hook: str
    lifecycle: Lifecycle = "prepare"
    options: Mapping[str, object] = field(default_factory=dict)
    phase: Phase | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _frozen_options(self.options))


type PipelineStep = Named | NamedWithOptions | Callback


def step_label(step: PipelineStep) -> str:
    """Human-readable identifier for a step."""
    match step:
        case Named(id=step_id) | NamedWithOptions(id=step_id):
            return step_id
        case Callback(hook=hook, lifecycle=lifecycle):
            return f"{lifecycle} hook: {hook}"


@dataclass(frozen=True, slots=True)
class ReleaseDescriptor:
    """Branch rules plus the ordered pipeline consumed by the orchestrator."""

    branches: tuple[BranchRule, ...]
    plugins: tuple[PipelineStep, ...]
    name: str = "release"

    def find_step(self, step_id: str) -> NamedWithOptions | Named | None:
        """First Named/NamedWithOptions step with this identifier."""
        for step in self.plugins:
            if isinstance(step, (Named, NamedWithOptions)) and step.id == step_id:
                return step
        return None
