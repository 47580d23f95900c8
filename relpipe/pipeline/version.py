"""Checks on orchestrator-supplied versions.

relpipe never computes a version. It only refuses values that are not
semantic versions, or that do not fit the branch's release channel.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from relpipe.core.result import Err, Ok, Result
from relpipe.descriptor.model import BranchRule, Prerelease, Stable
from relpipe.pipeline.errors import StepError

__all__ = ["SemVer", "check_version_for_branch", "parse_version"]


_SEMVER_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: str | None = None

    def __str__(self) -> str:
        out = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            out += "-" + ".".join(self.prerelease)
        if self.build:
            out += "+" + self.build
        return out


def parse_version(value: str) -> SemVer | None:
    """Parse ``MAJOR.MINOR.PATCH[-pre][+build]``; a leading ``v`` is accepted."""
    m = _SEMVER_RE.match(value.strip())
    if m is None:
        return None
    pre = tuple(m.group(4).split(".")) if m.group(4) else ()
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), pre, m.group(5))


def check_version_for_branch(value: str, branch: BranchRule) -> Result[SemVer, StepError]:
    """Parse ``value`` and check it against the branch channel.

    Stable branches take plain versions; pre-release branches take versions
    whose first pre-release identifier is the channel label
    (``1.4.0-beta.2`` on a ``beta`` branch).
    """
    version = parse_version(value)
    if version is None:
        return Err(
            StepError(
                kind="invalid_version",
                message=f"not a semantic version: {value!r}",
                hint="expected MAJOR.MINOR.PATCH[-label.N]",
            )
        )

    match branch.channel:
        case Stable():
            if version.prerelease:
                return Err(
                    StepError(
                        kind="invalid_version",
                        message=f"branch '{branch.name}' is stable but {version} is a pre-release",
                    )
                )
        case Prerelease(label=label):
            if not version.prerelease or version.prerelease[0] != label:
                return Err(
                    StepError(
                        kind="invalid_version",
                        message=(
                            f"branch '{branch.name}' releases '{label}' pre-releases, got {version}"
                        ),
                        hint=f"expected {version.major}.{version.minor}.{version.patch}-{label}.N",
                    )
                )
    return Ok(version)
