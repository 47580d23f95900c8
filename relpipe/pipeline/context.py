"""Per-run release context.

The orchestrator (or the CLI on its behalf) supplies the computed next
release. The context is created per run, shared read-only by every step,
and discarded afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relpipe.descriptor.model import BranchRule

__all__ = ["NextRelease", "ReleaseContext"]


@dataclass(frozen=True, slots=True)
class NextRelease:
    """The release being made.

    Attributes:
        version: Resolved version, without a leading ``v``.
        notes: Release notes generated for this version.
        git_tag: Tag to create; ``v{version}`` unless overridden.
        channel: Pre-release label of the branch, None for stable.
    """

    version: str
    notes: str = ""
    git_tag: str | None = None
    channel: str | None = None

    @property
    def tag(self) -> str:
        return self.git_tag if self.git_tag is not None else f"v{self.version}"


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    cwd: Path
    branch: BranchRule
    next_release: NextRelease | None = None
    last_release_version: str | None = None
    dry_run: bool = False

    def resolve(self, rel_path: str) -> Path:
        """Resolve a descriptor path against the project root."""
        return self.cwd / rel_path
