from __future__ import annotations

from relpipe.descriptor.model import BranchRule, ReleaseDescriptor

__all__ = ["resolve_branch"]


def resolve_branch(descriptor: ReleaseDescriptor, name: str) -> BranchRule | None:
    """Find the rule for the branch triggering a release.

    Matching is exact. None means the branch is not a release branch and the
    release must be skipped.
    """
    for rule in descriptor.branches:
        if rule.name == name:
            return rule
    return None
