from __future__ import annotations

from relpipe.descriptor.branches import resolve_branch
from relpipe.descriptor.model import BranchRule, Prerelease, ReleaseDescriptor, Stable


DESCRIPTOR = ReleaseDescriptor(
    branches=(
        BranchRule(name="main", channel=Stable()),
        BranchRule(name="dev", channel=Prerelease(label="beta")),
    ),
    plugins=(),
)


def test_resolves_stable_branch() -> None:
    rule = resolve_branch(DESCRIPTOR, "main")

    assert rule is not None
    assert not rule.prerelease
    assert rule.prerelease_label is None
    assert str(rule.channel) == "stable"


def test_resolves_prerelease_branch() -> None:
    rule = resolve_branch(DESCRIPTOR, "dev")

    assert rule is not None
    assert rule.prerelease
    assert rule.prerelease_label == "beta"
    assert str(rule.channel) == "prerelease (beta)"


def test_match_is_exact() -> None:
    assert resolve_branch(DESCRIPTOR, "Main") is None
    assert resolve_branch(DESCRIPTOR, "dev/next") is None
    assert resolve_branch(DESCRIPTOR, "") is None
