from __future__ import annotations

import pytest

from relpipe.core.result import Err, Ok
from relpipe.descriptor.model import BranchRule, Prerelease, Stable
from relpipe.pipeline.version import SemVer, check_version_for_branch, parse_version


MAIN = BranchRule(name="main", channel=Stable())
DEV = BranchRule(name="dev", channel=Prerelease(label="beta"))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1.2.3", SemVer(1, 2, 3)),
        ("v0.1.0", SemVer(0, 1, 0)),
        ("1.4.0-beta.2", SemVer(1, 4, 0, ("beta", "2"))),
        ("2.0.0+build.7", SemVer(2, 0, 0, (), "build.7")),
    ],
)
def test_parse_version(value: str, expected: SemVer) -> None:
    assert parse_version(value) == expected


@pytest.mark.parametrize("value", ["", "1.2", "01.2.3", "1.2.3-", "latest"])
def test_parse_version_rejects(value: str) -> None:
    assert parse_version(value) is None


def test_semver_str_drops_leading_v() -> None:
    version = parse_version("v1.4.0-beta.2")
    assert version is not None
    assert str(version) == "1.4.0-beta.2"


def test_stable_branch_accepts_plain_version() -> None:
    result = check_version_for_branch("1.2.3", MAIN)

    assert isinstance(result, Ok)


def test_stable_branch_rejects_prerelease() -> None:
    result = check_version_for_branch("1.2.3-beta.1", MAIN)

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_version"


def test_prerelease_branch_requires_label() -> None:
    assert isinstance(check_version_for_branch("1.3.0-beta.1", DEV), Ok)

    plain = check_version_for_branch("1.3.0", DEV)
    assert isinstance(plain, Err)
    assert plain.error.hint == "expected 1.3.0-beta.N"

    other = check_version_for_branch("1.3.0-alpha.1", DEV)
    assert isinstance(other, Err)


def test_invalid_version() -> None:
    result = check_version_for_branch("next", MAIN)

    assert isinstance(result, Err)
    assert "not a semantic version" in result.error.message
