"""Built-in descriptor variants.

All variants share the same branch rules (``main`` stable, ``dev`` beta
pre-release) and the same step order. They differ only in:

- ``script-marker``: patches the version marker in the installer script and
  ships the script as an asset;
- ``verify-hook``: writes the version file from ``verifyRelease`` instead of
  ``prepare``;
- ``minimal-assets``: publishes the version file only.
"""

from __future__ import annotations

from relpipe.core.result import Err, Ok, Result
from relpipe.descriptor import catalog
from relpipe.descriptor.errors import DescriptorError
from relpipe.descriptor.model import (
    AssetDescriptor,
    BranchRule,
    Callback,
    Lifecycle,
    Named,
    NamedWithOptions,
    PipelineStep,
    Prerelease,
    ReleaseDescriptor,
    Stable,
)

__all__ = [
    "COMMIT_MESSAGE",
    "DEFAULT_PRESET",
    "PRESETS",
    "get_preset",
    "preset_names",
]

COMMIT_MESSAGE = "chore(release): ${nextRelease.version} [skip ci]\n\n${nextRelease.notes}"

CHANGELOG_FILE = "CHANGELOG.md"
VERSION_FILE = "VERSION"
INSTALLER_SCRIPT = "git-worktree-manager.sh"

DEFAULT_PRESET = "standard"

_BRANCHES: tuple[BranchRule, ...] = (
    BranchRule(name="main", channel=Stable()),
    BranchRule(name="dev", channel=Prerelease(label="beta")),
)

_RELEASE_ASSETS: tuple[AssetDescriptor, ...] = (
    AssetDescriptor(path="README.md", label="README.md"),
    AssetDescriptor(path="LICENSE", label="License"),
    AssetDescriptor(path=VERSION_FILE, label="Version"),
)


def _pipeline(
    *,
    hook_lifecycle: Lifecycle = "prepare",
    marker: bool = False,
    release_assets: tuple[AssetDescriptor, ...] = _RELEASE_ASSETS,
) -> tuple[PipelineStep, ...]:
    committed = [AssetDescriptor(path=CHANGELOG_FILE), AssetDescriptor(path=VERSION_FILE)]
    if marker:
        committed.append(AssetDescriptor(path=INSTALLER_SCRIPT))
        release_assets = release_assets + (
            AssetDescriptor(path=INSTALLER_SCRIPT, label="Installer script"),
        )

    steps: list[PipelineStep] = [
        Named(id=catalog.COMMIT_ANALYZER),
        Named(id=catalog.NOTES_GENERATOR),
        NamedWithOptions(id=catalog.CHANGELOG, options={"changelogFile": CHANGELOG_FILE}),
        Callback(
            hook=catalog.WRITE_VERSION_FILE,
            lifecycle=hook_lifecycle,
            options={"path": VERSION_FILE},
        ),
    ]
    if marker:
        steps.append(
            NamedWithOptions(
                id=catalog.VERSION_MARKER,
                options={
                    "file": INSTALLER_SCRIPT,
                    "pattern": r'^SCRIPT_VERSION=".*"$',
                    "replacement": 'SCRIPT_VERSION="${nextRelease.version}"',
                },
            )
        )
    steps.append(
        NamedWithOptions(
            id=catalog.GIT,
            options={"message": COMMIT_MESSAGE},
            assets=tuple(committed),
        )
    )
    steps.append(NamedWithOptions(id=catalog.GITHUB, assets=release_assets))
    return tuple(steps)


PRESETS: dict[str, ReleaseDescriptor] = {
    "standard": ReleaseDescriptor(
        name="standard",
        branches=_BRANCHES,
        plugins=_pipeline(),
    ),
    "script-marker": ReleaseDescriptor(
        name="script-marker",
        branches=_BRANCHES,
        plugins=_pipeline(marker=True),
    ),
    "verify-hook": ReleaseDescriptor(
        name="verify-hook",
        branches=_BRANCHES,
        plugins=_pipeline(hook_lifecycle="verifyRelease"),
    ),
    "minimal-assets": ReleaseDescriptor(
        name="minimal-assets",
        branches=_BRANCHES,
        plugins=_pipeline(release_assets=(AssetDescriptor(path=VERSION_FILE, label="Version"),)),
    ),
}


def preset_names() -> tuple[str, ...]:
    return tuple(PRESETS)


def get_preset(name: str) -> Result[ReleaseDescriptor, DescriptorError]:
    descriptor = PRESETS.get(name)
    if descriptor is None:
        return Err(
            DescriptorError(
                kind="unknown_preset",
                message=f"unknown preset: {name}",
                hint=f"available: {', '.join(PRESETS)}",
            )
        )
    return Ok(descriptor)
