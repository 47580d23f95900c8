"""Tests for relpipe.pipeline.releaserc module."""

from __future__ import annotations

import json

from relpipe.descriptor import catalog
from relpipe.descriptor.presets import COMMIT_MESSAGE, PRESETS
from relpipe.pipeline.releaserc import dump_releaserc_json, hook_command_line, releaserc_dict


HOOK_SUFFIX = " --version ${nextRelease.version} --branch ${branch.name}"


class TestHookCommandLine:
    def test_default(self) -> None:
        assert hook_command_line(3, command="relpipe") == "relpipe hook 3" + HOOK_SUFFIX

    def test_with_selector_and_wrapper_command(self) -> None:
        line = hook_command_line(4, command="uvx relpipe", selector=("--preset", "script-marker"))

        assert line == "uvx relpipe --preset script-marker hook 4" + HOOK_SUFFIX

    def test_selector_paths_are_quoted(self) -> None:
        line = hook_command_line(0, command="relpipe", selector=("--descriptor", "ci/my release.toml"))

        assert line.startswith("relpipe --descriptor 'ci/my release.toml' hook 0")


class TestReleasercDict:
    def test_branches(self) -> None:
        data = releaserc_dict(PRESETS["standard"])

        assert data["branches"] == ["main", {"name": "dev", "prerelease": "beta"}]

    def test_standard_plugins(self) -> None:
        data = releaserc_dict(PRESETS["standard"])

        assert data["plugins"] == [
            catalog.COMMIT_ANALYZER,
            catalog.NOTES_GENERATOR,
            [catalog.CHANGELOG, {"changelogFile": "CHANGELOG.md"}],
            [catalog.EXEC, {"prepareCmd": "relpipe hook 3" + HOOK_SUFFIX}],
            [catalog.GIT, {"assets": ["CHANGELOG.md", "VERSION"], "message": COMMIT_MESSAGE}],
            [
                catalog.GITHUB,
                {
                    "assets": [
                        {"path": "README.md", "label": "README.md"},
                        {"path": "LICENSE", "label": "License"},
                        {"path": "VERSION", "label": "Version"},
                    ]
                },
            ],
        ]

    def test_verify_hook_uses_its_lifecycle(self) -> None:
        data = releaserc_dict(PRESETS["verify-hook"])
        plugins = data["plugins"]

        assert isinstance(plugins, list)
        assert plugins[3] == [catalog.EXEC, {"verifyReleaseCmd": "relpipe hook 3" + HOOK_SUFFIX}]

    def test_version_marker_becomes_prepare_cmd(self) -> None:
        data = releaserc_dict(PRESETS["script-marker"], selector=("--preset", "script-marker"))
        plugins = data["plugins"]

        assert isinstance(plugins, list)
        assert plugins[4] == [
            catalog.EXEC,
            {"prepareCmd": "relpipe --preset script-marker hook 4" + HOOK_SUFFIX},
        ]


def test_dump_is_valid_json() -> None:
    text = dump_releaserc_json(PRESETS["minimal-assets"])

    assert text.endswith("\n")
    assert json.loads(text)["plugins"][0] == catalog.COMMIT_ANALYZER
