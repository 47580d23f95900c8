"""Tests for relpipe.pipeline.template module."""

from __future__ import annotations

from pathlib import Path

from relpipe.core.result import Err, Ok
from relpipe.descriptor import catalog
from relpipe.descriptor.model import BranchRule, NamedWithOptions, Prerelease, ReleaseDescriptor, Stable
from relpipe.descriptor.presets import COMMIT_MESSAGE, PRESETS
from relpipe.pipeline.context import NextRelease, ReleaseContext
from relpipe.pipeline.template import commit_message_template, render_commit_message, render_template


MAIN = BranchRule(name="main", channel=Stable())
DEV = BranchRule(name="dev", channel=Prerelease(label="beta"))


def _context(
    tmp_path: Path,
    next_release: NextRelease | None = None,
    *,
    branch: BranchRule = MAIN,
    last: str | None = None,
) -> ReleaseContext:
    return ReleaseContext(
        cwd=tmp_path,
        branch=branch,
        next_release=next_release,
        last_release_version=last,
    )


class TestCommitMessage:
    def test_initial_release_message(self, tmp_path: Path) -> None:
        context = _context(tmp_path, NextRelease(version="1.0.0", notes="Initial release"))

        result = render_commit_message(PRESETS["standard"], context)

        assert isinstance(result, Ok)
        assert result.value == "chore(release): 1.0.0 [skip ci]\n\nInitial release"

    def test_every_preset_renders_the_same_message(self, tmp_path: Path) -> None:
        context = _context(tmp_path, NextRelease(version="1.0.0", notes="Initial release"))

        rendered = {name: render_commit_message(d, context) for name, d in PRESETS.items()}

        assert {r.value for r in rendered.values() if isinstance(r, Ok)} == {
            "chore(release): 1.0.0 [skip ci]\n\nInitial release"
        }

    def test_custom_message_option(self) -> None:
        descriptor = ReleaseDescriptor(
            branches=(MAIN,),
            plugins=(NamedWithOptions(id=catalog.GIT, options={"message": "release ${nextRelease.gitTag}"}),),
        )

        assert commit_message_template(descriptor) == "release ${nextRelease.gitTag}"

    def test_default_message_without_git_options(self) -> None:
        descriptor = ReleaseDescriptor(branches=(MAIN,), plugins=())

        assert commit_message_template(descriptor) == COMMIT_MESSAGE


class TestRenderTemplate:
    def test_all_placeholders(self, tmp_path: Path) -> None:
        context = _context(
            tmp_path,
            NextRelease(version="1.4.0-beta.2", notes="n", channel="beta"),
            branch=DEV,
            last="1.4.0-beta.1",
        )
        template = (
            "${nextRelease.version}|${nextRelease.notes}|${nextRelease.gitTag}|"
            "${nextRelease.channel}|${branch.name}|${lastRelease.version}"
        )

        result = render_template(template, context)

        assert isinstance(result, Ok)
        assert result.value == "1.4.0-beta.2|n|v1.4.0-beta.2|beta|dev|1.4.0-beta.1"

    def test_stable_channel_and_first_release_render_empty(self, tmp_path: Path) -> None:
        context = _context(tmp_path, NextRelease(version="1.0.0"))

        result = render_template("[${nextRelease.channel}][${lastRelease.version}]", context)

        assert isinstance(result, Ok)
        assert result.value == "[][]"

    def test_text_without_placeholders_is_unchanged(self, tmp_path: Path) -> None:
        result = render_template("make dist $HOME {x}", _context(tmp_path))

        assert isinstance(result, Ok)
        assert result.value == "make dist $HOME {x}"

    def test_unknown_placeholder(self, tmp_path: Path) -> None:
        context = _context(tmp_path, NextRelease(version="1.0.0"))

        result = render_template("${nextRelease.type}", context)

        assert isinstance(result, Err)
        assert result.error.kind == "unknown_placeholder"
        assert result.error.placeholder == "nextRelease.type"

    def test_unresolved_next_release(self, tmp_path: Path) -> None:
        result = render_template("v${nextRelease.version}", _context(tmp_path))

        assert isinstance(result, Err)
        assert result.error.kind == "unresolved"

    def test_branch_name_without_next_release(self, tmp_path: Path) -> None:
        result = render_template("${branch.name}", _context(tmp_path))

        assert isinstance(result, Ok)
        assert result.value == "main"
