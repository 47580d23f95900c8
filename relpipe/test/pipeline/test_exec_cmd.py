from __future__ import annotations

import shlex
import sys
from pathlib import Path

from relpipe.core.result import Err, Ok
from relpipe.descriptor.model import BranchRule
from relpipe.pipeline.context import NextRelease, ReleaseContext
from relpipe.pipeline.steps.exec_cmd import make_exec_handler


def _context(tmp_path: Path, *, dry_run: bool = False) -> ReleaseContext:
    return ReleaseContext(
        cwd=tmp_path,
        branch=BranchRule(name="main"),
        next_release=NextRelease(version="3.0.0"),
        dry_run=dry_run,
    )


def _python(code: str) -> str:
    return shlex.join([sys.executable, "-c", code])


def test_prepare_cmd_runs_with_rendered_version(tmp_path: Path) -> None:
    handler = make_exec_handler(timeout=30)
    options = {"prepareCmd": _python("open('out.txt', 'w').write('${nextRelease.version}')")}

    result = handler(options, _context(tmp_path))

    assert isinstance(result, Ok)
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "3.0.0"
    assert result.value.summary.startswith("ran prepareCmd")


def test_dry_run_does_not_execute(tmp_path: Path) -> None:
    handler = make_exec_handler(timeout=30)
    options = {"prepareCmd": _python("open('out.txt', 'w').write('x')")}

    result = handler(options, _context(tmp_path, dry_run=True))

    assert isinstance(result, Ok)
    assert not (tmp_path / "out.txt").exists()
    assert result.value.summary.startswith("would run prepareCmd")


def test_publish_commands_are_left_to_orchestrator(tmp_path: Path) -> None:
    handler = make_exec_handler(timeout=30)

    result = handler({"publishCmd": "./upload.sh", "successCmd": "./notify.sh"}, _context(tmp_path))

    assert isinstance(result, Ok)
    assert result.value.summary == "left to orchestrator: publishCmd, successCmd"


def test_failing_command(tmp_path: Path) -> None:
    handler = make_exec_handler(timeout=30)
    options = {"prepareCmd": _python("import sys; sys.stderr.write('boom\\n'); sys.exit(2)")}

    result = handler(options, _context(tmp_path))

    assert isinstance(result, Err)
    assert result.error.kind == "command_failed"
    assert result.error.hint == "boom"


def test_unknown_placeholder(tmp_path: Path) -> None:
    handler = make_exec_handler(timeout=30)

    result = handler({"prepareCmd": "echo ${nextRelease.codename}"}, _context(tmp_path))

    assert isinstance(result, Err)
    assert result.error.kind == "template_failed"


def test_unbalanced_quotes(tmp_path: Path) -> None:
    handler = make_exec_handler(timeout=30)

    result = handler({"prepareCmd": "echo 'oops"}, _context(tmp_path))

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_option"


def test_no_commands(tmp_path: Path) -> None:
    result = make_exec_handler()({}, _context(tmp_path))

    assert isinstance(result, Ok)
    assert result.value.summary == "no commands to run"
