"""Subprocess execution with Result-based error handling.

Used by the ``@semantic-release/exec`` step to run rendered ``*Cmd``
options. Commands are argument lists and never go through a shell.

Usage:
    result = run(["make", "dist"], cwd=root, env={"RELEASE_VERSION": "1.2.0"})
    if isinstance(result, Err):
        console.error(f"{result.error} ({result.error.reason})")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from relpipe.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not run or exited non-zero.

    Attributes:
        command: The argument list that was executed.
        returncode: Exit code, or -1 when the process never ran or timed out.
        stdout: Captured standard output (may be empty).
        stderr: Captured standard error, or why the process could not run.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"

    @property
    def reason(self) -> str | None:
        """Last non-empty line of stderr, which is usually the actual error."""
        lines = [line for line in self.stderr.splitlines() if line.strip()]
        return lines[-1].strip() if lines else None


def run(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.
        env: Extra variables layered over the current environment.
        timeout: Seconds before the process is killed (None for no limit).
    """
    command = tuple(cmd)
    full_env = {**os.environ, **env} if env else None

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=full_env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(ProcessError(command, -1, partial, f"timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(command, -1, "", str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
