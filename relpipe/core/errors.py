"""Process exit codes for the relpipe CLI.

The numeric values are part of the CLI contract (CI scripts branch on them)
and must remain stable:
- 0: Success
- 1: User error (bad arguments, branch not configured for release)
- 2: Environment error (descriptor or project file missing)
- 3: Config error (descriptor invalid or mis-ordered)
- 4: Step error (a pipeline step failed)
- 5: I/O error (file could not be read or written)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    CONFIG_ERROR = 3
    STEP_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
