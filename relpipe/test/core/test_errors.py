"""Tests for relpipe.core.errors module."""

from relpipe.core.errors import ErrorCode


def test_exit_code_values_are_stable() -> None:
    assert [int(c) for c in ErrorCode] == [0, 1, 2, 3, 4, 5]


def test_str_is_human_readable() -> None:
    assert str(ErrorCode.CONFIG_ERROR) == "config error"
    assert str(ErrorCode.OK) == "ok"


def test_success_flags() -> None:
    assert ErrorCode.OK.is_success
    assert not ErrorCode.OK.is_error
    assert ErrorCode.STEP_ERROR.is_error
