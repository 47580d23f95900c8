"""Tests for relpipe.output.console module."""

from __future__ import annotations

import pytest

from relpipe.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"


class TestConsoleProtocol:
    @pytest.mark.parametrize(
        "method", ["print", "success", "error", "warning", "info", "header", "newline"]
    )
    def test_methods_are_documented(self, method: str) -> None:
        assert getattr(ConsoleProtocol, method).__doc__


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DEFAULT

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")
        assert console.messages == ["OK done", "error: broken", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.has_success()

    def test_find_and_count(self) -> None:
        console = MockConsole()
        console.print("step 1/2: a", Style.BOLD)
        console.print("step 2/2: b", Style.BOLD)
        console.print("  delegated", Style.DIM)
        assert len(console.find("step")) == 2
        assert console.count(Style.DIM) == 1

    def test_clear(self) -> None:
        console = MockConsole()
        console.header("x")
        console.newline()
        console.clear()
        assert console.text == ""

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.print("ok")


class TestRichConsole:
    def test_markup_in_messages_is_not_interpreted(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("chore(release): 1.0.0 [skip ci]")
        console.error("[bold]literal[/bold]")
        out = capsys.readouterr().out
        assert "[skip ci]" in out
        assert "[bold]literal[/bold]" in out
        assert "error:" in out
