from __future__ import annotations

import typer

from relpipe.cli.commands._helpers import exit_with, print_issues
from relpipe.cli.context import build_context
from relpipe.core.errors import ErrorCode
from relpipe.descriptor import validate_descriptor


def check(ctx: typer.Context) -> None:
    """Validate branch rules and step ordering."""
    cli = build_context(ctx)
    issues = validate_descriptor(cli.descriptor)
    if issues:
        print_issues(cli, issues)
        exit_with(cli, f"{len(issues)} issue(s) in {cli.source}", code=ErrorCode.CONFIG_ERROR)

    d = cli.descriptor
    cli.console.success(f"{cli.source}: {len(d.branches)} branches, {len(d.plugins)} steps")
