from __future__ import annotations

import typer

from relpipe.cli.commands._helpers import exit_with
from relpipe.cli.context import build_context
from relpipe.core.errors import ErrorCode
from relpipe.descriptor import resolve_branch


def branch(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Branch triggering the release."),
) -> None:
    """Show the release channel a branch publishes to."""
    cli = build_context(ctx)
    rule = resolve_branch(cli.descriptor, name)
    if rule is None:
        exit_with(
            cli,
            f"branch '{name}' is not a release branch; a release would be skipped",
            code=ErrorCode.USER_ERROR,
        )
    cli.console.print(f"{rule.name}: {rule.channel}")
