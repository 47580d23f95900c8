"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from relpipe.core.errors import ErrorCode
from relpipe.descriptor import BranchRule, DescriptorIssue, resolve_branch, validate_descriptor
from relpipe.output.console import Style

if TYPE_CHECKING:
    from relpipe.cli.context import CLIContext


def exit_with(
    ctx: CLIContext,
    message: str,
    *,
    hint: str | None = None,
    code: ErrorCode,
) -> NoReturn:
    """Print an error (and optional hint) and exit with ``code``."""
    ctx.console.error(message)
    if hint:
        ctx.console.print(f"hint: {hint}", Style.DIM)
    raise typer.Exit(code=int(code))


def print_issues(ctx: CLIContext, issues: tuple[DescriptorIssue, ...]) -> None:
    for issue in issues:
        ctx.console.error(issue.pretty())


def require_valid(ctx: CLIContext) -> None:
    """Exit with CONFIG_ERROR when the descriptor has validation issues."""
    issues = validate_descriptor(ctx.descriptor)
    if issues:
        print_issues(ctx, issues)
        exit_with(
            ctx,
            f"{ctx.source}: {len(issues)} issue(s) found",
            hint="run `relpipe check` for details",
            code=ErrorCode.CONFIG_ERROR,
        )


def pick_branch(ctx: CLIContext, name: str | None) -> BranchRule:
    """The named branch rule, or the first stable branch when no name is given."""
    if name is None:
        for rule in ctx.descriptor.branches:
            if not rule.prerelease:
                return rule
        exit_with(ctx, "descriptor has no stable branch", code=ErrorCode.CONFIG_ERROR)

    rule = resolve_branch(ctx.descriptor, name)
    if rule is None:
        known = ", ".join(b.name for b in ctx.descriptor.branches)
        exit_with(
            ctx,
            f"branch '{name}' is not a release branch",
            hint=f"release branches: {known}",
            code=ErrorCode.USER_ERROR,
        )
    return rule
