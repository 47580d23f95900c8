from __future__ import annotations

from pathlib import Path

import typer

from relpipe.cli.commands._helpers import exit_with, pick_branch, require_valid
from relpipe.cli.context import CLIContext, build_context
from relpipe.core.errors import ErrorCode
from relpipe.core.result import Err
from relpipe.descriptor import BranchRule, resolve_branch
from relpipe.descriptor.model import Callback, Named, NamedWithOptions, step_label
from relpipe.output.console import Style
from relpipe.pipeline import (
    NextRelease,
    ReleaseContext,
    check_version_for_branch,
    default_registry,
    render_commit_message,
    run_pipeline,
)


def _read_notes(cli: CLIContext, notes: str | None, notes_file: Path | None) -> str:
    if notes is not None and notes_file is not None:
        exit_with(cli, "use either --notes or --notes-file", code=ErrorCode.USER_ERROR)
    if notes_file is None:
        return notes or ""
    try:
        return notes_file.read_text(encoding="utf-8").rstrip("\n")
    except OSError as e:
        exit_with(cli, f"failed to read --notes-file: {e}", hint=str(notes_file), code=ErrorCode.IO_ERROR)


def _release_context(
    cli: CLIContext,
    *,
    rule: BranchRule,
    version: str,
    notes: str,
    last_version: str | None = None,
    dry_run: bool = False,
) -> ReleaseContext:
    checked = check_version_for_branch(version, rule)
    if isinstance(checked, Err):
        exit_with(cli, checked.error.message, hint=checked.error.hint, code=ErrorCode.USER_ERROR)

    return ReleaseContext(
        cwd=cli.root,
        branch=rule,
        next_release=NextRelease(
            version=str(checked.value),
            notes=notes,
            channel=rule.prerelease_label,
        ),
        last_release_version=last_version,
        dry_run=dry_run,
    )


def message(
    ctx: typer.Context,
    version: str = typer.Option(..., "--version", help="Resolved next version."),
    notes: str | None = typer.Option(None, "--notes", help="Release notes."),
    notes_file: Path | None = typer.Option(None, "--notes-file", help="Read release notes from a file."),
    branch: str | None = typer.Option(None, "--branch", help="Release branch (default: stable branch)."),
) -> None:
    """Render the release commit message."""
    cli = build_context(ctx)
    rule = pick_branch(cli, branch)
    context = _release_context(cli, rule=rule, version=version, notes=_read_notes(cli, notes, notes_file))

    rendered = render_commit_message(cli.descriptor, context)
    if isinstance(rendered, Err):
        exit_with(cli, rendered.error.message, code=ErrorCode.CONFIG_ERROR)
    # Raw output so scripts can capture it verbatim
    typer.echo(rendered.value)


def run(
    ctx: typer.Context,
    branch: str = typer.Option(..., "--branch", help="Branch triggering the release."),
    version: str = typer.Option(..., "--version", help="Version resolved by commit analysis."),
    notes: str | None = typer.Option(None, "--notes", help="Generated release notes."),
    notes_file: Path | None = typer.Option(None, "--notes-file", help="Read release notes from a file."),
    last_version: str | None = typer.Option(None, "--last-version", help="Previous release version."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render and check only; write nothing."),
) -> None:
    """Run the pipeline in order: registered steps in-process, the rest delegated."""
    cli = build_context(ctx)
    require_valid(cli)

    rule = resolve_branch(cli.descriptor, branch)
    if rule is None:
        cli.console.warning(f"branch '{branch}' is not a release branch; release skipped")
        return

    context = _release_context(
        cli,
        rule=rule,
        version=version,
        notes=_read_notes(cli, notes, notes_file),
        last_version=last_version,
        dry_run=dry_run,
    )
    registry = default_registry(exec_timeout=cli.config.exec_timeout)

    cli.console.header(f"Release {version} from {rule.name} ({rule.channel})")
    result = run_pipeline(cli.descriptor, context, registry, cli.console)
    if isinstance(result, Err):
        failure = result.error
        exit_with(cli, failure.message, hint=failure.hint, code=ErrorCode.STEP_ERROR)

    report = result.value
    if report.commit_message is not None:
        cli.console.print("Commit message", Style.BOLD)
        cli.console.print(report.commit_message, Style.DIM)

    ran = len(report.outcomes) - len(report.delegated)
    prefix = "dry run: " if dry_run else ""
    cli.console.success(f"{prefix}{ran} step(s) ran, {len(report.delegated)} delegated")
    for path in report.changed:
        # Option paths may be absolute and point outside the project
        shown = path.relative_to(cli.root) if path.is_relative_to(cli.root) else path
        cli.console.print(f"  changed: {shown}", Style.DIM)


def hook(
    ctx: typer.Context,
    index: int = typer.Argument(..., help="Position of the step in the plugin list."),
    version: str = typer.Option(..., "--version", help="nextRelease.version from the orchestrator."),
    branch: str = typer.Option(..., "--branch", help="branch.name from the orchestrator."),
    notes: str | None = typer.Option(None, "--notes", help="nextRelease.notes, when needed."),
) -> None:
    """Run one registered step; called back by the exported orchestrator config."""
    cli = build_context(ctx)
    require_valid(cli)
    plugins = cli.descriptor.plugins
    if not 0 <= index < len(plugins):
        exit_with(cli, f"no step at index {index} ({len(plugins)} steps)", code=ErrorCode.USER_ERROR)

    step = plugins[index]
    match step:
        case Callback(hook=name, options=options):
            key, opts = name, dict(options)
        case NamedWithOptions(id=name, options=options):
            key, opts = name, dict(options)
        case Named(id=name):
            key, opts = name, {}

    registry = default_registry(exec_timeout=cli.config.exec_timeout)
    handler = registry.get(key)
    if handler is None:
        exit_with(
            cli,
            f"step {index} ({step_label(step)}) is not a registered step",
            hint=f"registered: {', '.join(registry.names())}",
            code=ErrorCode.USER_ERROR,
        )

    rule = pick_branch(cli, branch)
    context = _release_context(cli, rule=rule, version=version, notes=notes or "")
    result = handler(opts, context)
    if isinstance(result, Err):
        exit_with(cli, result.error.message, hint=result.error.hint, code=ErrorCode.STEP_ERROR)
    cli.console.success(result.value.summary)
