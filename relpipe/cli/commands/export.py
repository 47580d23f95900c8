from __future__ import annotations

from pathlib import Path

import typer

from relpipe.cli.commands._helpers import exit_with, require_valid
from relpipe.cli.context import build_context
from relpipe.core.errors import ErrorCode
from relpipe.pipeline import dump_releaserc_json
from relpipe.platform.files import atomic_write_text


def export(
    ctx: typer.Context,
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Target file (default: [tool.relpipe] releaserc, .releaserc.json).",
    ),
    stdout: bool = typer.Option(False, "--stdout", help="Print instead of writing a file."),
) -> None:
    """Export the descriptor as semantic-release configuration."""
    cli = build_context(ctx)
    require_valid(cli)

    text = dump_releaserc_json(
        cli.descriptor,
        command=cli.config.hook_command,
        selector=cli.selector,
    )
    if stdout:
        typer.echo(text, nl=False)
        return

    target = output if output is not None else Path(cli.config.releaserc)
    if not target.is_absolute():
        target = cli.root / target
    try:
        atomic_write_text(target, text)
    except OSError as e:
        exit_with(cli, f"failed to write {target}: {e}", code=ErrorCode.IO_ERROR)
    cli.console.success(f"wrote {target}")
