from __future__ import annotations

from pathlib import Path

import typer

from relpipe import __version__
from relpipe.cli.commands.branch_cmd import branch
from relpipe.cli.commands.check import check
from relpipe.cli.commands.export import export
from relpipe.cli.commands.presets_cmd import presets
from relpipe.cli.commands.release_cmd import hook, message, run
from relpipe.cli.commands.show import show
from relpipe.cli.context import GlobalOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(show)
app.command()(check)
app.command()(branch)
app.command()(message)
app.command()(run)
app.command()(hook)
app.command()(export)
app.command()(presets)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    descriptor: Path | None = typer.Option(
        None,
        "--descriptor",
        "-d",
        help="Descriptor file (.toml or .json), relative to the project root.",
    ),
    preset: str | None = typer.Option(
        None,
        "--preset",
        help="Use a built-in descriptor variant instead of a file.",
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (default: RELPIPE_ROOT, then the current directory).",
    ),
) -> None:
    """Release pipeline descriptor tooling."""
    if descriptor is not None and preset is not None:
        typer.echo("error: --descriptor and --preset are mutually exclusive", err=True)
        raise typer.Exit(code=1)

    ctx.obj = GlobalOptions(descriptor=descriptor, preset=preset, root=root)


def main() -> None:
    app()
