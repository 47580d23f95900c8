from __future__ import annotations

import typer

from relpipe.cli.context import build_context
from relpipe.descriptor import Callback, Named, NamedWithOptions, dump_descriptor_json
from relpipe.descriptor.catalog import HOOKS, phase_of
from relpipe.descriptor.model import step_label
from relpipe.output.console import Style


def show(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print the descriptor as JSON."),
) -> None:
    """Show branch rules and the ordered pipeline."""
    cli = build_context(ctx)
    descriptor = cli.descriptor

    if as_json:
        typer.echo(dump_descriptor_json(descriptor), nl=False)
        return

    console = cli.console
    console.header(f"{descriptor.name} ({cli.source})")

    console.print("Branches", Style.BOLD)
    for rule in descriptor.branches:
        console.print(f"  {rule.name}: {rule.channel}")

    console.print("Pipeline", Style.BOLD)
    for i, step in enumerate(descriptor.plugins):
        phase = phase_of(step)
        console.print(f"  {i}. {step_label(step)} [{phase or 'unknown phase'}]")
        match step:
            case Named():
                pass
            case NamedWithOptions(options=options, assets=assets):
                for key, value in options.items():
                    console.print(f"       {key} = {value!r}", Style.DIM)
                for asset in assets:
                    console.print(f"       asset: {asset.path} ({asset.display_label})", Style.DIM)
            case Callback(hook=hook, options=options):
                if hook in HOOKS:
                    console.print(f"       {HOOKS[hook].summary}", Style.DIM)
                for key, value in options.items():
                    console.print(f"       {key} = {value!r}", Style.DIM)
