from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relpipe.core.config import ToolConfig, load_config_or_default, resolve_root
from relpipe.core.errors import ErrorCode
from relpipe.core.result import Err, Result
from relpipe.descriptor import DescriptorError, ReleaseDescriptor, get_preset, load_descriptor
from relpipe.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the subcommand, stored on ``typer.Context.obj``."""

    descriptor: Path | None = None
    preset: str | None = None
    root: Path | None = None


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: ToolConfig
    descriptor: ReleaseDescriptor
    source: str
    # How `relpipe hook` finds this descriptor again (see `relpipe export`)
    selector: tuple[str, ...]
    console: ConsoleProtocol


def global_options(ctx: typer.Context) -> GlobalOptions:
    obj = ctx.find_root().obj
    if isinstance(obj, GlobalOptions):
        return obj
    return GlobalOptions()


def _fail(console: ConsoleProtocol, message: str, hint: str | None, code: ErrorCode) -> typer.Exit:
    console.error(message)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)
    return typer.Exit(code=int(code))


def _load(
    options: GlobalOptions,
    root: Path,
    config: ToolConfig,
) -> tuple[Result[ReleaseDescriptor, DescriptorError], str, tuple[str, ...]]:
    if options.preset is not None:
        return get_preset(options.preset), f"preset:{options.preset}", ("--preset", options.preset)

    if options.descriptor is not None:
        path = options.descriptor if options.descriptor.is_absolute() else root / options.descriptor
        return load_descriptor(path), str(path), ("--descriptor", str(options.descriptor))

    path = root / config.descriptor
    if not path.exists() and config.preset is not None:
        return get_preset(config.preset), f"preset:{config.preset}", ()
    return load_descriptor(path), str(path), ()


def build_context(ctx: typer.Context, *, console: ConsoleProtocol | None = None) -> CLIContext:
    """Resolve root, tool config and descriptor, or exit with the right code."""
    console = console or RichConsole()
    options = global_options(ctx)

    root = resolve_root(options.root)
    if not root.is_dir():
        raise _fail(console, f"project root not found: {root}", None, ErrorCode.ENV_ERROR)

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        err = config_result.error
        raise _fail(console, err.message, err.hint, ErrorCode.CONFIG_ERROR)
    config = config_result.value

    loaded, source, selector = _load(options, root, config)
    if isinstance(loaded, Err):
        err = loaded.error
        code = ErrorCode.ENV_ERROR if err.kind == "not_found" else ErrorCode.CONFIG_ERROR
        if err.kind == "unknown_preset":
            code = ErrorCode.USER_ERROR
        raise _fail(console, err.message, err.hint, code)

    return CLIContext(
        root=root,
        config=config,
        descriptor=loaded.value,
        source=source,
        selector=selector,
        console=console,
    )
