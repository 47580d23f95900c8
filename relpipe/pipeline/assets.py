from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

from relpipe.core.result import Err, Ok, Result
from relpipe.descriptor.model import AssetDescriptor
from relpipe.pipeline.context import ReleaseContext
from relpipe.pipeline.errors import StepError

__all__ = ["missing_assets", "verify_assets"]


def missing_assets(
    assets: tuple[AssetDescriptor, ...],
    context: ReleaseContext,
    *,
    planned: Collection[Path] = (),
) -> tuple[AssetDescriptor, ...]:
    """Assets whose path does not exist, in declaration order.

    ``planned`` lists files an earlier step of a dry run would have written;
    they count as present.
    """
    out: list[AssetDescriptor] = []
    for asset in assets:
        path = context.resolve(asset.path)
        if path in planned:
            continue
        if not path.is_file():
            out.append(asset)
    return tuple(out)


def verify_assets(
    assets: tuple[AssetDescriptor, ...],
    context: ReleaseContext,
    *,
    planned: Collection[Path] = (),
) -> Result[None, StepError]:
    missing = missing_assets(assets, context, planned=planned)
    if not missing:
        return Ok(None)
    names = ", ".join(f"{a.path} ({a.display_label})" for a in missing)
    return Err(
        StepError(
            kind="missing_asset",
            message=f"missing release asset(s): {names}",
            hint="asset paths are literal and resolved from the project root",
        )
    )
