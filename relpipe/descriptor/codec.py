"""Descriptor file decoding and encoding.

Two on-disk forms are accepted:

- TOML (``release.toml``), using arrays of tables for ``branches`` and
  ``plugins``.
- JSON, in the same table form or in semantic-release shorthand where a
  plugin is a bare string or an ``[id, options]`` pair.

Encoding always produces the table form. Decoding then encoding is
order-preserving for branches, plugins, options and asset lists.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from relpipe.core.result import Err, Ok, Result
from relpipe.core.structured import (
    StrDict,
    as_obj_list,
    as_str_dict,
    get_list,
    get_str,
    get_table,
)
from relpipe.descriptor.errors import DescriptorError
from relpipe.descriptor.model import (
    LIFECYCLES,
    AssetDescriptor,
    BranchRule,
    Callback,
    Lifecycle,
    Named,
    NamedWithOptions,
    Phase,
    PipelineStep,
    Prerelease,
    ReleaseChannel,
    ReleaseDescriptor,
    Stable,
)

__all__ = [
    "descriptor_from_dict",
    "descriptor_to_dict",
    "dump_descriptor_json",
    "encode_asset",
    "load_descriptor",
    "parse_descriptor_text",
]


def _invalid(message: str, *, hint: str | None = None) -> Err[DescriptorError]:
    return Err(DescriptorError(kind="invalid_structure", message=message, hint=hint))


# -----------------------------------------------------------------------------
# Decoding
# -----------------------------------------------------------------------------


def _decode_channel(where: str, name: str, raw: object) -> Result[ReleaseChannel, DescriptorError]:
    if raw is None or raw is False:
        return Ok(Stable())
    if raw is True:
        # semantic-release: `prerelease: true` labels with the branch name
        return Ok(Prerelease(label=name))
    if isinstance(raw, str) and raw.strip():
        return Ok(Prerelease(label=raw.strip()))
    return _invalid(f"{where}.prerelease must be a boolean or a non-empty label")


def _decode_branch(index: int, raw: object) -> Result[BranchRule, DescriptorError]:
    where = f"branches[{index}]"
    if isinstance(raw, str):
        if not raw.strip():
            return _invalid(f"{where} is an empty branch name")
        return Ok(BranchRule(name=raw.strip()))

    table = as_str_dict(raw)
    if table is None:
        return _invalid(f"{where} must be a branch name or a table")

    name = get_str(table, "name")
    if name is None:
        return _invalid(f"{where} is missing 'name'")

    channel = _decode_channel(where, name, table.get("prerelease"))
    if isinstance(channel, Err):
        return channel
    return Ok(BranchRule(name=name, channel=channel.value))


def _decode_asset(where: str, raw: object) -> Result[AssetDescriptor, DescriptorError]:
    if isinstance(raw, str):
        if not raw:
            return _invalid(f"{where} is an empty path")
        return Ok(AssetDescriptor(path=raw))

    table = as_str_dict(raw)
    if table is None:
        return _invalid(f"{where} must be a path or a {{path, label}} table")
    path = get_str(table, "path")
    if path is None:
        return _invalid(f"{where} is missing 'path'")
    label = table.get("label")
    if label is not None and not isinstance(label, str):
        return _invalid(f"{where}.label must be a string")
    return Ok(AssetDescriptor(path=path, label=label))


def _decode_assets(where: str, raw: object) -> Result[tuple[AssetDescriptor, ...], DescriptorError]:
    # semantic-release allows a single asset in place of a list
    items = as_obj_list(raw)
    if items is None:
        items = [raw]
    assets: list[AssetDescriptor] = []
    for i, item in enumerate(items):
        asset = _decode_asset(f"{where}.assets[{i}]", item)
        if isinstance(asset, Err):
            return asset
        assets.append(asset.value)
    return Ok(tuple(assets))


def _decode_phase(where: str, table: Mapping[str, object]) -> Result[Phase | None, DescriptorError]:
    raw = table.get("phase")
    if raw is None:
        return Ok(None)
    if not isinstance(raw, str):
        return _invalid(f"{where}.phase must be a string")
    phase = Phase.parse(raw)
    if phase is None:
        names = ", ".join(str(p) for p in Phase)
        return _invalid(f"{where}.phase '{raw}' is not a phase", hint=f"expected one of: {names}")
    return Ok(phase)


def _named(
    where: str,
    step_id: str,
    options: StrDict | None,
    phase: Phase | None,
) -> Result[PipelineStep, DescriptorError]:
    if options is None:
        return Ok(Named(id=step_id, phase=phase))

    opts = dict(options)
    assets: tuple[AssetDescriptor, ...] = ()
    if "assets" in opts:
        decoded = _decode_assets(where, opts.pop("assets"))
        if isinstance(decoded, Err):
            return decoded
        assets = decoded.value
    return Ok(NamedWithOptions(id=step_id, options=opts, assets=assets, phase=phase))


def _decode_callback(where: str, table: StrDict) -> Result[PipelineStep, DescriptorError]:
    hook = get_str(table, "hook")
    if hook is None:
        return _invalid(f"{where}.hook must be a non-empty string")

    lifecycle_raw = table.get("lifecycle", "prepare")
    if lifecycle_raw not in LIFECYCLES:
        return _invalid(
            f"{where}.lifecycle '{lifecycle_raw}' is not an orchestrator lifecycle",
            hint=f"expected one of: {', '.join(LIFECYCLES)}",
        )
    lifecycle: Lifecycle = lifecycle_raw  # type: ignore[assignment]

    options = table.get("options", {})
    opts = as_str_dict(options)
    if opts is None:
        return _invalid(f"{where}.options must be a table")

    phase = _decode_phase(where, table)
    if isinstance(phase, Err):
        return phase
    return Ok(Callback(hook=hook, lifecycle=lifecycle, options=dict(opts), phase=phase.value))


def _decode_step(index: int, raw: object) -> Result[PipelineStep, DescriptorError]:
    where = f"plugins[{index}]"

    if isinstance(raw, str):
        if not raw.strip():
            return _invalid(f"{where} is an empty step identifier")
        return Ok(Named(id=raw.strip()))

    pair = as_obj_list(raw)
    if pair is not None:
        if len(pair) != 2 or not isinstance(pair[0], str):
            return _invalid(f"{where} must be [id, options]")
        options = as_str_dict(pair[1])
        if options is None:
            return _invalid(f"{where} options must be a table")
        return _named(where, pair[0], options, None)

    table = as_str_dict(raw)
    if table is None:
        return _invalid(f"{where} must be a string, an [id, options] pair or a table")

    if "hook" in table:
        return _decode_callback(where, table)

    step_id = get_str(table, "id")
    if step_id is None:
        return _invalid(f"{where} needs either 'id' or 'hook'")

    phase = _decode_phase(where, table)
    if isinstance(phase, Err):
        return phase

    if "options" in table and get_table(table, "options") is None:
        return _invalid(f"{where}.options must be a table")
    return _named(where, step_id, get_table(table, "options"), phase.value)


def descriptor_from_dict(data: Mapping[str, object]) -> Result[ReleaseDescriptor, DescriptorError]:
    """Decode a parsed descriptor document.

    Decoding checks shapes only; ordering and uniqueness are the validator's
    job, so a decoded descriptor may still be rejected by
    ``validate_descriptor``.
    """
    branches_raw = get_list(data, "branches")
    if branches_raw is None:
        return _invalid("'branches' must be a list")
    plugins_raw = get_list(data, "plugins")
    if plugins_raw is None:
        return _invalid("'plugins' must be a list")

    branches: list[BranchRule] = []
    for i, raw in enumerate(branches_raw):
        branch = _decode_branch(i, raw)
        if isinstance(branch, Err):
            return branch
        branches.append(branch.value)

    plugins: list[PipelineStep] = []
    for i, raw in enumerate(plugins_raw):
        step = _decode_step(i, raw)
        if isinstance(step, Err):
            return step
        plugins.append(step.value)

    return Ok(
        ReleaseDescriptor(
            branches=tuple(branches),
            plugins=tuple(plugins),
            name=get_str(data, "name") or "release",
        )
    )


def parse_descriptor_text(text: str, *, fmt: str) -> Result[ReleaseDescriptor, DescriptorError]:
    """Parse descriptor source text in ``toml`` or ``json`` format."""
    import tomllib

    try:
        if fmt == "toml":
            data_obj: object = tomllib.loads(text)
        elif fmt == "json":
            data_obj = json.loads(text)
        else:
            return Err(
                DescriptorError(
                    kind="unsupported_format",
                    message=f"unsupported descriptor format: {fmt}",
                    hint="use .toml or .json",
                )
            )
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        return Err(DescriptorError(kind="invalid_syntax", message=f"invalid {fmt.upper()}: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return _invalid("descriptor root must be a table")
    return descriptor_from_dict(data)


def load_descriptor(path: Path) -> Result[ReleaseDescriptor, DescriptorError]:
    """Load a descriptor from a ``.toml`` or ``.json`` file.

    Args:
        path: Descriptor file.

    Returns:
        Ok(ReleaseDescriptor) or Err(DescriptorError) carrying ``path``.
    """
    fmt = path.suffix.lower().lstrip(".")
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(
            DescriptorError(
                kind="not_found",
                message=f"descriptor not found: {path}",
                hint="create release.toml or pass --preset",
                path=path,
            )
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(DescriptorError(kind="read_failed", message=f"failed to read {path}: {e}", path=path))

    result = parse_descriptor_text(text, fmt=fmt)
    if isinstance(result, Err):
        e = result.error
        return Err(DescriptorError(kind=e.kind, message=e.message, hint=e.hint, path=path))
    return result


# -----------------------------------------------------------------------------
# Encoding
# -----------------------------------------------------------------------------


def encode_asset(asset: AssetDescriptor) -> object:
    if asset.label is None:
        return asset.path
    return {"path": asset.path, "label": asset.label}


def _encode_branch(rule: BranchRule) -> StrDict:
    out: StrDict = {"name": rule.name}
    match rule.channel:
        case Stable():
            out["prerelease"] = False
        case Prerelease(label=label):
            out["prerelease"] = label
    return out


def _encode_step(step: PipelineStep) -> StrDict:
    out: StrDict
    match step:
        case Named(id=step_id, phase=phase):
            out = {"id": step_id}
        case NamedWithOptions(id=step_id, options=options, assets=assets, phase=phase):
            opts: StrDict = dict(options)
            if assets:
                opts["assets"] = [encode_asset(a) for a in assets]
            out = {"id": step_id, "options": opts}
        case Callback(hook=hook, lifecycle=lifecycle, options=options, phase=phase):
            out = {"hook": hook, "lifecycle": lifecycle, "options": dict(options)}
    if phase is not None:
        out["phase"] = str(phase)
    return out


def descriptor_to_dict(descriptor: ReleaseDescriptor) -> StrDict:
    """Encode a descriptor in table form."""
    return {
        "name": descriptor.name,
        "branches": [_encode_branch(b) for b in descriptor.branches],
        "plugins": [_encode_step(s) for s in descriptor.plugins],
    }


def dump_descriptor_json(descriptor: ReleaseDescriptor) -> str:
    # TOML dates and times have no JSON type and are emitted as their string form
    data = descriptor_to_dict(descriptor)
    return json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n"
