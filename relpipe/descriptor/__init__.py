"""Release pipeline descriptor: model, codec, validation and built-in variants."""

from .branches import resolve_branch
from .codec import (
    descriptor_from_dict,
    descriptor_to_dict,
    dump_descriptor_json,
    load_descriptor,
    parse_descriptor_text,
)
from .errors import DescriptorError, DescriptorIssue
from .model import (
    AssetDescriptor,
    BranchRule,
    Callback,
    Named,
    NamedWithOptions,
    Phase,
    PipelineStep,
    Prerelease,
    ReleaseChannel,
    ReleaseDescriptor,
    Stable,
)
from .presets import get_preset, preset_names
from .validate import check_descriptor, validate_descriptor

__all__ = [
    # model
    "AssetDescriptor",
    "BranchRule",
    "Callback",
    "Named",
    "NamedWithOptions",
    "Phase",
    "PipelineStep",
    "Prerelease",
    "ReleaseChannel",
    "ReleaseDescriptor",
    "Stable",
    # errors
    "DescriptorError",
    "DescriptorIssue",
    # codec
    "descriptor_from_dict",
    "descriptor_to_dict",
    "dump_descriptor_json",
    "load_descriptor",
    "parse_descriptor_text",
    # branches / validation / presets
    "check_descriptor",
    "get_preset",
    "preset_names",
    "resolve_branch",
    "validate_descriptor",
]
