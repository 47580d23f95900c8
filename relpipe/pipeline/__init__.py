"""Running a release descriptor: context, templates, steps, runner, export."""

from .context import NextRelease, ReleaseContext
from .errors import StepError, StepFailure, TemplateError
from .releaserc import dump_releaserc_json, releaserc_dict
from .runner import PipelineReport, StepOutcome, run_pipeline
from .steps import StepRegistry, StepResult, default_registry
from .template import render_commit_message, render_template
from .version import check_version_for_branch, parse_version

__all__ = [
    "NextRelease",
    "PipelineReport",
    "ReleaseContext",
    "StepError",
    "StepFailure",
    "StepOutcome",
    "StepRegistry",
    "StepResult",
    "TemplateError",
    "check_version_for_branch",
    "default_registry",
    "dump_releaserc_json",
    "parse_version",
    "releaserc_dict",
    "render_commit_message",
    "render_template",
    "run_pipeline",
]
