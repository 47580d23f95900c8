from __future__ import annotations

from relpipe.descriptor.presets import DEFAULT_PRESET, PRESETS
from relpipe.output.console import RichConsole, Style


def presets() -> None:
    """List built-in descriptor variants."""
    console = RichConsole()
    for name, descriptor in PRESETS.items():
        marker = " (default)" if name == DEFAULT_PRESET else ""
        console.print(f"{name}{marker}", Style.BOLD)
        console.print(
            f"  {len(descriptor.branches)} branches, {len(descriptor.plugins)} steps",
            Style.DIM,
        )
