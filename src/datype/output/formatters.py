"""Output mode selection for ServiceResult.

The CLI renders results for humans (Rich) or machines (--json); --quiet
prints only the essential value so output can be piped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from datype.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from datype.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Rendering switches taken from the global CLI flags and [output] config."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    indent: int = 2
    sort_keys: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    JSON mode wins over quiet mode; both win over Rich rendering.
    """
    opts = settings or OutputSettings()
    if opts.json_output:
        return result.model_dump_json(indent=2)
    if opts.quiet:
        return render_quiet(result, indent=opts.indent, sort_keys=opts.sort_keys)
    return render_result(
        result, verbose=opts.verbose, indent=opts.indent, sort_keys=opts.sort_keys
    )
