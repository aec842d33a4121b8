"""Command: deep-merge JSON / TOML / YAML documents."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from datype.commands._base import DatypeCommand
from datype.domain.merge import ArrayMergeStrategy

if TYPE_CHECKING:
    from datype.commands._context import AppContext


@click.command(
    cls=DatypeCommand,
    examples="""\
  datype merge base.yaml override.json
  datype merge defaults.toml local.toml --strategy replace
  datype -q merge a.json b.json > merged.json
  datype --json merge a.yaml b.yaml --max-depth 10""",
)
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in ArrayMergeStrategy]),
    default=None,
    help="How lists at the same key combine (default from [merge] config, else concat).",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum nesting depth (default from [merge] config, else 50).",
)
@click.pass_obj
def merge(app: AppContext, files: tuple[Path, ...], strategy: str | None, max_depth: int | None) -> None:
    """Deep-merge FILES in order; later files win."""
    from datype.services.merge import MergeService

    defaults = app.settings.merge
    result = MergeService().merge_files(
        list(files),
        strategy=strategy or defaults.array_strategy,
        max_depth=defaults.max_depth if max_depth is None else max_depth,
    )
    app.emit(result)
