"""Command: deep-compare two documents (exit 1 when they differ)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from datype.commands._base import DatypeCommand

if TYPE_CHECKING:
    from datype.commands._context import AppContext


@click.command(
    cls=DatypeCommand,
    examples="""\
  datype equal expected.json actual.yaml
  datype -q equal a.toml b.toml && echo same""",
)
@click.argument("file_a", type=click.Path(path_type=Path))
@click.argument("file_b", type=click.Path(path_type=Path))
@click.pass_obj
def equal(app: AppContext, file_a: Path, file_b: Path) -> None:
    """Compare FILE_A and FILE_B structurally, regardless of format."""
    from datype.services.compare import CompareService

    result = CompareService().compare_files(file_a, file_b)
    app.emit(result)
    if not result.data.get("equal"):
        raise SystemExit(1)
