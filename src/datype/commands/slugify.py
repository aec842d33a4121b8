"""Command: turn text into a URL slug."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datype.commands._base import DatypeCommand

if TYPE_CHECKING:
    from datype.commands._context import AppContext


@click.command(
    cls=DatypeCommand,
    examples="""\
  datype slugify "Hello, World!"
  datype slugify "Café in Москва" --separator _
  datype -q slugify "Über Straße" --strict""",
)
@click.argument("text")
@click.option("--separator", default=None, help="Word separator (default from [slugify] config, else '-').")
@click.option("--keep-case", is_flag=True, help="Do not lowercase the slug.")
@click.option("--strict", is_flag=True, help="Keep only ASCII letters and digits.")
@click.pass_obj
def slugify(app: AppContext, text: str, separator: str | None, keep_case: bool, strict: bool) -> None:
    """Convert TEXT into a URL-safe slug."""
    from datype.services.text import TextService

    defaults = app.settings.slugify
    result = TextService().slugify(
        text,
        separator=defaults.separator if separator is None else separator,
        lowercase=defaults.lowercase and not keep_case,
        strict=strict or defaults.strict,
    )
    app.emit(result)
