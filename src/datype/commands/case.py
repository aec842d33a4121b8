"""Command: convert text between naming conventions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from datype.commands._base import DatypeCommand
from datype.domain.strings import CaseStyle

if TYPE_CHECKING:
    from datype.commands._context import AppContext


@click.command(
    cls=DatypeCommand,
    examples="""\
  datype case snake helloWorld
  datype case camel "user-profile-id"
  datype -q case constant max-retries""",
)
@click.argument("style", type=click.Choice([s.value for s in CaseStyle], case_sensitive=False))
@click.argument("text")
@click.pass_obj
def case(app: AppContext, style: str, text: str) -> None:
    """Convert TEXT to STYLE (camel, pascal, kebab, snake, constant, dot)."""
    from datype.services.text import TextService

    app.emit(TextService().convert_case(text, style.lower()))
