"""Subcommand modules for datype.

Provides register_commands() which uses deferred imports to keep
``datype --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from datype.commands.case import case
    from datype.commands.equal import equal
    from datype.commands.merge import merge
    from datype.commands.slugify import slugify

    cli.add_command(merge)
    cli.add_command(equal)
    cli.add_command(slugify)
    cli.add_command(case)
