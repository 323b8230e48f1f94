# topmark:header:start
#
#   project      : LicenseTool
#   file         : version.py
#   file_relpath : src/licensetool/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool `version` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licensetool.constants import LICENSETOOL_VERSION

if TYPE_CHECKING:
    from licensetool.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of LicenseTool.",
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Print the LicenseTool version installed in the active environment."""
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    console.print(console.styled(LICENSETOOL_VERSION, bold=True))
