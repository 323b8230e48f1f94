# topmark:header:start
#
#   project      : LicenseTool
#   file         : main.py
#   file_relpath : src/licensetool/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool CLI entry point.

Group-level options are initialized once and placed into ``ctx.obj``; the
subcommands read the console and log level from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licensetool.cli.commands.check import check_command
from licensetool.cli.commands.filetypes import filetypes_command
from licensetool.cli.commands.version import version_command
from licensetool.cli.console import ClickConsole
from licensetool.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_verbose_options,
    resolve_verbosity,
)
from licensetool.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from licensetool.cli.console import ConsoleLike
    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Initialize shared state (log level, quiet mode and console) on the Click context.

    ``LICENSETOOL_LOG_LEVEL`` wins over ``-v``/``-q`` when set.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    level_env: int | None = resolve_env_log_level()
    log_level: int = level_env if level_env is not None else level_cli
    ctx.obj["log_level"] = log_level
    ctx.obj["quiet"] = quiet > 0
    setup_logging(level=log_level)

    ctx.color = not no_color
    ctx.obj["console"] = ClickConsole(enable_color=not no_color)


@click.group(
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Check and fix license headers and the standalone LICENSE file of a source tree.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
) -> None:
    """Entry point for the LicenseTool CLI."""
    init_common_state(ctx, verbose=verbose, quiet=quiet, no_color=no_color)
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'licensetool check PATH' to validate license headers.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(check_command)

cli.add_command(filetypes_command)

if __name__ == "__main__":
    cli()
