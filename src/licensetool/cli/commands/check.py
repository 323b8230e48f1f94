# topmark:header:start
#
#   project      : LicenseTool
#   file         : check.py
#   file_relpath : src/licensetool/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool `check` command.

Validates the license header of every supported file below PATH and the
standalone ``LICENSE`` file of PATH. With ``--fix`` non-compliant files are
rewritten and the standalone license is copied from its template.

Exit status:
    SUCCESS (0): Everything matched, or every problem was fixed.
    WOULD_CHANGE (2): Without ``--fix``, at least one file needs fixing.
    ENCODING_ERROR (65), UNSUPPORTED_FILE_TYPE (69), IO_ERROR (74): Some files
        could not be processed; the code of the first such file is used after
        all files were reported.
    FILE_NOT_FOUND (66): PATH or the header template does not exist, or the
        standalone template is missing (reported after the header check ran).
    CONFIG_ERROR (78): A config file could not be read or parsed.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from licensetool.checker import CheckStatus, check_header_licenses
from licensetool.cli.config_resolver import build_cli_overrides, resolve_config
from licensetool.cli.errors import (
    LicenseToolConfigError,
    LicenseToolFileNotFoundError,
    LicenseToolIOError,
)
from licensetool.cli.exit_codes import ExitCode
from licensetool.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    common_file_and_filtering_options,
)
from licensetool.config.logging import get_logger, setup_logging
from licensetool.errors import ConfigError, LicenseFileError
from licensetool.standalone import StandaloneResult, StandaloneStatus, check_standalone_license

if TYPE_CHECKING:
    from licensetool.checker import FileCheckResult, FileFailure, HeaderReport
    from licensetool.cli.console import ConsoleLike
    from licensetool.config.logging import LicenseToolLogger
    from licensetool.config.model import Config
    from licensetool.rendering.colored_enum import ColoredStrEnum

logger: LicenseToolLogger = get_logger(__name__)

FAILURE_EXIT_CODES: dict[CheckStatus, ExitCode] = {
    CheckStatus.UNSUPPORTED: ExitCode.UNSUPPORTED_FILE_TYPE,
    CheckStatus.UNDECODABLE: ExitCode.ENCODING_ERROR,
    CheckStatus.UNREADABLE: ExitCode.IO_ERROR,
}


def _label(console: ConsoleLike, status: ColoredStrEnum) -> str:
    enable_color: bool = getattr(console, "enable_color", False)
    return status.colored() if enable_color else status.value


def _detail(result: FileCheckResult) -> str:
    """Return the line-span detail shown after a file's status."""
    if result.matched is not None:
        return f"(lines {result.matched.start_line}~{result.matched.end_line})"
    if result.declarations:
        spans: str = ", ".join(f"{b.start_line}~{b.end_line}" for b in result.declarations)
        return f"(replacing lines {spans})" if result.fixed_text else f"(found lines {spans})"
    return ""


def render_results(
    console: ConsoleLike,
    report: HeaderReport,
    *,
    quiet: bool,
) -> None:
    """Print one line per checked file, followed by the failures.

    Args:
        console (ConsoleLike): Output console.
        report (HeaderReport): Header check results.
        quiet (bool): Only print files that need attention.
    """
    for result in report.results:
        if quiet and result.status is CheckStatus.MATCHED:
            continue
        line: str = f"{_label(console, result.status)}: {result.path} {_detail(result)}"
        console.print(line.rstrip())
    failure: FileFailure
    for failure in report.failures:
        console.print(f"{_label(console, failure.status)}: {failure.path} ({failure.reason})")


def render_summary(
    console: ConsoleLike,
    report: HeaderReport,
    standalone: StandaloneResult | None,
) -> None:
    """Print outcome counts for the run."""
    counts: dict[CheckStatus, int] = {status: 0 for status in CheckStatus}
    for result in report.results:
        counts[result.status] += 1
    for failure in report.failures:
        counts[failure.status] += 1

    console.print()
    console.print(console.styled("Summary:", bold=True, underline=True))
    for status, count in counts.items():
        if count:
            console.print(f"  {_label(console, status)}: {count}")
    if standalone is not None:
        console.print(f"  standalone: {_label(console, standalone.status)}")



def run_standalone_check(root: Path, license_file: Path, *, fix: bool) -> StandaloneResult:
    """Run the standalone check; a missing template is reported, not raised.

    The header check still runs afterwards, and the command exits with
    FILE_NOT_FOUND once every file has been reported.

    Raises:
        LicenseToolIOError: If the license file cannot be read or written.
    """
    try:
        return check_standalone_license(root, license_file, fix=fix)
    except LicenseFileError as e:
        logger.error("%s", e)
        return StandaloneResult(StandaloneStatus.NO_TEMPLATE, license_file)
    except OSError as e:
        raise LicenseToolIOError(str(e)) from e

@click.command(
    name="check",
    help="Validate license headers and the standalone LICENSE file. Use --fix to repair.",
    context_settings=CONTEXT_SETTINGS,
    epilog="""\
Examples:

  # Report files with a missing or stale header (exit code 2 if any)
  licensetool check .

  # Fix headers and LICENSE in place
  licensetool check --fix -H licenses/header.txt -L licenses/standalone.txt .
""",
)
@click.argument(
    "path",
    type=click.Path(path_type=Path),
)
@click.option(
    "-H",
    "--header",
    type=click.Path(path_type=Path),
    default=None,
    help="Template with the canonical header license text [default: licenses/header.txt].",
)
@click.option(
    "-L",
    "--standalone",
    type=click.Path(path_type=Path),
    default=None,
    help="Template for the root LICENSE file [default: licenses/standalone.txt].",
)
@click.option(
    "--no-standalone",
    is_flag=True,
    default=False,
    help="Skip the standalone LICENSE file check.",
)
@click.option(
    "-f",
    "--fix",
    is_flag=True,
    default=False,
    help="Rewrite non-compliant files in place.",
)
@click.option(
    "--years",
    default=None,
    metavar="FILE|LIST",
    help="Per-file start years: a file of 'path:year' lines or a comma-separated list.",
)
@common_file_and_filtering_options
@common_config_options
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also append log records to this file.",
)
@click.option(
    "--summary",
    "summary_mode",
    is_flag=True,
    help="Print outcome counts after the per-file report.",
)
@click.pass_context
def check_command(
    ctx: click.Context,
    *,
    path: Path,
    header: Path | None,
    standalone: Path | None,
    no_standalone: bool,
    fix: bool,
    years: str | None,
    excludes: tuple[str, ...],
    no_gitignore: bool,
    config_file: Path | None,
    no_config: bool,
    log_file: Path | None,
    summary_mode: bool,
) -> None:
    """Check (and optionally fix) license headers below PATH.

    Args:
        ctx (click.Context): Current Click context.
        path (Path): Root directory (or single file) to check.
        header (Path | None): Header license template override.
        standalone (Path | None): Standalone license template override.
        no_standalone (bool): Skip the standalone license check.
        fix (bool): Rewrite non-compliant files.
        years (str | None): Year map file or inline list.
        excludes (tuple[str, ...]): Extra ignore patterns.
        no_gitignore (bool): Ignore the root ``.gitignore``.
        config_file (Path | None): Explicit config file.
        no_config (bool): Skip config discovery.
        log_file (Path | None): Log file override.
        summary_mode (bool): Print outcome counts.

    Raises:
        LicenseToolFileNotFoundError: If PATH or a template does not exist.
        LicenseToolConfigError: If a config file is invalid.
        LicenseToolIOError: If the year map cannot be read.
    """
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    quiet: bool = ctx.obj.get("quiet", False)

    if not path.exists():
        raise LicenseToolFileNotFoundError(f'"{path}" doesn\'t exist')

    try:
        overrides = build_cli_overrides(
            header=header,
            standalone=standalone,
            no_standalone=no_standalone,
            fix=fix,
            excludes=excludes,
            years=years,
            no_gitignore=no_gitignore,
            log_file=log_file,
        )
        config: Config = resolve_config(
            path, config_file=config_file, no_config=no_config, overrides=overrides
        )
    except ConfigError as e:
        raise LicenseToolConfigError(str(e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise LicenseToolIOError(f"Cannot read year map: {e}") from e

    if config.log_file is not None:
        setup_logging(level=ctx.obj.get("log_level"), log_file=config.log_file)

    standalone_result: StandaloneResult | None = None
    if config.standalone_license is not None:
        standalone_result = run_standalone_check(path, config.standalone_license, fix=config.fix)

    try:
        report: HeaderReport = check_header_licenses(
            path,
            config.header_license,
            fix=config.fix,
            excludes=config.excludes,
            years=config.years,
            use_gitignore=config.use_gitignore,
        )
    except (LicenseFileError, FileNotFoundError) as e:
        raise LicenseToolFileNotFoundError(str(e)) from e
    except OSError as e:
        raise LicenseToolIOError(str(e)) from e

    if standalone_result is not None and standalone_result.status is not StandaloneStatus.SKIPPED:
        if not quiet or standalone_result.status is not StandaloneStatus.MATCHED:
            target: Path = standalone_result.path or path
            console.print(f"{_label(console, standalone_result.status)}: {target}")

    render_results(console, report, quiet=quiet)
    if summary_mode:
        render_summary(console, report, standalone_result)

    if report.failures:
        ctx.exit(FAILURE_EXIT_CODES[report.failures[0].status])
    if standalone_result is not None and standalone_result.status is StandaloneStatus.NO_TEMPLATE:
        ctx.exit(ExitCode.FILE_NOT_FOUND)
    if report.needs_fix or (standalone_result is not None and standalone_result.needs_fix):
        ctx.exit(ExitCode.WOULD_CHANGE)
