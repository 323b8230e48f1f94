# topmark:header:start
#
#   project      : LicenseTool
#   file         : errors.py
#   file_relpath : src/licensetool/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the LicenseTool CLI.

Raise these from commands to stop with a standardized message and exit code.
They print through the project console when one is present on the Click
context, and fall back to Click's default styling otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from licensetool.cli.exit_codes import ExitCode


class LicenseToolCliError(click.ClickException):
    """Base class for all LicenseTool CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colors are applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class LicenseToolUsageError(LicenseToolCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class LicenseToolConfigError(LicenseToolCliError):
    """Error for configuration errors (unreadable or malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class LicenseToolFileNotFoundError(LicenseToolCliError):
    """Error when the root path or a license template does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class LicenseToolIOError(LicenseToolCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR
