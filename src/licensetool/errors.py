# topmark:header:start
#
#   project      : LicenseTool
#   file         : errors.py
#   file_relpath : src/licensetool/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the LicenseTool engine and its I/O layer.

The comment engine itself is total: tokenizing, classifying and reconciling
never raise on well-formed input. Errors only come from resolving a comment
grammar for a file and from reading configuration and license templates.
The CLI maps these onto exit codes (see `licensetool.cli.errors`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class LicenseToolError(Exception):
    """Base class for all LicenseTool errors."""


class ConfigurationError(LicenseToolError):
    """A file cannot be processed with the current configuration."""


class GrammarNotFoundError(ConfigurationError):
    """No comment grammar is registered for a file.

    Attributes:
        path (Path | str): The file that could not be classified.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = path
        super().__init__(f'Cannot find comment pattern for "{path}"')


class ConfigError(LicenseToolError):
    """A configuration file is missing, unreadable or malformed."""


class LicenseFileError(LicenseToolError):
    """A license template or checked root is missing or not a regular file."""
