# topmark:header:start
#
#   project      : LicenseTool
#   file         : exit_codes.py
#   file_relpath : src/licensetool/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the LicenseTool CLI.

LicenseTool aligns with the BSD `sysexits` convention where practical. The one
divergence is `WOULD_CHANGE=2`, returned by ``check`` without ``--fix`` when
files need fixing. Click also uses 2 for usage errors, so tests must assert
``result.exception is None`` to tell the two apart.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the LicenseTool CLI.

    Attributes:
        SUCCESS: Every checked file (and the standalone license) is compliant,
            or was fixed.
        FAILURE: Generic failure.
        WOULD_CHANGE: ``check`` without ``--fix`` found files that need fixing.
        USAGE_ERROR: Invalid flags/args. Mirrors BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: A file is not valid UTF-8. Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Root path or license template missing. Mirrors BSD ``EX_NOINPUT (66)``.
        UNSUPPORTED_FILE_TYPE: No comment grammar for a file. Mirrors BSD ``EX_UNAVAILABLE (69)``.
        IO_ERROR: A file could not be read or written. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid or malformed config file. Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # divergence from sysexits; see module docstring

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    UNSUPPORTED_FILE_TYPE = 69  # EX_UNAVAILABLE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
