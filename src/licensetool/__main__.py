# topmark:header:start
#
#   project      : LicenseTool
#   file         : __main__.py
#   file_relpath : src/licensetool/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running LicenseTool via ``python -m licensetool``.

Delegates to :func:`licensetool.cli.main.cli`, the same Click group that backs
the ``licensetool`` console script.

Examples:
    Check a source tree without touching it::

        python -m licensetool check .
"""

from __future__ import annotations

from licensetool.cli.main import cli

if __name__ == "__main__":
    cli()
