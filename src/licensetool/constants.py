# topmark:header:start
#
#   project      : LicenseTool
#   file         : constants.py
#   file_relpath : src/licensetool/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    LICENSETOOL_VERSION: str = get_version("license-tool")
except PackageNotFoundError:  # running from a source checkout
    LICENSETOOL_VERSION = "0.0.0+unknown"

# Placeholder in the canonical header text expanded to "<start>" or "<start>, <current>"
YEARS_MACRO: str = "{years}"

DEFAULT_HEADER_LICENSE: str = "licenses/header.txt"
DEFAULT_STANDALONE_LICENSE: str = "licenses/standalone.txt"

# Checked in order; the first one that exists is compared against the template
STANDALONE_LICENSE_NAMES: tuple[str, ...] = ("LICENSE", "LICENSE.txt")

CONFIG_FILE_NAME: str = "licensetool.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_TABLE: str = "licensetool"

GITIGNORE_FILE_NAME: str = ".gitignore"
ALWAYS_IGNORED: tuple[str, ...] = (".git/",)

ENV_LOG_LEVEL: str = "LICENSETOOL_LOG_LEVEL"
