# topmark:header:start
#
#   project      : LicenseTool
#   file         : __init__.py
#   file_relpath : src/licensetool/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool CLI subcommands."""
