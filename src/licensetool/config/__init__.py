# topmark:header:start
#
#   project      : LicenseTool
#   file         : __init__.py
#   file_relpath : src/licensetool/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool configuration: model, TOML loading, year map and logging.

Build configs with `MutableConfig` and `freeze()` them into an immutable
`Config` before handing them to the checker.
"""

from __future__ import annotations

from licensetool.config.model import Config, MutableConfig

__all__ = ["Config", "MutableConfig"]
