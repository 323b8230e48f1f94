# topmark:header:start
#
#   project      : LicenseTool
#   file         : __init__.py
#   file_relpath : src/licensetool/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool package.

LicenseTool audits and repairs license headers across a source tree. It
tokenizes the leading comments of every supported file, checks them against a
canonical license text and, on request, rewrites the file so the canonical
header is present exactly once.
"""

from __future__ import annotations
