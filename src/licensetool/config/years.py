# topmark:header:start
#
#   project      : LicenseTool
#   file         : years.py
#   file_relpath : src/licensetool/config/years.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-file copyright start years.

A year map assigns a first copyright year to individual files, overriding the
year the classifier would extract from an existing header. Keys are POSIX
paths relative to the checked root, e.g.::

    src/app.js:2017
    lib/util.js:2019

The map is read from a ``path:year`` file, from a comma-separated list of the
same entries, or from a ``[years]`` TOML table.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from licensetool.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)

_YEAR_RE: Final[re.Pattern[str]] = re.compile(r"[12]\d{3}")


def normalize_key(path: str) -> str:
    """Return a year-map key as a POSIX relative path without a leading ``./``."""
    key: str = path.strip().replace("\\", "/")
    while key.startswith("./"):
        key = key[2:]
    return key


def parse_year(value: Any) -> int | None:
    """Return ``value`` as a 4-digit year, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 1000 <= value <= 2999 else None
    if isinstance(value, str) and _YEAR_RE.fullmatch(value.strip()):
        return int(value.strip())
    return None


def parse_year_entries(entries: Iterable[str]) -> dict[str, int]:
    """Parse ``path:year`` entries into a year map.

    Blank entries are skipped silently; entries that do not split into exactly
    two parts or carry an invalid year are skipped with a warning.

    Args:
        entries (Iterable[str]): Raw entries.

    Returns:
        dict[str, int]: Mapping of normalized relative path to start year.
    """
    years: dict[str, int] = {}
    for raw in entries:
        entry: str = raw.strip()
        if not entry:
            continue
        parts: list[str] = entry.split(":")
        if len(parts) != 2:
            logger.warning("Ignoring year entry %r (expected 'path:year')", entry)
            continue
        year: int | None = parse_year(parts[1])
        if year is None:
            logger.warning("Ignoring year entry %r (invalid year)", entry)
            continue
        years[normalize_key(parts[0])] = year
    return years


def load_year_map(value: str) -> dict[str, int]:
    """Load a year map from a file path or an inline comma-separated list.

    Args:
        value (str): Either the path of a file with one ``path:year`` entry per
            line, or the entries themselves separated by commas.

    Returns:
        dict[str, int]: The parsed year map.
    """
    path = Path(value)
    try:
        is_file: bool = path.is_file()
    except OSError:
        is_file = False
    if is_file:
        logger.debug("Reading file start years from %s", path)
        return parse_year_entries(path.read_text(encoding="utf-8").splitlines())
    return parse_year_entries(value.split(","))


def year_map_from_table(table: Mapping[str, Any]) -> dict[str, int]:
    """Convert a ``[years]`` TOML table into a year map, skipping invalid values."""
    years: dict[str, int] = {}
    for key, value in table.items():
        year: int | None = parse_year(value)
        if year is None:
            logger.warning("Ignoring [years] entry %r = %r (invalid year)", key, value)
            continue
        years[normalize_key(key)] = year
    return years
