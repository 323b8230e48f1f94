# topmark:header:start
#
#   project      : LicenseTool
#   file         : test_years.py
#   file_relpath : tests/config/test_years.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for per-file start-year maps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from licensetool.config.years import (
    load_year_map,
    normalize_key,
    parse_year,
    parse_year_entries,
    year_map_from_table,
)
from tests.conftest import mark_config, parametrize, write_file

if TYPE_CHECKING:
    from pathlib import Path


@mark_config
@parametrize(
    "value, expected",
    [(2019, 2019), ("2019", 2019), (" 1999 ", 1999), (999, None), ("19", None), (True, None)],
)
def test_parse_year(value: object, expected: int | None) -> None:
    """Only four-digit years in 1000-2999 are accepted."""
    assert parse_year(value) == expected


@mark_config
def test_normalize_key() -> None:
    """Keys are POSIX paths without a leading ``./``."""
    assert normalize_key(" ./src\\app.js ") == "src/app.js"


@mark_config
def test_parse_year_entries_skips_invalid() -> None:
    """Malformed entries are skipped; valid ones are kept."""
    entries = ["src/a.js:2017", "", "no-year", "b.js:abc", "c.js:2020:1", "./d.js: 2001"]
    assert parse_year_entries(entries) == {"src/a.js": 2017, "d.js": 2001}


@mark_config
def test_load_year_map_inline_list() -> None:
    """A value that is not a file is parsed as a comma-separated list."""
    assert load_year_map("a.js:2010, b/c.ts:2011") == {"a.js": 2010, "b/c.ts": 2011}


@mark_config
def test_load_year_map_from_file(tmp_path: Path) -> None:
    """A value naming a file is read line by line."""
    path: Path = write_file(tmp_path / "years.txt", "a.js:2010\r\n\r\nb.js:2012\n")
    assert load_year_map(str(path)) == {"a.js": 2010, "b.js": 2012}


@mark_config
def test_year_map_from_table() -> None:
    """TOML tables map keys to integer or string years."""
    assert year_map_from_table({"a.js": 2010, "b.js": "2011", "c.js": 1.5}) == {
        "a.js": 2010,
        "b.js": 2011,
    }
