# topmark:header:start
#
#   project      : LicenseTool
#   file         : io.py
#   file_relpath : src/licensetool/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources and read typed values from them.

Parsing is done with `tomlkit` and returned as plain `dict` structures. The
getters never raise: a value of the wrong shape is reported with a warning and
treated as unset, so one typo does not abort a whole-tree run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from licensetool.config.logging import get_logger
from licensetool.constants import PYPROJECT_FILE_NAME, PYPROJECT_TOOL_TABLE
from licensetool.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from licensetool.config.logging import LicenseToolLogger

TomlTable = dict[str, Any]

logger: LicenseToolLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed document as plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except TomlkitParseError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_tool_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the LicenseTool table of a parsed config document.

    ``pyproject.toml`` carries the settings under ``[tool.licensetool]``; any
    other file holds them at the top level.

    Returns:
        TomlTable | None: The settings table, or None if a pyproject has no such table.
    """
    if path.name != PYPROJECT_FILE_NAME:
        return data
    tool: Any = data.get("tool", {})
    section: Any = tool.get(PYPROJECT_TOOL_TABLE) if isinstance(tool, dict) else None
    if not isinstance(section, dict):
        logger.debug("[tool.%s] section missing in %s", PYPROJECT_TOOL_TABLE, path)
        return None
    return cast("TomlTable", section)


def get_str(table: TomlTable, key: str) -> str | None:
    """Return a string value, or None when missing or not a string."""
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Config key %r: expected a string, got %r; ignored", key, value)
    return None


def get_bool(table: TomlTable, key: str) -> bool | None:
    """Return a boolean value, or None when missing or not a boolean."""
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    logger.warning("Config key %r: expected a boolean, got %r; ignored", key, value)
    return None


def get_str_list(table: TomlTable, key: str) -> list[str] | None:
    """Return a list of strings; a single string is accepted as a one-item list."""
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        items: list[Any] = cast("list[Any]", value)
        kept: list[str] = [v for v in items if isinstance(v, str)]
        if len(kept) != len(items):
            logger.warning("Config key %r: non-string entries ignored", key)
        return kept
    logger.warning("Config key %r: expected a list of strings, got %r; ignored", key, value)
    return None
