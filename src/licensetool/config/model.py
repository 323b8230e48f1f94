# topmark:header:start
#
#   project      : LicenseTool
#   file         : model.py
#   file_relpath : src/licensetool/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable runtime snapshot used by the checker.
    - `MutableConfig`: a mutable builder used while layering defaults, config
      files and CLI options; it can be frozen into `Config` and thawed back.

Precedence (lowest to highest):
    defaults < discovered config file < explicit ``--config`` file < CLI options.

Path semantics:
    - Paths declared in a config file are resolved against that file's directory.
    - CLI paths and defaults are relative to the invocation CWD.

Example ``licensetool.toml``::

    header = "licenses/header.txt"
    standalone = "licenses/standalone.txt"
    excludes = ["dist/", "vendor/**"]
    log_file = "logs/check.log"

    [years]
    "src/app.js" = 2017
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from licensetool.config.io import (
    extract_tool_table,
    get_bool,
    get_str,
    get_str_list,
    load_toml_dict,
)
from licensetool.config.logging import get_logger
from licensetool.config.years import load_year_map, year_map_from_table
from licensetool.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_HEADER_LICENSE,
    DEFAULT_STANDALONE_LICENSE,
    PYPROJECT_FILE_NAME,
)

if TYPE_CHECKING:
    from licensetool.config.io import TomlTable
    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)

KNOWN_KEYS: frozenset[str] = frozenset(
    {"header", "standalone", "fix", "excludes", "gitignore", "years", "log_file"}
)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for a check/fix run.

    Attributes:
        header_license (Path): Template holding the canonical header license text.
        standalone_license (Path | None): Template for the root ``LICENSE`` file;
            None disables the standalone check.
        fix (bool): Whether to rewrite non-compliant files.
        excludes (tuple[str, ...]): Extra git-wildmatch ignore patterns.
        use_gitignore (bool): Whether the root ``.gitignore`` contributes ignore patterns.
        years (Mapping[str, int]): Per-file copyright start years (relative POSIX paths).
        log_file (Path | None): Optional log file mirroring console log records.
        config_files (tuple[Path, ...]): Config files that contributed to this snapshot.
    """

    header_license: Path
    standalone_license: Path | None
    fix: bool
    excludes: tuple[str, ...]
    use_gitignore: bool
    years: Mapping[str, int]
    log_file: Path | None
    config_files: tuple[Path, ...]

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this config."""
        return MutableConfig(
            header_license=self.header_license,
            standalone_license=self.standalone_license,
            disable_standalone=self.standalone_license is None,
            fix=self.fix,
            excludes=list(self.excludes),
            use_gitignore=self.use_gitignore,
            years=dict(self.years),
            log_file=self.log_file,
            config_files=list(self.config_files),
        )


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration draft.

    ``None`` means "inherit" for every scalar field; list and mapping fields
    are merged (excludes appended, years updated).
    """

    header_license: Path | None = None
    standalone_license: Path | None = None
    disable_standalone: bool | None = None
    fix: bool | None = None
    excludes: list[str] = field(default_factory=lambda: [])
    use_gitignore: bool | None = None
    years: dict[str, int] = field(default_factory=lambda: {})
    log_file: Path | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft holding the built-in defaults."""
        return cls(
            header_license=Path(DEFAULT_HEADER_LICENSE),
            standalone_license=Path(DEFAULT_STANDALONE_LICENSE),
            disable_standalone=False,
            fix=False,
            use_gitignore=True,
        )

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, base: Path) -> MutableConfig:
        """Build a draft from a parsed settings table.

        Args:
            data (TomlTable): Settings table (top level of ``licensetool.toml`` or
                ``[tool.licensetool]``).
            base (Path): Directory against which relative paths are resolved.

        Returns:
            MutableConfig: The draft; unknown keys and invalid values are ignored.
        """
        for key in sorted(set(data) - KNOWN_KEYS):
            logger.warning("Unknown config key %r ignored", key)

        draft = cls()
        header: str | None = get_str(data, "header")
        if header is not None:
            draft.header_license = base / header

        standalone: Any = data.get("standalone")
        if standalone is False:
            draft.disable_standalone = True
        elif isinstance(standalone, str):
            draft.standalone_license = base / standalone
            draft.disable_standalone = False
        elif standalone is not None:
            logger.warning("Config key 'standalone': expected a path or false, got %r", standalone)

        draft.fix = get_bool(data, "fix")
        draft.use_gitignore = get_bool(data, "gitignore")
        draft.excludes = get_str_list(data, "excludes") or []

        years: Any = data.get("years")
        if isinstance(years, dict):
            draft.years = year_map_from_table(years)
        elif isinstance(years, str):
            draft.years = load_year_map(str(base / years))
        elif years is not None:
            logger.warning("Config key 'years': expected a table or a path, got %r", years)

        log_file: str | None = get_str(data, "log_file")
        if log_file is not None:
            draft.log_file = base / log_file
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load a draft from ``licensetool.toml`` or the ``[tool.licensetool]`` of a pyproject.

        Args:
            path (Path): Config file path.

        Returns:
            MutableConfig | None: The draft, or None when a pyproject has no LicenseTool table.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        logger.debug("Loading config from %s", path)
        table: TomlTable | None = extract_tool_table(path, load_toml_dict(path))
        if table is None:
            return None
        draft: MutableConfig = cls.from_toml_dict(table, base=path.resolve().parent)
        draft.config_files = [path]
        return draft

    @classmethod
    def discover(cls, root: Path) -> MutableConfig | None:
        """Load the config file found in the checked root directory, if any.

        ``licensetool.toml`` takes precedence over ``pyproject.toml``. When
        ``root`` is a file, its parent directory is searched.

        Args:
            root (Path): Checked root.

        Returns:
            MutableConfig | None: The discovered draft or None.
        """
        directory: Path = root if root.is_dir() else root.parent
        for name in (CONFIG_FILE_NAME, PYPROJECT_FILE_NAME):
            candidate: Path = directory / name
            if candidate.is_file():
                draft: MutableConfig | None = cls.from_toml_file(candidate)
                if draft is not None:
                    return draft
        return None

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Overlay ``other`` onto this draft (``other`` wins where it is set).

        Args:
            other (MutableConfig): Higher-precedence draft.

        Returns:
            MutableConfig: ``self``, for chaining.
        """
        if other.header_license is not None:
            self.header_license = other.header_license
        if other.standalone_license is not None:
            self.standalone_license = other.standalone_license
        if other.disable_standalone is not None:
            self.disable_standalone = other.disable_standalone
        if other.fix is not None:
            self.fix = other.fix
        if other.use_gitignore is not None:
            self.use_gitignore = other.use_gitignore
        if other.log_file is not None:
            self.log_file = other.log_file
        self.excludes = [*self.excludes, *(e for e in other.excludes if e not in self.excludes)]
        self.years.update(other.years)
        self.config_files = [*self.config_files, *other.config_files]
        return self

    def freeze(self) -> Config:
        """Return an immutable snapshot, filling unset fields with defaults."""
        standalone: Path | None = None
        if not self.disable_standalone:
            standalone = self.standalone_license or Path(DEFAULT_STANDALONE_LICENSE)
        return Config(
            header_license=self.header_license or Path(DEFAULT_HEADER_LICENSE),
            standalone_license=standalone,
            fix=bool(self.fix),
            excludes=tuple(self.excludes),
            use_gitignore=self.use_gitignore if self.use_gitignore is not None else True,
            years=MappingProxyType(dict(self.years)),
            log_file=self.log_file,
            config_files=tuple(self.config_files),
        )
