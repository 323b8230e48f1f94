# topmark:header:start
#
#   project      : LicenseTool
#   file         : config_resolver.py
#   file_relpath : src/licensetool/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build the effective `Config` for a command from files and CLI options.

Layering (lowest to highest precedence):

1. built-in defaults,
2. the config file discovered in the checked root (unless ``--no-config``),
3. the file given with ``--config``,
4. explicit CLI options.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from licensetool.config.logging import get_logger
from licensetool.config.model import MutableConfig
from licensetool.config.years import load_year_map

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from licensetool.config.logging import LicenseToolLogger
    from licensetool.config.model import Config

logger: LicenseToolLogger = get_logger(__name__)


def build_cli_overrides(
    *,
    header: Path | None,
    standalone: Path | None,
    no_standalone: bool,
    fix: bool,
    excludes: Sequence[str],
    years: str | None,
    no_gitignore: bool,
    log_file: Path | None,
) -> MutableConfig:
    """Return a draft holding only the options set on the command line.

    Flags left at their default stay ``None`` so that they do not override
    values coming from config files.
    """
    draft = MutableConfig(
        header_license=header,
        standalone_license=standalone,
        log_file=log_file,
        excludes=list(excludes),
    )
    if no_standalone:
        draft.disable_standalone = True
    elif standalone is not None:
        draft.disable_standalone = False
    if fix:
        draft.fix = True
    if no_gitignore:
        draft.use_gitignore = False
    if years:
        draft.years = load_year_map(years)
    return draft


def resolve_config(
    root: Path,
    *,
    config_file: Path | None,
    no_config: bool,
    overrides: MutableConfig,
) -> Config:
    """Layer defaults, config files and CLI overrides into a frozen `Config`.

    Args:
        root (Path): Checked root (file or directory); used for discovery.
        config_file (Path | None): Explicit ``--config`` file.
        no_config (bool): Skip discovery in ``root``.
        overrides (MutableConfig): CLI draft (see `build_cli_overrides`).

    Returns:
        Config: The effective configuration.

    Raises:
        ConfigError: If a config file cannot be read or parsed.
    """
    draft: MutableConfig = MutableConfig.from_defaults()
    if not no_config:
        discovered: MutableConfig | None = MutableConfig.discover(root)
        if discovered is not None:
            logger.info("Using config from %s", discovered.config_files[0])
            draft.merge_with(discovered)
    if config_file is not None:
        explicit: MutableConfig | None = MutableConfig.from_toml_file(config_file)
        if explicit is None:
            logger.warning("No [tool.licensetool] table in %s", config_file)
        else:
            draft.merge_with(explicit)
    draft.merge_with(overrides)
    config: Config = draft.freeze()
    logger.debug("Effective config: %s", config)
    return config
