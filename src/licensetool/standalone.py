# topmark:header:start
#
#   project      : LicenseTool
#   file         : standalone.py
#   file_relpath : src/licensetool/standalone.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Standalone license-file check.

Verifies that the root directory holds a ``LICENSE`` (or ``LICENSE.txt``) file
whose bytes are identical to the configured template. No parsing is involved:
the comparison is an MD5 digest of both files. When fixing, the template is
copied to ``<root>/LICENSE``.
"""

from __future__ import annotations

import hashlib
import shutil
from dataclasses import dataclass
from typing import TYPE_CHECKING

from yachalk import chalk

from licensetool.config.logging import get_logger
from licensetool.constants import STANDALONE_LICENSE_NAMES
from licensetool.errors import LicenseFileError
from licensetool.rendering.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from pathlib import Path

    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)


class StandaloneStatus(ColoredStrEnum):
    """Outcome of the standalone license-file check."""

    SKIPPED = ("skipped (not a directory)", chalk.gray)
    MATCHED = ("license file matches", chalk.green)
    MISSING = ("no standalone license file", chalk.red)
    MISMATCHED = ("license file does not match", chalk.red)
    FIXED = ("license file created", chalk.blue)
    NO_TEMPLATE = ("standalone license template not found", chalk.red_bright)


@dataclass(frozen=True, slots=True)
class StandaloneResult:
    """Result of `check_standalone_license`.

    Attributes:
        status (StandaloneStatus): Outcome of the check.
        path (Path | None): The license file found (or written).
    """

    status: StandaloneStatus
    path: Path | None = None

    @property
    def needs_fix(self) -> bool:
        """Return True if the root lacks a matching license file."""
        return self.status in (StandaloneStatus.MISSING, StandaloneStatus.MISMATCHED)


def file_md5(path: Path) -> str:
    """Return the hex MD5 digest of a file's bytes."""
    return hashlib.md5(path.read_bytes()).hexdigest()


def find_standalone_license(root: Path) -> Path | None:
    """Return the first existing standalone license file in ``root``."""
    for name in STANDALONE_LICENSE_NAMES:
        candidate: Path = root / name
        logger.debug("- checking %s ...", candidate)
        if candidate.is_file():
            return candidate
    return None


def check_standalone_license(root: Path, license_file: Path, *, fix: bool) -> StandaloneResult:
    """Check (and optionally fix) the standalone license file of a directory.

    Args:
        root (Path): Directory to check; a non-directory root is skipped.
        license_file (Path): Template the license file must be identical to.
        fix (bool): Copy the template to ``<root>/LICENSE`` when it is missing or differs.

    Returns:
        StandaloneResult: The outcome.

    Raises:
        LicenseFileError: If ``license_file`` is not a regular file.
    """
    logger.info('> validating "%s" for standalone license "%s" ...', root, license_file)

    if not root.is_dir():
        logger.warning('"%s" is not a directory, skipped', root)
        return StandaloneResult(StandaloneStatus.SKIPPED)
    if not license_file.is_file():
        raise LicenseFileError(f'"{license_file}" is not a valid file')

    existing: Path | None = find_standalone_license(root)
    status: StandaloneStatus
    if existing is None:
        logger.info("No standalone license file found, should be fixed.")
        status = StandaloneStatus.MISSING
    else:
        logger.info('found "%s"', existing)
        existing_md5: str = file_md5(existing)
        expected_md5: str = file_md5(license_file)
        logger.debug("existing license file MD5 hash is: %s", existing_md5)
        logger.debug("expected license file MD5 hash is: %s", expected_md5)
        if existing_md5 == expected_md5:
            logger.info("license file matches")
            return StandaloneResult(StandaloneStatus.MATCHED, existing)
        logger.info("license file does not match, should be fixed")
        status = StandaloneStatus.MISMATCHED

    if not fix:
        return StandaloneResult(status, existing)

    target: Path = root / STANDALONE_LICENSE_NAMES[0]
    shutil.copyfile(license_file, target)
    logger.info('"%s" license file created', target)
    return StandaloneResult(StandaloneStatus.FIXED, target)
