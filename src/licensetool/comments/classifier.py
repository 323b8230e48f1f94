# topmark:header:start
#
#   project      : LicenseTool
#   file         : classifier.py
#   file_relpath : src/licensetool/comments/classifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""License classification of tokenized comment blocks.

These checks run against a `ParseResult`:

- `has_expected_license`: the first block whose whitespace-normalized text
  equals the canonical license text, after expanding the ``{years}`` macro.
- `has_license_declaration`: every block that merely *looks* like some license
  declaration, according to the heuristic `LICENSE_PATTERNS`.
- `find_license_template`: the first block equal to the canonical text with
  any year written in place of ``{years}``; it supplies the start year when
  no license-like block does.

The heuristic flag and the embedded copyright start year are computed once per
block by `annotate_blocks`, which the tokenizer calls right after splitting a
file into blocks.
"""

from __future__ import annotations

import dataclasses
import re
from datetime import date
from typing import TYPE_CHECKING, Final

from licensetool.config.logging import get_logger
from licensetool.constants import YEARS_MACRO

if TYPE_CHECKING:
    from collections.abc import Iterable

    from licensetool.comments.types import CommentBlock, ParseResult
    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)

LICENSE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"SPDX-License-Identifier:", re.IGNORECASE),
    re.compile(r"Copyright\s+\(C\)", re.IGNORECASE),
    re.compile(r"\(C\)\s+Copyright", re.IGNORECASE),
    re.compile(r"©\s+Copyright", re.IGNORECASE),
    re.compile(r"All\s+rights\s+reserved", re.IGNORECASE),
    re.compile(r"THE\s+SOFTWARE\s+IS\s+PROVIDED", re.IGNORECASE),
    re.compile(r"Permission\s+to\s+use", re.IGNORECASE),
)

_COPYRIGHT_RE: Final[re.Pattern[str]] = re.compile(r"Copyright", re.IGNORECASE)
_YEAR_RE: Final[re.Pattern[str]] = re.compile(r"\b[12]\d{3}\b")
_YEARS_GROUP: Final[str] = r"([12]\d{3})(?:, ([12]\d{3}))?"
_LINE_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"\r?\n")


def current_calendar_year() -> int:
    """Return the current local calendar year."""
    return date.today().year


def normalize_license_text(text: str) -> str:
    """Trim every line of ``text`` and join the lines with single spaces.

    Args:
        text (str): Multi-line text (canonical license or comment content).

    Returns:
        str: The normalized, trimmed text.
    """
    return " ".join(line.strip() for line in _LINE_SPLIT_RE.split(text)).strip()


def format_years(year_start: int | None, current_year: int | None = None) -> str:
    """Return the replacement for the ``{years}`` macro.

    Args:
        year_start (int | None): First copyright year; falls back to ``current_year``.
        current_year (int | None): Year of the run; defaults to the calendar year.

    Returns:
        str: ``"<year>"`` when start and current year coincide, else ``"<start>, <current>"``.
    """
    current: int = current_year if current_year is not None else current_calendar_year()
    start: int = year_start if year_start is not None else current
    if start == current:
        return str(current)
    return f"{start}, {current}"


def expand_years(text: str, year_start: int | None, current_year: int | None = None) -> str:
    """Replace every ``{years}`` macro in ``text``.

    Args:
        text (str): Canonical license text.
        year_start (int | None): First copyright year of the file, if known.
        current_year (int | None): Year of the run; defaults to the calendar year.

    Returns:
        str: The expanded text.
    """
    if YEARS_MACRO not in text:
        return text
    return text.replace(YEARS_MACRO, format_years(year_start, current_year))


def is_license_like(text: str) -> bool:
    """Return True if normalized comment text matches any license heuristic."""
    return any(pattern.search(text) for pattern in LICENSE_PATTERNS)


def extract_copyright_year(lines: Iterable[str]) -> int | None:
    """Return the earliest 4-digit year that follows "Copyright" on any line.

    Years are compared numerically; only numerals in the 1000-2999 range count.

    Args:
        lines (Iterable[str]): Content lines of a comment block.

    Returns:
        int | None: The earliest year found, or None.
    """
    earliest: int | None = None
    for line in lines:
        m: re.Match[str] | None = _COPYRIGHT_RE.search(line)
        if m is None:
            continue
        for year_text in _YEAR_RE.findall(line, m.end()):
            year = int(year_text)
            if earliest is None or year < earliest:
                earliest = year
    return earliest


def annotate_blocks(blocks: Iterable[CommentBlock]) -> tuple[list[CommentBlock], int | None]:
    """Flag license-like blocks and compute the earliest copyright year.

    Args:
        blocks (Iterable[CommentBlock]): Freshly tokenized blocks.

    Returns:
        tuple[list[CommentBlock], int | None]: The annotated blocks (new instances)
            and the earliest year over all license-like blocks.
    """
    annotated: list[CommentBlock] = []
    earliest: int | None = None
    for block in blocks:
        if not is_license_like(block.normalized()):
            annotated.append(block)
            continue
        year: int | None = extract_copyright_year(block.lines)
        annotated.append(dataclasses.replace(block, is_license_like=True, year_start=year))
        if year is not None and (earliest is None or year < earliest):
            earliest = year
    return annotated, earliest


def license_template_pattern(license_text: str) -> re.Pattern[str]:
    """Compile the normalized canonical text into a pattern accepting any ``{years}`` value.

    Each macro becomes ``<year>`` or ``<year>, <year>``; everything else must
    match literally.
    """
    parts: list[str] = normalize_license_text(license_text).split(YEARS_MACRO)
    return re.compile(_YEARS_GROUP.join(re.escape(part) for part in parts))


def find_license_template(
    result: ParseResult, license_text: str
) -> tuple[CommentBlock, int | None] | None:
    """Return the first block that equals the canonical license modulo its years.

    This finds a previously written header even when its text does not look
    like a license to `is_license_like` (e.g. a bare ``Copyright {years} Acme``).

    Args:
        result (ParseResult): Tokenized file.
        license_text (str): Canonical license text, possibly containing ``{years}``.

    Returns:
        tuple[CommentBlock, int | None] | None: The block and the earliest year
            written in place of the macro, or None when no block fits the template.
    """
    pattern: re.Pattern[str] = license_template_pattern(license_text)
    for block in result.blocks:
        m: re.Match[str] | None = pattern.fullmatch(block.normalized())
        if m is None:
            continue
        years: list[int] = [int(y) for y in m.groups() if y is not None]
        return block, min(years, default=None)
    return None


def resolve_year_start(result: ParseResult, license_text: str) -> int | None:
    """Return the start year for expanding ``{years}`` in ``result``.

    The year already on `result` (caller override or license-like blocks) wins;
    otherwise the year written in a block matching the template is used.
    """
    if result.year_start is not None:
        return result.year_start
    template: tuple[CommentBlock, int | None] | None = find_license_template(
        result, license_text
    )
    return template[1] if template is not None else None


def has_expected_license(
    result: ParseResult,
    license_text: str,
    *,
    current_year: int | None = None,
) -> CommentBlock | None:
    """Return the first block whose normalized text equals the canonical license.

    The ``{years}`` macro is expanded with `resolve_year_start`, so a header
    written by an earlier fix keeps matching even when it is not license-like.

    Args:
        result (ParseResult): Tokenized file.
        license_text (str): Canonical license text, possibly containing ``{years}``.
        current_year (int | None): Year of the run; defaults to the calendar year.

    Returns:
        CommentBlock | None: The matching block, or None when the file needs fixing.
    """
    expected: str = normalize_license_text(
        expand_years(license_text, resolve_year_start(result, license_text), current_year)
    )
    logger.trace("expected normalized license: %r", expected)
    for block in result.blocks:
        if block.normalized() == expected:
            return block
    return None


def has_license_declaration(result: ParseResult) -> list[CommentBlock]:
    """Return every license-like block (empty list when none was found).

    Args:
        result (ParseResult): Tokenized and annotated file.

    Returns:
        list[CommentBlock]: License-like blocks in document order.
    """
    return result.license_blocks
