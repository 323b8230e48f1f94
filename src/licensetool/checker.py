# topmark:header:start
#
#   project      : LicenseTool
#   file         : checker.py
#   file_relpath : src/licensetool/checker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Check and fix license headers of single files and whole source trees.

`check_file_license` is the pure, per-file contract around the comment engine:

    text + canonical license + fix flag + file name
        -> resolve grammar -> tokenize -> exact match?
            yes -> MATCHED
            no  -> heuristic declarations -> fix? FIXED(new text) : NEEDS_FIX

`check_header_licenses` adds the I/O around it for a directory (or single
file): reading the license template, discovering files, applying per-file
start years, writing fixed text back and collecting per-file failures without
aborting the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from yachalk import chalk

from licensetool.comments.classifier import (
    find_license_template,
    has_expected_license,
    has_license_declaration,
    resolve_year_start,
)
from licensetool.comments.grammar import GRAMMARS, resolve_grammar
from licensetool.comments.reconciler import fix_license
from licensetool.comments.tokenizer import tokenize
from licensetool.config.logging import get_logger
from licensetool.errors import GrammarNotFoundError, LicenseFileError
from licensetool.file_resolver import relative_key, resolve_files
from licensetool.rendering.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from licensetool.comments.grammar import CommentGrammar
    from licensetool.comments.types import CommentBlock, ParseResult
    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)


class CheckStatus(ColoredStrEnum):
    """Per-file outcome of a header check."""

    MATCHED = ("license header matched", chalk.green)
    NEEDS_FIX = ("license header missing or stale", chalk.yellow)
    FIXED = ("license header fixed", chalk.blue)
    UNSUPPORTED = ("no comment grammar for file", chalk.red)
    UNREADABLE = ("file could not be read or written", chalk.red_bright)
    UNDECODABLE = ("file is not valid UTF-8", chalk.red_bright)


@dataclass(frozen=True, slots=True)
class FileCheckResult:
    """Outcome of checking one file's text.

    Attributes:
        status (CheckStatus): MATCHED, NEEDS_FIX or FIXED.
        grammar (CommentGrammar): Grammar the file was tokenized with.
        matched (CommentBlock | None): Block equal to the canonical license (MATCHED only).
        declarations (tuple[CommentBlock, ...]): License-like blocks, plus an outdated
            copy of the template, found when there was no exact match; these are
            removed when fixing.
        year_start (int | None): Start year used for the ``{years}`` macro.
        fixed_text (str | None): Rewritten file text (FIXED only).
        path (Path | None): File the text came from, when known.
    """

    status: CheckStatus
    grammar: CommentGrammar
    matched: CommentBlock | None = None
    declarations: tuple[CommentBlock, ...] = ()
    year_start: int | None = None
    fixed_text: str | None = None
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FileFailure:
    """A file that could not be processed (the run continued)."""

    path: Path
    status: CheckStatus
    reason: str


@dataclass
class HeaderReport:
    """Results of a tree-level header check."""

    root: Path
    results: list[FileCheckResult] = field(default_factory=lambda: [])
    failures: list[FileFailure] = field(default_factory=lambda: [])

    @property
    def needs_fix(self) -> list[FileCheckResult]:
        """Return the files that were reported but not fixed."""
        return [r for r in self.results if r.status is CheckStatus.NEEDS_FIX]

    @property
    def fixed(self) -> list[FileCheckResult]:
        """Return the files that were rewritten."""
        return [r for r in self.results if r.status is CheckStatus.FIXED]

    @property
    def ok(self) -> bool:
        """Return True when nothing needs fixing and nothing failed."""
        return not self.needs_fix and not self.failures


def check_file_license(
    text: str,
    license_text: str,
    *,
    fix: bool,
    path: Path | str,
    year_start: int | None = None,
    current_year: int | None = None,
    grammars: tuple[CommentGrammar, ...] = GRAMMARS,
) -> FileCheckResult:
    """Check one file's text against the canonical license and optionally fix it.

    Args:
        text (str): Complete file contents.
        license_text (str): Canonical license text (may contain ``{years}``).
        fix (bool): Produce rewritten text when the header does not match.
        path (Path | str): File name or path, used to resolve the comment grammar.
        year_start (int | None): Start-year override (e.g. from a year map); takes
            precedence over the year found in existing headers.
        current_year (int | None): Year of the run; defaults to the calendar year.
        grammars (tuple[CommentGrammar, ...]): Grammar table.

    Returns:
        FileCheckResult: MATCHED, NEEDS_FIX or FIXED (with ``fixed_text``).

    Raises:
        GrammarNotFoundError: If no grammar matches ``path``.
    """
    grammar: CommentGrammar = resolve_grammar(path, grammars)
    result: ParseResult = tokenize(text, grammar)
    if year_start is not None:
        result.year_start = year_start
    result.year_start = resolve_year_start(result, license_text)
    file_path = Path(path)

    matched: CommentBlock | None = has_expected_license(
        result, license_text, current_year=current_year
    )
    if matched is not None:
        logger.info(
            "  license header matched at line %d ~ %d", matched.start_line, matched.end_line
        )
        logger.debug(
            "  current license between line %d ~ %d:\n%s",
            matched.start_line,
            matched.end_line,
            matched.text(),
        )
        return FileCheckResult(
            status=CheckStatus.MATCHED,
            grammar=grammar,
            matched=matched,
            year_start=result.year_start,
            path=file_path,
        )

    logger.info("  license header does not exist or match, should be fixed")
    declarations: list[CommentBlock] = has_license_declaration(result)
    template: tuple[CommentBlock, int | None] | None = find_license_template(result, license_text)
    if template is not None and not template[0].is_license_like:
        # An outdated header written from a template that is not license-like.
        declarations = sorted([*declarations, template[0]], key=lambda b: b.start_line)
    for block in declarations:
        logger.debug(
            "  current license between line %d ~ %d:\n%s",
            block.start_line,
            block.end_line,
            block.text(),
        )
        logger.debug("  current license starts at year %s", block.year_start)

    if not fix:
        return FileCheckResult(
            status=CheckStatus.NEEDS_FIX,
            grammar=grammar,
            declarations=tuple(declarations),
            year_start=result.year_start,
            path=file_path,
        )

    fixed_text: str = fix_license(
        result, declarations, license_text, grammar, current_year=current_year
    )
    return FileCheckResult(
        status=CheckStatus.FIXED,
        grammar=grammar,
        declarations=tuple(declarations),
        year_start=result.year_start,
        fixed_text=fixed_text,
        path=file_path,
    )


def read_text(path: Path) -> str:
    """Read a file as UTF-8 without translating line endings."""
    with path.open(encoding="utf-8", newline="") as fp:
        return fp.read()


def write_text(path: Path, text: str) -> None:
    """Write UTF-8 text verbatim (no line-ending translation)."""
    with path.open("w", encoding="utf-8", newline="") as fp:
        fp.write(text)


def read_license_text(license_file: Path) -> str:
    """Read a license template.

    Raises:
        LicenseFileError: If ``license_file`` is not a regular file.
    """
    if not license_file.is_file():
        raise LicenseFileError(f'"{license_file}" is not a valid file')
    return read_text(license_file)


def check_header_licenses(
    root: Path,
    license_file: Path,
    *,
    fix: bool,
    excludes: Iterable[str] = (),
    years: Mapping[str, int] | None = None,
    use_gitignore: bool = True,
    current_year: int | None = None,
) -> HeaderReport:
    """Check (and optionally fix) the license headers of every file below ``root``.

    Args:
        root (Path): A directory (walked recursively) or a single file.
        license_file (Path): Template holding the canonical header text.
        fix (bool): Rewrite non-compliant files in place.
        excludes (Iterable[str]): Extra ignore patterns.
        years (Mapping[str, int] | None): Start years keyed by POSIX path relative
            to ``root`` (for a file root, by its file name).
        use_gitignore (bool): Whether ``<root>/.gitignore`` contributes ignore patterns.
        current_year (int | None): Year of the run; defaults to the calendar year.

    Returns:
        HeaderReport: Per-file results and failures.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
        LicenseFileError: If ``license_file`` is not a regular file.
    """
    logger.info('> validating "%s" for header license "%s" ...', root, license_file)
    if not root.exists():
        raise FileNotFoundError(f'"{root}" doesn\'t exist')
    license_text: str = read_license_text(license_file)
    year_map: Mapping[str, int] = years or {}
    logger.debug("file license start years: %s", dict(year_map))

    report = HeaderReport(root=root)
    base: Path = root if root.is_dir() else root.parent
    for path in resolve_files(root, excludes=excludes, use_gitignore=use_gitignore):
        logger.info("- processing %s ...", path)
        try:
            text: str = read_text(path)
            result: FileCheckResult = check_file_license(
                text,
                license_text,
                fix=fix,
                path=path,
                year_start=year_map.get(relative_key(path, base)),
                current_year=current_year,
            )
            if result.fixed_text is not None:
                write_text(path, result.fixed_text)
                logger.info('  "%s" license header fixed', path)
        except GrammarNotFoundError as e:
            logger.error("  %s", e)
            report.failures.append(FileFailure(path, CheckStatus.UNSUPPORTED, str(e)))
            continue
        except UnicodeDecodeError as e:
            logger.error("  encoding error in %s: %s", path, e)
            report.failures.append(FileFailure(path, CheckStatus.UNDECODABLE, str(e)))
            continue
        except OSError as e:
            logger.error("  cannot process %s: %s", path, e)
            report.failures.append(FileFailure(path, CheckStatus.UNREADABLE, str(e)))
            continue
        report.results.append(result)

    logger.info(
        "checked %d file(s): %d matched, %d need fix, %d fixed, %d failed",
        len(report.results) + len(report.failures),
        sum(1 for r in report.results if r.status is CheckStatus.MATCHED),
        len(report.needs_fix),
        len(report.fixed),
        len(report.failures),
    )
    return report
