# topmark:header:start
#
#   project      : LicenseTool
#   file         : reconciler.py
#   file_relpath : src/licensetool/comments/reconciler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Header reconciler: rebuild a file with the canonical license header.

The reconstructed text is laid out as:

    [directive, blank line]      only when the file had an interpreter directive
    rendered canonical header    ``{years}`` expanded
    [blank line]                 only when the first surviving line is not blank
    surviving original lines     removed license blocks excised, order kept

and joined with the line ending detected by the tokenizer. A byte-order mark
split off by the tokenizer is put back in front. The functions here are pure;
writing the result back is the caller's job.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from licensetool.comments.classifier import expand_years
from licensetool.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from licensetool.comments.grammar import CommentGrammar, WriteForm
    from licensetool.comments.types import CommentBlock, ParseResult
    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)

_LINE_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"\r?\n")


def render_license_comment(license_text: str, grammar: CommentGrammar) -> list[str]:
    """Render license text as comment lines using the grammar's write-form.

    Args:
        license_text (str): License text with the year macro already expanded.
        grammar (CommentGrammar): Grammar providing the write-form delimiters.

    Returns:
        list[str]: Comment lines (without line terminators).
    """
    form: WriteForm | None = grammar.write_form()
    body: list[str] = [line.strip() for line in _LINE_SPLIT_RE.split(license_text.strip())]
    if form is None:
        logger.warning("grammar %r has no comment syntax; rendering plain text", grammar.name)
        return body

    rendered: list[str] = [form.start]
    for line in body:
        if form.line_prefix:
            line = form.line_prefix + (f" {line}" if line else "")
        rendered.append(line)
    rendered.append(form.end)
    return rendered


def _is_removed(number: int, spans: list[tuple[int, int]]) -> bool:
    return any(start <= number <= end for start, end in spans)


def fix_license(
    result: ParseResult,
    remove_blocks: Iterable[CommentBlock],
    license_text: str,
    grammar: CommentGrammar,
    *,
    current_year: int | None = None,
) -> str:
    """Return the full file text with the canonical license header in place.

    Args:
        result (ParseResult): Tokenization of the original file.
        remove_blocks (Iterable[CommentBlock]): Blocks to excise (typically every
            license-like block).
        license_text (str): Canonical license text, possibly containing ``{years}``.
        grammar (CommentGrammar): Grammar used to render the header.
        current_year (int | None): Year of the run; defaults to the calendar year.

    Returns:
        str: The reconstructed file text.
    """
    expanded: str = expand_years(license_text, result.year_start, current_year)
    header: list[str] = render_license_comment(expanded, grammar)

    spans: list[tuple[int, int]] = [b.span for b in remove_blocks]
    if spans:
        body: list[str] = [
            line
            for number, line in enumerate(result.lines, start=1)
            if not _is_removed(number, spans)
        ]
    else:
        body = list(result.lines)

    out: list[str] = []
    if result.directive:
        out += [result.directive, ""]
    out += header
    if body and body[0].strip() != "":
        out.append("")
    out += body

    logger.debug(
        "rebuilt file: %d header line(s), %d line(s) removed, %d line(s) kept",
        len(header),
        len(result.lines) - len(body),
        len(body),
    )
    return result.bom + result.line_ending.join(out)
