# topmark:header:start
#
#   project      : LicenseTool
#   file         : tokenizer.py
#   file_relpath : src/licensetool/comments/tokenizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment tokenizer: split raw file text into comment blocks.

The tokenizer is a line-oriented finite-state machine with three states:

- `Idle`: outside any comment.
- `InBlockComment`: inside a block comment opened by a given `BlockCommentDef`.
- `InLineComment`: inside a run of consecutive line comments.

Each physical line is first *classified* relative to the current state
(`classify_line`), then the pair ``(state, LineKind)`` selects an `Action`
from `TRANSITIONS`. Only the start of a trimmed physical line is examined; the
tokenizer does not understand string literals, trailing comments after code or
nested comments.

Edge-case behavior:
    - While a comment is open, a line is only ever checked for *closing* it. A
      line that ends a line-comment run belongs to code and is not re-examined
      for opening a new comment.
    - The ``ignore`` prefix of a block definition is stripped greedily.
    - A bare block opener (``/**``) contributes an empty first content line; a
      closing line with nothing left after stripping contributes no line.
    - A line-comment run still open at end of input is kept; a block comment
      left open at end of input is dropped without error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

from licensetool.comments.classifier import annotate_blocks
from licensetool.comments.types import CommentBlock, ParseResult
from licensetool.config.logging import get_logger

if TYPE_CHECKING:
    from licensetool.comments.grammar import BlockCommentDef, CommentGrammar
    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)

BOM: Final[str] = "\ufeff"
DIRECTIVE_RE: Final[re.Pattern[str]] = re.compile(r"#![^\r\n]*")
LINE_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class Idle:
    """Outside any comment."""


@dataclass(frozen=True, slots=True)
class InBlockComment:
    """Inside a block comment opened by ``definition``."""

    definition: BlockCommentDef


@dataclass(frozen=True, slots=True)
class InLineComment:
    """Inside a run of line comments."""


TokenizerState = Idle | InBlockComment | InLineComment

IDLE: Final[Idle] = Idle()
IN_LINE_COMMENT: Final[InLineComment] = InLineComment()


class LineKind(Enum):
    """Classification of a trimmed physical line relative to the current state."""

    CODE = "code"
    LINE_COMMENT = "line comment"
    BLOCK_OPEN = "block open"
    BLOCK_ONE_LINER = "block open and close"
    BLOCK_BODY = "block body"
    BLOCK_CLOSE = "block close"


class Action(Enum):
    """What the tokenizer does with a classified line."""

    SKIP = "skip"
    OPEN_LINE = "open line run"
    OPEN_BLOCK = "open block"
    EMIT_ONE_LINER = "emit single-line block"
    APPEND = "append"
    CLOSE_BLOCK = "close block"
    CLOSE_LINE = "close line run"


TRANSITIONS: Final[dict[tuple[type[TokenizerState], LineKind], Action]] = {
    (Idle, LineKind.CODE): Action.SKIP,
    (Idle, LineKind.LINE_COMMENT): Action.OPEN_LINE,
    (Idle, LineKind.BLOCK_OPEN): Action.OPEN_BLOCK,
    (Idle, LineKind.BLOCK_ONE_LINER): Action.EMIT_ONE_LINER,
    (InBlockComment, LineKind.BLOCK_BODY): Action.APPEND,
    (InBlockComment, LineKind.BLOCK_CLOSE): Action.CLOSE_BLOCK,
    (InLineComment, LineKind.LINE_COMMENT): Action.APPEND,
    (InLineComment, LineKind.CODE): Action.CLOSE_LINE,
}


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """A line classification with the comment content extracted from it."""

    kind: LineKind
    content: str = ""
    definition: BlockCommentDef | None = None


def strip_ignore(line: str, ignore: str | None) -> str:
    """Trim ``line`` and strip the ``ignore`` decoration repeatedly from its start."""
    line = line.strip()
    if ignore:
        while line.startswith(ignore):
            line = line[len(ignore) :].strip()
    return line


def strip_line_comment(line: str, prefixes: tuple[str, ...]) -> str | None:
    """Return the content of a line comment, or None if ``line`` is not one.

    The first prefix (in order) that starts the line is stripped repeatedly,
    so ``### note`` yields ``note``.
    """
    for prefix in prefixes:
        if line.startswith(prefix):
            while line.startswith(prefix):
                line = line[len(prefix) :].strip()
            return line
    return None


def classify_line(state: TokenizerState, line: str, grammar: CommentGrammar) -> ClassifiedLine:
    """Classify a trimmed line relative to the current tokenizer state.

    Args:
        state (TokenizerState): Current state.
        line (str): The trimmed physical line.
        grammar (CommentGrammar): Comment syntax of the file.

    Returns:
        ClassifiedLine: The line kind, its extracted content and, when opening a
            block comment, the matching definition.
    """
    if isinstance(state, InBlockComment):
        bc: BlockCommentDef = state.definition
        if line.endswith(bc.end):
            return ClassifiedLine(
                LineKind.BLOCK_CLOSE, strip_ignore(line[: len(line) - len(bc.end)], bc.ignore)
            )
        return ClassifiedLine(LineKind.BLOCK_BODY, strip_ignore(line, bc.ignore))

    if isinstance(state, InLineComment):
        content: str | None = strip_line_comment(line, grammar.line_comments)
        if content is None:
            return ClassifiedLine(LineKind.CODE)
        return ClassifiedLine(LineKind.LINE_COMMENT, content)

    for bc in grammar.block_comments:
        if line.startswith(bc.start):
            rest: str = line[len(bc.start) :]
            if rest.endswith(bc.end):
                return ClassifiedLine(
                    LineKind.BLOCK_ONE_LINER,
                    strip_ignore(rest[: len(rest) - len(bc.end)], bc.ignore),
                    bc,
                )
            return ClassifiedLine(LineKind.BLOCK_OPEN, strip_ignore(rest, bc.ignore), bc)

    content = strip_line_comment(line, grammar.line_comments)
    if content is not None:
        return ClassifiedLine(LineKind.LINE_COMMENT, content)
    return ClassifiedLine(LineKind.CODE)


class CommentTokenizer:
    """Stateful driver for the comment state machine (one instance per file)."""

    def __init__(self, grammar: CommentGrammar) -> None:
        self.grammar: CommentGrammar = grammar
        self.state: TokenizerState = IDLE
        self.blocks: list[CommentBlock] = []
        self._content: list[str] = []
        self._start_line: int = 0
        self._end_line: int = 0

    def feed(self, number: int, raw_line: str) -> None:
        """Process one physical line.

        Args:
            number (int): 1-based physical line number.
            raw_line (str): The line without its line terminator.
        """
        classified: ClassifiedLine = classify_line(self.state, raw_line.strip(), self.grammar)
        action: Action = TRANSITIONS[(type(self.state), classified.kind)]
        logger.trace("line %d: %s -> %s", number, classified.kind.value, action.value)

        match action:
            case Action.SKIP:
                pass
            case Action.OPEN_LINE:
                self._open(number, classified.content)
                self.state = IN_LINE_COMMENT
            case Action.OPEN_BLOCK:
                assert classified.definition is not None
                self._open(number, classified.content)
                self.state = InBlockComment(classified.definition)
            case Action.EMIT_ONE_LINER:
                self._open(number, classified.content)
                self._emit()
            case Action.APPEND:
                self._content.append(classified.content)
                self._end_line = number
            case Action.CLOSE_BLOCK:
                if classified.content:
                    self._content.append(classified.content)
                self._end_line = number
                self._emit()
            case Action.CLOSE_LINE:
                # The current line is code; the run ended on the previous line.
                self._emit()

    def finish(self) -> list[CommentBlock]:
        """Finalize the machine at end of input and return the blocks found."""
        if isinstance(self.state, InLineComment):
            self._emit()
        elif isinstance(self.state, InBlockComment):
            logger.debug(
                "dropping unterminated block comment opened at line %d (%r)",
                self._start_line,
                self.state.definition.start,
            )
            self._reset()
        return self.blocks

    def _open(self, number: int, content: str) -> None:
        self._content = [content]
        self._start_line = number
        self._end_line = number

    def _emit(self) -> None:
        self.blocks.append(
            CommentBlock(
                lines=tuple(self._content),
                start_line=self._start_line,
                end_line=self._end_line,
            )
        )
        self._reset()

    def _reset(self) -> None:
        self.state = IDLE
        self._content = []
        self._start_line = 0
        self._end_line = 0


def split_bom(text: str) -> tuple[str, str]:
    """Split a leading byte-order mark off ``text``.

    ``str.strip()`` keeps U+FEFF, so a BOM left in place would turn a header on
    line 1 into code.

    Returns:
        tuple[str, str]: The BOM (or ``""``) and the remaining text.
    """
    if text.startswith(BOM):
        return BOM, text[len(BOM) :]
    return "", text


def split_directive(text: str) -> tuple[str | None, str]:
    """Split a leading interpreter directive (``#!...``) off ``text``.

    Only the directive's text is removed; its line terminator stays so that
    physical line numbers of the remaining text are unchanged.

    Returns:
        tuple[str | None, str]: The directive (or None) and the remaining text.
    """
    m: re.Match[str] | None = DIRECTIVE_RE.match(text)
    if m is None:
        return None, text
    return m.group(0), text[m.end() :]


def detect_line_ending(text: str) -> str:
    r"""Return ``"\r\n"`` if ``text`` contains any carriage return, else ``"\n"``."""
    return "\r\n" if "\r" in text else "\n"


def tokenize(text: str, grammar: CommentGrammar) -> ParseResult:
    """Tokenize raw file text into comment blocks.

    Args:
        text (str): Complete file contents.
        grammar (CommentGrammar): Comment syntax of the file.

    Returns:
        ParseResult: Directive, annotated comment blocks, physical lines, line
            ending and earliest copyright year of the file.
    """
    bom, text = split_bom(text)
    line_ending: str = detect_line_ending(text)
    directive, body = split_directive(text)
    lines: list[str] = LINE_SPLIT_RE.split(body)

    machine = CommentTokenizer(grammar)
    for number, line in enumerate(lines, start=1):
        machine.feed(number, line)
    blocks, year_start = annotate_blocks(machine.finish())

    logger.debug(
        "tokenized %d line(s) with grammar %r: %d comment block(s), %d license-like",
        len(lines),
        grammar.name,
        len(blocks),
        sum(1 for b in blocks if b.is_license_like),
    )
    return ParseResult(
        directive=directive,
        blocks=blocks,
        lines=lines,
        line_ending=line_ending,
        year_start=year_start,
        bom=bom,
    )
