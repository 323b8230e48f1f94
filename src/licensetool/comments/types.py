# topmark:header:start
#
#   project      : LicenseTool
#   file         : types.py
#   file_relpath : src/licensetool/comments/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value types produced by the tokenizer and consumed by classifier and reconciler."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CommentBlock:
    """One contiguous run of comment lines of a single kind.

    Attributes:
        lines (tuple[str, ...]): Content lines, trimmed and stripped of comment
            delimiters and ignore prefixes.
        start_line (int): 1-based physical line where the block starts.
        end_line (int): 1-based physical line where the block ends (inclusive).
        is_license_like (bool): True when the block's text looks like a license
            declaration (set once, right after tokenization).
        year_start (int | None): Earliest year following "Copyright" inside this
            block (license-like blocks only).
    """

    lines: tuple[str, ...]
    start_line: int
    end_line: int
    is_license_like: bool = False
    year_start: int | None = None

    @property
    def span(self) -> tuple[int, int]:
        """Return the inclusive ``(start_line, end_line)`` span."""
        return (self.start_line, self.end_line)

    def normalized(self) -> str:
        """Return the block text joined with single spaces and trimmed."""
        return " ".join(self.lines).strip()

    def text(self) -> str:
        """Return the block content as a newline-joined string (for diagnostics)."""
        return "\n".join(self.lines).strip()


@dataclass(slots=True)
class ParseResult:
    """Tokenization of one file.

    Attributes:
        directive (str | None): Leading interpreter directive (``#!...``), if any.
        blocks (list[CommentBlock]): Comment blocks in document order.
        lines (list[str]): Physical lines with the directive text removed; when a
            directive was present ``lines[0]`` is the (empty) rest of its line, so
            that indices stay aligned with physical line numbers.
        line_ending (str): ``"\\r\\n"`` if the text contains any carriage return, else ``"\\n"``.
        year_start (int | None): Earliest copyright year over all license-like blocks,
            or a caller-supplied override.
        bom (str): Leading byte-order mark (``"\\ufeff"``) removed before tokenizing, or ``""``.
    """

    directive: str | None
    blocks: list[CommentBlock] = field(default_factory=lambda: [])
    lines: list[str] = field(default_factory=lambda: [])
    line_ending: str = "\n"
    year_start: int | None = None
    bom: str = ""

    @property
    def license_blocks(self) -> list[CommentBlock]:
        """Return the license-like blocks in document order."""
        return [b for b in self.blocks if b.is_license_like]
