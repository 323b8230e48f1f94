# topmark:header:start
#
#   project      : LicenseTool
#   file         : grammar.py
#   file_relpath : src/licensetool/comments/grammar.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment grammar table: how comments are spelled for each supported file type.

A `CommentGrammar` describes both *recognition* (which line prefixes and block
delimiters start a comment) and *re-emission* (the write-form delimiters used
when a canonical license header is rendered back into the file).

The built-in table `GRAMMARS` is an immutable tuple built at import time. It is
shared read-only by every tokenizer call, so concurrent file processing needs
no locking.

Layout example for the C-style block grammar write-form:

/**
 * Copyright (C) 2024 Example
 * All rights reserved.
 */
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from licensetool.config.logging import get_logger
from licensetool.errors import GrammarNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BlockCommentDef:
    """A block-comment delimiter pair plus its write-form overrides.

    Attributes:
        start (str): Opening delimiter recognized at the start of a trimmed line.
        end (str): Closing delimiter recognized at the end of a trimmed line.
        ignore (str | None): Decoration stripped (repeatedly) from the start of
            every interior line, e.g. the ``*`` of a Javadoc-style comment.
        write_start (str | None): Opening line emitted when rendering; defaults to ``start``.
        write_end (str | None): Closing line emitted when rendering; defaults to ``end``.
        write_line_prefix (str | None): Prefix of every rendered content line;
            defaults to the empty string.
    """

    start: str
    end: str
    ignore: str | None = None
    write_start: str | None = None
    write_end: str | None = None
    write_line_prefix: str | None = None


@dataclass(frozen=True, slots=True)
class WriteForm:
    """Delimiters used to render a license text as a comment."""

    start: str
    end: str
    line_prefix: str


@dataclass(frozen=True, slots=True)
class CommentGrammar:
    """Comment syntax of a file type.

    Attributes:
        name (str): Identifier of the file type (e.g. ``"javascript"``).
        extensions (tuple[str, ...]): Lower-case extensions without the leading dot.
        filenames (tuple[str, ...]): Lower-case exact basenames (e.g. ``"jenkinsfile"``).
        line_comments (tuple[str, ...]): Line-comment prefixes, tried in order.
        block_comments (tuple[BlockCommentDef, ...]): Block-comment definitions, tried in order.
    """

    name: str
    extensions: tuple[str, ...] = ()
    filenames: tuple[str, ...] = ()
    line_comments: tuple[str, ...] = ()
    block_comments: tuple[BlockCommentDef, ...] = ()

    def matches(self, name: str) -> bool:
        """Return True if the (case-insensitive) basename belongs to this grammar.

        Args:
            name (str): A file name or path; only the basename is considered.

        Returns:
            bool: True when the basename ends with ``.<ext>`` for one of the
                extensions or equals one of the filenames.
        """
        basename: str = PurePath(name).name.lower()
        if any(basename.endswith(f".{ext}") for ext in self.extensions):
            return True
        return basename in self.filenames

    def write_form(self) -> WriteForm | None:
        """Return the delimiters used to re-emit a header for this grammar.

        The first block-comment definition wins; when only line comments exist
        the first line-comment prefix is used uniformly as start, end and line
        prefix.

        Returns:
            WriteForm | None: The write-form, or None if the grammar has no comment syntax.
        """
        if self.block_comments:
            bc: BlockCommentDef = self.block_comments[0]
            return WriteForm(
                start=bc.write_start or bc.start,
                end=bc.write_end or bc.end,
                line_prefix=bc.write_line_prefix or "",
            )
        if self.line_comments:
            lc: str = self.line_comments[0]
            return WriteForm(start=lc, end=lc, line_prefix=lc)
        return None


# Javadoc-style block comments shared by the C family
C_BLOCK: BlockCommentDef = BlockCommentDef(
    start="/*",
    end="*/",
    ignore="*",
    write_start="/**",
    write_end=" */",
    write_line_prefix=" *",
)

XML_BLOCK: BlockCommentDef = BlockCommentDef(start="<!--", end="-->", write_line_prefix=" ")

GRAMMARS: tuple[CommentGrammar, ...] = (
    CommentGrammar(
        name="javascript",
        extensions=("js", "mjs", "cjs", "jsx"),
        line_comments=("//",),
        block_comments=(C_BLOCK,),
    ),
    CommentGrammar(
        name="typescript",
        extensions=("ts", "tsx"),
        line_comments=("//",),
        block_comments=(C_BLOCK,),
    ),
    CommentGrammar(
        name="java",
        extensions=("java", "groovy"),
        filenames=("jenkinsfile",),
        line_comments=("//",),
        block_comments=(C_BLOCK,),
    ),
    CommentGrammar(
        name="c",
        extensions=("c", "h", "cc", "cpp", "hpp"),
        line_comments=("//",),
        block_comments=(C_BLOCK,),
    ),
    CommentGrammar(name="shell", extensions=("sh", "bash"), line_comments=("#",)),
    CommentGrammar(name="python", extensions=("py",), line_comments=("#",)),
    CommentGrammar(name="yaml", extensions=("yml", "yaml"), line_comments=("#",)),
    CommentGrammar(name="make", filenames=("makefile", "dockerfile"), line_comments=("#",)),
    CommentGrammar(
        name="css",
        extensions=("css", "less", "sass", "scss"),
        block_comments=(C_BLOCK,),
    ),
    CommentGrammar(
        name="html",
        extensions=("html", "htm", "xml", "svg"),
        block_comments=(XML_BLOCK,),
    ),
)


def lookup_grammar(
    name: str | Path,
    grammars: tuple[CommentGrammar, ...] = GRAMMARS,
) -> CommentGrammar | None:
    """Return the first grammar (in table order) matching a file name.

    Args:
        name (str | Path): File name or path; matching is case-insensitive on the basename.
        grammars (tuple[CommentGrammar, ...]): Table to search.

    Returns:
        CommentGrammar | None: The matching grammar, or None.
    """
    for grammar in grammars:
        if grammar.matches(str(name)):
            return grammar
    return None


def resolve_grammar(
    name: str | Path,
    grammars: tuple[CommentGrammar, ...] = GRAMMARS,
) -> CommentGrammar:
    """Return the grammar for a file name or raise.

    Args:
        name (str | Path): File name or path.
        grammars (tuple[CommentGrammar, ...]): Table to search.

    Returns:
        CommentGrammar: The matching grammar.

    Raises:
        GrammarNotFoundError: If no grammar matches.
    """
    grammar: CommentGrammar | None = lookup_grammar(name, grammars)
    if grammar is None:
        raise GrammarNotFoundError(name)
    logger.debug("using grammar %r for %s", grammar.name, name)
    return grammar


def get_grammar(name: str) -> CommentGrammar | None:
    """Return a built-in grammar by its identifier (e.g. ``"python"``)."""
    return next((g for g in GRAMMARS if g.name == name), None)
