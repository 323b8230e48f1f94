# topmark:header:start
#
#   project      : LicenseTool
#   file         : test_tokenizer.py
#   file_relpath : tests/comments/test_tokenizer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the comment tokenizer state machine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import given, settings

from licensetool.comments.grammar import C_BLOCK, get_grammar
from licensetool.comments.tokenizer import (
    IDLE,
    TRANSITIONS,
    Action,
    Idle,
    InBlockComment,
    InLineComment,
    LineKind,
    classify_line,
    detect_line_ending,
    split_directive,
    split_bom,
    strip_ignore,
    tokenize,
)
from tests.conftest import mark_comments, parametrize
from tests.strategies_licensetool import s_source_file

if TYPE_CHECKING:
    from licensetool.comments.grammar import CommentGrammar
    from licensetool.comments.types import CommentBlock, ParseResult


def _grammar(name: str) -> CommentGrammar:
    grammar: CommentGrammar | None = get_grammar(name)
    assert grammar is not None
    return grammar


JS: CommentGrammar = _grammar("javascript")
SHELL: CommentGrammar = _grammar("shell")
HTML: CommentGrammar = _grammar("html")


@mark_comments
def test_block_comment_stripping() -> None:
    """A bare opener yields an empty first line; the ignore prefix is stripped."""
    result: ParseResult = tokenize("/** \n * Copyright (C) 2020 Example\n */", JS)

    assert len(result.blocks) == 1
    block: CommentBlock = result.blocks[0]
    assert block.lines == ("", "Copyright (C) 2020 Example")
    assert block.span == (1, 3)
    assert block.is_license_like is True
    assert block.year_start == 2020
    assert result.year_start == 2020


@mark_comments
def test_shell_line_comment_run_excludes_blank_line() -> None:
    """Two consecutive ``#`` lines form one block; the blank line ends it."""
    result: ParseResult = tokenize("# first\n# second\n\necho hi\n", SHELL)

    assert len(result.blocks) == 1
    assert result.blocks[0].lines == ("first", "second")
    assert result.blocks[0].span == (1, 2)


@mark_comments
def test_line_comment_run_open_at_eof_is_kept() -> None:
    """A run that reaches the end of input is emitted."""
    result: ParseResult = tokenize("echo hi\n# trailing", SHELL)

    assert [b.span for b in result.blocks] == [(2, 2)]
    assert result.blocks[0].lines == ("trailing",)


@mark_comments
def test_unterminated_block_is_dropped() -> None:
    """A block comment still open at end of input is discarded silently."""
    result: ParseResult = tokenize("// note\ncode();\n/* Copyright (C) 2020 X\n still open", JS)

    assert [b.span for b in result.blocks] == [(1, 1)]
    assert result.year_start is None


@mark_comments
def test_line_closing_a_run_is_not_reexamined() -> None:
    """The line that ends a line-comment run is consumed as code.

    Here the block opener directly after the run is therefore not recognized;
    the following ``//`` line starts a new run.
    """
    text = "// one\n/* not seen\n// two\n"
    result: ParseResult = tokenize(text, JS)

    assert [b.span for b in result.blocks] == [(1, 1), (3, 3)]
    assert [b.lines for b in result.blocks] == [("one",), ("two",)]


@mark_comments
def test_closing_takes_priority_inside_a_block() -> None:
    """Inside a block only the close delimiter is checked, even on ``//`` lines."""
    text = "/*\n// looks like a line comment\n*/\n"
    result: ParseResult = tokenize(text, JS)

    assert len(result.blocks) == 1
    assert result.blocks[0].lines == ("", "// looks like a line comment")
    assert result.blocks[0].span == (1, 3)


@mark_comments
def test_single_line_block_comment() -> None:
    """Opener and closer on one line form a one-line block."""
    result: ParseResult = tokenize("x = 1;\n/* SPDX-License-Identifier: MIT */\ny = 2;\n", JS)

    assert len(result.blocks) == 1
    assert result.blocks[0].lines == ("SPDX-License-Identifier: MIT",)
    assert result.blocks[0].span == (2, 2)
    assert result.blocks[0].is_license_like


@mark_comments
def test_closing_line_content_is_kept() -> None:
    """Text before the close delimiter on the last line is part of the block."""
    result: ParseResult = tokenize("<!--\n  Copyright 2021 Example\n  end -->\n<html/>", HTML)

    assert result.blocks[0].lines == ("", "Copyright 2021 Example", "end")


@mark_comments
def test_repeated_line_prefix_is_stripped() -> None:
    """``###`` banners are stripped down to their text."""
    result: ParseResult = tokenize("### Section ###\n", SHELL)

    assert result.blocks[0].lines == ("Section ###",)


@mark_comments
def test_crlf_is_detected_and_split() -> None:
    """CRLF files are split on CRLF and report a CRLF line ending."""
    result: ParseResult = tokenize("// a\r\n// b\r\ncode();\r\n", JS)

    assert result.line_ending == "\r\n"
    assert result.lines == ["// a", "// b", "code();", ""]
    assert result.blocks[0].lines == ("a", "b")


@mark_comments
def test_directive_is_split_but_line_numbers_stay_physical() -> None:
    """The directive text is removed; its line keeps an empty remainder."""
    result: ParseResult = tokenize("#!/usr/bin/env bash\n# Copyright (C) 2019 X\necho\n", SHELL)

    assert result.directive == "#!/usr/bin/env bash"
    assert result.lines[0] == ""
    assert [b.span for b in result.blocks] == [(2, 2)]
    assert result.year_start == 2019


@mark_comments
def test_directive_only_at_start_of_text() -> None:
    """A ``#!`` that is not at offset 0 is not a directive."""
    directive, rest = split_directive("\n#!/bin/sh\n")
    assert directive is None
    assert rest == "\n#!/bin/sh\n"


@mark_comments
@parametrize(
    "text, expected",
    [("a\nb", "\n"), ("a\r\nb", "\r\n"), ("a\rb", "\r\n"), ("", "\n")],
)
def test_detect_line_ending(text: str, expected: str) -> None:
    """Any carriage return selects CRLF."""
    assert detect_line_ending(text) == expected


@mark_comments
def test_strip_ignore_is_greedy() -> None:
    """The ignore decoration is removed repeatedly, with whitespace in between."""
    assert strip_ignore("  * * text ", "*") == "text"
    assert strip_ignore("  text ", None) == "text"


@mark_comments
@parametrize(
    "state, line, kind",
    [
        (IDLE, "code();", LineKind.CODE),
        (IDLE, "// c", LineKind.LINE_COMMENT),
        (IDLE, "/**", LineKind.BLOCK_OPEN),
        (IDLE, "/* x */", LineKind.BLOCK_ONE_LINER),
        (InBlockComment(C_BLOCK), " * body", LineKind.BLOCK_BODY),
        (InBlockComment(C_BLOCK), "*/", LineKind.BLOCK_CLOSE),
        (InLineComment(), "// more", LineKind.LINE_COMMENT),
        (InLineComment(), "/* block */", LineKind.CODE),
    ],
)
def test_classify_line(
    state: Idle | InBlockComment | InLineComment,
    line: str,
    kind: LineKind,
) -> None:
    """Lines are classified relative to the current state."""
    assert classify_line(state, line.strip(), JS).kind is kind


@mark_comments
def test_transition_table_covers_every_reachable_pair() -> None:
    """Every (state, kind) pair `classify_line` can produce has an action."""
    reachable: dict[type, set[LineKind]] = {
        Idle: {
            LineKind.CODE,
            LineKind.LINE_COMMENT,
            LineKind.BLOCK_OPEN,
            LineKind.BLOCK_ONE_LINER,
        },
        InBlockComment: {LineKind.BLOCK_BODY, LineKind.BLOCK_CLOSE},
        InLineComment: {LineKind.LINE_COMMENT, LineKind.CODE},
    }
    for state_type, kinds in reachable.items():
        for kind in kinds:
            assert isinstance(TRANSITIONS[(state_type, kind)], Action)


@mark_comments
@settings(max_examples=200, deadline=None)
@given(sample=s_source_file())
def test_spans_are_disjoint_and_increasing(sample: tuple[str, CommentGrammar]) -> None:
    """No two blocks overlap and spans are strictly increasing."""
    text, grammar = sample
    result: ParseResult = tokenize(text, grammar)

    previous_end: int = 0
    for block in result.blocks:
        assert previous_end < block.start_line <= block.end_line <= len(result.lines)
        previous_end = block.end_line


@mark_comments
def test_byte_order_mark_is_split_off() -> None:
    """A leading BOM is kept aside so the header on line 1 is still a comment."""
    result: ParseResult = tokenize("\ufeff/**\n * Copyright (C) 2024 Example\n */\nrun();\n", JS)

    assert result.bom == "\ufeff"
    assert [b.span for b in result.blocks] == [(1, 3)]
    assert result.lines[0] == "/**"
    assert split_bom("no mark") == ("", "no mark")


@mark_comments
def test_byte_order_mark_before_directive() -> None:
    """The directive is still recognized after a BOM."""
    result: ParseResult = tokenize("\ufeff#!/bin/sh\n# Copyright (C) 2020 Example\n", SHELL)

    assert result.bom == "\ufeff"
    assert result.directive == "#!/bin/sh"
    assert [b.span for b in result.blocks] == [(2, 2)]
