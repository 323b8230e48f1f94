# topmark:header:start
#
#   project      : LicenseTool
#   file         : strategies_licensetool.py
#   file_relpath : tests/strategies_licensetool.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hypothesis strategies for generating source files with and without license comments.

Files are assembled from line "fragments" (code, blank lines, line comments,
block comments, license declarations) so that property tests cover the
tokenizer's transitions without exploding the input space.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

from licensetool.comments.grammar import CommentGrammar, get_grammar

Draw = Callable[[st.SearchStrategy[Any]], Any]

LINE_ENDINGS: tuple[str, ...] = ("\n", "\r\n")

SHEBANGS: tuple[str, ...] = (
    "#!/usr/bin/env node",
    "#!/usr/bin/env bash",
    "#!/usr/bin/env python3",
)

GRAMMAR_NAMES: tuple[str, ...] = ("javascript", "python", "shell", "css", "html", "c")

#: Canonical header texts, license-like or not.
LICENSE_TEXTS: tuple[str, ...] = (
    "Copyright {years} Acme Inc.",
    "This file is part of Example.\nMaintained since {years}.",
    "Copyright {years} Example\nAll rights reserved.",
    "SPDX-License-Identifier: MIT\nCopyright {years} Example Corp.",
    "Copyright (C) {years} Example\n\nLicensed under the MIT license.",
)

_WORDS = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), max_codepoint=0x7F),
    min_size=1,
    max_size=8,
)


def s_code_line() -> st.SearchStrategy[str]:
    """Plausible code lines that never start a comment."""
    return st.builds(
        lambda name, value: f"const {name} = {value};",
        _WORDS,
        st.integers(min_value=0, max_value=999),
    )


@st.composite
def s_comment_fragment(draw: Draw, grammar: CommentGrammar) -> list[str]:
    """A line-comment run or a block comment in ``grammar``'s syntax."""
    words: list[str] = draw(st.lists(_WORDS, min_size=1, max_size=3))
    if grammar.block_comments and (not grammar.line_comments or draw(st.booleans())):
        bc = grammar.block_comments[0]
        if draw(st.booleans()):
            return [f"{bc.start} {' '.join(words)} {bc.end}"]
        return [bc.start, *(f"  {w}" for w in words), bc.end]
    prefix: str = grammar.line_comments[0]
    return [f"{prefix} {w}" for w in words]


@st.composite
def s_license_fragment(draw: Draw, grammar: CommentGrammar) -> list[str]:
    """An old-style license declaration in ``grammar``'s syntax."""
    year: int = draw(st.integers(min_value=1990, max_value=2024))
    lines: list[str] = [f"Copyright (C) {year} Someone", "All rights reserved."]
    if grammar.block_comments:
        bc = grammar.block_comments[0]
        return [bc.start, *lines, bc.end]
    prefix: str = grammar.line_comments[0]
    return [f"{prefix} {line}" for line in lines]


@st.composite
def s_source_file(
    draw: Draw,
    *,
    with_directive: bool | None = None,
) -> tuple[str, CommentGrammar]:
    """Return ``(text, grammar)`` for a generated source file.

    Args:
        draw (Draw): Hypothesis draw function.
        with_directive (bool | None): Force or forbid a leading ``#!`` line; None draws it.

    Returns:
        tuple[str, CommentGrammar]: The file text and the grammar to tokenize it with.
    """
    grammar: CommentGrammar | None = get_grammar(draw(st.sampled_from(GRAMMAR_NAMES)))
    assert grammar is not None
    fragments: list[list[str]] = draw(
        st.lists(
            st.one_of(
                s_code_line().map(lambda line: [line]),
                st.just([""]),
                s_comment_fragment(grammar),
                s_license_fragment(grammar),
            ),
            max_size=8,
        )
    )
    lines: list[str] = [line for fragment in fragments for line in fragment]
    directive: bool = draw(st.booleans()) if with_directive is None else with_directive
    if directive:
        lines.insert(0, draw(st.sampled_from(SHEBANGS)))
    le: str = draw(st.sampled_from(LINE_ENDINGS))
    trailing: str = le if draw(st.booleans()) else ""
    return le.join(lines) + trailing, grammar
