# topmark:header:start
#
#   project      : LicenseTool
#   file         : __init__.py
#   file_relpath : src/licensetool/comments/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment tokenizer and license-header reconciliation engine.

Flow for one file::

    grammar = resolve_grammar(path)
    result = tokenize(text, grammar)
    matched = has_expected_license(result, license_text)
    if matched is None:
        text = fix_license(result, has_license_declaration(result), license_text, grammar)
"""

from __future__ import annotations

from licensetool.comments.classifier import (
    LICENSE_PATTERNS,
    expand_years,
    has_expected_license,
    has_license_declaration,
    normalize_license_text,
)
from licensetool.comments.grammar import (
    GRAMMARS,
    BlockCommentDef,
    CommentGrammar,
    lookup_grammar,
    resolve_grammar,
)
from licensetool.comments.reconciler import fix_license, render_license_comment
from licensetool.comments.tokenizer import tokenize
from licensetool.comments.types import CommentBlock, ParseResult

__all__ = [
    "GRAMMARS",
    "LICENSE_PATTERNS",
    "BlockCommentDef",
    "CommentBlock",
    "CommentGrammar",
    "ParseResult",
    "expand_years",
    "fix_license",
    "has_expected_license",
    "has_license_declaration",
    "lookup_grammar",
    "normalize_license_text",
    "render_license_comment",
    "resolve_grammar",
    "tokenize",
]
