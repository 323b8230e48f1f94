# topmark:header:start
#
#   project      : LicenseTool
#   file         : filetypes.py
#   file_relpath : src/licensetool/cli/commands/filetypes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseTool `filetypes` command.

Lists the comment grammars LicenseTool knows: which file extensions and file
names select each grammar, and the comment syntax it recognizes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licensetool.comments.grammar import GRAMMARS

if TYPE_CHECKING:
    from licensetool.cli.console import ConsoleLike
    from licensetool.comments.grammar import CommentGrammar


def describe_syntax(grammar: CommentGrammar) -> str:
    """Return a compact description of a grammar's comment syntax.

    Args:
        grammar (CommentGrammar): The grammar to describe.

    Returns:
        str: E.g. ``"// ...", "/* ... */"``.
    """
    parts: list[str] = [f"{prefix} ..." for prefix in grammar.line_comments]
    parts.extend(f"{b.start} ... {b.end}" for b in grammar.block_comments)
    return ", ".join(parts)


@click.command(
    name="filetypes",
    help="List the supported file types and their comment syntax.",
)
@click.option(
    "--long",
    "show_details",
    is_flag=True,
    help="Also show the comment syntax used when writing headers.",
)
@click.pass_context
def filetypes_command(ctx: click.Context, *, show_details: bool = False) -> None:
    """List supported file types.

    Args:
        ctx (click.Context): Current Click context.
        show_details (bool): Show the written header form as well.
    """
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    console.print(console.styled("Supported file types:", bold=True, underline=True))
    width: int = max(len(g.name) for g in GRAMMARS)
    for grammar in GRAMMARS:
        selectors: list[str] = [f".{ext}" for ext in grammar.extensions]
        selectors.extend(grammar.filenames)
        console.print(
            f"  {console.styled(grammar.name.ljust(width), bold=True)}  {' '.join(selectors)}"
        )
        console.print(f"  {' ' * width}  comments: {describe_syntax(grammar)}")
        form = grammar.write_form()
        if show_details and form is not None:
            console.print(
                f"  {' ' * width}  header:   {form.start!r} / {form.line_prefix!r} / {form.end!r}"
            )
