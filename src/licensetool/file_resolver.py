# topmark:header:start
#
#   project      : LicenseTool
#   file         : file_resolver.py
#   file_relpath : src/licensetool/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the files to check below a root path.

A file root yields itself. A directory root is walked recursively and every
file whose name resolves to a comment grammar is a candidate. Candidates are
then filtered with git-wildmatch ignore patterns composed from:

1. the root's ``.gitignore`` (when enabled),
2. the always-ignored ``.git/`` directory,
3. caller-supplied excludes (CLI ``--exclude`` / config ``excludes``).

Patterns are matched against the POSIX path relative to the root. The result
is sorted for deterministic output.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from licensetool.comments.grammar import GRAMMARS, lookup_grammar
from licensetool.config.logging import get_logger
from licensetool.constants import ALWAYS_IGNORED, GITIGNORE_FILE_NAME

if TYPE_CHECKING:
    from collections.abc import Iterable

    from licensetool.comments.grammar import CommentGrammar
    from licensetool.config.logging import LicenseToolLogger

logger: LicenseToolLogger = get_logger(__name__)


def split_excludes(values: Iterable[str]) -> list[str]:
    """Flatten exclude values that may each hold several ``;``-separated patterns.

    Args:
        values (Iterable[str]): Raw exclude values.

    Returns:
        list[str]: Non-blank, trimmed patterns in input order.
    """
    patterns: list[str] = []
    for value in values:
        for part in value.split(";"):
            s: str = part.strip()
            if s:
                patterns.append(s)
    return patterns


def load_gitignore_patterns(root: Path) -> list[str]:
    """Return the non-empty, non-comment lines of ``<root>/.gitignore``.

    Args:
        root (Path): Directory holding the ``.gitignore``.

    Returns:
        list[str]: Patterns (empty when the file is missing or unreadable).
    """
    path: Path = root / GITIGNORE_FILE_NAME
    try:
        text: str = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except OSError as e:
        logger.error("Cannot read ignore patterns from '%s': %s", path, e)
        return []
    patterns: list[str] = []
    for line in text.splitlines():
        s: str = line.rstrip()
        if not s.strip() or s.lstrip().startswith("#"):
            continue
        patterns.append(s)
    logger.debug("Loaded %d pattern(s) from %s", len(patterns), path)
    return patterns


def build_ignore_spec(
    root: Path,
    excludes: Iterable[str] = (),
    *,
    use_gitignore: bool = True,
) -> PathSpec:
    """Compose the ignore spec for a directory root.

    Args:
        root (Path): Checked root directory.
        excludes (Iterable[str]): Extra patterns (may be ``;``-separated).
        use_gitignore (bool): Whether ``<root>/.gitignore`` contributes patterns.

    Returns:
        PathSpec: The combined git-wildmatch spec.
    """
    patterns: list[str] = []
    if use_gitignore:
        patterns.extend(load_gitignore_patterns(root))
    patterns.extend(ALWAYS_IGNORED)
    patterns.extend(split_excludes(excludes))
    logger.debug("ignore patterns: %s", patterns)
    return PathSpec.from_lines(GitWildMatchPattern, patterns)


def relative_key(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` as a POSIX string (absolute as fallback)."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def resolve_files(
    root: Path,
    *,
    excludes: Iterable[str] = (),
    use_gitignore: bool = True,
    grammars: tuple[CommentGrammar, ...] = GRAMMARS,
) -> list[Path]:
    """Return the files to check below ``root``.

    Args:
        root (Path): A file or a directory.
        excludes (Iterable[str]): Extra ignore patterns (may be ``;``-separated).
        use_gitignore (bool): Whether ``<root>/.gitignore`` contributes patterns.
        grammars (tuple[CommentGrammar, ...]): Grammar table deciding which files are supported.

    Returns:
        list[Path]: Sorted files. A file root is returned as-is, even when no
            grammar supports it, so the caller can report it as unsupported.
    """
    if root.is_file():
        return [root]
    if not root.is_dir():
        logger.warning("No such file or directory: %s", root)
        return []

    logger.info("finding files ...")
    spec: PathSpec = build_ignore_spec(root, excludes, use_gitignore=use_gitignore)
    files: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file() or lookup_grammar(path.name, grammars) is None:
            continue
        if spec.match_file(relative_key(path, root)):
            logger.trace("ignored: %s", path)
            continue
        files.append(path)

    files.sort()
    logger.info("found %d files", len(files))
    return files
