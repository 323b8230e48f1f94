# topmark:header:start
#
#   project      : LicenseTool
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the LicenseTool test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs, ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `licensetool.config.MutableConfig`, then `freeze()` them into
    a `licensetool.config.Config`. Do not mutate a frozen `Config`; call
    `Config.thaw()`, edit, and `freeze()` again.

    Tests that depend on the calendar year pass ``current_year`` explicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from licensetool.comments import classifier
from licensetool.config import logging

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

#: Year used by every test that expands the ``{years}`` macro.
CURRENT_YEAR: int = 2024

JS_HEADER: str = "Copyright {years} Example\nAll rights reserved.\n"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_comments: DecoratorType[Any] = as_typed_mark(pytest.mark.comments)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)
mark_checker: DecoratorType[Any] = as_typed_mark(pytest.mark.checker)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_licensetool_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to
            manipulate environment variables.
    """
    monkeypatch.delenv("LICENSETOOL_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def frozen_calendar_year(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the calendar year used by the {years} macro to `CURRENT_YEAR`."""
    monkeypatch.setattr(classifier, "current_calendar_year", lambda: CURRENT_YEAR)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the log level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def write_file(path: Path, text: str) -> Path:
    """Write ``text`` verbatim (no newline translation), creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(text)
    return path


def read_file(path: Path) -> str:
    """Read ``path`` verbatim (no newline translation)."""
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a small project tree with license templates.

    Layout::

        proj/
          licenses/header.txt       canonical header with the {years} macro
          licenses/standalone.txt   standalone license text
          src/app.js                no header
          src/ok.js                 compliant header (current year 2024)

    Returns:
        Path: The project root.
    """
    root: Path = tmp_path / "proj"
    write_file(root / "licenses" / "header.txt", JS_HEADER)
    write_file(
        root / "licenses" / "standalone.txt", "MIT License\n\nPermission is hereby granted\n"
    )
    write_file(root / "src" / "app.js", "console.log('hi');\n")
    write_file(
        root / "src" / "ok.js",
        "/**\n * Copyright 2024 Example\n * All rights reserved.\n */\n\nexport const ok = 1;\n",
    )
    return root
