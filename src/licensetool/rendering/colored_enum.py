# topmark:header:start
#
#   project      : LicenseTool
#   file         : colored_enum.py
#   file_relpath : src/licensetool/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""String enums that carry a colorizer for human-facing output.

Check outcomes (`licensetool.checker.CheckStatus`, `licensetool.standalone.StandaloneStatus`)
are plain strings for logs and tests, and know how to color themselves for the
console:

    ```python
    from yachalk import chalk

    class Outcome(ColoredStrEnum):
        OK = ("ok", chalk.green)

    Outcome.OK.value            # 'ok'
    Outcome.OK.color("hello")   # green "hello"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display (e.g. a `yachalk.ChalkBuilder`)."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Return the decorated, ``sep``-joined arguments."""
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose value is a string and that carries an associated colorizer."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        """Store ``text`` as the member value and keep ``color`` aside."""
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """Return the textual value of the member."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """Return the colorizer associated with this member."""
        return self._color

    def colored(self, text: str | None = None) -> str:
        """Return ``text`` (default: the member value) decorated with the member's color."""
        return self._color(self._value_ if text is None else text)

    def __str__(self) -> str:
        return self._value_
