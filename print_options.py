"""Print options: text encoding, codepage, column width and trailing actions.

Callers pass a partial mapping; it is merged field by field over a fresh
defaults record. Keys may use the markup-side camelCase spelling
(``tailingLine``, ``colWidth``) or the Python field names.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Union

from errors import InvalidOption

logger = logging.getLogger(__name__)

_KEY_ALIASES = {
    "tailingLine": "tailing_line",
    "colWidth": "col_width",
}


@dataclass(frozen=True)
class PrintOptions:
    beep: bool = False
    cut: bool = False
    tailing_line: bool = False
    encoding: str = "UTF8"
    codepage: int = 0
    col_width: int = 32

    def __post_init__(self) -> None:
        for name in ("beep", "cut", "tailing_line"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidOption(f"{name} must be a boolean, got {value!r}")
        if isinstance(self.codepage, bool) or not isinstance(self.codepage, int):
            raise InvalidOption(f"codepage must be an integer, got {self.codepage!r}")
        if not 0 <= self.codepage <= 0xFF:
            raise InvalidOption(f"codepage must be in 0..255, got {self.codepage}")
        if isinstance(self.col_width, bool) or not isinstance(self.col_width, int):
            raise InvalidOption(f"col_width must be an integer, got {self.col_width!r}")
        if self.col_width <= 0:
            raise InvalidOption(f"col_width must be positive, got {self.col_width}")


OptionsLike = Union[PrintOptions, Mapping[str, Any], None]


def default_options() -> PrintOptions:
    """Return a fresh defaults record."""
    return PrintOptions()


def merge_options(overrides: OptionsLike = None) -> PrintOptions:
    """Merge caller overrides over the defaults.

    Explicit falsy values (``False``, ``0``) override the defaults too.
    Unknown keys are ignored.
    """
    if overrides is None:
        return default_options()
    if isinstance(overrides, PrintOptions):
        return overrides

    known = {f.name for f in fields(PrintOptions)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        name = _KEY_ALIASES.get(key, key)
        if name not in known:
            logger.warning("Ignoring unknown print option: %s", key)
            continue
        changes[name] = value
    return replace(default_options(), **changes)

