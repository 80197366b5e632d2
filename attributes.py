"""Typed attribute records for the Text and QRCode nodes.

Raw markup attributes are strings; each record is filled in a single pass
over the mapping and validated field by field. Unknown attributes are
ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from errors import InvalidAttribute

logger = logging.getLogger(__name__)

# Printers depend on these exact byte values
ALIGNMENT_CODES = {"left": 0, "center": 1, "right": 2}
FONT_WIDTH_CODES = (0x00, 0x10, 0x20, 0x30)
FONT_HEIGHT_CODES = (0x00, 0x01, 0x02, 0x03)

QR_VERSION_RANGE = range(0, 20)
QR_ERROR_CORRECTION_RANGE = range(0, 4)
QR_MAGNIFICATION_RANGE = range(1, 9)


def _parse_byte(tag: str, name: str, raw: str) -> int:
    """Parse an integer attribute that is emitted as a single byte."""
    try:
        value = int(raw)
    except ValueError:
        raise InvalidAttribute(tag, name, raw, "not an integer") from None
    if not 0 <= value <= 0xFF:
        raise InvalidAttribute(tag, name, raw, "does not fit in one byte")
    return value


def _lookup(tag: str, name: str, raw: str, table: tuple[int, ...]) -> int:
    try:
        index = int(raw)
    except ValueError:
        raise InvalidAttribute(tag, name, raw, "not an integer") from None
    if not 0 <= index < len(table):
        raise InvalidAttribute(tag, name, raw, f"expected 0..{len(table) - 1}")
    return table[index]


def _parse_indent(raw: str) -> int:
    try:
        indent = int(raw, 10)
    except ValueError:
        return 0
    return max(indent, 0)


@dataclass(frozen=True)
class TextAttributes:
    font: int = 0
    align: int = 0
    font_width: int = 0x00
    font_height: int = 0x00
    bold: bool = False
    base64: bool = False
    indent: int = 0

    @property
    def size(self) -> int:
        """Character size byte: width and height codes summed."""
        return self.font_width + self.font_height

    @classmethod
    def parse(cls, attributes: Mapping[str, str]) -> "TextAttributes":
        values: dict[str, object] = {}
        for key, raw in attributes.items():
            if key == "font":
                values["font"] = _parse_byte("Text", key, raw)
            elif key == "align":
                if raw not in ALIGNMENT_CODES:
                    raise InvalidAttribute("Text", key, raw, "expected left, center or right")
                values["align"] = ALIGNMENT_CODES[raw]
            elif key == "fontWidth":
                values["font_width"] = _lookup("Text", key, raw, FONT_WIDTH_CODES)
            elif key == "fontHeight":
                values["font_height"] = _lookup("Text", key, raw, FONT_HEIGHT_CODES)
            elif key == "bold":
                values["bold"] = raw == "1"
            elif key == "base64":
                values["base64"] = raw == "1"
            elif key == "indent":
                values["indent"] = _parse_indent(raw)
        return cls(**values)


@dataclass(frozen=True)
class QRCodeAttributes:
    version: int = 0
    error_correction_level: int = 0
    magnification: int = 1

    @classmethod
    def parse(cls, attributes: Mapping[str, str]) -> "QRCodeAttributes":
        values: dict[str, int] = {}
        for key, field_name, documented in (
            ("version", "version", QR_VERSION_RANGE),
            ("errorCorrectionLevel", "error_correction_level", QR_ERROR_CORRECTION_RANGE),
            ("magnification", "magnification", QR_MAGNIFICATION_RANGE),
        ):
            if key not in attributes:
                continue
            value = _parse_byte("QRCode", key, attributes[key])
            if value not in documented:
                # Emitted unchanged
                logger.warning(
                    "QRCode %s=%d outside of %d..%d",
                    key,
                    value,
                    documented.start,
                    documented.stop - 1,
                )
            values[field_name] = value
        return cls(**values)
