"""Printout markup to ESC/POS command encoder.

Walks the direct children of a ``<Printout>`` root and emits, in order:

- codepage preamble: ``ESC t n`` followed by ``FS &`` (codepage 0) or ``FS .``
- per node: ``Text``, ``NewLine``, ``Line`` or ``QRCode`` commands
- trailing options: cut, beep, tailing blank lines (that order)
- ``ESC @`` to reset the printer

A document whose root is not ``<Printout>`` encodes to ``b""``.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Callable, Dict, Tuple, Union

from escpos.constants import CODEPAGE_CHANGE, CTL_LF, ESC, FS, GS, HW_INIT

import text_encoding
from attributes import QRCodeAttributes, TextAttributes
from byte_buffer import ByteBuffer
from errors import InvalidEncoding
from markup import Document, Node, parse_markup
from print_options import OptionsLike, PrintOptions, merge_options

logger = logging.getLogger(__name__)

KANJI_MODE_ON = FS + b"&"
KANJI_MODE_OFF = FS + b"."
CHARACTER_SIZE = GS + b"!"
EMPHASIS = ESC + b"E"
JUSTIFICATION = ESC + b"a"
FONT_SELECT = ESC + b"M"
QR_CODE = ESC + b"Z"

# Order is part of the output format
TRAILING_OPTIONS: Tuple[Tuple[str, bytes], ...] = (
    ("cut", ESC + b"i"),
    ("beep", ESC + b"B\x03\x02"),
    ("tailing_line", CTL_LF * 4),
)

COLUMN_DELIMITER = "|"
DEFAULT_LINE_CHAR = "-"


def layout_columns(text: str, col_width: int) -> str:
    """Justify ``left|right`` so that ``right`` ends at ``col_width``.

    Text without exactly one delimiter is returned unchanged. At least one
    space always separates both sides.
    """
    parts = text.split(COLUMN_DELIMITER)
    if len(parts) != 2:
        return text
    left, right = (part.strip() for part in parts)
    space_count = max(col_width - len(left) - len(right), 1)
    return left + " " * space_count + right


def decode_base64(value: str) -> str:
    """Decode a base64 text payload, line-wrapped (MIME) form included."""
    payload = "".join(value.split())
    try:
        return base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise InvalidEncoding(f"Invalid base64 text payload: {e}") from e


class CommandEncoder:
    """Encode a parsed Printout document into printer commands.

    Stateless between calls; every ``encode()`` uses its own buffer.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Callable[[Node, ByteBuffer, PrintOptions], None]] = {
            "Text": self._add_text,
            "NewLine": self._add_new_line,
            "QRCode": self._add_qr_code,
            "Line": self._add_line,
        }

    def encode(self, document: Union[Document, Node], options: OptionsLike = None) -> bytes:
        options = merge_options(options)
        root = document.root if isinstance(document, Document) else document
        buffer = ByteBuffer()

        if root.tag != "Printout":
            logger.info("Root element is <%s>, expected <Printout>; nothing to print", root.tag)
            return buffer.to_bytes()

        self._set_codepage(buffer, options)

        for node in root.children:
            handler = self._handlers.get(node.tag)
            if handler is None:
                logger.debug("Skipping unknown element <%s>", node.tag)
                continue
            handler(node, buffer, options)

        self._add_print_options(buffer, options)
        buffer.append(HW_INIT)

        data = buffer.to_bytes()
        logger.debug("Encoded %d elements into %d bytes", len(root.children), len(data))
        return data

    @staticmethod
    def _set_codepage(buffer: ByteBuffer, options: PrintOptions) -> None:
        buffer.append(CODEPAGE_CHANGE + bytes((options.codepage,)))
        buffer.append(KANJI_MODE_ON if options.codepage == 0 else KANJI_MODE_OFF)

    @staticmethod
    def _add_new_line(node: Node, buffer: ByteBuffer, options: PrintOptions) -> None:
        buffer.append(text_encoding.encode("\n", options.encoding))

    @staticmethod
    def _add_text(node: Node, buffer: ByteBuffer, options: PrintOptions) -> None:
        attrs = TextAttributes.parse(node.attributes)

        text = node.value
        if attrs.base64:
            text = decode_base64(text)
        if attrs.indent:
            text = " " * attrs.indent + text
        text = layout_columns(text, options.col_width)

        buffer.append(
            CHARACTER_SIZE + bytes((attrs.size,))
            + EMPHASIS + bytes((int(attrs.bold),))
            + JUSTIFICATION + bytes((attrs.align,))
            + FONT_SELECT + bytes((attrs.font,))
        )
        buffer.append(text_encoding.encode(text, options.encoding))

    @staticmethod
    def _add_line(node: Node, buffer: ByteBuffer, options: PrintOptions) -> None:
        line_char = node.attributes.get("lineChar") or DEFAULT_LINE_CHAR
        buffer.append(text_encoding.encode(line_char * options.col_width, options.encoding))
        buffer.append(text_encoding.encode("\n", options.encoding))

    @staticmethod
    def _add_qr_code(node: Node, buffer: ByteBuffer, options: PrintOptions) -> None:
        """Emit ESC Z with the payload.

        The length field counts characters of the payload, not encoded bytes;
        with multi-byte encodings only ASCII payloads keep both in step.
        """
        attrs = QRCodeAttributes.parse(node.attributes)
        data = node.value
        length = len(data) & 0xFFFF

        buffer.append(
            QR_CODE
            + bytes(
                (
                    attrs.version,
                    attrs.error_correction_level,
                    attrs.magnification,
                    length & 0xFF,
                    length >> 8,
                )
            )
        )
        buffer.append(text_encoding.encode(data, options.encoding))

    @staticmethod
    def _add_print_options(buffer: ByteBuffer, options: PrintOptions) -> None:
        for name, command in TRAILING_OPTIONS:
            if getattr(options, name):
                buffer.append(command)


def encode(document: Union[Document, Node], options: OptionsLike = None) -> bytes:
    """Encode a parsed document with a throwaway encoder."""
    return CommandEncoder().encode(document, options)


def encode_markup(markup: Union[str, bytes], options: OptionsLike = None) -> bytes:
    """Parse Printout markup text and encode it."""
    return encode(parse_markup(markup), options)
