"""Exceptions raised while turning Printout markup into ESC/POS bytes."""

from __future__ import annotations


class PrintoutError(Exception):
    """Base class for all printout encoding failures."""


class InvalidAttribute(PrintoutError, ValueError):
    """Attribute value is malformed or has no entry in a lookup table."""

    def __init__(self, tag: str, attribute: str, value: str, reason: str = "") -> None:
        self.tag = tag
        self.attribute = attribute
        self.value = value
        message = f"Invalid value {value!r} for attribute {attribute!r} of <{tag}>"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidEncoding(PrintoutError, ValueError):
    """Payload could not be decoded (e.g. malformed base64)."""


class UnsupportedEncoding(InvalidEncoding, LookupError):
    """Text encoding name is unknown to the codec registry."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"Unsupported text encoding: {encoding!r}")


class InvalidOption(PrintoutError, ValueError):
    """Print option value is out of its allowed range."""


class MarkupError(PrintoutError, ValueError):
    """Markup text is not well-formed."""
