"""Text to bytes conversion for the printer's configured encoding.

Encoding names follow the iconv conventions used by receipt templates:
``UTF8``, ``CP866``, ``ISO-8859-1``, ``win1251``... Python's codec registry
already handles case and punctuation; the Windows codepage spellings
(``win1251``, ``windows1251``) are added through a codec search function.
"""

from __future__ import annotations

import codecs
import logging
import re

from errors import UnsupportedEncoding

logger = logging.getLogger(__name__)

_WINDOWS_CODEPAGE = re.compile(r"win(?:dows)?_?(\d{3,4})")


def _search_windows_codepage(name: str) -> codecs.CodecInfo | None:
    """Codec search function mapping ``win1251`` style names to ``cp1251``."""
    match = _WINDOWS_CODEPAGE.fullmatch(name)
    if match is None:
        return None
    try:
        return codecs.lookup(f"cp{match.group(1)}")
    except LookupError:
        return None


codecs.register(_search_windows_codepage)


def lookup(encoding: str) -> codecs.CodecInfo:
    """Return codec info for an encoding name.

    Raises:
        UnsupportedEncoding: the name is unknown.
    """
    try:
        return codecs.lookup(encoding)
    except (LookupError, TypeError) as e:
        logger.error("Unknown text encoding: %r", encoding)
        raise UnsupportedEncoding(encoding) from e


def is_supported(encoding: str) -> bool:
    try:
        lookup(encoding)
    except UnsupportedEncoding:
        return False
    return True


def encode(text: str, encoding: str) -> bytes:
    """Encode text; characters missing from the codepage become ``?``."""
    codec = lookup(encoding)
    data, _ = codec.encode(text, "replace")
    return data
