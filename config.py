"""Configuration module - loads settings from the environment and .env file."""

import logging
import os

from dotenv import load_dotenv

# Must load .env before reading any variables; the file is optional
load_dotenv()

logger = logging.getLogger(__name__)


def _parse_bool(value: str | None) -> bool:
    """Parse string to bool; default False for missing/invalid."""
    if not value:
        return False
    return value.strip().lower() in ("true", "1", "yes", "on")


def _parse_int(key: str, default: int) -> int:
    """Parse integer env var; log warning and use default if invalid."""
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError:
        logger.warning("Invalid integer for %s in .env: %r, using %d", key, value, default)
        return default


# Text encoding used for every text run (iconv style names: UTF8, CP866, win1251)
ENCODING: str = os.getenv("ENCODING", "UTF8").strip()
# Numeric codepage sent with ESC t
CODEPAGE: int = _parse_int("CODEPAGE", 0)
# Characters per line; drives two-column text and Line rules
COL_WIDTH: int = _parse_int("COL_WIDTH", 32)

# Trailing actions appended after the document
CUT: bool = _parse_bool(os.getenv("CUT", "false"))
BEEP: bool = _parse_bool(os.getenv("BEEP", "false"))
TAILING_LINE: bool = _parse_bool(os.getenv("TAILING_LINE", "false"))

LOG_DIR: str = os.getenv("LOG_DIR", "logs").strip()
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
