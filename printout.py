#!/usr/bin/env python3
"""Render Printout markup into a raw ESC/POS byte stream.

Usage examples (from project root, with venv activated):

  python printout.py receipt.xml -o receipt.bin
      → encodes receipt.xml with the options from config.py / .env.

  python printout.py receipt.xml --cut --tailing-line > /dev/usb/lp0
      → encodes and writes the bytes to stdout.

  cat receipt.xml | python printout.py - --encoding cp866 --codepage 17
      → reads markup from stdin.

Delivering the bytes to a printer is left to the caller (shell redirection,
``lp -o raw``, a socket...).
"""

from __future__ import annotations

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import config
from encoder import encode_markup
from errors import PrintoutError

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Rotating file logging under config.LOG_DIR."""
    log_dir = Path(config.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "printout.log",
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(handlers=[handler], level=getattr(logging, config.LOG_LEVEL, logging.INFO))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Encode Printout markup into ESC/POS commands")
    parser.add_argument(
        "markup",
        nargs="?",
        default="-",
        help="Markup file to encode ('-' or omitted: read stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write bytes to this file instead of stdout",
    )
    parser.add_argument(
        "--cut",
        action=argparse.BooleanOptionalAction,
        default=config.CUT,
        help="Cut paper after printing",
    )
    parser.add_argument(
        "--beep",
        action=argparse.BooleanOptionalAction,
        default=config.BEEP,
        help="Beep after printing",
    )
    parser.add_argument(
        "--tailing-line",
        action=argparse.BooleanOptionalAction,
        default=config.TAILING_LINE,
        help="Feed four blank lines after printing",
    )
    parser.add_argument(
        "--encoding",
        default=config.ENCODING,
        help=f"Text encoding (default: {config.ENCODING})",
    )
    parser.add_argument(
        "--codepage",
        type=int,
        default=config.CODEPAGE,
        help=f"Printer codepage number (default: {config.CODEPAGE})",
    )
    parser.add_argument(
        "--col-width",
        type=int,
        default=config.COL_WIDTH,
        help=f"Characters per line (default: {config.COL_WIDTH})",
    )
    return parser


def _read_markup(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _write_output(data: bytes, target: str | None) -> None:
    if target is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        Path(target).write_bytes(data)


def main(argv: list[str] | None = None) -> int:
    """Parse args, encode markup and write the command stream."""
    args = build_parser().parse_args(argv)
    options = {
        "cut": args.cut,
        "beep": args.beep,
        "tailing_line": args.tailing_line,
        "encoding": args.encoding,
        "codepage": args.codepage,
        "col_width": args.col_width,
    }

    try:
        markup = _read_markup(args.markup)
    except OSError as e:
        logger.error("Cannot read markup %s: %s", args.markup, e)
        print(f"printout: cannot read {args.markup}: {e}", file=sys.stderr)
        return 1

    try:
        data = encode_markup(markup, options)
    except PrintoutError as e:
        logger.error("Encoding failed for %s: %s", args.markup, e)
        print(f"printout: {e}", file=sys.stderr)
        return 1

    if not data:
        logger.warning("%s has no <Printout> root, nothing written", args.markup)

    try:
        _write_output(data, args.output)
    except OSError as e:
        logger.error("Cannot write output %s: %s", args.output, e)
        print(f"printout: cannot write {args.output}: {e}", file=sys.stderr)
        return 1

    logger.info("Encoded %s: %d bytes", args.markup, len(data))
    return 0


def run() -> None:
    """Console script entry point."""
    setup_logging()
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
