"""Append-only byte accumulator backed by python-escpos' in-memory printer."""

from __future__ import annotations

from escpos.printer import Dummy


class ByteBuffer:
    """Collects raw command chunks and flattens them on demand.

    ``Dummy`` stores every ``_raw()`` write instead of sending it to a device,
    which is exactly the accumulation the encoder needs.
    """

    def __init__(self) -> None:
        self._printer = Dummy()

    def append(self, data: bytes) -> None:
        self._printer._raw(bytes(data))

    def to_bytes(self) -> bytes:
        return self._printer.output

    def __len__(self) -> int:
        return len(self.to_bytes())
