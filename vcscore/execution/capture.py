"""Capture strategies that turn a raw byte stream into output units.

Each decoder receives bytes through ``feed`` as they arrive and returns the
units completed so far; ``flush`` is called once at end of stream and
returns whatever non-empty fragment is still buffered.
"""

import logging
from typing import BinaryIO, Callable, Protocol

from vcscore.constants import READ_CHUNK_SIZE
from vcscore.models.result import CaptureMode

logger = logging.getLogger(__name__)


def _decode(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


class OutputDecoder(Protocol):
    """Protocol for stream decoders."""

    def feed(self, data: bytes) -> list[str]:
        ...

    def flush(self) -> list[str]:
        ...


class LineDecoder:
    """Split on ``\\n`` or ``\\r``; empty lines are dropped."""

    def __init__(self):
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[str]:
        units = []
        for value in data:
            if value in (0x0A, 0x0D):
                self._emit(units)
            else:
                self._buffer.append(value)
        return units

    def flush(self) -> list[str]:
        units: list[str] = []
        self._emit(units)
        return units

    def _emit(self, units: list[str]) -> None:
        line = _decode(self._buffer)
        self._buffer.clear()
        if line:
            units.append(line)


class NullRecordDecoder:
    """Split on NUL bytes; empty records are dropped."""

    def __init__(self):
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[str]:
        units = []
        start = 0
        while True:
            index = data.find(b"\x00", start)
            if index == -1:
                self._buffer.extend(data[start:])
                break
            self._buffer.extend(data[start:index])
            self._emit(units)
            start = index + 1
        return units

    def flush(self) -> list[str]:
        units: list[str] = []
        self._emit(units)
        return units

    def _emit(self, units: list[str]) -> None:
        record = _decode(self._buffer)
        self._buffer.clear()
        if record:
            units.append(record)


class WholeBufferDecoder:
    """Accumulate everything and emit a single unit at end of stream."""

    def __init__(self):
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[str]:
        self._buffer.extend(data)
        return []

    def flush(self) -> list[str]:
        if not self._buffer:
            return []
        text = _decode(self._buffer)
        self._buffer.clear()
        return [text]


def create_decoder(mode: CaptureMode) -> OutputDecoder:
    """Get a fresh decoder for a capture mode."""
    if mode == CaptureMode.NULL_RECORDS:
        return NullRecordDecoder()
    if mode == CaptureMode.TEXT_WHOLE:
        return WholeBufferDecoder()
    return LineDecoder()


def drain_stream(
    stream: BinaryIO, mode: CaptureMode, on_unit: Callable[[str], None]
) -> None:
    """
    Read a stream to EOF, passing each decoded unit to ``on_unit``.

    I/O errors mean the process was destroyed underneath us and are treated
    as end of stream.

    Args:
        stream: Binary stream (a process's stdout or stderr pipe)
        mode: Capture mode selecting the decoder
        on_unit: Callback invoked in stream order for every unit
    """
    decoder = create_decoder(mode)
    try:
        while True:
            chunk = stream.read1(READ_CHUNK_SIZE)
            if not chunk:
                break
            for unit in decoder.feed(chunk):
                on_unit(unit)
    except (OSError, ValueError) as e:
        logger.debug(f"Stream closed while draining: {e}")

    for unit in decoder.flush():
        on_unit(unit)
