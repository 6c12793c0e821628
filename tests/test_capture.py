"""Tests for capture strategies."""

import io

from vcscore.execution.capture import (
    LineDecoder,
    NullRecordDecoder,
    WholeBufferDecoder,
    create_decoder,
    drain_stream,
)
from vcscore.models.result import CaptureMode


class ChunkedStream:
    """Binary stream that returns pre-split chunks from read1."""

    def __init__(self, chunks: list[bytes]):
        self._chunks = list(chunks)

    def read1(self, size: int = -1) -> bytes:
        return self._chunks.pop(0) if self._chunks else b""


class BrokenStream:
    """Stream that fails like a pipe closed by a killed process."""

    def __init__(self, first: bytes):
        self._first = first

    def read1(self, size: int = -1) -> bytes:
        if self._first:
            data, self._first = self._first, b""
            return data
        raise ValueError("I/O operation on closed file")


def _drain(stream, mode: CaptureMode) -> list[str]:
    units: list[str] = []
    drain_stream(stream, mode, units.append)
    return units


def test_line_decoder_splits_on_lf_and_cr():
    """Test both newline and carriage return end a line."""
    decoder = LineDecoder()
    assert decoder.feed(b"one\ntwo\rthree") == ["one", "two"]
    assert decoder.flush() == ["three"]


def test_line_decoder_drops_empty_lines():
    """Test CRLF and blank lines produce no empty units."""
    decoder = LineDecoder()
    assert decoder.feed(b"a\r\n\nb\r\n") == ["a", "b"]
    assert decoder.flush() == []


def test_line_decoder_joins_lines_across_chunks():
    """Test a line split across reads is emitted once."""
    assert _drain(ChunkedStream([b"hel", b"lo\nwor", b"ld"]), CaptureMode.TEXT_LINES) == [
        "hello",
        "world",
    ]


def test_line_decoder_multibyte_character_across_chunks():
    """Test UTF-8 sequences split across reads decode correctly."""
    data = "café\n".encode("utf-8")
    assert _drain(ChunkedStream([data[:4], data[4:]]), CaptureMode.TEXT_LINES) == ["café"]


def test_null_record_decoder():
    """Test NUL-delimited records, dropping empty ones."""
    decoder = NullRecordDecoder()
    assert decoder.feed(b"## main\x00M  a.txt\x00\x00R  new") == ["## main", "M  a.txt"]
    assert decoder.feed(b".txt\x00old.txt") == ["R  new.txt"]
    assert decoder.flush() == ["old.txt"]


def test_null_record_decoder_keeps_newlines():
    """Test newlines inside a record are preserved."""
    assert _drain(ChunkedStream([b"a\nb\x00"]), CaptureMode.NULL_RECORDS) == ["a\nb"]


def test_whole_buffer_decoder_emits_once():
    """Test the whole stream becomes a single unit."""
    decoder = WholeBufferDecoder()
    assert decoder.feed(b"line 1\n") == []
    assert decoder.feed(b"line 2\n") == []
    assert decoder.flush() == ["line 1\nline 2\n"]


def test_whole_buffer_decoder_empty_stream():
    """Test an empty stream yields no unit."""
    assert _drain(io.BytesIO(b""), CaptureMode.TEXT_WHOLE) == []


def test_create_decoder_per_mode():
    """Test each capture mode maps to its decoder."""
    assert isinstance(create_decoder(CaptureMode.TEXT_LINES), LineDecoder)
    assert isinstance(create_decoder(CaptureMode.NULL_RECORDS), NullRecordDecoder)
    assert isinstance(create_decoder(CaptureMode.TEXT_WHOLE), WholeBufferDecoder)


def test_drain_stream_reads_bytes_io():
    """Test draining a real buffered stream."""
    assert _drain(io.BytesIO(b"x\ny\n"), CaptureMode.TEXT_LINES) == ["x", "y"]


def test_drain_stream_treats_io_error_as_eof():
    """Test a stream closed mid-read still flushes what was buffered."""
    assert _drain(BrokenStream(b"partial"), CaptureMode.TEXT_LINES) == ["partial"]
