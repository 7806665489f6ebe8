"""Reusable contract tests for InputStream implementations.

Subclass ``StreamContract`` in a ``test_*`` module and implement ``open_streams`` to
run every check below against the streams it returns. Each stream must be opened over
a file holding ``PAYLOAD_SIZE`` random bytes and must not read ahead before the first
read call, so that ``available()`` starts at 0.
"""

from collections.abc import Iterator
import os
from pathlib import Path
import tempfile

import pytest

from proxystream.base import EOF, InputStream
from proxystream.utils import close_quietly, consume

ARRAY_LENGTHS = [0, 1, 2, 4, 8, 16, 32, 64, 128]


def read_one_by_one(stream: InputStream, count: int) -> bytes:
    """Read ``count`` bytes through single-byte reads, failing on early EOF."""
    values = bytearray()
    for _ in range(count):
        value = stream.read()
        assert value != EOF, f"unexpected EOF after {len(values)} bytes"
        values.append(value)
    return bytes(values)


class StreamContract:
    """Contract every sequential input stream must satisfy."""

    PAYLOAD_SIZE = 2 * 1024 * 1024

    def open_streams(self, path: Path, payload: bytes) -> list[InputStream]:
        """Open the streams under test over ``path``, whose content is ``payload``."""
        raise NotImplementedError

    @pytest.fixture
    def payload(self) -> bytes:
        return os.urandom(self.PAYLOAD_SIZE)

    @pytest.fixture
    def streams(self, payload: bytes) -> Iterator[list[InputStream]]:
        with tempfile.NamedTemporaryFile(mode="wb", delete=False, suffix=".tmp") as f:
            f.write(payload)
            temp_path = Path(f.name)

        opened = self.open_streams(temp_path, payload)
        try:
            yield opened
        finally:
            close_quietly(*opened)
            temp_path.unlink()

    def test_available_after_close(self, streams: list[InputStream]) -> None:
        """Test that available() is 0 once the stream is closed."""
        for stream in streams:
            stream.close()
            assert stream.available() == 0

    def test_available_after_open(self, streams: list[InputStream]) -> None:
        """Test that available() is 0 before the first read."""
        for stream in streams:
            assert stream.available() == 0

    def test_available_after_read(self, streams: list[InputStream]) -> None:
        """Test that available() is positive after reading one byte."""
        for stream in streams:
            assert stream.read() != EOF
            assert stream.available() > 0

    def test_available_at_end(self, streams: list[InputStream]) -> None:
        """Test that available() is 0 at end of data."""
        for stream in streams:
            consume(stream)
            assert stream.available() == 0

    def test_bytes_skipped(self, streams: list[InputStream], payload: bytes) -> None:
        """Test skipping from the start and reading the remainder."""
        for stream in streams:
            assert stream.skip(1024) == 1024
            assert read_one_by_one(stream, len(payload) - 1024) == payload[1024:]

    def test_bytes_skipped_after_eof(self, streams: list[InputStream], payload: bytes) -> None:
        """Test that skipping past the end clamps to the remaining length."""
        for stream in streams:
            assert stream.skip(len(payload) + 1) == len(payload)
            assert stream.read() == EOF

    def test_bytes_skipped_after_read(self, streams: list[InputStream], payload: bytes) -> None:
        """Test skipping after some bytes have been read."""
        for stream in streams:
            assert read_one_by_one(stream, 1024) == payload[:1024]
            assert stream.skip(1024) == 1024
            assert read_one_by_one(stream, len(payload) - 2048) == payload[2048:]

    def test_negative_bytes_skipped_after_read(
        self, streams: list[InputStream], payload: bytes
    ) -> None:
        """Test that negative skips are no-ops."""
        for stream in streams:
            assert read_one_by_one(stream, 1024) == payload[:1024]
            assert stream.skip(-1) == 0
            assert stream.skip(-1024) == 0
            assert stream.skip(-(2**63)) == 0
            assert stream.skip(1024) == 1024
            assert read_one_by_one(stream, len(payload) - 2048) == payload[2048:]

    def test_read_multiple_bytes(self, streams: list[InputStream], payload: bytes) -> None:
        """Test bulk reads reproduce the payload."""
        for stream in streams:
            buffer = bytearray(8 * 1024)
            received = bytearray()
            while True:
                read = stream.read_into(buffer, 0, 8 * 1024)
                if read == EOF:
                    break
                received += buffer[:read]
            assert bytes(received) == payload

    def test_read_one_byte(self, streams: list[InputStream], payload: bytes) -> None:
        """Test single-byte reads reproduce the payload."""
        for stream in streams:
            assert read_one_by_one(stream, len(payload)) == payload
            assert stream.read() == EOF

    @pytest.mark.parametrize("length", ARRAY_LENGTHS)
    def test_read_at_offset(
        self, streams: list[InputStream], payload: bytes, length: int
    ) -> None:
        """Test bulk reads land in the requested slice of the buffer."""
        for stream in streams:
            position = 0
            for _ in range(16):
                buffer = bytearray(length + 4)
                read = stream.read_into(buffer, 2, length)
                if length == 0:
                    assert read == 0
                    continue
                assert 0 < read <= length
                assert buffer[2 : 2 + read] == payload[position : position + read]
                assert buffer[:2] == b"\x00\x00"
                assert not any(buffer[2 + read :])
                position += read
            assert stream.read() == payload[position]

    def test_read_past_eof(self, streams: list[InputStream]) -> None:
        """Test that reads after end of data keep returning EOF."""
        stream = streams[0]
        buffer = bytearray(1024)
        while stream.read_into(buffer, 0, len(buffer)) != EOF:
            pass

        assert stream.read_into(buffer, 0, len(buffer)) == EOF
        assert stream.read_into(buffer, 0, len(buffer)) == EOF
        assert stream.read() == EOF
        assert stream.read() == EOF

    def test_skip_from_medium(self, streams: list[InputStream], payload: bytes) -> None:
        """Test skips both within the read buffer and beyond it."""
        for stream in streams:
            assert stream.skip(1024) == 1024
            assert read_one_by_one(stream, 1024) == payload[1024:2048]
            assert stream.skip(256) == 256
            assert stream.skip(256) == 256
            assert stream.skip(512) == 512
            assert read_one_by_one(stream, len(payload) - 3072) == payload[3072:]
