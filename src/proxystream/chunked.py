"""Stream over an iterator of byte chunks."""

from collections.abc import Iterator
import logging
from pathlib import Path

from typing_extensions import override

from proxystream.base import EOF, InputStream, check_range

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 16777216


class ChunkedInputStream(InputStream):
    """
    Wraps an iterator of byte chunks as a sequential input stream.

    Chunks are pulled lazily, only when the buffered bytes run out, so
    ``available()`` reports what has already been pulled and is 0 until the first read.
    The source cannot be repositioned: skipping consumes chunks.
    """

    def __init__(self, chunks: Iterator[bytes]) -> None:
        self.chunks = chunks
        self.buffer: bytes = b""
        self._pos = 0
        self._exhausted = False
        self._closed = False

    @classmethod
    def from_path(
        cls, file_path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> "ChunkedInputStream":
        """
        Stream a local file in chunks.

        Args:
            file_path: Path to the local file.
            chunk_size: Size of chunks to read (default: 16MB).

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is not a file or chunk_size is not positive.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if not path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")

        logger.info("ChunkedInputStream opened for: %s", path)
        return cls(_iter_file(path, chunk_size))

    def _fill(self) -> bool:
        """Pull chunks until unread bytes are buffered; False once exhausted."""
        if self._closed:
            raise OSError("Stream closed")
        while self._pos >= len(self.buffer):
            if self._exhausted:
                return False
            try:
                chunk = next(self.chunks)
            except StopIteration:
                self._exhausted = True
                return False
            self.buffer, self._pos = chunk, 0
        return True

    @override
    def read(self) -> int:
        if not self._fill():
            return EOF
        value = self.buffer[self._pos]
        self._pos += 1
        return value

    @override
    def read_into(self, buffer: bytearray, offset: int = 0, length: int | None = None) -> int:
        length = check_range(buffer, offset, length)
        if length == 0:
            return 0
        if not self._fill():
            return EOF

        count = min(length, len(self.buffer) - self._pos)
        buffer[offset : offset + count] = self.buffer[self._pos : self._pos + count]
        self._pos += count
        return count

    @override
    def skip(self, count: int) -> int:
        skipped = 0
        while skipped < count and self._fill():
            step = min(count - skipped, len(self.buffer) - self._pos)
            self._pos += step
            skipped += step
        return skipped

    @override
    def available(self) -> int:
        if self._closed:
            return 0
        return len(self.buffer) - self._pos

    @override
    def close(self) -> None:
        if self._closed:
            return
        close = getattr(self.chunks, "close", None)
        if close is not None:
            close()
        self.buffer, self._pos = b"", 0
        self._closed = True


def _iter_file(path: Path, chunk_size: int) -> Iterator[bytes]:
    try:
        with path.open("rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                yield chunk
    except OSError as e:
        logger.exception("Error reading file %s: %s", path, e)
        raise OSError(f"Failed to read file {path}: {e}") from e
