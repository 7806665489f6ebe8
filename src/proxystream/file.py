"""Buffered stream over a random-access local file."""

import logging
import os
from pathlib import Path

from typing_extensions import override

from proxystream.base import EOF, InputStream, check_range

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 8192


class BufferedFileInputStream(InputStream):
    """
    Read a local file through an internal buffer.

    The buffer is refilled from the file on demand, so ``available()`` counts only the
    buffered unread bytes. Skips that fit in the buffer move the buffer cursor; larger
    skips discard the buffer and reposition the file directly.
    """

    def __init__(self, file_path: str | Path, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        """
        Initialize BufferedFileInputStream.

        Args:
            file_path: Path to the local file.
            buffer_size: Size of the internal buffer (default: 8KB).

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is not a file or buffer_size is not positive.
            OSError: If the file cannot be opened.
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if not self.file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")

        try:
            self._file = self.file_path.open("rb", buffering=0)
        except OSError as e:
            logger.exception("Error opening file %s: %s", self.file_path, e)
            raise OSError(f"Failed to open file {self.file_path}: {e}") from e

        self.buffer_size = buffer_size
        self._buffer = bytearray(buffer_size)
        self._pos = 0
        self._limit = 0
        self._closed = False

        logger.info("BufferedFileInputStream opened for: %s", self.file_path)

    def _ensure_open(self) -> None:
        if self._closed:
            raise OSError("Stream closed")

    def _refill(self) -> bool:
        """Refill the buffer if it is drained; False at end of file."""
        if self._pos < self._limit:
            return True
        read = self._file.readinto(self._buffer)
        self._pos, self._limit = 0, read or 0
        return self._limit > 0

    @override
    def read(self) -> int:
        self._ensure_open()
        if not self._refill():
            return EOF
        value = self._buffer[self._pos]
        self._pos += 1
        return value

    @override
    def read_into(self, buffer: bytearray, offset: int = 0, length: int | None = None) -> int:
        self._ensure_open()
        length = check_range(buffer, offset, length)
        if length == 0:
            return 0

        count = 0
        while count < length:
            if not self._refill():
                break
            step = min(length - count, self._limit - self._pos)
            start = offset + count
            buffer[start : start + step] = self._buffer[self._pos : self._pos + step]
            self._pos += step
            count += step
        return count if count > 0 else EOF

    @override
    def skip(self, count: int) -> int:
        self._ensure_open()
        if count <= 0:
            return 0

        buffered = self._limit - self._pos
        if count <= buffered:
            self._pos += count
            return count

        # Drop the buffer and move the file position directly.
        position = self._file.tell()
        size = os.fstat(self._file.fileno()).st_size
        target = min(position + count - buffered, size)
        self._file.seek(target)
        self._pos = self._limit = 0
        logger.debug("Skipped %s to offset %d", self.file_path, target)
        return buffered + max(0, target - position)

    @override
    def available(self) -> int:
        if self._closed:
            return 0
        return self._limit - self._pos

    @override
    def close(self) -> None:
        if self._closed:
            return
        self._file.close()
        self._closed = True
        logger.debug("Closed %s", self.file_path)
