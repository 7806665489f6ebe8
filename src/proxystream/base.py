"""Abstract base class for sequential byte-input streams."""

from abc import ABC, abstractmethod
from types import TracebackType

from typing_extensions import Self

EOF = -1
"""Returned by reads once no further bytes remain."""

MAX_SKIP_BUFFER_SIZE = 2048


class InputStream(ABC):
    """
    Abstract base class for sequential byte-input streams.

    A stream produces bytes one at a time or in bulk until it is exhausted, at which
    point reads return ``EOF``. Only ``read`` must be implemented; the bulk, skip and
    availability operations have working (if slow) defaults built on top of it.
    """

    @abstractmethod
    def read(self) -> int:
        """
        Read the next byte.

        Returns:
            int: The byte value in the range 0-255, or ``EOF`` at end of data.

        Raises:
            OSError: If the stream cannot be read.
        """
        ...

    def read_into(self, buffer: bytearray, offset: int = 0, length: int | None = None) -> int:
        """
        Read up to ``length`` bytes into ``buffer`` starting at ``offset``.

        Args:
            buffer: Writable destination.
            offset: First index of ``buffer`` to write to.
            length: Maximum number of bytes to read (default: rest of ``buffer``).

        Returns:
            int: Number of bytes stored, 0 if ``length`` is 0, or ``EOF``.

        Raises:
            IndexError: If ``offset``/``length`` fall outside ``buffer``.
            OSError: If the stream cannot be read.
        """
        length = check_range(buffer, offset, length)
        if length == 0:
            return 0

        first = self.read()
        if first == EOF:
            return EOF
        buffer[offset] = first

        count = 1
        while count < length:
            value = self.read()
            if value == EOF:
                break
            buffer[offset + count] = value
            count += 1
        return count

    def skip(self, count: int) -> int:
        """
        Skip over and discard up to ``count`` bytes.

        Args:
            count: Number of bytes to skip. Values <= 0 skip nothing.

        Returns:
            int: Number of bytes actually skipped, never negative.
        """
        if count <= 0:
            return 0

        scratch = bytearray(min(MAX_SKIP_BUFFER_SIZE, count))
        remaining = count
        while remaining > 0:
            read = self.read_into(scratch, 0, min(len(scratch), remaining))
            if read == EOF:
                break
            remaining -= read
        return count - remaining

    def available(self) -> int:
        """Estimate the bytes that can be read without blocking."""
        return 0

    def close(self) -> None:
        """Release any resources held by the stream."""

    def mark(self, read_limit: int) -> None:
        """Mark the current position (unsupported by default)."""

    def reset(self) -> None:
        """Return to the last mark."""
        raise OSError("mark/reset not supported")

    def mark_supported(self) -> bool:
        return False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def check_range(buffer: bytearray, offset: int, length: int | None) -> int:
    """Validate a buffer slice and return its resolved length."""
    if length is None:
        length = len(buffer) - offset
    if offset < 0 or length < 0 or offset + length > len(buffer):
        raise IndexError(
            f"Range [{offset}, {offset} + {length}) out of bounds for length {len(buffer)}"
        )
    return length
