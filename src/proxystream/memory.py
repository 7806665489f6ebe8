"""In-memory stream implementation."""

from typing_extensions import override

from proxystream.base import EOF, InputStream, check_range


class ByteArrayInputStream(InputStream):
    """Stream over an in-memory ``bytes`` buffer. Closing it has no effect."""

    def __init__(self, data: bytes, offset: int = 0, length: int | None = None) -> None:
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        if length is None:
            length = max(0, len(data) - offset)
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")

        self.data = bytes(data)
        self._pos = min(offset, len(self.data))
        self._end = min(offset + length, len(self.data))
        self._mark = self._pos

    @override
    def read(self) -> int:
        if self._pos >= self._end:
            return EOF
        value = self.data[self._pos]
        self._pos += 1
        return value

    @override
    def read_into(self, buffer: bytearray, offset: int = 0, length: int | None = None) -> int:
        length = check_range(buffer, offset, length)
        if length == 0:
            return 0
        if self._pos >= self._end:
            return EOF

        count = min(length, self._end - self._pos)
        buffer[offset : offset + count] = self.data[self._pos : self._pos + count]
        self._pos += count
        return count

    @override
    def skip(self, count: int) -> int:
        skipped = max(0, min(count, self._end - self._pos))
        self._pos += skipped
        return skipped

    @override
    def available(self) -> int:
        return self._end - self._pos

    @override
    def mark(self, read_limit: int) -> None:
        self._mark = self._pos

    @override
    def reset(self) -> None:
        self._pos = self._mark

    @override
    def mark_supported(self) -> bool:
        return True
