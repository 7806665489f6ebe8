"""Helpers for draining, copying and closing streams."""

import logging
from typing import BinaryIO

from proxystream.base import EOF, InputStream

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 8192


def copy(
    stream: InputStream,
    output: BinaryIO,
    buffer_size: int = COPY_BUFFER_SIZE,
    limit: int | None = None,
) -> int:
    """
    Copy the rest of ``stream`` to ``output``.

    Args:
        stream: Source stream; read until EOF.
        output: Binary writable destination.
        buffer_size: Size of the transfer buffer.
        limit: Maximum number of bytes to copy (default: no limit).

    Returns:
        int: Number of bytes copied.
    """
    if buffer_size < 1:
        raise ValueError("buffer_size must be positive")

    buffer = bytearray(buffer_size)
    total = 0
    while limit is None or total < limit:
        wanted = buffer_size if limit is None else min(buffer_size, limit - total)
        read = stream.read_into(buffer, 0, wanted)
        if read == EOF:
            break
        output.write(buffer[:read])
        total += read
    return total


def consume(stream: InputStream) -> int:
    """Read ``stream`` to EOF, discarding the data. Returns the byte count."""
    buffer = bytearray(COPY_BUFFER_SIZE)
    total = 0
    while True:
        read = stream.read_into(buffer)
        if read == EOF:
            return total
        total += read


def to_bytes(stream: InputStream) -> bytes:
    """Read the rest of ``stream`` into memory."""
    chunks = bytearray()
    buffer = bytearray(COPY_BUFFER_SIZE)
    while True:
        read = stream.read_into(buffer)
        if read == EOF:
            return bytes(chunks)
        chunks += buffer[:read]


def close_quietly(*streams: InputStream | None) -> None:
    """Close each stream, logging rather than raising failures."""
    for stream in streams:
        if stream is None:
            continue
        try:
            stream.close()
        except OSError as e:
            logger.warning("Error closing %r: %s", stream, e)
