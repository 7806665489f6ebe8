"""Forwarding decorator over an InputStream."""

from collections.abc import Callable
import logging

from typing_extensions import override

from proxystream.base import EOF, InputStream

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[OSError], None]


def rethrow(error: OSError) -> None:
    """Default error strategy: re-raise the failure unchanged."""
    raise error


def log_and_rethrow(log: logging.Logger) -> ErrorHandler:
    """Build a strategy that logs the failure before re-raising it."""

    def handler(error: OSError) -> None:
        log.warning("I/O failure in proxied stream: %s", error)
        raise error

    return handler


def suppress_and_log(log: logging.Logger) -> ErrorHandler:
    """Build a strategy that logs the failure and swallows it."""

    def handler(error: OSError) -> None:
        log.warning("Suppressed I/O failure in proxied stream: %s", error)

    return handler


class ProxyInputStream(InputStream):
    """
    Stream that forwards every operation to an underlying stream.

    The underlying stream may be absent, in which case the proxy behaves as an empty
    stream, and it can be replaced at any time with ``rebind``. Every ``OSError`` raised
    by a forwarded read, skip, reset or close goes through ``handle_error``; subclasses
    override it (or pass ``on_error``) to translate, log or suppress failures. When the
    handler returns normally the operation reports ``EOF`` (reads) or 0 (skip).

    ``before_read`` and ``after_read`` bracket every forwarded read and are the seams
    for counting or filtering subclasses.
    """

    def __init__(self, underlying: InputStream | None, on_error: ErrorHandler = rethrow) -> None:
        """
        Initialize ProxyInputStream.

        Args:
            underlying: Stream to forward to, or None for no source.
            on_error: Strategy invoked by ``handle_error`` (default: re-raise).
        """
        self._underlying = underlying
        self._on_error = on_error
        self._closed = False

    @property
    def closed(self) -> bool:
        """True once the stream has been closed successfully."""
        return self._closed

    def unwrap(self) -> InputStream | None:
        """Return the currently bound underlying stream."""
        return self._underlying

    def rebind(self, underlying: InputStream | None) -> None:
        """Replace the underlying stream."""
        logger.debug("Rebinding %s to %r", type(self).__name__, underlying)
        self._underlying = underlying

    def handle_error(self, error: OSError) -> None:
        """
        Intercept an I/O failure raised by the underlying stream.

        Args:
            error: The failure raised by the underlying stream.

        Raises:
            OSError: Unless the configured strategy suppresses it.
        """
        self._on_error(error)

    def before_read(self, count: int) -> None:
        """Called with the number of bytes requested before each read."""

    def after_read(self, count: int) -> None:
        """Called with the result of each read: bytes read, or ``EOF``."""

    @override
    def read(self) -> int:
        if self._underlying is None or self._closed:
            return EOF
        try:
            self.before_read(1)
            value = self._underlying.read()
            self.after_read(1 if value != EOF else EOF)
            return value
        except OSError as e:
            self.handle_error(e)
            return EOF

    @override
    def read_into(self, buffer: bytearray, offset: int = 0, length: int | None = None) -> int:
        requested = len(buffer) - offset if length is None else length
        if self._underlying is None or self._closed:
            return 0 if requested == 0 else EOF
        try:
            self.before_read(requested)
            count = self._underlying.read_into(buffer, offset, length)
            self.after_read(count)
            return count
        except OSError as e:
            self.handle_error(e)
            return EOF

    @override
    def skip(self, count: int) -> int:
        if count <= 0 or self._underlying is None:
            return 0
        try:
            return max(0, self._underlying.skip(count))
        except OSError as e:
            self.handle_error(e)
            return 0

    @override
    def available(self) -> int:
        if self._underlying is None or self._closed:
            return 0
        return self._underlying.available()

    @override
    def close(self) -> None:
        if self._closed:
            return
        if self._underlying is not None:
            try:
                self._underlying.close()
            except OSError as e:
                self.handle_error(e)
        self._closed = True
        logger.debug("Closed %s", type(self).__name__)

    @override
    def mark(self, read_limit: int) -> None:
        if self._underlying is not None and not self._closed:
            self._underlying.mark(read_limit)

    @override
    def reset(self) -> None:
        if self._underlying is None:
            raise OSError("mark/reset not supported")
        if self._closed:
            raise OSError("Stream closed")
        try:
            self._underlying.reset()
        except OSError as e:
            self.handle_error(e)

    @override
    def mark_supported(self) -> bool:
        if self._underlying is None or self._closed:
            return False
        return self._underlying.mark_supported()
