"""Stream that fails on every operation."""

from collections.abc import Callable

from typing_extensions import override

from proxystream.base import InputStream


class BrokenInputStream(InputStream):
    """
    Stream whose every operation raises the same error.

    Useful for exercising the failure paths of code that consumes streams.
    """

    def __init__(self, error: OSError | Callable[[], OSError] | None = None) -> None:
        """
        Initialize BrokenInputStream.

        Args:
            error: Error instance, or a zero-argument factory producing one
                (default: ``OSError("Broken input stream")``).
        """
        if error is None:
            error = OSError("Broken input stream")
        elif callable(error) and not isinstance(error, BaseException):
            error = error()
        self.error: OSError = error

    @override
    def read(self) -> int:
        raise self.error

    @override
    def read_into(self, buffer: bytearray, offset: int = 0, length: int | None = None) -> int:
        raise self.error

    @override
    def skip(self, count: int) -> int:
        raise self.error

    @override
    def available(self) -> int:
        raise self.error

    @override
    def reset(self) -> None:
        raise self.error

    @override
    def close(self) -> None:
        raise self.error
