"""Example: Reading a local file through a proxy that logs and counts."""

import logging
import sys

from typing_extensions import override

from proxystream import EOF, ProxyInputStream
from proxystream.file import BufferedFileInputStream
from proxystream.proxy import log_and_rethrow

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("example")


class CountingInputStream(ProxyInputStream):
    """Proxy that counts the bytes passing through it."""

    def __init__(self, underlying: BufferedFileInputStream) -> None:
        super().__init__(underlying, on_error=log_and_rethrow(logger))
        self.count = 0

    @override
    def after_read(self, count: int) -> None:
        if count != EOF:
            self.count += count


path = sys.argv[1] if len(sys.argv) > 1 else __file__

with CountingInputStream(BufferedFileInputStream(path)) as stream:
    print("Skipped:", stream.skip(16))
    buffer = bytearray(64)
    while stream.read_into(buffer) != EOF:
        pass
    print("Bytes read after skip:", stream.count)
