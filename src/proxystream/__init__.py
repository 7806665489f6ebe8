"""proxystream: sequential byte-input streams and a forwarding proxy decorator."""

from proxystream.base import EOF, InputStream
from proxystream.proxy import ProxyInputStream

__all__ = ["EOF", "InputStream", "ProxyInputStream"]
