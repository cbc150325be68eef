"""I/O layer for streamkit - sources, sinks and the transfers between them."""

import sys

from ..core.util import ensure_parent_dir, require

# Re-export these for import convenience
from .base import BUFFER_SIZE, CHAR_BUFFER_SIZE, ByteSink, ByteSource, TextSink, TextSource
from .http_sync import HTTPByteSource, open_http_source
from .local import copy_chars_to_path, copy_file, copy_from_path, copy_path_to_chars, copy_to_path
from .text import TextReader, TextWriter
from .transfer import (
    copy,
    copy_bytes,
    copy_chars,
    copy_range,
    copy_text,
    drain,
    empty_source,
    skip,
    to_bytes,
    to_string,
)
from .wrappers import NonClosingStream, non_closing

STDIO = "-"


def _binary(stream):
    return getattr(stream, "buffer", stream)


def _is_url(source) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def open_source(source):
    """Open a readable byte source for a path, URL, '-' (stdin) or file-like object.

    Streams the caller already owns come back wrapped with `non_closing`, so
    the result can always be used in a ``with`` block.
    """
    require(source, "source")
    if hasattr(source, "read"):  # BinaryIO
        return non_closing(source)
    if source == STDIO:
        return non_closing(_binary(sys.stdin))
    if _is_url(source):
        return open_http_source(source)
    return open(source, "rb")


def open_sink(dest, *, append: bool = False):
    """Open a writable byte sink for a path, '-' (stdout) or file-like object."""
    require(dest, "dest")
    if hasattr(dest, "write"):
        return non_closing(dest)
    if dest == STDIO:
        return non_closing(_binary(sys.stdout))
    return open(ensure_parent_dir(dest), "ab" if append else "wb")
