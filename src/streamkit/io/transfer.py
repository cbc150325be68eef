"""Buffered transfer primitives between sources and sinks.

None of the functions here close the streams they are given: a source may be
handed to `copy_range` and then to `drain`, and closing stays with the caller
on every path, including errors.
"""

import io
import logging
from typing import Optional

from ..core.model import TransferError
from ..core.util import check_range, require, require_positive, resolve_charset
from .base import (
    BUFFER_SIZE,
    CHAR_BUFFER_SIZE,
    ByteSink,
    ByteSource,
    TextSink,
    TextSource,
    read_chunk,
    write_fully,
)
from .text import TextReader

logger = logging.getLogger(__name__)

_EMPTY = b""


def copy(source: ByteSource, sink: ByteSink, buffer_size: int = BUFFER_SIZE) -> int:
    """Copy every remaining byte of `source` into `sink` and flush it once.

    Returns the number of bytes transferred.
    """
    require(source, "source")
    require(sink, "sink")
    require_positive(buffer_size, "buffer_size")

    count = 0
    while True:
        chunk = read_chunk(source, buffer_size)
        if not chunk:
            break
        write_fully(sink, chunk)
        count += len(chunk)
    sink.flush()
    logger.debug("copied %d bytes with a %d byte buffer", count, buffer_size)
    return count


def copy_chars(source: TextSource, sink: TextSink, buffer_size: int = CHAR_BUFFER_SIZE) -> int:
    """Character-stream analogue of `copy`; returns the number of characters."""
    require(source, "source")
    require(sink, "sink")
    require_positive(buffer_size, "buffer_size")

    count = 0
    while True:
        chunk = read_chunk(source, buffer_size)
        if not chunk:
            break
        write_fully(sink, chunk)
        count += len(chunk)
    sink.flush()
    logger.debug("copied %d characters", count)
    return count


def skip(source: ByteSource, count: int, buffer_size: int = BUFFER_SIZE) -> int:
    """Advance `source` by up to `count` bytes; return how many were skipped.

    Seekable sources are moved with seek, but never past their end.
    """
    require(source, "source")
    if count <= 0:
        return 0

    seekable = getattr(source, "seekable", None)
    if seekable is not None and seekable():
        current = source.tell()
        size = source.seek(0, io.SEEK_END)
        if size <= current:
            # already at or past the end: put it back where it was
            source.seek(current)
            return 0
        target = min(current + count, size)
        source.seek(target)
        return target - current

    skipped = 0
    while skipped < count:
        chunk = read_chunk(source, min(buffer_size, count - skipped))
        if not chunk:
            break
        skipped += len(chunk)
    return skipped


def copy_range(
    source: ByteSource,
    sink: ByteSink,
    start: int,
    end: int,
    buffer_size: int = BUFFER_SIZE,
) -> int:
    """Copy the inclusive byte range ``[start, end]`` of `source` into `sink`.

    A range running past the end of the source is not an error: the bytes up
    to end-of-data are copied and their count returned. Failing to skip the
    first `start` bytes raises TransferError. Bytes after `end` are left
    unread in `source`.
    """
    require(source, "source")
    require(sink, "sink")
    require_positive(buffer_size, "buffer_size")
    check_range(start, end)

    skipped = skip(source, start, buffer_size)
    if skipped < start:
        raise TransferError(f"Skipped only {skipped} bytes out of {start} required")

    wanted = end - start + 1
    remaining = wanted
    chunk_size = min(buffer_size, remaining)
    while remaining > 0:
        chunk = read_chunk(source, min(chunk_size, remaining))
        if not chunk:
            break
        if len(chunk) > remaining:
            chunk = chunk[:remaining]
        write_fully(sink, chunk)
        remaining -= len(chunk)
    sink.flush()

    copied = wanted - remaining
    if remaining:
        logger.debug("range [%d, %d] ended early after %d bytes", start, end, copied)
    return copied


def drain(source: ByteSource, buffer_size: int = BUFFER_SIZE) -> int:
    """Read and discard the rest of `source`; return the bytes consumed."""
    require(source, "source")
    require_positive(buffer_size, "buffer_size")

    count = 0
    while True:
        chunk = read_chunk(source, buffer_size)
        if not chunk:
            return count
        count += len(chunk)


def copy_bytes(data: bytes, sink: ByteSink) -> None:
    require(data, "data")
    require(sink, "sink")
    write_fully(sink, bytes(data))
    sink.flush()


def copy_text(text: str, sink: ByteSink, charset: Optional[str] = None) -> None:
    """Encode `text` with `charset` (UTF-8 by default) and write it to `sink`."""
    require(text, "text")
    require(sink, "sink")
    write_fully(sink, text.encode(resolve_charset(charset)))
    sink.flush()


def empty_source() -> io.BytesIO:
    return io.BytesIO(_EMPTY)


# --------------------------------------------------------------------------- #
# materializing converters

def to_bytes(source: Optional[ByteSource]) -> bytes:
    """Read `source` to the end into a new bytes object; b"" for None."""
    if source is None:
        return _EMPTY
    out = io.BytesIO()
    copy(source, out)
    return out.getvalue()


def to_string(source: Optional[ByteSource], charset: Optional[str] = None) -> str:
    """Decode `source` to the end with `charset` (UTF-8 by default); "" for None."""
    if source is None:
        return ""
    out = io.StringIO()
    copy_chars(TextReader(source, charset), out)
    return out.getvalue()
