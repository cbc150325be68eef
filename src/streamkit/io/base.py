"""Base protocols and shared constants for the transfer layer."""

import time
from typing import Optional, Protocol, Union, runtime_checkable

from ..core.model import TransferError
from ..core.util import DEFAULT_CHARSET  # noqa: F401  (re-export)


BUFFER_SIZE = 4096                   # bytes per read in byte transfers
CHAR_BUFFER_SIZE = BUFFER_SIZE // 2  # code units per read in character transfers
POLL_INTERVAL = 0.001                # seconds; first backoff after repeated None reads
MAX_POLL_INTERVAL = 0.05             # seconds


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for readable byte streams."""

    def read(self, size: int = -1) -> Optional[bytes]:
        """Return up to `size` bytes.
        b"" means end-of-data; None means nothing is available right now.
        """
        ...


@runtime_checkable
class ByteSink(Protocol):
    """Protocol for writable byte streams."""

    def write(self, data: bytes) -> Optional[int]:
        ...

    def flush(self) -> None:
        ...


@runtime_checkable
class TextSource(Protocol):
    """Protocol for readable character streams ("" means end-of-data)."""

    def read(self, size: int = -1) -> str:
        ...


@runtime_checkable
class TextSink(Protocol):
    """Protocol for writable character streams."""

    def write(self, text: str) -> Optional[int]:
        ...

    def flush(self) -> None:
        ...


def read_chunk(source, size: int):
    """Read one chunk of at most `size`, looping over transient empty reads (None).

    A single None is retried at once; repeated ones back off with a short sleep
    that grows up to MAX_POLL_INTERVAL.
    """
    misses = 0
    while True:
        chunk = source.read(size)
        if chunk is not None:
            return chunk
        if misses:
            time.sleep(min(POLL_INTERVAL * misses, MAX_POLL_INTERVAL))
        misses += 1


def write_fully(sink, chunk: Union[bytes, str]) -> None:
    """Write all of `chunk`, resending the tail after a partial write."""
    while chunk:
        written = sink.write(chunk)
        if written is None or written >= len(chunk):
            # None: sinks that do not report a count accept the whole chunk
            return
        if written == 0:
            raise TransferError(f"Sink accepted no bytes out of {len(chunk)}")
        chunk = chunk[written:]
