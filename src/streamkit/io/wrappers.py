"""Stream decorators that suppress close()."""

from typing import Any, Iterable

from ..core.util import require


class NonClosingStream:
    """Delegate every operation to the wrapped stream except close().

    Lets a shared stream (standard output, a pooled connection) be handed to
    code that closes whatever it receives.
    """

    def __init__(self, stream: Any):
        self._stream = require(stream, "stream")

    @property
    def wrapped(self) -> Any:
        return self._stream

    # --- reading ---
    def read(self, size: int = -1):
        return self._stream.read(size)

    def read1(self, size: int = -1):
        return self._stream.read1(size)

    def readinto(self, buffer) -> int:
        return self._stream.readinto(buffer)

    def readline(self, size: int = -1):
        return self._stream.readline(size)

    def __iter__(self):
        return iter(self._stream)

    # --- writing ---
    def write(self, data):
        # whole buffer in one call, never element by element
        return self._stream.write(data)

    def writelines(self, lines: Iterable) -> None:
        self._stream.writelines(lines)

    def flush(self) -> None:
        self._stream.flush()

    # --- positioning ---
    def seek(self, offset: int, whence: int = 0) -> int:
        return self._stream.seek(offset, whence)

    def tell(self) -> int:
        return self._stream.tell()

    def seekable(self) -> bool:
        return bool(getattr(self._stream, "seekable", lambda: False)())

    def readable(self) -> bool:
        return bool(getattr(self._stream, "readable", lambda: hasattr(self._stream, "read"))())

    def writable(self) -> bool:
        return bool(getattr(self._stream, "writable", lambda: hasattr(self._stream, "write"))())

    # --- lifecycle ---
    def close(self) -> None:
        """Do nothing; the wrapped stream stays open."""

    @property
    def closed(self) -> bool:
        return bool(getattr(self._stream, "closed", False))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass

    def __getattr__(self, name: str) -> Any:
        if name == "_stream":
            raise AttributeError(name)
        return getattr(self._stream, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._stream!r})"


def non_closing(stream: Any) -> NonClosingStream:
    """Return `stream` wrapped so that close() is a no-op."""
    require(stream, "stream")
    if isinstance(stream, NonClosingStream):
        return stream
    return NonClosingStream(stream)
