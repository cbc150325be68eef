"""Instrumented sources and sinks shared by the tests."""

import io


class RecordingSink(io.BytesIO):
    """BytesIO that counts flushes and remembers whether close() was called."""

    def __init__(self):
        super().__init__()
        self.flushes = 0
        self.close_calls = 0

    def flush(self):
        self.flushes += 1
        super().flush()

    def close(self):
        self.close_calls += 1
        # keep the buffer readable so tests can still inspect it


class RecordingTextSink(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0
        self.close_calls = 0

    def flush(self):
        self.flushes += 1
        super().flush()

    def close(self):
        self.close_calls += 1


class ShortWriteSink(RecordingSink):
    """Accepts at most `limit` bytes per write() and reports the real count."""

    def __init__(self, limit: int):
        super().__init__()
        self.limit = limit
        self.write_calls = 0

    def write(self, data):
        self.write_calls += 1
        return super().write(bytes(data[:self.limit]))


class SilentSink:
    """Sink whose write() returns None, like many hand-written file-likes."""

    def __init__(self):
        self.data = bytearray()

    def write(self, data):
        self.data += data

    def flush(self):
        pass


class StuckSink:
    def write(self, data):
        return 0

    def flush(self):
        pass


class TrickleSource:
    """Non-seekable source yielding at most `step` bytes per read and a None
    (nothing available yet) before every chunk."""

    def __init__(self, data: bytes, step: int = 1):
        self._data = data
        self._pos = 0
        self._step = step
        self._ready = False
        self.close_calls = 0

    def read(self, size=-1):
        if not self._ready:
            self._ready = True
            return None
        self._ready = False
        if size is None or size < 0:
            size = len(self._data)
        n = min(size, self._step)
        chunk = self._data[self._pos:self._pos + n]
        self._pos += len(chunk)
        return chunk

    def seekable(self):
        return False

    def close(self):
        self.close_calls += 1


class FailingSource:
    """Yields `good` bytes, then raises OSError."""

    def __init__(self, good: bytes):
        self._good = good

    def read(self, size=-1):
        if self._good:
            if size is None or size < 0:
                size = len(self._good)
            chunk, self._good = self._good[:size], self._good[size:]
            return chunk
        raise OSError("connection reset")


class StallingSource:
    """Returns None `stalls` times in a row, then `data`, then end-of-data."""

    def __init__(self, data: bytes, stalls: int):
        self._replies = [None] * stalls + [data, b""]

    def read(self, size=-1):
        return self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
