"""Character streams layered over byte sources and sinks."""

import codecs
from typing import Optional

from ..core.util import require, resolve_charset
from .base import BUFFER_SIZE, ByteSink, ByteSource, read_chunk, write_fully


class TextReader:
    """Decode a byte source incrementally.

    Multi-byte sequences split across reads are held by the decoder until
    the rest arrives, so read() only returns "" at end-of-data.
    """

    def __init__(self, source: ByteSource, charset: Optional[str] = None, errors: str = "strict"):
        self._source = require(source, "source")
        self.charset = resolve_charset(charset)
        self._decoder = codecs.getincrementaldecoder(self.charset)(errors)
        self._eof = False

    def read(self, size: int = -1) -> str:
        if self._eof or size == 0:
            return ""
        if size is None or size < 0:
            parts = []
            while True:
                text = self.read(BUFFER_SIZE)
                if not text:
                    return "".join(parts)
                parts.append(text)

        while True:
            data = read_chunk(self._source, size)
            if not data:
                self._eof = True
                return self._decoder.decode(b"", final=True)
            text = self._decoder.decode(data)
            if text:
                return text

    def readable(self) -> bool:
        return True

    def close(self):
        self._source.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class TextWriter:
    """Encode text into a byte sink."""

    def __init__(self, sink: ByteSink, charset: Optional[str] = None, errors: str = "strict"):
        self._sink = require(sink, "sink")
        self.charset = resolve_charset(charset)
        self._encoder = codecs.getincrementalencoder(self.charset)(errors)
        self._closed = False

    def write(self, text: str) -> int:
        if self._closed:
            raise ValueError("write to closed TextWriter")
        data = self._encoder.encode(text)
        if data:
            write_fully(self._sink, data)
        return len(text)

    def writable(self) -> bool:
        return True

    def flush(self):
        self._sink.flush()

    def close(self):
        if self._closed:
            return
        tail = self._encoder.encode("", final=True)
        if tail:
            write_fully(self._sink, tail)
        self._sink.flush()
        self._closed = True
        self._sink.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
