"""Base64 (RFC 4648) codec: whole-buffer helpers and streaming wrappers.

Both the standard (``+/``) and URL-safe (``-_``) alphabets are supported and
output is always ``=`` padded. Decoding is strict: anything outside the
alphabet, misplaced padding or data after padding raises Base64DecodeError.
Padding is optional on input; an unpadded final group of 2 or 3 characters
decodes as if it were padded.

Streaming usage::

    with encode_wrap(non_closing(sink)) as out:
        out.write(b"01234")
        out.write(b"56789")
    # sink now holds b"MDEyMzQ1Njc4OQ=="
"""

from __future__ import annotations

import base64
import binascii
import io
from typing import Optional, Union

from ..core.model import Base64DecodeError
from ..core.util import require, require_positive, resolve_charset
from ..io.base import BUFFER_SIZE, ByteSink, ByteSource, read_chunk, write_fully
from ..io.transfer import copy_bytes, to_bytes

STANDARD_ALPHABET = b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
URL_SAFE_ALPHABET = STANDARD_ALPHABET[:62] + b"-_"
PAD = b"="

# keyed by the url_safe flag
_ALPHABETS = {False: STANDARD_ALPHABET, True: URL_SAFE_ALPHABET}
_ACCEPTED = {flag: alphabet + PAD for flag, alphabet in _ALPHABETS.items()}

Source = Union[bytes, bytearray, memoryview, str]


def _as_bytes(src: Source, charset: Optional[str]) -> bytes:
    require(src, "src")
    if isinstance(src, str):
        return src.encode(resolve_charset(charset))
    return bytes(src)


def _ascii(text: str) -> bytes:
    try:
        return text.encode("ascii")
    except UnicodeEncodeError as e:
        raise Base64DecodeError(f"Illegal base64 character {text[e.start]!r}") from None


def _encode_groups(data: bytes, url_safe: bool) -> bytes:
    return base64.urlsafe_b64encode(data) if url_safe else base64.b64encode(data)


def _decode_groups(data: bytes, url_safe: bool) -> bytes:
    """Decode complete 4-character groups that already passed validation."""
    try:
        if url_safe:
            return base64.urlsafe_b64decode(data)
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise Base64DecodeError(str(e)) from e


def _check_alphabet(data: bytes, url_safe: bool) -> None:
    illegal = data.translate(None, _ACCEPTED[url_safe])
    if illegal:
        raise Base64DecodeError(f"Illegal base64 character {chr(illegal[0])!r}")


# ------------------------------------------------------------------ #
# grouping state shared by the whole-buffer and streaming code paths

class _GroupEncoder:
    """Holds the 0-2 bytes of an incomplete 3-byte group between writes."""

    def __init__(self, url_safe: bool):
        self.url_safe = url_safe
        self._pending = b""

    def feed(self, data) -> bytes:
        data = self._pending + bytes(data)
        whole = len(data) - len(data) % 3
        self._pending = data[whole:]
        return _encode_groups(data[:whole], self.url_safe) if whole else b""

    def finish(self) -> bytes:
        tail, self._pending = self._pending, b""
        return _encode_groups(tail, self.url_safe) if tail else b""


class _GroupDecoder:
    """Holds undecoded characters until a full 4-character group is available."""

    def __init__(self, url_safe: bool):
        self.url_safe = url_safe
        self._pending = bytearray()
        self._done = False  # the padded final group has been decoded

    def feed(self, data: bytes) -> bytes:
        if not data:
            return b""
        _check_alphabet(data, self.url_safe)
        if self._done:
            raise Base64DecodeError("Input continues after padding")
        self._pending += data

        pad_at = self._pending.find(PAD)
        if pad_at < 0:
            return self._take(len(self._pending) - len(self._pending) % 4)

        group_start = pad_at - pad_at % 4
        group_end = group_start + 4
        if group_end - pad_at > 2:
            raise Base64DecodeError("Too much padding in final group")
        tail = self._pending[pad_at:group_end]
        if tail != PAD * len(tail):
            raise Base64DecodeError("Illegal character inside padding")
        if len(self._pending) < group_end:
            # rest of the padding has not arrived yet
            return self._take(group_start)
        if len(self._pending) > group_end:
            raise Base64DecodeError("Input continues after padding")
        self._done = True
        return self._take(group_end)

    def finish(self) -> bytes:
        rest = bytes(self._pending)
        self._pending.clear()
        if not rest:
            return b""
        if PAD in rest:
            raise Base64DecodeError("Incomplete padding at end of input")
        if len(rest) == 1:
            raise Base64DecodeError("Dangling single character at end of input")
        return _decode_groups(rest + PAD * (4 - len(rest)), self.url_safe)

    def _take(self, count: int) -> bytes:
        if count <= 0:
            return b""
        block = bytes(self._pending[:count])
        del self._pending[:count]
        return _decode_groups(block, self.url_safe)


# ------------------------------------------------------------------ #
# whole-buffer API

def encode(src: Source, charset: Optional[str] = None, *, url_safe: bool = False) -> bytes:
    """Base64-encode `src`; text is first encoded with `charset` (UTF-8 default)."""
    data = _as_bytes(src, charset)
    if not data:
        return b""
    return _encode_groups(data, url_safe)


def encode_to_string(src: Source, charset: Optional[str] = None, *, url_safe: bool = False) -> str:
    return encode(src, charset, url_safe=url_safe).decode("ascii")


def decode(src: Source, *, url_safe: bool = False) -> bytes:
    """Decode Base64 `src` (bytes or ASCII text)."""
    data = _ascii(src) if isinstance(src, str) else _as_bytes(src, None)
    if not data:
        return b""
    decoder = _GroupDecoder(url_safe)
    return decoder.feed(data) + decoder.finish()


def decode_to_string(src: Source, charset: Optional[str] = None, *, url_safe: bool = False) -> str:
    return decode(src, url_safe=url_safe).decode(resolve_charset(charset))


def encode_stream(source: ByteSource, *, url_safe: bool = False) -> bytes:
    """Read `source` to the end and return its encoding. The source stays open."""
    return encode(to_bytes(require(source, "source")), url_safe=url_safe)


def encode_to_source(src: Source, charset: Optional[str] = None, *, url_safe: bool = False) -> io.BytesIO:
    return io.BytesIO(encode(src, charset, url_safe=url_safe))


def decode_to_source(src: Source, *, url_safe: bool = False) -> io.BytesIO:
    return io.BytesIO(decode(src, url_safe=url_safe))


def encode_to_sink(src: Source, sink: ByteSink, charset: Optional[str] = None, *, url_safe: bool = False) -> None:
    copy_bytes(encode(src, charset, url_safe=url_safe), require(sink, "sink"))


def decode_to_sink(src: Source, sink: ByteSink, *, url_safe: bool = False) -> None:
    copy_bytes(decode(src, url_safe=url_safe), require(sink, "sink"))


# ------------------------------------------------------------------ #
# streaming API

class Base64EncodingWriter:
    """Byte sink that writes the Base64 encoding of everything written to it.

    The final partial group is only emitted, padded, by close(); an encoding
    taken before close() is incomplete. close() also closes the wrapped sink,
    wrap it with `non_closing` to keep it open.
    """

    def __init__(self, sink: ByteSink, *, url_safe: bool = False):
        self._sink = require(sink, "sink")
        self._encoder = _GroupEncoder(url_safe)
        self._closed = False

    def write(self, data) -> int:
        if self._closed:
            raise ValueError("write to closed Base64EncodingWriter")
        encoded = self._encoder.feed(data)
        if encoded:
            write_fully(self._sink, encoded)
        return len(data)

    def writelines(self, lines) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        """Flush the wrapped sink. Pending bytes are not padded out."""
        self._sink.flush()

    def writable(self) -> bool:
        return True

    def readable(self) -> bool:
        return False

    def seekable(self) -> bool:
        return False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            tail = self._encoder.finish()
            if tail:
                write_fully(self._sink, tail)
            self._sink.flush()
        finally:
            self._sink.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class Base64DecodingReader:
    """Byte source that decodes a Base64 source on the fly.

    The wrapped source may yield bytes or ASCII text. close() closes it.
    """

    def __init__(self, source: ByteSource, *, url_safe: bool = False, buffer_size: int = BUFFER_SIZE):
        self._source = require(source, "source")
        self._decoder = _GroupDecoder(url_safe)
        self._buffer_size = require_positive(buffer_size, "buffer_size")
        self._decoded = bytearray()
        self._eof = False
        self._closed = False

    def _fill(self) -> None:
        chunk = read_chunk(self._source, self._buffer_size)
        if isinstance(chunk, str):
            chunk = _ascii(chunk)
        if chunk:
            self._decoded += self._decoder.feed(chunk)
        else:
            self._eof = True
            self._decoded += self._decoder.finish()

    def read(self, size: int = -1) -> bytes:
        """Return up to `size` decoded bytes; b"" once the input is exhausted."""
        if self._closed:
            raise ValueError("read from closed Base64DecodingReader")
        if size is None or size < 0:
            while not self._eof:
                self._fill()
            size = len(self._decoded)
        elif size == 0:
            return b""
        else:
            while not self._decoded and not self._eof:
                self._fill()
        data = bytes(self._decoded[:size])
        del self._decoded[:size]
        return data

    def readinto(self, buffer) -> int:
        data = self.read(len(buffer))
        buffer[:len(data)] = data
        return len(data)

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def seekable(self) -> bool:
        return False

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._source.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def encode_wrap(sink: ByteSink, *, url_safe: bool = False) -> Base64EncodingWriter:
    """Wrap `sink` so that bytes written to it are Base64-encoded."""
    return Base64EncodingWriter(sink, url_safe=url_safe)


def decode_wrap(source: ByteSource, *, url_safe: bool = False) -> Base64DecodingReader:
    """Wrap `source` so that reading from it yields the decoded bytes."""
    return Base64DecodingReader(source, url_safe=url_safe)
