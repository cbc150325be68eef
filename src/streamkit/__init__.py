"""streamkit - buffered stream transfer and Base64 streaming primitives."""

from .core.model import Base64DecodeError, InvalidArgumentError, Result, TransferError  # re-export
from .io import (
    BUFFER_SIZE,
    CHAR_BUFFER_SIZE,
    copy,
    copy_bytes,
    copy_chars,
    copy_range,
    copy_text,
    drain,
    empty_source,
    non_closing,
    open_sink,
    open_source,
    to_bytes,
    to_string,
)
from .codec.b64 import decode_wrap, encode_wrap

__all__ = [
    "copy", "copy_chars", "copy_range", "drain", "copy_bytes", "copy_text",
    "to_bytes", "to_string", "empty_source", "non_closing",
    "open_source", "open_sink", "encode_wrap", "decode_wrap",
    "BUFFER_SIZE", "CHAR_BUFFER_SIZE",
    "Result", "InvalidArgumentError", "TransferError", "Base64DecodeError",
]
