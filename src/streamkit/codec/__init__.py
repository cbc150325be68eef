"""Codecs that wrap byte sources and sinks."""

from .b64 import (
    Base64DecodingReader,
    Base64EncodingWriter,
    decode,
    decode_to_sink,
    decode_to_source,
    decode_to_string,
    decode_wrap,
    encode,
    encode_stream,
    encode_to_sink,
    encode_to_source,
    encode_to_string,
    encode_wrap,
)
