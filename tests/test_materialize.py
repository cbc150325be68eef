"""Tests for to_bytes, to_string and the text stream adapters."""

import io

import pytest

from streamkit.core.model import InvalidArgumentError
from streamkit.io.text import TextReader, TextWriter
from streamkit.io.transfer import empty_source, to_bytes, to_string

from stream_fakes import RecordingSink, TrickleSource


class TestToBytes:
    """Test to_bytes."""

    def test_none(self):
        """Test that None gives an empty result."""
        assert to_bytes(None) == b""

    def test_empty(self):
        """Test an empty source."""
        assert to_bytes(empty_source()) == b""

    def test_content(self):
        """Test reading a source to the end."""
        data = bytes(range(256)) * 100
        assert to_bytes(io.BytesIO(data)) == data

    def test_from_current_position_and_not_closed(self):
        """Test that only the remaining bytes are returned and the source stays open."""
        source = io.BytesIO(b"headerbody")
        source.read(6)

        assert to_bytes(source) == b"body"
        assert not source.closed


class TestToString:
    """Test to_string."""

    def test_none(self):
        """Test that None gives an empty string."""
        assert to_string(None) == ""
        assert to_string(None, "latin-1") == ""

    def test_utf8_default(self):
        """Test decoding with the default charset."""
        assert to_string(io.BytesIO("grüße ✓".encode("utf-8"))) == "grüße ✓"

    def test_charset(self):
        """Test decoding with an explicit charset."""
        assert to_string(io.BytesIO("grüße".encode("latin-1")), "latin-1") == "grüße"

    def test_multibyte_split_across_reads(self):
        """Test characters whose bytes arrive in separate reads."""
        text = "✓€😀" * 50
        source = TrickleSource(text.encode("utf-8"), step=1)

        assert to_string(source) == text
        assert source.close_calls == 0

    def test_large(self):
        """Test a text larger than the character buffer."""
        text = "0123456789" * 1000
        assert to_string(io.BytesIO(text.encode())) == text

    def test_truncated_sequence(self):
        """Test that an incomplete trailing sequence fails to decode."""
        with pytest.raises(UnicodeDecodeError):
            to_string(io.BytesIO("✓".encode("utf-8")[:2]))

    def test_unknown_charset(self):
        """Test that an unknown charset is rejected."""
        with pytest.raises(InvalidArgumentError, match="Unknown charset"):
            to_string(io.BytesIO(b"x"), "klingon")


class TestTextAdapters:
    """Test TextReader and TextWriter directly."""

    def test_reader_read_all(self):
        """Test read() without a size."""
        reader = TextReader(io.BytesIO("añb".encode("utf-16")), "utf-16")
        assert reader.read() == "añb"
        assert reader.read(10) == ""

    def test_reader_closes_source(self):
        """Test that closing the reader closes the byte source."""
        source = io.BytesIO(b"abc")
        with TextReader(source) as reader:
            assert reader.read(2) == "ab"
        assert source.closed

    def test_writer_encodes(self):
        """Test writing text through the encoder."""
        sink = RecordingSink()
        writer = TextWriter(sink, "utf-8")

        assert writer.write("ça") == 2
        writer.flush()

        assert sink.getvalue() == "ça".encode("utf-8")
        assert sink.flushes == 1

    def test_writer_close(self):
        """Test that close() finalises and closes the sink once."""
        sink = RecordingSink()
        with TextWriter(sink) as writer:
            writer.write("x")
        writer.close()

        assert sink.close_calls == 1
        with pytest.raises(ValueError):
            writer.write("y")
