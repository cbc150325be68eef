"""Streaming HTTP byte source using requests."""

import logging
import warnings
from typing import Optional

import requests
from urllib3.exceptions import HTTPError as TransportError

logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPByteSource:
    """Readable byte source over the body of a streaming GET request.

    The connection goes back to the pool on close(), so a partly read body
    should be drained first if the connection is to be reused.
    """

    def __init__(self, url: str, timeout: float = 30):
        self.url = url
        self.content_length: Optional[int] = None
        self.bytes_read = 0
        self._response = None
        self._session = _get_session()

        try:
            response = self._session.get(url, stream=True, timeout=timeout)
        except requests.RequestException as e:
            raise IOError(f"GET request failed: {e}")

        if response.status_code >= 400:
            response.close()
            raise IOError(f"GET request failed with status {response.status_code}")

        content_length_header = response.headers.get("content-length")
        if content_length_header:
            self.content_length = int(content_length_header)
        self._response = response
        logger.debug("opened %s (content-length=%s)", url, self.content_length)

    def read(self, size: int = -1) -> bytes:
        if self._response is None:
            raise ValueError("read from closed HTTPByteSource")
        try:
            if size is None or size < 0:
                data = self._response.raw.read(decode_content=True)
            else:
                data = self._response.raw.read(size, decode_content=True)
        except (requests.RequestException, TransportError) as e:
            raise IOError(f"Reading {self.url} failed: {e}")

        self.bytes_read += len(data)
        if not data and size != 0:
            self._check_length()
        return data

    def _check_length(self):
        # a compressed body is measured before decoding, so only plain bodies are checked
        if self.content_length is None or self._response.headers.get("content-encoding"):
            return
        if self.bytes_read < self.content_length:
            warnings.warn(f"Body of {self.url} ended early. Expected {self.content_length} bytes, got {self.bytes_read}")

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    @property
    def closed(self) -> bool:
        return self._response is None

    def close(self):
        if self._response is not None:
            self._response.close()
            self._response = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_http_source(url: str) -> HTTPByteSource:
    """Open a streaming byte source for `url`."""
    return HTTPByteSource(url)
