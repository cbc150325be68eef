from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class Result:
    source: str
    success: bool
    bytes_copied: int          # filled by the transfer primitive
    error: str | None = None


class InvalidArgumentError(ValueError):
    """Raised when a source, sink, buffer size or byte range is unusable."""
    pass


class TransferError(IOError):
    """Raised when a transfer cannot proceed, e.g. a skip fell short of its offset."""
    pass


class Base64DecodeError(ValueError):
    """Raised when Base64 input contains invalid characters or padding."""
    pass
