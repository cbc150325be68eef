"""Transfers between streams and local files.

These helpers open and close the files they name, but never the streams
passed in by the caller.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ..core.util import ensure_parent_dir, require, resolve_charset
from .base import ByteSink, ByteSource, TextSink, TextSource
from .transfer import copy, copy_chars

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _existing(path: PathLike) -> Path:
    path = Path(require(path, "path"))
    if not path.is_file():
        raise FileNotFoundError(f"Source file does not exist: {path}")
    return path


def copy_to_path(source: ByteSource, path: PathLike, *, append: bool = False) -> int:
    """Copy `source` into the file at `path`, creating parent directories."""
    require(source, "source")
    path = ensure_parent_dir(require(path, "path"))
    with open(path, "ab" if append else "wb") as out:
        count = copy(source, out)
    logger.debug("wrote %d bytes to %s", count, path)
    return count


def copy_from_path(path: PathLike, sink: ByteSink) -> int:
    """Copy the file at `path` into `sink`."""
    require(sink, "sink")
    with open(_existing(path), "rb") as src:
        return copy(src, sink)


def copy_file(src: PathLike, dst: PathLike, *, append: bool = False) -> int:
    """Copy one file into another; returns the number of bytes copied."""
    with open(_existing(src), "rb") as source:
        return copy_to_path(source, dst, append=append)


def copy_chars_to_path(reader: TextSource, path: PathLike, charset: Optional[str] = None) -> int:
    """Write the text of `reader` to `path` encoded with `charset`."""
    require(reader, "reader")
    path = ensure_parent_dir(require(path, "path"))
    with open(path, "w", encoding=resolve_charset(charset), newline="") as out:
        return copy_chars(reader, out)


def copy_path_to_chars(path: PathLike, writer: TextSink, charset: Optional[str] = None) -> int:
    """Decode the file at `path` with `charset` and copy the text into `writer`."""
    require(writer, "writer")
    with open(_existing(path), "r", encoding=resolve_charset(charset), newline="") as src:
        return copy_chars(src, writer)
