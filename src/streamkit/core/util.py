from __future__ import annotations
import codecs
import os
from pathlib import Path
from typing import Any, Dict, Iterable, TypeVar

from .model import InvalidArgumentError, Result

T = TypeVar("T")

DEFAULT_CHARSET = "utf-8"


def require(value: T | None, name: str) -> T:
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")
    return value


def require_positive(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return value


def check_range(start: int, end: int) -> None:
    """Validate an inclusive byte range ``[start, end]``."""
    if start < 0 or end < 0:
        raise InvalidArgumentError(f"Range bounds cannot be negative: [{start}, {end}]")
    if start > end:
        raise InvalidArgumentError(f"Range start {start} is after end {end}")


def resolve_charset(charset: str | None = None) -> str:
    """Return the canonical codec name for `charset`, defaulting to UTF-8."""
    try:
        return codecs.lookup(charset or DEFAULT_CHARSET).name
    except LookupError:
        raise InvalidArgumentError(f"Unknown charset: {charset!r}") from None


# --- path helpers, used to prepare destinations before a sink is opened ---

def ensure_parent_dir(path: str | os.PathLike) -> Path:
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    return path


def create_file(path: str | os.PathLike) -> Path:
    path = ensure_parent_dir(path)
    if not path.exists():
        path.touch()
    return path


def is_empty(path: str | os.PathLike) -> bool:
    """True for a zero-length file or a directory without entries."""
    path = Path(path)
    if path.is_dir():
        return next(path.iterdir(), None) is None
    return path.stat().st_size == 0


def result_asdict(res: Result, *, fields: Iterable[str] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict (skip None) optionally filtered."""
    payload = {"source": res.source, "success": res.success, "bytes_copied": res.bytes_copied}
    if res.error is not None:
        payload["error"] = res.error
    if fields:
        wanted = set(fields) | {"success"}
        payload = {k: v for k, v in payload.items() if k in wanted}
    return payload
