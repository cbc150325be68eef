"""CLI implementation for streamkit."""

import json
import logging
import sys
from typing import Optional

import typer

from .codec.b64 import decode_wrap, encode_wrap
from .core.model import Base64DecodeError, InvalidArgumentError, Result
from .core.util import result_asdict
from .io import BUFFER_SIZE, STDIO, copy, copy_range, drain, open_sink, open_source

app = typer.Typer(add_completion=False, help="Copy, slice, drain and Base64-code byte streams.")

# everything a transfer can fail with that should become a failed Result
_FAILURES = (OSError, InvalidArgumentError, Base64DecodeError)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log transfer details to stderr"),
):
    """Stream transfer tools for local paths, URLs and stdin/stdout."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)


def _emit(results: list[Result], jsonl: bool, fields: Optional[str] = None, err: bool = False) -> None:
    """Print one pretty JSON object for a single result, JSON lines otherwise."""
    sel_fields = set(fields.split(",")) if fields else None
    if len(results) == 1 and not jsonl:
        typer.echo(json.dumps(result_asdict(results[0], fields=sel_fields), indent=2), err=err)
    else:
        for res in results:
            typer.echo(json.dumps(result_asdict(res, fields=sel_fields)), err=err)


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command("copy")
def copy_cmd(
    source: str = typer.Argument(..., help="Path, URL or '-' for stdin"),
    dest: str = typer.Argument(..., help="Destination path or '-' for stdout"),
    start: Optional[int] = typer.Option(None, "--start", min=0, help="First byte to copy"),
    end: Optional[int] = typer.Option(None, "--end", min=0, help="Last byte to copy (inclusive)"),
    buffer_size: int = typer.Option(BUFFER_SIZE, "--buffer-size", min=1, help="Bytes per read"),
    append: bool = typer.Option(False, "--append", help="Append to DEST instead of truncating it"),
):
    """Copy SOURCE to DEST, optionally only the byte range [--start, --end]."""
    try:
        with open_source(source) as src, open_sink(dest, append=append) as out:
            if start is None and end is None:
                count = copy(src, out, buffer_size)
            else:
                last = end if end is not None else sys.maxsize
                count = copy_range(src, out, start or 0, last, buffer_size)
        res = Result(source=source, success=True, bytes_copied=count)
    except _FAILURES as e:
        res = Result(source=source, success=False, bytes_copied=0, error=str(e))

    # keep stdout clean when it carries the data
    _emit([res], jsonl=False, err=dest == STDIO)
    if not res.success:
        raise typer.Exit(code=1)


@app.command("drain")
def drain_cmd(
    sources: list[str] = typer.Argument(None, help="Paths or URLs to drain, or '-' for stdin"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Force JSON-lines output"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
):
    """Read every source to the end and report how many bytes it held."""
    if not sources:
        typer.echo("No input files given.", err=True)
        raise typer.Exit(code=1)

    results: list[Result] = []
    for src in sources:
        try:
            with open_source(src) as stream:
                res = Result(source=src, success=True, bytes_copied=drain(stream))
        except _FAILURES as e:
            res = Result(source=src, success=False, bytes_copied=0, error=str(e))
        results.append(res)

    _emit(results, jsonl, fields)
    if any(not r.success for r in results):
        raise typer.Exit(code=1)


@app.command("b64encode")
def b64encode_cmd(
    source: str = typer.Argument(STDIO, help="Path, URL or '-' for stdin"),
    output: str = typer.Option(STDIO, "-o", "--output", help="Write to PATH instead of stdout"),
    url_safe: bool = typer.Option(False, "--url-safe", help="Use the URL-safe alphabet"),
):
    """Base64-encode SOURCE."""
    try:
        with open_source(source) as src, open_sink(output) as out:
            with encode_wrap(out, url_safe=url_safe) as encoder:
                copy(src, encoder)
    except _FAILURES as e:
        _fail(str(e))


@app.command("b64decode")
def b64decode_cmd(
    source: str = typer.Argument(STDIO, help="Path, URL or '-' for stdin"),
    output: str = typer.Option(STDIO, "-o", "--output", help="Write to PATH instead of stdout"),
    url_safe: bool = typer.Option(False, "--url-safe", help="Use the URL-safe alphabet"),
):
    """Decode Base64 SOURCE."""
    try:
        with open_source(source) as src, open_sink(output) as out:
            with decode_wrap(src, url_safe=url_safe) as decoder:
                copy(decoder, out)
    except _FAILURES as e:
        _fail(str(e))


if __name__ == "__main__":
    app()
