"""Command-line interface for copying byte ranges out of files."""

import logging
from pathlib import Path
import sys

import typer

from proxystream.file import DEFAULT_BUFFER_SIZE, BufferedFileInputStream
from proxystream.proxy import ProxyInputStream, log_and_rethrow
from proxystream.utils import copy

app = typer.Typer(add_completion=False)

logger = logging.getLogger(__name__)


@app.command()
def main(
    source: str = typer.Argument(
        ...,
        help="Path of the file to read",
    ),
    skip: int = typer.Option(
        0,
        help="Number of bytes to skip before copying",
    ),
    length: int | None = typer.Option(
        None,
        help="Maximum number of bytes to copy (default: all remaining)",
    ),
    buffer_size: int = typer.Option(
        DEFAULT_BUFFER_SIZE,
        help="Size of the read buffer in bytes",
    ),
    output: str | None = typer.Option(
        None,
        help="Output file path (default: stdout)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """Copy bytes from a file to stdout or another file.

    The file is read through a proxied, buffered stream. Skips that exceed the read
    buffer reposition the file directly instead of reading the skipped bytes.
    """
    # Configure logging
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    try:
        stream = ProxyInputStream(
            BufferedFileInputStream(source, buffer_size=buffer_size),
            on_error=log_and_rethrow(logger),
        )
        with stream:
            skipped = stream.skip(skip)
            if output:
                with Path(output).open("wb") as f:
                    copied = copy(stream, f, buffer_size, limit=length)
            else:
                copied = copy(stream, sys.stdout.buffer, buffer_size, limit=length)
                sys.stdout.buffer.flush()

        typer.echo(f"Skipped {skipped} bytes, copied {copied} bytes", err=True)

    except FileNotFoundError as e:
        typer.echo(f"Error: File not found: {e}", err=True)
        raise typer.Exit(code=1) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        if verbose:
            import traceback

            traceback.print_exc(file=sys.stderr)
        raise typer.Exit(code=1) from None


if __name__ == "__main__":
    app()
