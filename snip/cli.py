"""
CLI interface for snip.

Usage:
    snip add "name" "some text"
    snip ls
    snip show 9cfc5a2d
    snip attach 9cfc5a2d ./paper.pdf
"""

import json
import os
import sqlite3
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from typing_extensions import Annotated

from . import __version__
from .attachment import (
    add_attachment,
    get_attachment,
    list_attachments,
    write_attachment_data,
)
from .config import load_config
from .database import connect
from .errors import SnipError, log_exception
from .identifier import format_identifier, short_identifier
from .logging_config import (
    configure_ops_log,
    configure_quiet_mode,
    enable_debug_mode,
    remove_ops_log,
)
from .resolver import resolve_attachment, resolve_snippet
from .snippet import (
    create_snippet,
    delete_snippet,
    find_snippets,
    get_first_snippet,
    get_snippet,
    list_snippets,
    update_snippet,
)
from .types import AttachmentInfo, Snippet, display_timestamp
from .words import read_lines, read_word, split_words, stem as stem_word


# Configure quiet mode by default
# Set SNIP_VERBOSE=1 to enable debug mode via environment
if os.environ.get("SNIP_VERBOSE") == "1":
    enable_debug_mode()
else:
    configure_quiet_mode(quiet=True)


def _version_callback(value: bool):
    if value:
        print(f"snip {__version__}")
        raise typer.Exit()


def _verbose_callback(value: bool):
    if value:
        enable_debug_mode()


# Global state for CLI options
_db_override: Optional[Path] = None
_db_path: Optional[Path] = None


def _db_callback(value: Optional[Path]):
    global _db_override
    _db_override = value


def _get_db_override() -> Optional[Path]:
    return _db_override


app = typer.Typer(
    name="snip",
    help="Personal snippet store with attachments.",
    no_args_is_help=True,
    rich_markup_mode=None,
)


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option(
        "--verbose", "-v",
        help="Enable debug-level logging to stderr",
        callback=_verbose_callback,
        is_eager=True,
    )] = False,
    version: Annotated[Optional[bool], typer.Option(
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    )] = None,
    db: Annotated[Optional[Path], typer.Option(
        "--db",
        envvar="SNIP_DB",
        help="Path to the database file (default: ~/.snip.sqlite3)",
        callback=_db_callback,
        is_eager=True,
    )] = None,
):
    """Personal snippet store with attachments."""


@contextmanager
def _database() -> Iterator[sqlite3.Connection]:
    """Open the configured database for one command.

    SnipErrors raised inside the block are shown as a one-line message and
    end the command with exit status 1. The connection and the ops log
    handler are released on every path.
    """
    global _db_path
    try:
        config = load_config(_get_db_override())
    except SnipError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    _db_path = config.db_path

    try:
        conn = connect(config.db_path)
    except (sqlite3.Error, OSError) as e:
        typer.echo(f"Error: cannot open database {config.db_path}: {e}", err=True)
        raise typer.Exit(1)

    handler = None
    try:
        if config.ops_log:
            handler = configure_ops_log(config.db_path)
        yield conn
    except SnipError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        conn.close()
        remove_ops_log(handler)


# -----------------------------------------------------------------------------
# Output Formatting
# -----------------------------------------------------------------------------

def _format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KiB"
    return f"{size / (1024 * 1024):.1f} MiB"


def _format_snippet_line(snippet: Snippet) -> str:
    return f"{short_identifier(snippet.uuid)} {display_timestamp(snippet.timestamp)} {snippet.name}"


def _format_attachment_line(info: AttachmentInfo) -> str:
    return (
        f"{short_identifier(info.uuid)} {display_timestamp(info.timestamp)} "
        f"{info.name} ({_format_size(info.size)})"
    )


def _read_text_from_stdin() -> str:
    if sys.stdin.isatty():
        typer.echo("Error: Provide TEXT or pipe it on stdin", err=True)
        raise typer.Exit(1)
    return sys.stdin.read()


# -----------------------------------------------------------------------------
# Snippet commands
# -----------------------------------------------------------------------------

@app.command("ls")
def ls():
    """List all snips."""
    with _database() as conn:
        for snippet in list_snippets(conn):
            typer.echo(_format_snippet_line(snippet))


@app.command()
def get():
    """Print first snip in database."""
    with _database() as conn:
        s = get_first_snippet(conn)
        typer.echo(
            f"first snip: uuid: {format_identifier(s.uuid)} "
            f"timestamp: {s.timestamp.isoformat()} name: {s.name} text: {s.text}"
        )


@app.command()
def show(
    partial: Annotated[str, typer.Argument(help="Snip uuid or any unique part of it")],
):
    """Print a snip and list its attachments."""
    with _database() as conn:
        snippet = get_snippet(conn, resolve_snippet(conn, partial))
        typer.echo(f"uuid: {format_identifier(snippet.uuid)}")
        typer.echo(f"timestamp: {snippet.timestamp.isoformat()}")
        typer.echo(f"name: {snippet.name}")
        typer.echo("")
        typer.echo(snippet.text)
        attachments = list_attachments(conn, snippet.uuid)
        if attachments:
            typer.echo("")
            typer.echo("attachments:")
            for info in attachments:
                typer.echo(f"  {_format_attachment_line(info)}")


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Name of the new snip")],
    text: Annotated[Optional[str], typer.Argument(
        help="Snip text (read from stdin when omitted)"
    )] = None,
):
    """Create a new snip."""
    if text is None:
        text = _read_text_from_stdin()
    with _database() as conn:
        snippet = create_snippet(conn, name, text)
        typer.echo(format_identifier(snippet.uuid))


@app.command()
def edit(
    partial: Annotated[str, typer.Argument(help="Snip uuid or any unique part of it")],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="New name")] = None,
    text: Annotated[Optional[str], typer.Option("--text", "-t", help="New text")] = None,
):
    """Change the name or text of a snip."""
    if name is None and text is None:
        typer.echo("Error: Specify --name and/or --text", err=True)
        raise typer.Exit(1)
    with _database() as conn:
        snippet = update_snippet(conn, resolve_snippet(conn, partial), name=name, text=text)
        typer.echo(_format_snippet_line(snippet))


@app.command()
def rm(
    partial: Annotated[str, typer.Argument(help="Snip uuid or any unique part of it")],
):
    """Delete a snip (its attachments are kept)."""
    with _database() as conn:
        id = resolve_snippet(conn, partial)
        delete_snippet(conn, id)
        typer.echo(f"Deleted {format_identifier(id)}")


@app.command()
def search(
    word: Annotated[str, typer.Argument(help="Word to look for (compared by stem)")],
):
    """List snips containing a word."""
    with _database() as conn:
        for snippet in find_snippets(conn, word):
            typer.echo(_format_snippet_line(snippet))


# -----------------------------------------------------------------------------
# Text utilities
# -----------------------------------------------------------------------------

@app.command()
def split(
    string: Annotated[Optional[str], typer.Argument(
        help="The string to split (read from stdin when omitted)"
    )] = None,
):
    """Split a string into words."""
    text = string if string is not None else read_lines(sys.stdin)
    typer.echo(json.dumps(split_words(text), ensure_ascii=False))


@app.command()
def stem(
    word: Annotated[Optional[str], typer.Argument(
        help="The word to stem (first stdin line when omitted)"
    )] = None,
):
    """Stem a word."""
    term = word if word is not None else read_word(sys.stdin)
    typer.echo(f"{term} -> {stem_word(term)}")


# -----------------------------------------------------------------------------
# Attachment commands
# -----------------------------------------------------------------------------

@app.command()
def attach(
    partial: Annotated[str, typer.Argument(help="Snip uuid or any unique part of it")],
    file: Annotated[Path, typer.Argument(help="File to attach")],
):
    """Attach a file to a snip."""
    with _database() as conn:
        attachment = add_attachment(conn, resolve_snippet(conn, partial), file)
        typer.echo(format_identifier(attachment.uuid))


@app.command()
def attachments(
    partial: Annotated[Optional[str], typer.Argument(
        help="Only attachments of this snip"
    )] = None,
):
    """List attachments."""
    with _database() as conn:
        owner = resolve_snippet(conn, partial) if partial is not None else None
        for info in list_attachments(conn, owner):
            typer.echo(_format_attachment_line(info))


@app.command()
def export(
    partial: Annotated[str, typer.Argument(help="Attachment uuid or any unique part of it")],
    output: Annotated[Optional[Path], typer.Option(
        "--output", "-o",
        help="Destination file (default: attachment name in the current directory)",
    )] = None,
    force: Annotated[bool, typer.Option(
        "--force",
        help="Overwrite the destination if it already exists"
    )] = False,
):
    """Write an attachment to a file."""
    with _database() as conn:
        attachment = get_attachment(conn, resolve_attachment(conn, partial))
        dest = output or Path(attachment.name)
        if dest.exists() and not force:
            typer.echo(f"Error: {dest} already exists (use --force to overwrite)", err=True)
            raise typer.Exit(1)
        dest = write_attachment_data(attachment, dest)
        typer.echo(f"Wrote {attachment.size} bytes to {dest}")


@app.command()
def detach(
    partial: Annotated[str, typer.Argument(help="Attachment uuid or any unique part of it")],
):
    """Remove an attachment."""
    with _database() as conn:
        attachment = get_attachment(conn, resolve_attachment(conn, partial))
        attachment.remove(conn)
        typer.echo(f"Removed {format_identifier(attachment.uuid)} ({attachment.name})")


# -----------------------------------------------------------------------------

def main():
    try:
        app()
    except SystemExit:
        raise  # Let typer handle exit codes
    except KeyboardInterrupt:
        raise SystemExit(130)  # Standard exit code for Ctrl+C
    except Exception as e:
        # Log full traceback to file, show clean message to user
        log_path = log_exception(e, context="snip CLI", db_path=_db_path)
        typer.echo(f"Error: {e}", err=True)
        typer.echo(f"Details logged to {log_path}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
