"""
Command-line interface for DrExtract.

Reads a physician note, extracts the DME order, and either prints the
canonical JSON (`extract`) or forwards it to the intake API (`process`).
"""

import logging
import sys
import typing

import click
from stairval.notepad import create_notepad

from .extractor import extract
from .note_reader import NoteFileReader
from .serializer import to_json
from .settings import Settings
from .transmitter import DmeApiClient


@click.group()
@click.option(
    "--verbose-logging",
    is_flag=True,
    help="Also emit debug logs to stderr",
)
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
@click.pass_context
def main(ctx: click.Context, verbose_logging: bool, log_file_path: typing.Optional[str]):
    """DrExtract: pull DME orders out of physician notes."""
    _configure_logging(verbose_logging, log_file_path)
    try:
        ctx.obj = Settings.from_env()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command(name="extract")
@click.argument("note_path", required=False, type=click.Path(dir_okay=False))
@click.option("-t", "--text", "note_text", type=str, help="note text to use instead of a file")
@click.option("--pretty", is_flag=True, help="indent the JSON output")
@click.option("--no-timestamp", is_flag=True, help="omit processed_timestamp from the output")
@click.pass_obj
def extract_command(
    settings: Settings,
    note_path: typing.Optional[str],
    note_text: typing.Optional[str],
    pretty: bool,
    no_timestamp: bool,
):
    """
    Extract the DME order from NOTE_PATH (default: the configured note file,
    falling back to the sample note) and print it as JSON.
    """
    text = note_text if note_text is not None else _read_note(settings, note_path)

    notepad = create_notepad("note")
    record = extract(text, notepad)
    click.echo(to_json(record, pretty=pretty, include_timestamp=not no_timestamp))
    _report_issues(notepad)


@main.command(name="process")
@click.argument("note_path", required=False, type=click.Path(dir_okay=False))
@click.option("-u", "--endpoint", "endpoint_url", type=str, help="intake endpoint URL")
@click.option("--timeout", type=float, help="HTTP timeout in seconds")
@click.option("--no-timestamp", is_flag=True, help="omit processed_timestamp from the payload")
@click.pass_obj
def process_command(
    settings: Settings,
    note_path: typing.Optional[str],
    endpoint_url: typing.Optional[str],
    timeout: typing.Optional[float],
    no_timestamp: bool,
):
    """
    Read the note, extract the DME order, and POST it to the intake endpoint.
    Exits 0 once the request completes (whatever the status code), 1 on failure.
    """
    try:
        text = _read_note(settings, note_path)
        notepad = create_notepad("note")
        record = extract(text, notepad)
        _report_issues(notepad)

        with DmeApiClient(
            endpoint_url or settings.endpoint_url,
            timeout=settings.timeout if timeout is None else timeout,
        ) as client:
            status_code = client.send_record(record, include_timestamp=not no_timestamp)
    except Exception as e:
        logging.exception(f"Processing failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{record.device.label} order sent, status code {status_code}")


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        # force: replace handlers left by an earlier in-process invocation
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


def _read_note(settings: Settings, note_path: typing.Optional[str]) -> str:
    reader = NoteFileReader(note_path or settings.note_path, settings.fallback_note_text)
    return reader.read()


def _report_issues(notepad) -> None:
    # warnings go to stderr so stdout stays valid JSON
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in note:", err=True)
        for err in notepad.errors():
            click.echo(f"- {err}", err=True)
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in note:", err=True)
        for w in notepad.warnings():
            click.echo(f"- {w}", err=True)


if __name__ == "__main__":
    main()
