"""
Command-line interface for c19data.
Checks, normalizes and tabulates dashboard JSON payloads and prints status trees.
"""

import click
import logging
import pathlib
import sys
import typing

from stairval.notepad import create_notepad

from .auditor import audit_collection
from .codec import decode, decode_collection, decode_dataset
from .errors import DecodeError
from .formats import format_datetime
from .frame import dataset_to_frame
from .last_update import LastUpdate
from .metric import MetricRecord
from .news import NewsItems
from .payload import dumps, loads
from .status import Attribute, Status
from .summary import Summary

logger = logging.getLogger(__name__)

# --kind choices for `normalize`
RECORD_KINDS: dict[str, typing.Callable[[typing.Any], typing.Any]] = {
    "collection": decode_collection,
    "dataset": lambda tree: decode_dataset(tree, MetricRecord),
    "metric": lambda tree: decode(tree, MetricRecord),
    "summary": lambda tree: decode(tree, Summary),
    "status": lambda tree: decode(tree, Status),
    "news": lambda tree: decode(tree, NewsItems),
    "last-update": lambda tree: decode(tree, LastUpdate),
}


@click.group()
@click.option("--verbose", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def main(verbose: bool = False, log_file_path: typing.Optional[str] = None):
    """c19data: dashboard data records and their JSON codec."""
    _configure_logging(verbose, log_file_path)


def _configure_logging(verbose: bool, log_file_path: typing.Optional[str]) -> None:
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


payload_option = click.option(
    "-p",
    "--payload-path",
    "payload_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="path to the JSON payload",
)


@main.command(name="check")
@payload_option
def check(payload_file: str):
    """
    Audit a collection payload ({"<dataset>": [{"date": ..., "value": ...}, ...]}).
    Bad records are reported and skipped; date gaps are reported as warnings.
    Exits with status 1 if any errors were found.
    """
    tree = _read_payload(payload_file)

    notepad = create_notepad("payload")
    datasets = audit_collection(tree, notepad)
    _report_issues(notepad)

    click.echo(
        f"Kept {sum(len(records) for records in datasets.values())} records "
        f"in {len(datasets)} datasets"
    )
    if notepad.has_errors(include_subsections=True):
        sys.exit(1)


@main.command(name="normalize")
@payload_option
@click.option(
    "-k",
    "--kind",
    default="collection",
    show_default=True,
    type=click.Choice(sorted(RECORD_KINDS)),
    help="record kind the payload holds",
)
def normalize(payload_file: str, kind: str):
    """
    Decode a payload strictly, then print it re-encoded in canonical form
    (unknown fields dropped, schema field order).
    """
    tree = _read_payload(payload_file)
    try:
        decoded = RECORD_KINDS[kind](tree)
    except DecodeError as e:
        _fail(f"{payload_file}: {e}")
    click.echo(dumps(decoded, indent=2))


@main.command(name="table")
@payload_option
@click.option("-d", "--dataset", "dataset_name", required=True, help="dataset to print")
def table(payload_file: str, dataset_name: str):
    """Print one dataset of a collection payload as a date/value table."""
    tree = _read_payload(payload_file)
    try:
        datasets = decode_collection(tree)
    except DecodeError as e:
        _fail(f"{payload_file}: {e}")
    if dataset_name not in datasets:
        _fail(f"Dataset {dataset_name!r} not found; available: {', '.join(datasets) or 'none'}")
    click.echo(dataset_to_frame(datasets[dataset_name]).to_string(index=False))


def _parse_attribute(ctx, param, label: typing.Optional[str]) -> typing.Optional[Attribute]:
    if label is None:
        return None
    try:
        return Attribute.from_label(label)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None


@main.command(name="status")
@payload_option
@click.option(
    "-a",
    "--attr",
    "attribute",
    callback=_parse_attribute,
    help='only print nodes with this attribute, e.g. "severely patients"',
)
def status(payload_file: str, attribute: typing.Optional[Attribute]):
    """Print a status payload as an indented tree, one 'attr: value' node per line."""
    tree = _read_payload(payload_file)
    try:
        root = decode(tree, Status)
    except DecodeError as e:
        _fail(f"{payload_file}: {e}")

    nodes = [(depth, node) for depth, node in root.walk() if attribute is None or node.attr is attribute]
    if not nodes:
        _fail(f"No {attribute.value!r} node in {payload_file}")
    for depth, node in nodes:
        indent = "  " * depth if attribute is None else ""
        click.echo(f"{indent}{node.attr.value}: {node.value}")
    if root.last_update is not None and attribute is None:
        click.echo(f"last update: {format_datetime(root.last_update)}")


def _fail(message: str) -> typing.NoReturn:
    logger.error(message)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _read_payload(payload_file: str) -> typing.Any:
    logger.info(f"Reading payload '{payload_file}'")
    try:
        return loads(pathlib.Path(payload_file).read_bytes())
    except DecodeError as e:
        _fail(f"{payload_file}: {e}")


def _report_issues(notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in payload:")
        for err in notepad.errors():
            click.echo(f"- {err}")
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in payload:")
        for w in notepad.warnings():
            click.echo(f"- {w}")


if __name__ == "__main__":
    main()
