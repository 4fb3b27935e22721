"""Command-line interface for the NHN Cloud CLI."""

import argparse
import json
import sys
from collections.abc import Mapping

import argcomplete
import yaml

from .config import load_config, resolve_output_format, resolve_query
from .errors import InvalidDocument, OutputError, UnknownRecordType
from .models import RECORD_TYPES, get_record_type
from .output import OutputFormat, render_output
from .shapes import get_fields, record_from_mapping
from .utils import debug_print, set_debug_enabled


def record_type_completer(prefix, parsed_args, **kwargs):
    """Autocomplete record type names"""
    return [name for name in sorted(RECORD_TYPES) if name.startswith(prefix)]


def parse_document(text):
    """Parse a JSON or YAML document."""
    stripped = text.lstrip()
    try:
        if stripped.startswith(("{", "[")):
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidDocument(f"failed to parse input document: {e}") from e


def read_document(path=None):
    """Read a JSON or YAML document from a file, or stdin for None and "-"."""
    if not path or path == "-":
        debug_print("Reading document from stdin")  # pragma: no mutate
        try:
            text = sys.stdin.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidDocument(f"failed to read stdin: {e}") from e
        return parse_document(text)

    try:
        with open(path, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidDocument(f"failed to read {path}: {e}") from e
    debug_print(f"Read {len(text)} characters from {path}")  # pragma: no mutate
    return parse_document(text)


def _decode_record(record_type, item):
    if not isinstance(item, Mapping):
        raise InvalidDocument(
            f"expected an object for {record_type.__name__}, got {type(item).__name__}"
        )
    try:
        return record_from_mapping(record_type, item)
    except TypeError as e:
        raise InvalidDocument(f"failed to decode {record_type.__name__}: {e}") from e


def decode_records(document, record_type):
    """Decode a mapping into one record, or a list of mappings into a list of records."""
    if isinstance(document, list):
        return [_decode_record(record_type, item) for item in document]
    return _decode_record(record_type, document)


def run_command(args):
    """Execute the selected command and return its result value."""
    if args.command == "render":
        document = read_document(args.file)
        if args.record_type:
            return decode_records(document, get_record_type(args.record_type))
        return document

    if args.command == "fields":
        return list(get_fields(get_record_type(args.record_type)))

    if args.command == "record-types":
        return [{"name": name, "type": cls.__name__} for name, cls in RECORD_TYPES.items()]

    raise ValueError(f"unknown command {args.command!r}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="nhncloud",
        description="Render NHN Cloud API results as tables, JSON or YAML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nhncloud render volumes.json --record-type nas-volume
  nhncloud -o yaml render events.json
  nhncloud --query "[?status=='AVAILABLE'].name" render registries.json
  cat instances.yaml | nhncloud -o json render --record-type db-instance
  nhncloud fields audit-event  (show fields and display names)
  nhncloud record-types

Configuration Priority (highest to lowest):
  1. Command-line flags (--output, --query, --profile)
  2. Environment variables (NHN_CLOUD_OUTPUT, NHN_CLOUD_QUERY, NHN_CLOUD_PROFILE)
  3. Config file (~/.nhncloud/credentials, or NHN_CLOUD_CONFIG_FILE)
        """,
    )

    parser.add_argument(
        "-o",
        "--output",
        choices=[member.value for member in OutputFormat],
        help="Output format (default: table)",
    )
    parser.add_argument("--query", help="JMESPath query to filter output")
    parser.add_argument("--profile", help="Config file profile to use")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug output")

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render a JSON or YAML result document")
    render_parser.add_argument(
        "file", nargs="?", default="-", help="Document to render (default: stdin)"
    )
    record_type_arg = render_parser.add_argument(
        "--record-type", help="Decode the document into this record type"
    )
    record_type_arg.completer = record_type_completer  # type: ignore[attr-defined]

    fields_parser = subparsers.add_parser("fields", help="Show the fields of a record type")
    fields_type_arg = fields_parser.add_argument("record_type", help="Record type name")
    fields_type_arg.completer = record_type_completer  # type: ignore[attr-defined]

    subparsers.add_parser("record-types", help="List known record types")

    return parser


def main(argv=None):
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    set_debug_enabled(args.debug)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    try:
        config = load_config(args.profile)
        output_format = resolve_output_format(args.output, config)
        query = resolve_query(args.query, config)
        debug_print(
            f"Running {args.command} with output={output_format!r}, query={query!r}"
        )  # pragma: no mutate

        result = run_command(args)
        render_output(result, output_format, query)
    except (OutputError, InvalidDocument, UnknownRecordType) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
