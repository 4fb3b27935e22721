"""Conversion of result values to generic documents, and JSON/YAML encoding."""

import base64
import datetime
import decimal
import enum
import json

import yaml

from .errors import EncodingFailure
from .shapes import is_record, record_to_dict


def _encode_default(obj):
    """json.dumps hook for values the json module does not know."""
    if is_record(obj):
        return record_to_dict(obj)
    if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
        return obj.isoformat()
    if isinstance(obj, decimal.Decimal):
        if obj.is_finite() and obj == obj.to_integral_value():
            return int(obj)
        return float(obj)
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    return str(obj)


def to_document(value):
    """Convert a result value to a generic document by a JSON round trip.

    Records become dicts keyed by display name in declaration order, lists and
    tuples become lists, and the result is exactly what a JSON consumer would
    decode from ``encode_json(value)``.

    Raises:
        EncodingFailure: If the value cannot be serialized (e.g. circular references)
    """
    try:
        return json.loads(json.dumps(value, default=_encode_default))
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingFailure(f"failed to convert result to document: {e}") from e


def encode_json(document) -> str:
    """Encode a document as two-space indented JSON with a trailing newline.

    NaN and infinite floats have no JSON form and raise EncodingFailure.
    """
    try:
        return (
            json.dumps(
                document,
                indent=2,
                ensure_ascii=False,
                allow_nan=False,
                default=_encode_default,
            )
            + "\n"
        )
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingFailure(f"failed to encode JSON: {e}") from e


class IndentedDumper(yaml.SafeDumper):
    """SafeDumper that indents sequences nested under a mapping key."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


DOCUMENT_END = "...\n"


def encode_yaml(document) -> str:
    """Encode a document as two-space indented block style YAML.

    Keys keep document order; the document is expected to come from
    ``to_document`` so only plain dicts, lists and scalars reach the dumper.
    A scalar document is written without the "..." end marker.
    """
    try:
        text = yaml.dump(
            document,
            Dumper=IndentedDumper,
            indent=2,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        raise EncodingFailure(f"failed to encode YAML: {e}") from e

    if text.endswith("\n" + DOCUMENT_END):
        text = text[: -len(DOCUMENT_END)]
    return text
