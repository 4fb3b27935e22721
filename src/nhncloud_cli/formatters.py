"""Table output formatting for the NHN Cloud CLI."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import List

from tabulate import tabulate

from .shapes import ShapeKind, classify, is_record, is_sequence, record_to_dict
from .utils import debug_print

MAX_CELL_WIDTH = 50
ELLIPSIS = "..."

NO_RESULTS = "No results found."
NO_COLUMNS = "No matching columns found."


def truncate_value(text, limit=MAX_CELL_WIDTH):
    """Truncate text longer than limit, keeping the total length at limit.

    Examples:
        "x" * 120 -> "x" * 47 + "..."
        "short" -> "short"
    """
    if len(text) > limit:
        return text[: limit - len(ELLIPSIS)] + ELLIPSIS
    return text


def _nested_default(obj):
    if is_record(obj):
        return record_to_dict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    return str(obj)


def format_cell(value):
    """Render a single value as cell text.

    None renders empty and booleans render lowercase as in JSON. Nested
    records, mappings and sequences render as compact JSON; everything else
    uses its default text form.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        value = dict(value)
    elif not (is_record(value) or is_sequence(value)):
        return str(value)
    try:
        return json.dumps(value, default=_nested_default, ensure_ascii=False)
    except (TypeError, ValueError):
        # Non-string map keys and cycles have no JSON form
        return str(value)


def _tabulate(rows, headers=()):
    """Align rows into columns separated by at least two spaces."""
    table = tabulate(
        rows,
        headers=list(headers),
        tablefmt="plain",
        stralign="left",
        disable_numparse=True,
    )
    return "\n".join(line.rstrip() for line in table.splitlines())


def _format_record(record, fields):
    if not fields:
        return NO_COLUMNS
    rows = [[f"{field.display_name}:", format_cell(field.value_of(record))] for field in fields]
    return _tabulate(rows)


def _format_record_list(records, fields):
    if not fields:
        return NO_COLUMNS
    headers = [field.display_name.upper() for field in fields]
    rows = [
        [truncate_value(format_cell(field.value_of(record))) for field in fields]
        for record in records
    ]
    debug_print(f"Formatting {len(rows)} records with {len(headers)} columns")  # pragma: no mutate
    return _tabulate(rows, headers)


def _format_map_list(items, keys):
    if not keys:
        return NO_COLUMNS
    rows: List[List[str]] = []
    for item in items:
        # Keys absent from later items render as empty cells
        rows.append([truncate_value(format_cell(item[key])) if key in item else "" for key in keys])
    return _tabulate(rows, [str(key) for key in keys])


def _format_keyed_map(mapping, keys):
    rows = [[str(key), format_cell(mapping[key])] for key in keys]
    return _tabulate(rows, ["KEY", "VALUE"])


def format_table_output(value):
    """Format a result value as an aligned text table.

    Layout depends on the value's shape:
    - single record: one "name:  value" line per field
    - list of records: uppercased header row plus one row per record
    - list of mappings: header from the first mapping's keys
    - mapping: KEY/VALUE rows
    - anything else: its text form, one line per element for sequences

    Returns:
        Table text without a trailing newline
    """
    shape = classify(value)

    if shape.kind is ShapeKind.RECORD:
        return _format_record(value, shape.fields)

    if shape.kind is ShapeKind.RECORD_LIST:
        records = list(value)
        if not records:
            return NO_RESULTS
        return _format_record_list(records, shape.fields)

    if shape.kind is ShapeKind.MAP_LIST:
        return _format_map_list(list(value), shape.keys)

    if shape.kind is ShapeKind.KEYED_MAP:
        return _format_keyed_map(value, shape.keys)

    if shape.kind is ShapeKind.SEQUENCE:
        items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
        return "\n".join(format_cell(item) for item in items)

    return format_cell(value)
