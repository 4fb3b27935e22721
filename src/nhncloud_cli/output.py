"""Output dispatch: projection, encoding and table rendering of command results."""

import enum
import sys

from .encoders import encode_json, encode_yaml, to_document
from .errors import InvalidOutputFormat, WriteFailure
from .formatters import format_table_output
from .query import apply_query
from .utils import debug_print


class OutputFormat(enum.Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"

    @classmethod
    def parse(cls, value):
        """Parse a render mode name; None selects the table layout.

        Raises:
            InvalidOutputFormat: If the name is not a known render mode
        """
        if value is None:
            return cls.TABLE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise InvalidOutputFormat(
                f"unknown output format {value!r} (choose from {choices})"
            ) from None


def format_output(value, output_format=OutputFormat.TABLE, query=None) -> str:
    """Produce the complete output text for a result value.

    The table layout renders the original value so that type specific text
    forms survive, and never builds a document; with a query, table output
    falls back to JSON since a projection's shape rarely fits fixed columns.

    Raises:
        InvalidOutputFormat, InvalidExpression, EvaluationFailure, EncodingFailure
    """
    output_format = OutputFormat.parse(output_format)

    if output_format is OutputFormat.TABLE and not query:
        debug_print("Rendering table output")  # pragma: no mutate
        return format_table_output(value) + "\n"

    document = to_document(value)
    projected = apply_query(document, query)

    if output_format is OutputFormat.JSON:
        debug_print("Rendering JSON output")  # pragma: no mutate
        return encode_json(projected)

    if output_format is OutputFormat.YAML:
        debug_print("Rendering YAML output")  # pragma: no mutate
        return encode_yaml(projected)

    debug_print("Query given with table output, rendering JSON instead")  # pragma: no mutate
    return encode_json(projected)


def write_output(text, stream=None):
    """Write text to the stream (stdout by default) and flush it.

    Raises:
        WriteFailure: If writing or flushing fails
    """
    if stream is None:
        stream = sys.stdout
    try:
        stream.write(text)
        stream.flush()
    except (OSError, ValueError) as e:
        raise WriteFailure(f"failed to write output: {e}") from e


def render_output(value, output_format=OutputFormat.TABLE, query=None, stream=None):
    """Render a command result exactly once in the requested format.

    Nothing is written unless the whole output could be produced.

    Args:
        value: Command result of any shape
        output_format: OutputFormat or one of "table", "json", "yaml"
        query: Optional JMESPath expression
        stream: Text stream to write to, stdout by default
    """
    text = format_output(value, output_format, query)
    write_output(text, stream)
