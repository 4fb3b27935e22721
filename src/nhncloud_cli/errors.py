"""Errors raised by the output rendering pipeline.

All of them are terminal for the current command: the CLI reports the message
and exits with a non-zero status.
"""


class OutputError(Exception):
    """Base class for rendering failures."""


class InvalidOutputFormat(OutputError, ValueError):
    """Requested render mode is not one of table, json or yaml."""


class InvalidExpression(OutputError):
    """Projection expression could not be parsed."""


class EvaluationFailure(OutputError):
    """Projection expression failed while being evaluated against the document."""


class EncodingFailure(OutputError):
    """Document could not be serialized."""


class WriteFailure(OutputError):
    """Output stream could not be written or flushed."""


class InvalidDocument(Exception):
    """Input document could not be read, parsed or decoded into records."""


class UnknownRecordType(LookupError):
    """No record type is registered under the requested name."""
