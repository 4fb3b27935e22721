"""JMESPath projection of generic documents."""

import jmespath
from jmespath.exceptions import JMESPathError

from .errors import EvaluationFailure, InvalidExpression
from .utils import debug_print


def compile_query(expression: str):
    """Compile a JMESPath expression.

    Raises:
        InvalidExpression: If the expression is malformed
    """
    try:
        return jmespath.compile(expression)
    except JMESPathError as e:
        raise InvalidExpression(f"invalid JMESPath query {expression!r}: {e}") from e


def apply_query(document, expression=None):
    """Apply an optional JMESPath expression to a generic document.

    Args:
        document: Decoded JSON document (dicts, lists and scalars)
        expression: JMESPath expression; None or empty returns the document as is

    Returns:
        Projected document. A query that matches nothing yields an empty list.

    Raises:
        InvalidExpression: If the expression is malformed
        EvaluationFailure: If evaluation fails, e.g. a function type mismatch
    """
    if not expression:
        return document

    compiled = compile_query(expression)
    debug_print(f"Applying JMESPath query: {expression}")  # pragma: no mutate

    try:
        result = compiled.search(document)
    except JMESPathError as e:
        raise EvaluationFailure(f"JMESPath query error: {e}") from e

    if result is None:
        debug_print("Query matched nothing, using empty list")  # pragma: no mutate
        return []

    return result
