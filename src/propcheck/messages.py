"""Error message rendering.

The active error function turns one ValidationError into a message. The
policy implemented by ``error_function``, in priority order:
1. The node's ``error_message`` option, verbatim
2. "is missing" for absent required properties
3. The default description for the error kind, followed by
   "not <value>" naming the offending value

Replace the function on a ValidationContext (or process-wide with
context.set_error_function) to change rendering for every validation.
"""

import json
import math
from datetime import date
from typing import Any

from propcheck.schema.nodes import (
    ArraySchema,
    ObjectSchema,
    PrimitiveKind,
    PrimitiveSchema,
    SchemaNode,
    UnsafeSchema,
)
from propcheck.types import MISSING, ValidationError, ValueErrorType

_PRIMITIVE_NAMES = {
    PrimitiveKind.STRING: "string",
    PrimitiveKind.NUMBER: "number",
    PrimitiveKind.INTEGER: "integer",
    PrimitiveKind.BOOLEAN: "boolean",
    PrimitiveKind.DATE: "Date",
    PrimitiveKind.NULL: "null",
    PrimitiveKind.FUNCTION: "function",
    PrimitiveKind.ANY: "any",
}


def json_default(value: Any) -> Any:
    """``default`` hook for json.dumps over validated values."""
    if isinstance(value, date):
        return value.isoformat()
    if value is MISSING:
        return None
    return str(value)


def _number_text(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def quick_value(value: Any) -> str:
    """Short textual representation of a value for messages.

    None renders as "null", MISSING as "undefined", containers as compact
    JSON and strings as-is.
    """
    if value is None:
        return "null"
    if value is MISSING:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_text(value)
    if isinstance(value, str):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, separators=(",", ":"), default=json_default)
        except (TypeError, ValueError):
            return str(value)
    return str(value)


def _expected(schema: SchemaNode) -> str:
    if isinstance(schema, PrimitiveSchema):
        return f"Expected {_PRIMITIVE_NAMES[schema.kind]}"
    if isinstance(schema, ArraySchema):
        return "Expected array"
    if isinstance(schema, ObjectSchema):
        return "Expected object"
    if isinstance(schema, UnsafeSchema):
        return f"Expected kind '{schema.kind}'"
    return "Expected value"


def default_error_function(error: ValidationError) -> str:
    """Describe an error by its kind, without naming the value."""
    options = error.schema.options
    error_type = error.error_type

    if error_type in (ValueErrorType.TYPE, ValueErrorType.CUSTOM):
        return _expected(error.schema)
    elif error_type == ValueErrorType.FORMAT:
        return f"Expected string to match '{options.get('format')}' format"
    elif error_type == ValueErrorType.UNREGISTERED_FORMAT:
        return f"Unknown format '{options.get('format')}'"
    elif error_type == ValueErrorType.UNREGISTERED_KIND:
        return f"Unknown kind '{getattr(error.schema, 'kind', '')}'"
    elif error_type == ValueErrorType.OBJECT_REQUIRED_PROPERTY:
        return "Required property"
    elif error_type == ValueErrorType.STRING_MIN_LENGTH:
        return f"Expected string length greater or equal to {options.get('min_length')}"
    elif error_type == ValueErrorType.STRING_MAX_LENGTH:
        return f"Expected string length less or equal to {options.get('max_length')}"
    elif error_type == ValueErrorType.STRING_PATTERN:
        return f"Expected string to match '{options.get('pattern')}'"
    elif error_type == ValueErrorType.NUMBER_MINIMUM:
        return f"Expected number to be greater or equal to {options.get('minimum')}"
    elif error_type == ValueErrorType.NUMBER_MAXIMUM:
        return f"Expected number to be less or equal to {options.get('maximum')}"
    elif error_type == ValueErrorType.ARRAY_MIN_ITEMS:
        return f"Expected array length to be greater or equal to {options.get('min_items')}"
    elif error_type == ValueErrorType.ARRAY_MAX_ITEMS:
        return f"Expected array length to be less or equal to {options.get('max_items')}"

    return "Invalid value"


def error_function(error: ValidationError) -> str:
    """Render an error with the default message policy."""
    if "error_message" in error.schema.options:
        return error.schema.error_message

    if error.error_type == ValueErrorType.OBJECT_REQUIRED_PROPERTY:
        return "is missing"

    return f"{default_error_function(error)} not {quick_value(error.value)}"
