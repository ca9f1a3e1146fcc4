"""Built-in Unsafe kinds.

- ObjectId: a 24-character hexadecimal identifier
- NumericValue: a number, or a string that starts with a number
- ReactNode: something a UI runtime can render

Usage:
    from propcheck.kinds import register_builtin_kinds

    register_builtin_kinds(context.types, is_renderable=ui.is_component)
"""

import math
import re
from typing import Any, Callable

from propcheck.registry import TypeRegistry
from propcheck.schema.nodes import BuiltinKind, SchemaNode
from propcheck.types import TypeCheck

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

# Longest numeric prefix, the way a lenient float parser reads it
NUMERIC_PREFIX_PATTERN = re.compile(
    r"^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def to_number(value: Any) -> float | int | None:
    """Attempt to convert a value into a number.

    Numbers pass through unless NaN. Strings are parsed by their leading
    numeric prefix, so "42px" gives 42.0. Everything else (including
    booleans) gives None.
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and math.isnan(value) else value

    if not isinstance(value, str):
        return None

    match = NUMERIC_PREFIX_PATTERN.match(value)
    if match is None:
        return None
    return float(match.group(0).strip().replace("Infinity", "inf"))


def is_object_id(value: Any) -> bool:
    """Check if a value is a valid ObjectId.

    Accepts 24-character hex strings, 12-byte strings, and objects
    exposing a 12-byte ``binary`` attribute (e.g. bson.ObjectId).
    """
    if not value:
        return False

    if isinstance(value, str):
        return bool(OBJECT_ID_PATTERN.match(value))

    if isinstance(value, (bytes, bytearray)):
        return len(value) == 12

    binary = getattr(value, "binary", None)
    return isinstance(binary, bytes) and len(binary) == 12


def _object_id_check(schema: SchemaNode, value: Any) -> bool:
    return is_object_id(value)


def _numeric_value_check(schema: SchemaNode, value: Any) -> bool:
    return to_number(value) is not None


def react_node_check(is_renderable: Callable[[Any], bool] | None = None) -> TypeCheck:
    """Build the ReactNode type check.

    Args:
        is_renderable: Predicate supplied by the UI runtime for its own
            component objects. Without it only None, numbers, strings and
            callables are accepted.
    """

    def check(schema: SchemaNode, value: Any) -> bool:
        if value is None or isinstance(value, str) or callable(value):
            return True
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return True
        return is_renderable is not None and is_renderable(value)

    return check


def register_builtin_kinds(
    registry: TypeRegistry,
    is_renderable: Callable[[Any], bool] | None = None,
) -> None:
    """Register ObjectId, NumericValue and ReactNode."""
    registry.register(BuiltinKind.OBJECT_ID.value, _object_id_check)
    registry.register(BuiltinKind.NUMERIC_VALUE.value, _numeric_value_check)
    registry.register(BuiltinKind.REACT_NODE.value, react_node_check(is_renderable))
