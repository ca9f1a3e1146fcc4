"""Schema node types.

Schema nodes form an immutable tree: every node is a frozen dataclass,
child mappings are read-only, and children must already exist when a
parent is built, so a node can never contain itself. Nodes are safe to
share between threads and validation calls.

Options passed to a builder are attached verbatim to the node. The
recognized ones are:
- error_message: replaces every message rendered for errors at this node
- format: named string format (string primitives only)
- min_length / max_length / pattern: string constraints
- minimum / maximum: number and integer constraints
- min_items / max_items: array constraints
Anything else is kept as opaque metadata and is visible to type checks.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class SchemaError(Exception):
    """Raised when a schema is authored incorrectly."""


class UnknownKeyError(SchemaError):
    """Raised when a schema names a property that does not exist."""

    def __init__(self, keys: Iterable[str], available: Iterable[str]):
        self.keys = list(keys)
        self.available = list(available)
        super().__init__(
            f"Unknown key(s) {', '.join(repr(k) for k in self.keys)}. "
            f"Available keys: {', '.join(self.available) or '(none)'}"
        )


class PrimitiveKind(Enum):
    """Built-in primitive value kinds."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"
    NULL = "null"
    FUNCTION = "function"
    ANY = "any"


class BuiltinKind(Enum):
    """Unsafe kinds registered by register_builtin_kinds()."""

    OBJECT_ID = "ObjectId"
    NUMERIC_VALUE = "NumericValue"
    REACT_NODE = "ReactNode"


_CAMEL_BOUNDARY = re.compile(r"_([a-z])")


def _to_camel_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def _check_count(options: Mapping[str, Any], name: str) -> None:
    value = options.get(name)
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaError(f"Option '{name}' must be a non-negative integer, got {value!r}")


def _check_bound(options: Mapping[str, Any], name: str) -> None:
    value = options.get(name)
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"Option '{name}' must be a number, got {value!r}")


@dataclass(frozen=True, eq=False)
class SchemaNode:
    """Base class for all schema nodes.

    Attributes:
        options: Read-only options bag (see module docstring)
        optional: If True, the node is not required as an object property
    """

    options: Mapping[str, Any] = field(default_factory=dict, kw_only=True)
    optional: bool = field(default=False, kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def error_message(self) -> str | None:
        return self.options.get("error_message")

    def to_dict(self) -> dict[str, Any]:
        """Export as a JSON-friendly dict (camelCase option keys)."""
        return {_to_camel_case(key): value for key, value in self.options.items()}


@dataclass(frozen=True, eq=False)
class PrimitiveSchema(SchemaNode):
    """A string, number, integer, boolean, date, null, function or any value."""

    kind: PrimitiveKind
    compiled_pattern: re.Pattern[str] | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Check the constraints that apply to this kind.

        Raises:
            SchemaError: If a constraint has the wrong type or ``pattern``
                is not a valid regular expression
        """
        super().__post_init__()
        options = self.options

        if self.kind == PrimitiveKind.STRING:
            _check_count(options, "min_length")
            _check_count(options, "max_length")

            fmt = options.get("format")
            if fmt is not None and not isinstance(fmt, str):
                raise SchemaError(f"Option 'format' must be a string, got {fmt!r}")

            pattern = options.get("pattern")
            if pattern is not None:
                if not isinstance(pattern, str):
                    raise SchemaError(f"Option 'pattern' must be a string, got {pattern!r}")
                try:
                    compiled = re.compile(pattern)
                except re.error as exc:
                    raise SchemaError(f"Invalid pattern {pattern!r}: {exc}") from exc
                object.__setattr__(self, "compiled_pattern", compiled)

        elif self.kind in (PrimitiveKind.NUMBER, PrimitiveKind.INTEGER):
            _check_bound(options, "minimum")
            _check_bound(options, "maximum")

    @property
    def format(self) -> str | None:
        return self.options.get("format")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, **super().to_dict()}


@dataclass(frozen=True, eq=False)
class ObjectSchema(SchemaNode):
    """A mapping with declared properties.

    Properties not in ``required`` may be absent. When ``required`` is not
    given, every property not marked optional is required. Keys present in
    a value but not declared here are ignored.
    """

    properties: Mapping[str, SchemaNode]
    required: frozenset[str] | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        for name, node in self.properties.items():
            if not isinstance(node, SchemaNode):
                raise SchemaError(f"Property '{name}' is not a schema node: {node!r}")
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

        if self.required is None:
            required = frozenset(
                name for name, node in self.properties.items() if not node.optional
            )
        else:
            required = frozenset(self.required)
            unknown = [name for name in self.required if name not in self.properties]
            if unknown:
                raise UnknownKeyError(unknown, self.properties)
        object.__setattr__(self, "required", required)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {name: node.to_dict() for name, node in self.properties.items()},
            "required": [name for name in self.properties if name in self.required],
            **super().to_dict(),
        }


@dataclass(frozen=True, eq=False)
class PickSchema(ObjectSchema):
    """An object schema restricted to selected properties of another one.

    The selected properties keep their sub-schemas and their required flag.

    Raises:
        UnknownKeyError: If a key is not a property of ``source``
    """

    properties: Mapping[str, SchemaNode] = field(init=False, default=None)
    required: frozenset[str] | None = field(init=False, default=None)
    source: ObjectSchema = field(kw_only=True)
    keys: tuple[str, ...] = field(kw_only=True)

    def __post_init__(self) -> None:
        keys = tuple(self.keys)
        unknown = [key for key in keys if key not in self.source.properties]
        if unknown:
            raise UnknownKeyError(unknown, self.source.properties)

        object.__setattr__(self, "keys", keys)
        object.__setattr__(
            self, "properties", {key: self.source.properties[key] for key in keys}
        )
        object.__setattr__(
            self, "required", frozenset(key for key in keys if key in self.source.required)
        )
        super().__post_init__()


@dataclass(frozen=True, eq=False)
class ArraySchema(SchemaNode):
    """An ordered sequence whose items all match ``element``."""

    element: SchemaNode

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.element, SchemaNode):
            raise SchemaError(f"Array element is not a schema node: {self.element!r}")
        _check_count(self.options, "min_items")
        _check_count(self.options, "max_items")

    def to_dict(self) -> dict[str, Any]:
        return {"type": "array", "items": self.element.to_dict(), **super().to_dict()}


@dataclass(frozen=True, eq=False)
class UnsafeSchema(SchemaNode):
    """An opaque leaf validated by the type check registered for ``kind``."""

    kind: str

    @property
    def builtin_kind(self) -> BuiltinKind | None:
        try:
            return BuiltinKind(self.kind)
        except ValueError:
            return None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **super().to_dict()}
