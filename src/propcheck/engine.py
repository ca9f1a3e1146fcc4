"""Validation engine.

Walks a schema and a value together and yields one ValidationError per
violation, in pre-order: object properties in declaration order, array
items in index order. Validation never raises for invalid values;
unregistered kinds and formats become errors too.

Usage:
    from propcheck.engine import check, errors

    if not check(schema, props):
        for error in errors(schema, props):
            print(error.path, error.message)
"""

import math
from collections.abc import Iterator, Mapping
from dataclasses import replace
from datetime import date
from typing import Any

from propcheck.context import ValidationContext, default_context
from propcheck.registry import UnregisteredFormatError, UnregisteredKindError
from propcheck.schema.nodes import (
    ArraySchema,
    ObjectSchema,
    PrimitiveKind,
    PrimitiveSchema,
    SchemaError,
    SchemaNode,
    UnsafeSchema,
)
from propcheck.types import MISSING, ValidationError, ValueErrorType


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_integer(value: Any) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return True
    return isinstance(value, float) and value.is_integer()


_PRIMITIVE_CHECKS = {
    PrimitiveKind.STRING: lambda value: isinstance(value, str),
    PrimitiveKind.NUMBER: _is_number,
    PrimitiveKind.INTEGER: _is_integer,
    PrimitiveKind.BOOLEAN: lambda value: isinstance(value, bool),
    PrimitiveKind.DATE: lambda value: isinstance(value, date),
    PrimitiveKind.NULL: lambda value: value is None,
    PrimitiveKind.FUNCTION: callable,
    PrimitiveKind.ANY: lambda value: True,
}


def _escape_key(key: str) -> str:
    return key.replace("~", "~0").replace("/", "~1")


class ErrorWalker:
    """Yields the errors for a schema/value pair.

    Usage:
        walker = ErrorWalker(context)
        for error in walker.walk(schema, value):
            ...
    """

    def __init__(self, context: ValidationContext):
        self.context = context

    def walk(self, schema: SchemaNode, value: Any, path: str = "") -> Iterator[ValidationError]:
        """Yield every error for ``value`` against ``schema`` at ``path``."""
        method_name = f"_visit_{type(schema).__name__.lower()}"
        method = getattr(self, method_name, None)

        if method is None:
            raise SchemaError(f"Unknown schema node type: {type(schema).__name__}")

        yield from method(schema, value, path)

    def _error(
        self,
        error_type: ValueErrorType,
        schema: SchemaNode,
        path: str,
        value: Any,
    ) -> ValidationError:
        error = ValidationError(path=path, schema=schema, value=value, error_type=error_type)
        return replace(error, message=self.context.error_function(error))

    # -------------------------------------------------------------------------
    # Node visitors
    # -------------------------------------------------------------------------

    def _visit_primitiveschema(
        self, schema: PrimitiveSchema, value: Any, path: str
    ) -> Iterator[ValidationError]:
        if not _PRIMITIVE_CHECKS[schema.kind](value):
            yield self._error(ValueErrorType.TYPE, schema, path, value)
            return

        if schema.kind == PrimitiveKind.STRING:
            yield from self._string_constraints(schema, value, path)
        elif schema.kind in (PrimitiveKind.NUMBER, PrimitiveKind.INTEGER):
            yield from self._number_constraints(schema, value, path)

    def _string_constraints(
        self, schema: PrimitiveSchema, value: str, path: str
    ) -> Iterator[ValidationError]:
        options = schema.options

        min_length = options.get("min_length")
        if min_length is not None and len(value) < min_length:
            yield self._error(ValueErrorType.STRING_MIN_LENGTH, schema, path, value)

        max_length = options.get("max_length")
        if max_length is not None and len(value) > max_length:
            yield self._error(ValueErrorType.STRING_MAX_LENGTH, schema, path, value)

        pattern = schema.compiled_pattern
        if pattern is not None and not pattern.search(value):
            yield self._error(ValueErrorType.STRING_PATTERN, schema, path, value)

        if schema.format is not None:
            try:
                format_check = self.context.formats.resolve(schema.format)
            except UnregisteredFormatError:
                yield self._error(ValueErrorType.UNREGISTERED_FORMAT, schema, path, value)
                return
            if not format_check(value):
                yield self._error(ValueErrorType.FORMAT, schema, path, value)

    def _number_constraints(
        self, schema: PrimitiveSchema, value: int | float, path: str
    ) -> Iterator[ValidationError]:
        minimum = schema.options.get("minimum")
        if minimum is not None and value < minimum:
            yield self._error(ValueErrorType.NUMBER_MINIMUM, schema, path, value)

        maximum = schema.options.get("maximum")
        if maximum is not None and value > maximum:
            yield self._error(ValueErrorType.NUMBER_MAXIMUM, schema, path, value)

    def _visit_objectschema(
        self, schema: ObjectSchema, value: Any, path: str
    ) -> Iterator[ValidationError]:
        if not isinstance(value, Mapping):
            yield self._error(ValueErrorType.TYPE, schema, path, value)
            return

        # Undeclared keys in the value are not checked
        for name, property_schema in schema.properties.items():
            property_path = f"{path}/{_escape_key(name)}"
            if name in value:
                yield from self.walk(property_schema, value[name], property_path)
            elif name in schema.required:
                yield self._error(
                    ValueErrorType.OBJECT_REQUIRED_PROPERTY,
                    property_schema,
                    property_path,
                    MISSING,
                )

    _visit_pickschema = _visit_objectschema

    def _visit_arrayschema(
        self, schema: ArraySchema, value: Any, path: str
    ) -> Iterator[ValidationError]:
        if not isinstance(value, (list, tuple)):
            yield self._error(ValueErrorType.TYPE, schema, path, value)
            return

        min_items = schema.options.get("min_items")
        if min_items is not None and len(value) < min_items:
            yield self._error(ValueErrorType.ARRAY_MIN_ITEMS, schema, path, value)

        max_items = schema.options.get("max_items")
        if max_items is not None and len(value) > max_items:
            yield self._error(ValueErrorType.ARRAY_MAX_ITEMS, schema, path, value)

        for index, item in enumerate(value):
            yield from self.walk(schema.element, item, f"{path}/{index}")

    def _visit_unsafeschema(
        self, schema: UnsafeSchema, value: Any, path: str
    ) -> Iterator[ValidationError]:
        try:
            type_check = self.context.types.resolve(schema.kind)
        except UnregisteredKindError:
            yield self._error(ValueErrorType.UNREGISTERED_KIND, schema, path, value)
            return

        if not type_check(schema, value):
            yield self._error(ValueErrorType.CUSTOM, schema, path, value)


class ValidationErrors:
    """Lazy, restartable sequence of the errors for a schema/value pair.

    Each iteration walks the value again with the context's current
    registries; nothing is cached.
    """

    def __init__(self, schema: SchemaNode, value: Any, context: ValidationContext):
        self.schema = schema
        self.value = value
        self.context = context

    def __iter__(self) -> Iterator[ValidationError]:
        return ErrorWalker(self.context).walk(self.schema, self.value)

    def first(self) -> ValidationError | None:
        """Get the first error, or None if the value is valid."""
        return next(iter(self), None)


def errors(
    schema: SchemaNode,
    value: Any,
    context: ValidationContext | None = None,
) -> ValidationErrors:
    """Get every error for ``value`` against ``schema``.

    Args:
        schema: Schema to validate against
        value: Runtime value to validate
        context: Registries and error function (default: process-wide context)
    """
    return ValidationErrors(schema, value, context or default_context())


def check(
    schema: SchemaNode,
    value: Any,
    context: ValidationContext | None = None,
) -> bool:
    """Check if ``value`` matches ``schema``. Stops at the first error."""
    return errors(schema, value, context).first() is None
