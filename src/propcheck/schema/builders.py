"""Builder functions for schema nodes.

Example:
    User = Type.object({
        "id": Type.object_id(),
        "name": Type.string(min_length=1),
        "createdAt": Type.date(),
        "title": Type.optional(Type.string()),
    })

    UserSummary = Type.pick(User, ["id", "name"])
"""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from propcheck.schema.nodes import (
    ArraySchema,
    BuiltinKind,
    ObjectSchema,
    PickSchema,
    PrimitiveKind,
    PrimitiveSchema,
    SchemaNode,
    UnsafeSchema,
)


class Type:
    """Namespace of schema builders.

    Every builder accepts keyword options that are attached to the node
    as-is (``error_message``, ``format``, constraints, or extra metadata).
    """

    @staticmethod
    def string(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.STRING, options=options)

    @staticmethod
    def number(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.NUMBER, options=options)

    @staticmethod
    def integer(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.INTEGER, options=options)

    @staticmethod
    def boolean(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.BOOLEAN, options=options)

    @staticmethod
    def date(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.DATE, options=options)

    @staticmethod
    def null(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.NULL, options=options)

    @staticmethod
    def function(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.FUNCTION, options=options)

    @staticmethod
    def any(**options: Any) -> PrimitiveSchema:
        return PrimitiveSchema(PrimitiveKind.ANY, options=options)

    @staticmethod
    def object(
        properties: Mapping[str, SchemaNode],
        *,
        required: Iterable[str] | None = None,
        **options: Any,
    ) -> ObjectSchema:
        """Build an object schema.

        Args:
            properties: Property name -> schema, in declaration order
            required: Required property names. Defaults to every property
                not wrapped in Type.optional().

        Raises:
            UnknownKeyError: If ``required`` names an undeclared property
        """
        return ObjectSchema(
            properties,
            None if required is None else frozenset(required),
            options=options,
        )

    @staticmethod
    def array(element: SchemaNode, **options: Any) -> ArraySchema:
        return ArraySchema(element, options=options)

    @staticmethod
    def pick(source: ObjectSchema, keys: Iterable[str], **options: Any) -> PickSchema:
        """Build an object schema holding only ``keys`` of ``source``.

        Raises:
            UnknownKeyError: If a key is not a property of ``source``
        """
        return PickSchema(source=source, keys=tuple(keys), options=options)

    @staticmethod
    def unsafe(kind: str, **options: Any) -> UnsafeSchema:
        """Build a leaf validated by the type check registered under ``kind``."""
        return UnsafeSchema(kind, options=options)

    @staticmethod
    def object_id(**options: Any) -> UnsafeSchema:
        return UnsafeSchema(BuiltinKind.OBJECT_ID.value, options=options)

    @staticmethod
    def numeric_value(**options: Any) -> UnsafeSchema:
        return UnsafeSchema(BuiltinKind.NUMERIC_VALUE.value, options=options)

    @staticmethod
    def react_node(**options: Any) -> UnsafeSchema:
        return UnsafeSchema(BuiltinKind.REACT_NODE.value, options=options)

    @staticmethod
    def optional(schema: SchemaNode) -> SchemaNode:
        """Return a copy of ``schema`` that is not required as an object property."""
        return replace(schema, optional=True)
