"""Schema model: immutable schema nodes and their builders."""

from propcheck.schema.builders import Type
from propcheck.schema.nodes import (
    ArraySchema,
    BuiltinKind,
    ObjectSchema,
    PickSchema,
    PrimitiveKind,
    PrimitiveSchema,
    SchemaError,
    SchemaNode,
    UnknownKeyError,
    UnsafeSchema,
)

__all__ = [
    "ArraySchema",
    "BuiltinKind",
    "ObjectSchema",
    "PickSchema",
    "PrimitiveKind",
    "PrimitiveSchema",
    "SchemaError",
    "SchemaNode",
    "Type",
    "UnknownKeyError",
    "UnsafeSchema",
]
