"""propcheck: runtime schema validation.

Describe the shape of a value with a schema, check runtime values
against it, and get path-addressed errors with customizable messages:
- Schema model: Type builders (object, array, pick, primitives, unsafe kinds)
- Registries: type checks for custom kinds, format checks for strings
- Engine: check() and errors()
- Messages: the error function that renders each error
- Adapter: development-only input checkers for host components

Usage:
    from propcheck import Type, check, errors, make_checker

    User = Type.object({
        "id": Type.object_id(),
        "name": Type.string(),
        "clickedAt": Type.date(error_message="must be a date"),
    })

    check(User, {"id": "000000000000000000000000", "name": "Ann"})

    validate_props = make_checker(User)
    error = validate_props("UserCard", props)
"""

from propcheck.adapter import (
    CheckerConfig,
    Mode,
    PropsError,
    default_config,
    format_errors,
    make_checker,
)
from propcheck.context import (
    ValidationContext,
    default_context,
    get_error_function,
    register_format,
    register_type,
    reset_default_context,
    set_error_function,
    set_is_renderable,
)
from propcheck.engine import ValidationErrors, check, errors
from propcheck.formats import register_builtin_formats
from propcheck.kinds import register_builtin_kinds, to_number
from propcheck.messages import default_error_function, error_function, quick_value
from propcheck.registry import (
    FormatRegistry,
    RegistryError,
    TypeRegistry,
    UnregisteredFormatError,
    UnregisteredKindError,
)
from propcheck.schema import (
    ArraySchema,
    BuiltinKind,
    ObjectSchema,
    PickSchema,
    PrimitiveKind,
    PrimitiveSchema,
    SchemaError,
    SchemaNode,
    Type,
    UnknownKeyError,
    UnsafeSchema,
)
from propcheck.schema.loader import (
    DocumentIssue,
    SchemaDocumentError,
    SchemaLoader,
    load_schema_document,
)
from propcheck.types import MISSING, ValidationError, ValueErrorType

__all__ = [
    # Types
    "MISSING",
    "ValidationError",
    "ValueErrorType",
    # Schema
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
    # Schema documents
    "DocumentIssue",
    "SchemaDocumentError",
    "SchemaLoader",
    "load_schema_document",
    # Registries
    "FormatRegistry",
    "RegistryError",
    "TypeRegistry",
    "UnregisteredFormatError",
    "UnregisteredKindError",
    "register_builtin_formats",
    "register_builtin_kinds",
    "to_number",
    # Context
    "ValidationContext",
    "default_context",
    "get_error_function",
    "register_format",
    "register_type",
    "reset_default_context",
    "set_error_function",
    "set_is_renderable",
    # Engine
    "ValidationErrors",
    "check",
    "errors",
    # Messages
    "default_error_function",
    "error_function",
    "quick_value",
    # Adapter
    "CheckerConfig",
    "Mode",
    "PropsError",
    "default_config",
    "format_errors",
    "make_checker",
]
